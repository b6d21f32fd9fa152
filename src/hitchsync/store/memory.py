"""In-memory document store for testing and dry runs.

Example:
    >>> from hitchsync.store.memory import MemoryDocumentStore
    >>> store = MemoryDocumentStore()
    >>> hasattr(store, "upsert"), hasattr(store, "query_latest")
    (True, True)

Note:
    All methods are async. Use within async context or with asyncio.run().
"""

from __future__ import annotations

import copy
from collections import defaultdict
from collections.abc import Mapping
from datetime import datetime
from typing import Any


def get_path(document: Mapping[str, Any], path: str) -> Any:
    """Read a dotted field path (``source.type``) from a nested mapping.

    Example:
        >>> get_path({"source": {"type": "hitchwiki"}}, "source.type")
        'hitchwiki'
        >>> get_path({}, "source.type") is None
        True
    """
    value: Any = document
    for part in path.split("."):
        if not isinstance(value, Mapping) or part not in value:
            return None
        value = value[part]
    return value


class MemoryDocumentStore:
    """Document store using nested dictionaries.

    Data is lost when the process exits. Documents are deep-copied on the
    way in and out, so callers never share state with the store.

    Example:
        >>> from hitchsync.store.memory import MemoryDocumentStore
        >>> s = MemoryDocumentStore()
        >>> s.count("hitching-spots")
        0
    """

    def __init__(self) -> None:
        self._collections: dict[str, dict[str, dict[str, Any]]] = defaultdict(dict)
        self._write_count = 0
        self._initialized = False

    async def initialize(self) -> None:
        """No-op for memory store."""
        self._initialized = True

    async def close(self) -> None:
        """Keep data; only mark the store closed."""
        self._initialized = False

    @property
    def write_count(self) -> int:
        """Total upserts performed, overwrites included."""
        return self._write_count

    # --- Document Operations ---

    async def upsert(self, collection: str, doc_id: str, document: Mapping[str, Any]) -> None:
        """Create or fully overwrite a document."""
        self._collections[collection][doc_id] = copy.deepcopy(dict(document))
        self._write_count += 1

    async def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        document = self._collections[collection].get(doc_id)
        return copy.deepcopy(document) if document is not None else None

    async def query_latest(self, collection: str, provenance_tag: str) -> dict[str, Any] | None:
        """Newest document of a provenance type by ``submittedTimestamp``.

        Documents without a timestamp are ignored, as an ordered query
        would skip them.
        """
        candidates = [
            document
            for document in self._collections[collection].values()
            if get_path(document, "source.type") == provenance_tag
            and isinstance(document.get("submittedTimestamp"), datetime)
        ]
        if not candidates:
            return None
        latest = max(candidates, key=lambda document: document["submittedTimestamp"])
        return copy.deepcopy(latest)

    # --- Inspection ---

    def count(self, collection: str) -> int:
        return len(self._collections[collection])

    def documents(self, collection: str) -> dict[str, dict[str, Any]]:
        """Snapshot of a collection keyed by document id."""
        return copy.deepcopy(self._collections[collection])

    def clear(self) -> None:
        self._collections.clear()
        self._write_count = 0


__all__ = ["MemoryDocumentStore", "get_path"]
