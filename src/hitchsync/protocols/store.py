"""Document store protocol.

Defines the two target store capabilities a sync pass needs: reading the
newest ingested document of a provenance type, and an idempotent upsert.

Example:
    >>> from hitchsync.protocols.store import DocumentStore
    >>> hasattr(DocumentStore, "query_latest"), hasattr(DocumentStore, "upsert")
    (True, True)
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class DocumentStore(Protocol):
    """Target document store protocol.

    See Also:
        hitchsync.store.memory.MemoryDocumentStore: In-memory implementation
        hitchsync.store.firestore.FirestoreRestStore: Firestore over REST
    """

    async def query_latest(self, collection: str, provenance_tag: str) -> dict[str, Any] | None:
        """Newest document by ``submittedTimestamp`` with ``source.type == provenance_tag``.

        Returns None when no such document exists.
        """
        ...

    async def upsert(self, collection: str, doc_id: str, document: Mapping[str, Any]) -> None:
        """Create or fully overwrite the document ``doc_id``."""
        ...

    # --- Lifecycle ---

    async def initialize(self) -> None:
        """Acquire connections."""
        ...

    async def close(self) -> None:
        """Release connections."""
        ...
