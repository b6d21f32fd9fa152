"""Watermark resolution.

The watermark is the ``submittedTimestamp`` of the newest document already
ingested for a provenance type. It is always read back from the target
store, never remembered locally, so it only ever covers writes that were
durably persisted.

Example:
    >>> import asyncio
    >>> from hitchsync.core.watermark import WatermarkResolver
    >>> from hitchsync.store.memory import MemoryDocumentStore
    >>> resolver = WatermarkResolver(MemoryDocumentStore(), "hitching-spots", "hitchwiki")
    >>> asyncio.run(resolver.resolve()).isoformat()  # empty store: first run
    '1970-01-01T00:00:00+00:00'
"""

from __future__ import annotations

import logging
from datetime import datetime

from hitchsync.core.exceptions import StoreError, WatermarkReadError
from hitchsync.models.base import EPOCH, ensure_utc
from hitchsync.protocols.store import DocumentStore

logger = logging.getLogger(__name__)


class WatermarkResolver:
    """Reads the sync cutoff from the target store.

    Args:
        store: Target document store.
        collection: Collection holding ingested documents.
        provenance_tag: ``source.type`` of the documents this sync owns.
    """

    def __init__(self, store: DocumentStore, collection: str, provenance_tag: str) -> None:
        self._store = store
        self._collection = collection
        self._provenance_tag = provenance_tag

    async def resolve(self) -> datetime:
        """Return the newest ingested ``submittedTimestamp``, or `EPOCH`.

        Raises:
            WatermarkReadError: If the store cannot be read or the newest
                document has no usable timestamp.
        """
        logger.info("Getting last ingested row")
        try:
            latest = await self._store.query_latest(self._collection, self._provenance_tag)
        except StoreError as e:
            raise WatermarkReadError(f"Cannot read watermark: {e}") from e

        if latest is None:
            logger.info("No %s documents yet, starting from the beginning", self._provenance_tag)
            return EPOCH

        submitted = latest.get("submittedTimestamp")
        if not isinstance(submitted, datetime):
            raise WatermarkReadError(
                f"Latest {self._provenance_tag} document has no valid submittedTimestamp: {submitted!r}"
            )
        return ensure_utc(submitted)


__all__ = ["WatermarkResolver"]
