"""SyncOrchestrator - runs one incremental sync pass.

A pass runs strictly in sequence:

1. fetch the snapshot
2. resolve the watermark from the target store
3. select rows created after the watermark, oldest first
4. transform every row
5. write documents one at a time, up to the write budget

Any stage failure ends the pass. Nothing is retried: the next scheduled
pass picks up from whatever was durably written.

Example:
    >>> from hitchsync.core.config import get_settings
    >>> from hitchsync.core.orchestrator import SyncOrchestrator
    >>> from hitchsync.store.memory import MemoryDocumentStore
    >>> settings = get_settings(store_backend="memory", snapshot_path="dump.sqlite")
    >>> orchestrator = SyncOrchestrator(settings, MemoryDocumentStore())
    >>> # result = await orchestrator.run_pass()
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from hitchsync.core.config import Settings
from hitchsync.core.exceptions import SourceQueryError, SyncError, TransportError, WriteError
from hitchsync.core.watermark import WatermarkResolver
from hitchsync.models.base import utc_now
from hitchsync.models.sync_pass import PassResult, PassStatus
from hitchsync.protocols.progress import (
    NullProgressReporter,
    ProgressEvent,
    ProgressReporter,
    ProgressStage,
)
from hitchsync.protocols.source import SnapshotFetcher, SnapshotSource
from hitchsync.protocols.store import DocumentStore
from hitchsync.source.selector import SourceSelector
from hitchsync.source.sqlite import SQLiteSnapshot
from hitchsync.transform import RowTransformer
from hitchsync.writer import BoundedWriter

logger = logging.getLogger(__name__)


class SyncOrchestrator:
    """Composes fetch, watermark, selection, transform and bounded write.

    The orchestrator owns the lifetime of the snapshot handle and the store
    connection for the duration of a pass: both are acquired at the start
    and released on every exit path.

    Args:
        settings: Application settings.
        store: Target document store.
        fetcher: Downloads the snapshot. When None, ``settings.snapshot_path``
            must already hold one.
        source_factory: Opens a snapshot file for querying.
        transformer: Row transformer (built from settings when omitted).
        reporter: Receives stage and per-write progress events.
    """

    def __init__(
        self,
        settings: Settings,
        store: DocumentStore,
        *,
        fetcher: SnapshotFetcher | None = None,
        source_factory: Callable[[Path], SnapshotSource] = SQLiteSnapshot,
        transformer: RowTransformer | None = None,
        reporter: ProgressReporter | None = None,
    ) -> None:
        self._settings = settings
        self._store = store
        self._fetcher = fetcher
        self._source_factory = source_factory
        self._transformer = transformer or RowTransformer(
            provenance_tag=settings.provenance_tag,
            rating_offset=settings.rating_offset,
            name_marker=settings.name_marker,
        )
        self._reporter = reporter or NullProgressReporter()

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def store(self) -> DocumentStore:
        return self._store

    def _watermark_resolver(self) -> WatermarkResolver:
        return WatermarkResolver(
            self._store,
            self._settings.collection,
            self._settings.provenance_tag,
        )

    async def resolve_watermark(self) -> datetime:
        """Read the current watermark without running a pass."""
        await self._store.initialize()
        try:
            return await self._watermark_resolver().resolve()
        finally:
            await self._store.close()

    async def _fetch_snapshot(self) -> Path:
        path = Path(self._settings.snapshot_path)
        if self._fetcher is None:
            if not path.is_file():
                raise TransportError(f"Snapshot not found at {path}")
            logger.info("Using local snapshot %s", path)
            return path
        return await self._fetcher.fetch(self._settings.dump_url, path)

    def _open_source(self, path: Path) -> SnapshotSource:
        logger.info("Opening snapshot %s", path)
        source = self._source_factory(path)
        try:
            source.open()
        except sqlite3.Error as e:
            raise SourceQueryError(f"Cannot open snapshot {path}: {e}") from e
        return source

    def _stage(self, stage: ProgressStage, message: str = "") -> None:
        self._reporter.report(ProgressEvent(stage=stage, message=message))

    async def run_pass(self) -> PassResult:
        """Run one pass.

        Returns:
            The pass outcome. Stage failures are recorded on the result
            (``status=FAILED``) instead of raised.
        """
        logger.info("Running")
        result = PassResult(status=PassStatus.RUNNING)
        self._reporter.start()

        try:
            self._stage(ProgressStage.FETCHING, self._settings.dump_url)
            snapshot_path = await self._fetch_snapshot()

            source = self._open_source(snapshot_path)
            try:
                await self._store.initialize()
                try:
                    await self._sync(source, result)
                finally:
                    await self._store.close()
            finally:
                source.close()

        except SyncError as e:
            self._fail(result, e, e.stage)
        except Exception as e:
            logger.exception("Unexpected error during pass")
            self._fail(result, e, "pass")
        else:
            result.status = PassStatus.SUCCESS
            self._stage(ProgressStage.COMPLETE)
            logger.info("Completed without error")

        result.completed_at = utc_now()
        self._reporter.finish(result.is_success)
        return result

    async def _sync(self, source: SnapshotSource, result: PassResult) -> None:
        self._stage(ProgressStage.WATERMARK)
        cutoff = await self._watermark_resolver().resolve()
        result.cutoff = cutoff

        self._stage(ProgressStage.SELECTING, cutoff.isoformat())
        selector = SourceSelector(source, rating_floor=self._settings.rating_floor)
        rows = selector.select_rows(cutoff)

        self._stage(ProgressStage.TRANSFORMING)
        # Materialized: a bad row must stop the pass before the first write.
        records = [self._transformer.transform(row) for row in rows]
        result.selected = len(records)

        if not records:
            logger.info("No new rows since %s", cutoff.isoformat())
            return

        self._stage(ProgressStage.WRITING)
        writer = BoundedWriter(self._store, self._settings.collection, reporter=self._reporter)
        try:
            report = await writer.write_all(records, self._settings.max_writes)
        except WriteError as e:
            if e.report is not None:
                result.written = e.report.written
                result.last_submitted = e.report.last_submitted
            raise

        result.written = report.written
        result.last_submitted = report.last_submitted
        result.budget_exhausted = report.budget_exhausted

    def _fail(self, result: PassResult, error: Exception, stage: str) -> None:
        result.status = PassStatus.FAILED
        result.failed_stage = stage
        result.error = str(error)
        result.error_type = type(error).__name__
        self._stage(ProgressStage.FAILED, str(error))
        logger.error(
            "Failed at %s stage after %d writes: %s",
            stage,
            result.written,
            error,
        )


__all__ = ["SyncOrchestrator"]
