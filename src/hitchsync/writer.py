"""Bounded writer - applies documents to the target store under a budget.

Documents are upserted one at a time, each awaited before the next, in the
order given. The writer stops once the budget of completed writes is
reached; whatever is left is picked up by the next pass, because the next
watermark is read back from what was actually persisted. The stop never
falls between two documents with the same ``submittedTimestamp``.

Example:
    >>> from hitchsync.writer import WriteReport
    >>> report = WriteReport(total=10, budget=4, written=4, budget_exhausted=True)
    >>> report.remaining
    6
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

from hitchsync.core.exceptions import StoreError, WriteError
from hitchsync.models.spot import TargetRecord
from hitchsync.protocols.progress import (
    NullProgressReporter,
    ProgressEvent,
    ProgressReporter,
    ProgressStage,
)
from hitchsync.protocols.store import DocumentStore

logger = logging.getLogger(__name__)


@dataclass
class WriteReport:
    """Outcome of `BoundedWriter.write_all`.

    Attributes:
        total: Documents handed to the writer.
        budget: Maximum writes allowed.
        written: Writes completed.
        budget_exhausted: Stopped at the budget with documents left over.
        last_document_id: Identity key of the last completed write.
        last_submitted: submittedTimestamp of the last completed write.
    """

    total: int
    budget: int
    written: int = 0
    budget_exhausted: bool = False
    last_document_id: str | None = None
    last_submitted: datetime | None = None

    @property
    def remaining(self) -> int:
        return self.total - self.written


def stop_index(records: Sequence[TargetRecord], budget: int) -> int:
    """Number of leading ``records`` a pass may write under ``budget``.

    ``records`` must be ordered by ``submitted_timestamp``. The next pass
    selects strictly after the newest written timestamp, so a cut inside a
    group of equal timestamps would strand the rest of the group: the cut
    moves back to the start of that group instead. A group that alone
    exceeds the budget is written in full.

    Example:
        >>> stop_index([], 5)
        0
    """
    total = len(records)
    if total <= budget:
        return total

    boundary = records[budget].submitted_timestamp
    stop = budget
    while stop > 0 and records[stop - 1].submitted_timestamp == boundary:
        stop -= 1
    if stop > 0:
        return stop

    stop = budget
    while stop < total and records[stop].submitted_timestamp == boundary:
        stop += 1
    return stop


class BoundedWriter:
    """Writes documents sequentially until done or out of budget.

    Args:
        store: Target document store.
        collection: Collection to write into.
        reporter: Receives one event per completed write.
    """

    def __init__(
        self,
        store: DocumentStore,
        collection: str,
        reporter: ProgressReporter | None = None,
    ) -> None:
        self._store = store
        self._collection = collection
        self._reporter = reporter or NullProgressReporter()

    async def write_all(self, records: Sequence[TargetRecord], budget: int) -> WriteReport:
        """Upsert ``records`` in order, stopping after ``budget`` writes.

        Reaching the budget is not an error: the report says where the
        writer stopped. See `stop_index` for where the stop falls when
        timestamps tie.

        Raises:
            ValueError: If budget is less than 1.
            WriteError: If an upsert fails. Earlier writes stay committed
                and the error carries the partial report.
        """
        if budget < 1:
            raise ValueError("budget must be at least 1")

        total = len(records)
        report = WriteReport(total=total, budget=budget)
        stop = stop_index(records, budget)
        logger.info("Inserting %d rows", total)
        if stop > budget:
            logger.error(
                "%d rows share submittedTimestamp %s, more than the quota of %d: writing them all",
                stop,
                records[0].submitted_timestamp.isoformat(),
                budget,
            )

        for record in records[:stop]:
            doc_id = record.document_id
            try:
                await self._store.upsert(self._collection, doc_id, record.to_document())
            except StoreError as e:
                raise WriteError(
                    f"Upsert of {doc_id} failed: {e}", document_id=doc_id, report=report
                ) from e

            report.written += 1
            report.last_document_id = doc_id
            report.last_submitted = record.submitted_timestamp
            self._reporter.report(
                ProgressEvent(
                    stage=ProgressStage.WRITING,
                    current=report.written,
                    total=total,
                    record_id=record.source.id,
                    submitted=record.submitted_timestamp,
                )
            )

        if stop < total:
            report.budget_exhausted = True
            logger.info(
                "Reached quota of %d writes: %d rows left for the next pass",
                budget,
                report.remaining,
            )

        return report


__all__ = ["BoundedWriter", "WriteReport", "stop_index"]
