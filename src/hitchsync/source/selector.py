"""Source selector - picks the rows a pass still has to ingest.

Only reviewed, unbanned spots rated above the quality floor are eligible,
and only those created strictly after the cutoff. Rows come back oldest
first: a pass cut short by the write budget then always leaves a
contiguous, already-written prefix behind, and the next watermark starts
right after it.

Example:
    >>> from hitchsync.source.selector import format_cutoff
    >>> from datetime import datetime, UTC
    >>> format_cutoff(datetime(2021, 5, 1, 12, 0, tzinfo=UTC))
    '2021-05-01 12:00:00'
    >>> format_cutoff(datetime(2021, 5, 1, 12, 0, 0, 500000, tzinfo=UTC))
    '2021-05-01 12:00:00'
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterator
from datetime import datetime

from hitchsync.core.exceptions import SourceQueryError
from hitchsync.models.base import ensure_utc
from hitchsync.models.spot import SourceRecord
from hitchsync.protocols.source import SnapshotSource

logger = logging.getLogger(__name__)

DEFAULT_RATING_FLOOR = 2

SELECT_SQL = """
    SELECT id, lat, lon, rating, name, datetime
    FROM points
    WHERE
        banned = 0 AND
        reviewed = 1 AND
        rating > ? AND
        datetime >= ?
    ORDER BY datetime, id
"""


def format_cutoff(cutoff: datetime) -> str:
    """Render the SQL lower bound for a cutoff, rounded down to the second.

    The dump's ``datetime`` column is UTC text whose fractional part varies
    in length (``12:00:00``, ``12:00:00.5``, ``12:00:00.500000``), so text
    comparison is only reliable at whole seconds. The query selects from
    the start of the cutoff's second and `SourceSelector` drops rows that
    are not strictly newer once parsed.
    """
    return ensure_utc(cutoff).strftime("%Y-%m-%d %H:%M:%S")


class SourceSelector:
    """Selects eligible snapshot rows newer than a cutoff.

    Args:
        source: Open snapshot to query.
        rating_floor: Rows must be rated strictly above this.
    """

    def __init__(self, source: SnapshotSource, rating_floor: int = DEFAULT_RATING_FLOOR) -> None:
        self._source = source
        self._rating_floor = rating_floor

    @property
    def rating_floor(self) -> int:
        return self._rating_floor

    def select_rows(self, cutoff: datetime) -> Iterator[SourceRecord]:
        """Yield eligible rows created strictly after ``cutoff``, oldest first.

        The iterator is one-shot.

        Raises:
            SourceQueryError: If the snapshot cannot be queried.
            TransformError: If a row fails validation.
        """
        cutoff = ensure_utc(cutoff)
        logger.info("Getting rows after %s", cutoff.isoformat())
        params = (self._rating_floor, format_cutoff(cutoff))
        try:
            for row in self._source.query(SELECT_SQL, params):
                record = SourceRecord.from_row(row)
                if record.created_at > cutoff:
                    yield record
        except sqlite3.Error as e:
            raise SourceQueryError(f"Snapshot query failed: {e}") from e


__all__ = ["DEFAULT_RATING_FLOOR", "SELECT_SQL", "SourceSelector", "format_cutoff"]
