"""Row transformer - maps one source spot to one target document.

No store or network access happens here; the only input besides the row is
the clock used for ``source.ingestedTimestamp``.

Example:
    >>> from hitchsync.transform import clean_name, rescale_rating
    >>> clean_name("Jane Doe (Hitchwiki)")
    'Jane Doe'
    >>> clean_name(None)
    ''
    >>> rescale_rating(5)
    3
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

import pygeohash as pgh
from pydantic import ValidationError

from hitchsync.core.exceptions import TransformError
from hitchsync.models.base import utc_now
from hitchsync.models.spot import GeoPoint, GuestUser, SourceRecord, SourceRef, TargetRecord

PROVENANCE_TAG = "hitchwiki"
NAME_MARKER = "(Hitchwiki)"

# Source rates 1-5, the app rates 1-3
RATING_OFFSET = 2

# Matches the app's geofire readers
GEOHASH_PRECISION = 10


def clean_name(name: str | None, marker: str = NAME_MARKER) -> str:
    """Strip the provenance marker from a free-text author name."""
    if not name:
        return ""
    return name.replace(marker, "").strip()


def rescale_rating(rating: int, offset: int = RATING_OFFSET) -> int:
    return rating - offset


class RowTransformer:
    """Maps `SourceRecord`s to `TargetRecord`s.

    Args:
        provenance_tag: Value of ``source.type`` on every document.
        rating_offset: Subtracted from the source rating.
        name_marker: Literal removed from author names.
        geohash_precision: Characters of geohash to store.
        clock: Returns the ingestion instant, called once per record.

    Example:
        >>> from hitchsync.models.spot import SourceRecord
        >>> row = SourceRecord.from_row({
        ...     "id": 42, "lat": 10.0, "lon": 20.0, "rating": 4,
        ...     "name": "X (Hitchwiki)", "datetime": "2021-05-01 12:00:00",
        ... })
        >>> doc = RowTransformer().transform(row)
        >>> doc.document_id, doc.rating, doc.user.name
        ('hitchwiki-42', 2, 'X')
    """

    def __init__(
        self,
        provenance_tag: str = PROVENANCE_TAG,
        rating_offset: int = RATING_OFFSET,
        name_marker: str = NAME_MARKER,
        geohash_precision: int = GEOHASH_PRECISION,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._provenance_tag = provenance_tag
        self._rating_offset = rating_offset
        self._name_marker = name_marker
        self._geohash_precision = geohash_precision
        self._clock = clock

    @property
    def provenance_tag(self) -> str:
        return self._provenance_tag

    def transform(self, row: SourceRecord) -> TargetRecord:
        """Build the target document for one source row.

        Raises:
            TransformError: If the row maps to an invalid document, e.g.
                coordinates out of range.
        """
        try:
            coords = GeoPoint(latitude=row.lat, longitude=row.lon)
            return TargetRecord(
                coords=coords,
                geohash=pgh.encode(row.lat, row.lon, precision=self._geohash_precision),
                rating=rescale_rating(row.rating, self._rating_offset),
                user=GuestUser(name=clean_name(row.name, self._name_marker)),
                submitted_timestamp=row.created_at,
                source=SourceRef(
                    type=self._provenance_tag,
                    id=row.id,
                    ingested_timestamp=self._clock(),
                ),
            )
        except (ValidationError, ValueError) as e:
            raise TransformError(f"Cannot transform row: {e}", record_id=row.id) from e

    __call__ = transform


__all__ = [
    "GEOHASH_PRECISION",
    "NAME_MARKER",
    "PROVENANCE_TAG",
    "RATING_OFFSET",
    "RowTransformer",
    "clean_name",
    "rescale_rating",
]
