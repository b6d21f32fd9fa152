"""Spot models - the source row and the target document.

- `SourceRecord`: one row of the Hitchwiki dump, validated
- `TargetRecord`: the document written to the ``hitching-spots`` collection

Example:
    >>> from hitchsync.models.spot import SourceRecord
    >>> row = {"id": 42, "lat": 10.0, "lon": 20.0, "rating": 4,
    ...        "name": "X (Hitchwiki)", "datetime": "2021-05-01 12:00:00"}
    >>> record = SourceRecord.from_row(row)
    >>> record.id, record.created_at.isoformat()
    ('42', '2021-05-01T12:00:00+00:00')
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any, Literal

from pydantic import ConfigDict, Field, ValidationError, field_validator

from hitchsync.core.exceptions import TransformError
from hitchsync.models.base import DocumentModel, HitchSyncModel, ensure_utc


class SourceRecord(HitchSyncModel):
    """A spot as published in the third-party snapshot.

    Never mutated by this package.
    """

    # Raw snapshot text is kept verbatim; clean_name strips names on transform
    model_config = ConfigDict(extra="ignore", frozen=True, str_strip_whitespace=False)

    id: str = Field(..., min_length=1, description="Identifier in the source dataset")
    lat: float = Field(..., description="Latitude in degrees")
    lon: float = Field(..., description="Longitude in degrees")
    rating: int = Field(..., ge=1, le=5, description="Community rating, 1 (bad) to 5 (great)")
    name: str | None = Field(default=None, description="Free-text author field")
    created_at: datetime = Field(..., description="When the spot was submitted to the source")

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        """Source ids are integers in the dump, strings everywhere else."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("created_at")
    @classmethod
    def normalize_created_at(cls, v: datetime) -> datetime:
        """The dump stores naive UTC timestamps."""
        return ensure_utc(v)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> SourceRecord:
        """Validate a raw snapshot row.

        The row uses the dump's column names, ``datetime`` included.

        Raises:
            TransformError: If a required field is missing or malformed.
        """
        data = dict(row)
        if "datetime" in data:
            data["created_at"] = data.pop("datetime")
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            record_id = data.get("id")
            fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
            raise TransformError(
                f"Invalid source row: {fields}",
                record_id=None if record_id is None else str(record_id),
            ) from e


class GeoPoint(DocumentModel):
    """A geographic point.

    Example:
        >>> from hitchsync.models.spot import GeoPoint
        >>> GeoPoint(latitude=10.0, longitude=20.0).latitude
        10.0
    """

    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)


class GuestUser(DocumentModel):
    """Author of an ingested spot. Source authors are never real accounts."""

    type: Literal["guest"] = "guest"
    name: str = ""


class SourceRef(DocumentModel):
    """Provenance of an ingested document."""

    type: str = Field(..., min_length=1, description="Provenance tag")
    id: str = Field(..., min_length=1, description="Identifier in the source dataset")
    ingested_timestamp: datetime = Field(..., description="When this sync wrote the document")


class TargetRecord(DocumentModel):
    """A spot document ready for the target store.

    Example:
        >>> from datetime import datetime, UTC
        >>> from hitchsync.models.spot import GeoPoint, SourceRef, TargetRecord
        >>> now = datetime(2024, 1, 1, tzinfo=UTC)
        >>> doc = TargetRecord(
        ...     coords=GeoPoint(latitude=10.0, longitude=20.0),
        ...     geohash="s3y0",
        ...     rating=2,
        ...     submitted_timestamp=now,
        ...     source=SourceRef(type="hitchwiki", id="42", ingested_timestamp=now),
        ... )
        >>> doc.document_id
        'hitchwiki-42'
        >>> sorted(doc.to_document())
        ['coords', 'geohash', 'rating', 'source', 'submittedTimestamp', 'user']
    """

    coords: GeoPoint
    geohash: str = Field(..., min_length=1)
    rating: int = Field(..., ge=-1, le=3)
    user: GuestUser = Field(default_factory=GuestUser)
    submitted_timestamp: datetime
    source: SourceRef

    @property
    def document_id(self) -> str:
        """Identity key: the same source spot always lands in the same document."""
        return f"{self.source.type}-{self.source.id}"

    def to_document(self) -> dict[str, Any]:
        """Build the stored mapping.

        Keys are camelCase. ``coords`` stays a `GeoPoint` so store adapters
        can emit their native geopoint type.
        """
        document = self.model_dump(by_alias=True)
        document["coords"] = self.coords
        return document


__all__ = ["GeoPoint", "GuestUser", "SourceRecord", "SourceRef", "TargetRecord"]
