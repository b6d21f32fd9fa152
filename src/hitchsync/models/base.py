"""Base models and shared types.

Example:
    >>> from hitchsync.models.base import EPOCH, utc_now
    >>> EPOCH.isoformat()
    '1970-01-01T00:00:00+00:00'
    >>> utc_now().tzinfo is not None
    True
"""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def utc_now() -> datetime:
    """Current instant, timezone aware."""
    return datetime.now(UTC)


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes and convert aware ones to UTC.

    Example:
        >>> from datetime import datetime
        >>> ensure_utc(datetime(2024, 1, 1)).isoformat()
        '2024-01-01T00:00:00+00:00'
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class HitchSyncModel(BaseModel):
    """Base model with standard configuration."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        str_strip_whitespace=True,
        validate_assignment=True,
        extra="forbid",
    )


class DocumentModel(HitchSyncModel):
    """Base for models stored in the target document store.

    Fields are snake_case in Python and camelCase in the stored document.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=False,
        extra="forbid",
        frozen=True,
    )
