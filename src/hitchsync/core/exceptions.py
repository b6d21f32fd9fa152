"""Custom exceptions.

hitchsync uses a hierarchy of exceptions so a failed pass can always be
traced back to the stage that broke it:

Example:
    >>> from hitchsync.core.exceptions import SyncError, TransportError
    >>> err = TransportError("snapshot download failed")
    >>> isinstance(err, SyncError), err.stage
    (True, 'fetch')
    >>> from hitchsync.core.exceptions import TransformError
    >>> str(TransformError("bad latitude", record_id="42"))
    'bad latitude (record 42)'
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from hitchsync.writer import WriteReport


class HitchSyncError(Exception):
    """Base exception for hitchsync."""


class ConfigurationError(HitchSyncError):
    """Configuration is invalid.

    Example:
        >>> from hitchsync.core.exceptions import ConfigurationError
        >>> raise ConfigurationError("missing project id")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ConfigurationError: missing project id
    """


class StoreError(HitchSyncError):
    """A target store request failed."""


class SyncError(HitchSyncError):
    """A sync pass stage failed. Always fatal for the pass."""

    stage: str = "pass"


class TransportError(SyncError):
    """The snapshot could not be fetched."""

    stage = "fetch"


class SourceQueryError(SyncError):
    """The snapshot could not be opened or queried."""

    stage = "select"


class WatermarkReadError(SyncError):
    """The watermark could not be read from the target store."""

    stage = "watermark"


class TransformError(SyncError):
    """A source row could not be mapped to a target document."""

    stage = "transform"

    def __init__(self, message: str, record_id: str | None = None) -> None:
        self.record_id = record_id
        if record_id is not None:
            message = f"{message} (record {record_id})"
        super().__init__(message)


class WriteError(SyncError):
    """A single upsert failed; the rest of the batch was not attempted."""

    stage = "write"

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        report: WriteReport | None = None,
    ) -> None:
        super().__init__(message)
        self.document_id = document_id
        self.report = report
