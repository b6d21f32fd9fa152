"""Progress reporting protocol for hitchsync.

Lets callers watch a pass move through its stages and follow each write.

Example:
    >>> from hitchsync.protocols.progress import ProgressEvent, ProgressStage
    >>> event = ProgressEvent(stage=ProgressStage.WRITING, current=5, total=20)
    >>> event.progress_percent
    25.0
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Protocol, runtime_checkable


class ProgressStage(Enum):
    """Stages of a sync pass."""
    FETCHING = "fetching"
    WATERMARK = "watermark"
    SELECTING = "selecting"
    TRANSFORMING = "transforming"
    WRITING = "writing"
    COMPLETE = "complete"
    FAILED = "failed"


@dataclass
class ProgressEvent:
    """A progress event emitted during a pass.

    Attributes:
        stage: Current pass stage
        current: Documents written so far
        total: Documents selected for this pass
        message: Human-readable status message
        record_id: Source id of the document just written
        submitted: submittedTimestamp of the document just written
        started_at: When the event was created
        metadata: Additional stage-specific data
    """
    stage: ProgressStage
    current: int = 0
    total: int = 0
    message: str = ""
    record_id: str | None = None
    submitted: datetime | None = None
    started_at: datetime = field(default_factory=datetime.now)
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def progress_percent(self) -> float:
        """Progress as percentage (0-100)."""
        if self.total <= 0:
            return 0.0
        return min(100.0, (self.current / self.total) * 100)


@runtime_checkable
class ProgressReporter(Protocol):
    """Protocol for progress reporting implementations."""

    def report(self, event: ProgressEvent) -> None:
        """Report a progress event."""
        ...

    def start(self) -> None:
        """Called when the pass begins."""
        ...

    def finish(self, success: bool) -> None:
        """Called when the pass ends.

        Args:
            success: True if the pass completed without errors
        """
        ...


class NullProgressReporter:
    """No-op progress reporter (default when none specified)."""

    def report(self, event: ProgressEvent) -> None:
        pass

    def start(self) -> None:
        pass

    def finish(self, success: bool) -> None:
        pass


__all__ = [
    "NullProgressReporter",
    "ProgressEvent",
    "ProgressReporter",
    "ProgressStage",
]
