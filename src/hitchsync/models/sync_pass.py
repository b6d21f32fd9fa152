"""PassResult model - tracks one sync pass.

A pass either succeeds (possibly writing nothing, possibly stopping early at
the write budget) or fails at exactly one stage.

Example:
    >>> from hitchsync.models.sync_pass import PassResult, PassStatus
    >>> result = PassResult(status=PassStatus.SUCCESS, selected=0)
    >>> result.is_empty, result.exit_code
    (True, 0)
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from uuid import uuid4

from pydantic import Field

from hitchsync.models.base import EPOCH, HitchSyncModel, utc_now


class PassStatus(str, Enum):
    """Pass execution states.

    Example:
        >>> from hitchsync.models.sync_pass import PassStatus
        >>> PassStatus.FAILED.value
        'failed'
    """

    RUNNING = "running"
    SUCCESS = "success"
    FAILED = "failed"


class PassResult(HitchSyncModel):
    """Outcome of a single sync pass.

    Example:
        >>> from hitchsync.models.sync_pass import PassResult, PassStatus
        >>> failed = PassResult(status=PassStatus.FAILED, failed_stage="watermark")
        >>> failed.is_success, failed.exit_code
        (False, 1)
    """

    id: str = Field(
        default_factory=lambda: str(uuid4()),
        description="Unique pass identifier",
    )
    status: PassStatus = Field(default=PassStatus.RUNNING)

    # Timestamps
    started_at: datetime = Field(default_factory=utc_now)
    completed_at: datetime | None = Field(default=None)

    # Progress
    cutoff: datetime = Field(
        default=EPOCH,
        description="Watermark the selection started from",
    )
    selected: int = Field(default=0, ge=0, description="Rows selected since the cutoff")
    written: int = Field(default=0, ge=0, description="Documents durably written")
    budget_exhausted: bool = Field(
        default=False,
        description="The pass stopped at the write budget with rows left over",
    )
    last_submitted: datetime | None = Field(
        default=None,
        description="submittedTimestamp of the last document written",
    )

    # Error tracking
    failed_stage: str | None = Field(default=None)
    error: str | None = Field(default=None)
    error_type: str | None = Field(default=None, description="Exception class name")

    @property
    def is_success(self) -> bool:
        return self.status == PassStatus.SUCCESS

    @property
    def is_empty(self) -> bool:
        """Successful pass that found nothing new."""
        return self.is_success and self.selected == 0

    @property
    def remaining(self) -> int:
        """Selected rows left for the next pass."""
        return max(self.selected - self.written, 0)

    @property
    def duration_seconds(self) -> float | None:
        if self.completed_at is None:
            return None
        return (self.completed_at - self.started_at).total_seconds()

    @property
    def exit_code(self) -> int:
        """Process exit code: 0 for success (empty included), 1 otherwise."""
        return 0 if self.is_success else 1


__all__ = ["PassResult", "PassStatus"]
