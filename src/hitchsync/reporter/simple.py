"""Simple logging-based progress reporter.

Logs one line per written document and a terminal summary, suitable for
cron jobs and CI logs.

Example:
    >>> from hitchsync.reporter import SimpleProgressReporter
    >>>
    >>> reporter = SimpleProgressReporter()
    >>> reporter.start()
    >>> # ... orchestrator.run_pass() reports progress events ...
    >>> reporter.finish(success=True)

    # Output in logs:
    # 1/120: 4711 2021-05-01 12:00:00+00:00
    # 2/120: 4712 2021-05-01 12:03:10+00:00
    # [COMPLETE] Written: 120, Duration: 9.4s
"""

from __future__ import annotations

import logging
import time

from hitchsync.protocols.progress import (
    ProgressEvent,
    ProgressStage,
)


class SimpleProgressReporter:
    """Text progress reporter using logging.

    Attributes:
        logger: The logger instance to use
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        log_level: int = logging.INFO,
    ):
        """Initialize the reporter.

        Args:
            logger: Logger to use (default: hitchsync.progress logger)
            log_level: Logging level for progress messages
        """
        self._logger = logger or logging.getLogger("hitchsync.progress")
        self._log_level = log_level
        self._started_at: float | None = None
        self._written = 0

    @property
    def written(self) -> int:
        """Writes reported since start()."""
        return self._written

    def start(self) -> None:
        """Mark the start of the pass."""
        self._started_at = time.monotonic()
        self._written = 0

    def report(self, event: ProgressEvent) -> None:
        """Report a progress event.

        Args:
            event: Progress event from the pass
        """
        if event.stage is ProgressStage.WRITING and event.record_id is not None:
            self._written = event.current
            self._logger.log(
                self._log_level,
                f"{event.current}/{event.total}: {event.record_id} {event.submitted}",
            )
        elif event.stage in (ProgressStage.COMPLETE, ProgressStage.FAILED):
            return
        else:
            self._logger.debug(f"[{event.stage.value.upper()}] {event.message}")

    def finish(self, success: bool) -> None:
        """Mark the end of the pass.

        Args:
            success: Whether the pass completed successfully
        """
        elapsed = 0.0
        if self._started_at is not None:
            elapsed = time.monotonic() - self._started_at
        status = "COMPLETE" if success else "FAILED"
        self._logger.log(
            self._log_level,
            f"[{status}] Written: {self._written:,}, Duration: {elapsed:.1f}s",
        )


__all__ = ["SimpleProgressReporter"]
