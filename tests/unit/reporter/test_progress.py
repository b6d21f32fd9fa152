"""Tests for hitchsync.protocols.progress."""

from __future__ import annotations

from hitchsync.protocols.progress import (
    NullProgressReporter,
    ProgressEvent,
    ProgressReporter,
    ProgressStage,
)


class TestProgressEvent:
    def test_percent(self) -> None:
        event = ProgressEvent(stage=ProgressStage.WRITING, current=5, total=20)
        assert event.progress_percent == 25.0

    def test_percent_without_total(self) -> None:
        assert ProgressEvent(stage=ProgressStage.WATERMARK).progress_percent == 0.0


class TestNullProgressReporter:
    def test_accepts_everything(self) -> None:
        reporter = NullProgressReporter()
        assert isinstance(reporter, ProgressReporter)
        reporter.start()
        reporter.report(ProgressEvent(stage=ProgressStage.COMPLETE))
        reporter.finish(True)
