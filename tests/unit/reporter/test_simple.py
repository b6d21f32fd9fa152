"""Tests for hitchsync.reporter.simple - SimpleProgressReporter."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from types import SimpleNamespace

import pytest

from hitchsync.protocols.progress import ProgressEvent, ProgressReporter, ProgressStage
from hitchsync.reporter import SimpleProgressReporter, simple

LOGGER = "hitchsync.progress"


@pytest.fixture
def reporter() -> SimpleProgressReporter:
    r = SimpleProgressReporter()
    r.start()
    return r


class TestSimpleProgressReporter:
    """Tests for log output."""

    def test_implements_protocol(self) -> None:
        assert isinstance(SimpleProgressReporter(), ProgressReporter)

    def test_write_line(
        self, reporter: SimpleProgressReporter, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.INFO, logger=LOGGER):
            reporter.report(
                ProgressEvent(
                    stage=ProgressStage.WRITING,
                    current=3,
                    total=120,
                    record_id="4711",
                    submitted=datetime(2021, 5, 1, 12, tzinfo=UTC),
                )
            )
        assert caplog.messages == ["3/120: 4711 2021-05-01 12:00:00+00:00"]
        assert reporter.written == 3

    def test_stage_events_are_debug(
        self, reporter: SimpleProgressReporter, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.INFO, logger=LOGGER):
            reporter.report(ProgressEvent(stage=ProgressStage.SELECTING, message="cutoff"))
        assert caplog.messages == []

        with caplog.at_level(logging.DEBUG, logger=LOGGER):
            reporter.report(ProgressEvent(stage=ProgressStage.SELECTING, message="cutoff"))
        assert caplog.messages == ["[SELECTING] cutoff"]

    @pytest.mark.parametrize(("success", "label"), [(True, "COMPLETE"), (False, "FAILED")])
    def test_finish(
        self,
        reporter: SimpleProgressReporter,
        caplog: pytest.LogCaptureFixture,
        success: bool,
        label: str,
    ) -> None:
        reporter.report(
            ProgressEvent(stage=ProgressStage.WRITING, current=1500, total=2000, record_id="9")
        )
        with caplog.at_level(logging.INFO, logger=LOGGER):
            reporter.finish(success)
        assert caplog.messages[-1].startswith(f"[{label}] Written: 1,500, Duration: ")

    def test_start_resets(self, reporter: SimpleProgressReporter) -> None:
        reporter.report(
            ProgressEvent(stage=ProgressStage.WRITING, current=2, total=2, record_id="1")
        )
        reporter.start()
        assert reporter.written == 0

    def test_custom_logger(self, caplog: pytest.LogCaptureFixture) -> None:
        reporter = SimpleProgressReporter(logging.getLogger("custom"), log_level=logging.WARNING)
        with caplog.at_level(logging.WARNING, logger="custom"):
            reporter.finish(True)
        assert caplog.records[0].name == "custom"
        assert caplog.records[0].levelno == logging.WARNING

    def test_duration_uses_monotonic_clock(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        ticks = iter([100.0, 102.5])
        monkeypatch.setattr(simple, "time", SimpleNamespace(monotonic=lambda: next(ticks)))
        reporter = SimpleProgressReporter()
        reporter.start()
        with caplog.at_level(logging.INFO, logger=LOGGER):
            reporter.finish(True)
        assert caplog.messages[-1] == "[COMPLETE] Written: 0, Duration: 2.5s"
