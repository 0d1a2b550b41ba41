"""Transcript lifecycle: start/stop results and failure reporting."""

from __future__ import annotations

from pathlib import Path

from lib_script_log.application.transcript import TranscriptController, TranscriptState
from lib_script_log.domain.levels import LogLevel
from tests.support import NullRetention, RecordingTranscriptBackend

PATTERN = "*-*-*-*-Script1-transcript*.log"


def _controller(backend: RecordingTranscriptBackend) -> tuple[TranscriptController, list, NullRetention]:
    reports: list[tuple[str, LogLevel]] = []
    retention = NullRetention()
    controller = TranscriptController(backend, rotation=retention, report=lambda msg, lvl: reports.append((msg, lvl)))
    return controller, reports, retention


def test_stop_without_running_capture_returns_false() -> None:
    controller, _, _ = _controller(RecordingTranscriptBackend())
    assert controller.stop() is False
    assert controller.state is TranscriptState.STOPPED


def test_start_then_stop_twice(tmp_path: Path) -> None:
    backend = RecordingTranscriptBackend()
    controller, _, retention = _controller(backend)
    target = tmp_path / "Transcript" / "t.log"
    assert controller.start(target, PATTERN) == target
    assert controller.state is TranscriptState.RUNNING
    assert retention.calls == [(target.parent, PATTERN, 7)]
    assert controller.stop() is True
    assert controller.stop() is False
    assert backend.stopped == 1


def test_second_start_returns_active_path_with_warning(tmp_path: Path) -> None:
    backend = RecordingTranscriptBackend()
    controller, reports, _ = _controller(backend)
    first = controller.start(tmp_path / "a.log", PATTERN)
    again = controller.start(tmp_path / "b.log", PATTERN)
    assert again == first
    assert backend.started == [tmp_path / "a.log"]
    assert reports and reports[-1][1] is LogLevel.WARNING


def test_failed_start_reports_error_and_stays_stopped(tmp_path: Path) -> None:
    controller, reports, retention = _controller(RecordingTranscriptBackend(fail_start=True))
    assert controller.start(tmp_path / "t.log", PATTERN) is None
    assert controller.state is TranscriptState.STOPPED
    assert reports[-1][1] is LogLevel.ERROR
    assert "capture facility unavailable" in reports[-1][0]
    assert retention.calls == []


def test_failed_stop_returns_false_without_raising(tmp_path: Path) -> None:
    controller, reports, _ = _controller(RecordingTranscriptBackend(fail_stop=True))
    controller.start(tmp_path / "t.log", PATTERN)
    assert controller.stop() is False
    assert controller.state is TranscriptState.STOPPED
    assert reports[-1][1] is LogLevel.ERROR
