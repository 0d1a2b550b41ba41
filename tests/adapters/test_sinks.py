"""File, CSV, network CSV and console sinks."""

from __future__ import annotations

import csv
import os
from datetime import datetime
from pathlib import Path

from lib_script_log.adapters.rotation.default import RotationPolicy
from lib_script_log.adapters.sinks.csv_records import CsvSink, NetworkCsvSink
from lib_script_log.adapters.sinks.file import FileSink
from lib_script_log.domain.events import CSV_COLUMNS, NETWORK_CSV_COLUMNS, CallerInfo, LogEvent, SinkStatus, UserContext
from lib_script_log.domain.levels import LogLevel
from tests.support import NullRetention, make_console, read_verbatim

FILE_NAME = "BUILD01-nightly-User-ada-Script1-activity-20250102_030405"


def _event(message: str = "hello", level: LogLevel = LogLevel.INFO) -> LogEvent:
    return LogEvent(
        timestamp=datetime(2025, 1, 2, 3, 4, 5),
        level=level,
        message=message,
        caller=CallerInfo("nightly.py", "main", 17),
        user=UserContext("User", "ada", "BUILD01"),
        job_name="Job1",
        parent_script_name="Script1",
        calling_script_name="nightly",
    )


def _read_rows(path: Path) -> list[dict[str, str]]:
    with path.open(encoding="utf-8", newline="") as handle:
        return list(csv.DictReader(handle))


def test_file_sink_appends_lines_and_rotates(tmp_path: Path) -> None:
    retention = NullRetention()
    target = tmp_path / "logs" / f"{FILE_NAME}.log"
    sink = FileSink(target, parent_script_name="Script1", rotation=retention)
    assert sink.write(_event("one")).ok
    assert sink.write(_event("two")).ok
    assert read_verbatim(target) == (
        "[2025-01-02 03:04:05] [INFO] [Script1.main:17] - one\n[2025-01-02 03:04:05] [INFO] [Script1.main:17] - two\n"
    )
    assert retention.calls[-1] == (target.parent, "*-*-*-*-Script1-activity*.log", 7)


def test_file_sink_failure_becomes_result(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("x", encoding="utf-8")
    sink = FileSink(blocker / "child" / "x.log", parent_script_name="Script1", rotation=NullRetention())
    result = sink.write(_event())
    assert result.status is SinkStatus.FAILED
    assert result.sink == "file"


def test_csv_sink_writes_header_once(tmp_path: Path) -> None:
    target = tmp_path / "CSV" / f"{FILE_NAME}.csv"
    sink = CsvSink(target, parent_script_name="Script1", rotation=NullRetention())
    sink.write(_event("first, with comma"))
    sink.write(_event('second "quoted"\nline'))
    with target.open(encoding="utf-8", newline="") as handle:
        header = next(csv.reader(handle))
    assert tuple(header) == CSV_COLUMNS
    rows = _read_rows(target)
    assert [row["Message"] for row in rows] == ["first, with comma", 'second "quoted"\nline']
    assert rows[0]["CallerInfo"] == "nightly.py:main:17"


def test_network_sink_skips_unreachable_share(tmp_path: Path) -> None:
    share = tmp_path / "share"
    target = share / "Job1" / "BUILD01" / "2025-01-02" / "Script1" / f"{FILE_NAME}.csv"
    sink = NetworkCsvSink(target, network_root=share, parent_script_name="Script1", rotation=NullRetention())
    result = sink.write(_event())
    assert result.status is SinkStatus.SKIPPED
    assert not share.exists()


def test_network_sink_writes_extended_record(tmp_path: Path) -> None:
    share = tmp_path / "share"
    share.mkdir()
    target = share / "Job1" / "BUILD01" / "2025-01-02" / "Script1" / f"{FILE_NAME}.csv"
    retention = NullRetention()
    sink = NetworkCsvSink(target, network_root=share, parent_script_name="Script1", rotation=retention)
    assert sink.write(_event()).ok
    with target.open(encoding="utf-8", newline="") as handle:
        assert tuple(next(csv.reader(handle))) == NETWORK_CSV_COLUMNS
    row = _read_rows(target)[0]
    assert (row["JobName"], row["LogType"]) == ("Job1", "Activity")
    assert retention.calls[-1][2] == 5


def test_sinks_rotate_with_real_policy(tmp_path: Path) -> None:
    directory = tmp_path / "CSV"
    directory.mkdir()
    for index in range(9):
        old = directory / f"OLD-x-User-ada-Script1-activity-2024010{index}_000000.csv"
        old.write_text("x", encoding="utf-8")
        os.utime(old, (1_600_000_000 + index, 1_600_000_000 + index))
    sink = CsvSink(directory / f"{FILE_NAME}.csv", parent_script_name="Script1", rotation=RotationPolicy())
    sink.write(_event())
    assert len(list(directory.iterdir())) == 7
    assert (directory / f"{FILE_NAME}.csv").exists()


def test_console_sink_prints_verbatim(tmp_path: Path) -> None:
    sink, buffer = make_console()
    assert sink.write(_event("[bold]not markup[/bold] 1234")).ok
    assert buffer.getvalue() == "[2025-01-02 03:04:05] [INFO] [Script1.main:17] - [bold]not markup[/bold] 1234\n"


def test_console_styles_follow_level() -> None:
    sink, _ = make_console()
    assert sink.style_for(LogLevel.ERROR) == "bold red"
    assert sink.style_for(LogLevel.SUCCESS) == "green"
    assert sink.style_for(LogLevel.DEBUG) == "dim cyan"


def test_console_style_overrides() -> None:
    from lib_script_log.adapters.sinks.console import RichConsoleSink

    sink = RichConsoleSink(make_console()[0].console, styles={"warning": "magenta"})
    assert sink.style_for(LogLevel.WARNING) == "magenta"
    assert sink.style_for(LogLevel.INFO) == "white"


def test_console_diagnostic_lines() -> None:
    sink, buffer = make_console()
    sink.write_diagnostic(["call chain:", "  #0 a.py:1 in f"])
    assert buffer.getvalue().splitlines() == ["call chain:", "  #0 a.py:1 in f"]
