"""Adapter contract tests: the default adapters satisfy the application ports."""

from __future__ import annotations

from pathlib import Path

from lib_script_log.adapters.file_loaders.structured import JSONFileLoader, TOMLFileLoader, YAMLFileLoader
from lib_script_log.adapters.frames.default import InspectFrameProvider
from lib_script_log.adapters.identity.default import DefaultIdentityProvider
from lib_script_log.adapters.rotation.default import RotationPolicy
from lib_script_log.adapters.sinks.console import RichConsoleSink
from lib_script_log.adapters.sinks.csv_records import CsvSink, NetworkCsvSink
from lib_script_log.adapters.sinks.file import FileSink
from lib_script_log.adapters.transcript.default import TeeTranscriptBackend
from lib_script_log.application import ports
from lib_script_log.cli import ShellFrameProvider
from lib_script_log.core import SystemClock
from tests.support import FakeFrameProvider, FakeIdentity, FixedClock, RecordingTranscriptBackend, make_console


def test_default_adapters_fulfil_ports(tmp_path: Path) -> None:
    rotation = RotationPolicy()
    assert isinstance(InspectFrameProvider(), ports.FrameProvider)
    assert isinstance(ShellFrameProvider(), ports.FrameProvider)
    assert isinstance(DefaultIdentityProvider(), ports.IdentityProvider)
    assert isinstance(SystemClock(), ports.Clock)
    assert isinstance(rotation, ports.RetentionPolicy)
    assert isinstance(TeeTranscriptBackend(), ports.TranscriptBackend)
    for loader in (TOMLFileLoader(), JSONFileLoader(), YAMLFileLoader()):
        assert isinstance(loader, ports.SettingsLoader)
    sinks = [
        FileSink(tmp_path / "a.log", parent_script_name="S", rotation=rotation),
        CsvSink(tmp_path / "a.csv", parent_script_name="S", rotation=rotation),
        NetworkCsvSink(tmp_path / "n.csv", network_root=tmp_path, parent_script_name="S", rotation=rotation),
        make_console()[0],
    ]
    for sink in sinks:
        assert isinstance(sink, ports.Sink)
    assert [sink.name for sink in sinks] == ["file", "csv", "network_csv", "console"]
    assert isinstance(RichConsoleSink(), ports.Sink)


def test_fakes_fulfil_ports() -> None:
    assert isinstance(FakeFrameProvider(), ports.FrameProvider)
    assert isinstance(FakeIdentity(), ports.IdentityProvider)
    assert isinstance(FixedClock(), ports.Clock)
    assert isinstance(RecordingTranscriptBackend(), ports.TranscriptBackend)
