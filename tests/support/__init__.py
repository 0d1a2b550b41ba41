"""Shared fakes and sandbox helpers for the test suite.

Every environmental collaborator of :class:`lib_script_log.ScriptLogger` has a
deterministic stand-in here so tests can pin call chains, identities, clocks
and transcript behaviour.
"""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from pathlib import Path
from typing import Sequence

from rich.console import Console

import lib_script_log.core as core_module
from lib_script_log import ScriptLogger
from lib_script_log.adapters.sinks.console import RichConsoleSink
from lib_script_log.domain.errors import TranscriptError
from lib_script_log.domain.events import FrameRecord, LogEvent, SinkResult, UserContext

CORE_FILE = core_module.__file__
SCRIPT_FILE = "/opt/jobs/nightly.py"

DEFAULT_CHAIN: tuple[FrameRecord, ...] = (
    FrameRecord("log", CORE_FILE, 250),
    FrameRecord("main", SCRIPT_FILE, 17),
    FrameRecord("<module>", SCRIPT_FILE, 40),
)


class FakeFrameProvider:
    """Return a pinned call chain regardless of the real stack."""

    def __init__(self, chain: Sequence[FrameRecord] = DEFAULT_CHAIN) -> None:
        self.chain = list(chain)

    def call_chain(self, offset: int = 0, limit: int | None = None) -> list[FrameRecord]:
        frames = self.chain[offset:]
        return frames if limit is None else frames[:limit]


class FakeIdentity:
    def __init__(self, user_type: str = "User", user_name: str = "ada", computer_name: str = "BUILD01") -> None:
        self.context = UserContext(user_type, user_name, computer_name)
        self.calls = 0

    def resolve(self) -> UserContext:
        self.calls += 1
        return self.context


class FixedClock:
    def __init__(self, moment: datetime = datetime(2025, 1, 2, 3, 4, 5)) -> None:
        self.moment = moment

    def now(self) -> datetime:
        return self.moment

    def advance(self, seconds: int) -> None:
        self.moment += timedelta(seconds=seconds)


class RecordingTranscriptBackend:
    """Pretend capture that writes a marker line and records calls."""

    def __init__(self, *, fail_start: bool = False, fail_stop: bool = False) -> None:
        self.fail_start = fail_start
        self.fail_stop = fail_stop
        self.started: list[Path] = []
        self.stopped = 0
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    def start(self, path: Path) -> None:
        if self.fail_start:
            raise TranscriptError("capture facility unavailable")
        path.write_text("transcript\n", encoding="utf-8")
        self.started.append(path)
        self._active = True

    def stop(self) -> None:
        if self.fail_stop:
            raise TranscriptError("capture facility refused to stop")
        self._active = False
        self.stopped += 1


class RecordingSink:
    def __init__(self, name: str = "recording") -> None:
        self.name = name
        self.events: list[LogEvent] = []

    def write(self, event: LogEvent) -> SinkResult:
        self.events.append(event)
        return SinkResult.written(self.name)


class ExplodingSink:
    def __init__(self, name: str = "exploding", error: Exception | None = None) -> None:
        self.name = name
        self.error = error or OSError("disk on fire")
        self.attempts = 0

    def write(self, event: LogEvent) -> SinkResult:
        self.attempts += 1
        raise self.error


class NullRetention:
    def __init__(self) -> None:
        self.calls: list[tuple[Path, str, int]] = []

    def enforce(self, directory: Path, pattern: str, max_count: int) -> list[Path]:
        self.calls.append((directory, pattern, max_count))
        return []


def make_console() -> tuple[RichConsoleSink, io.StringIO]:
    """Return a console sink printing plain text into a buffer."""

    buffer = io.StringIO()
    console = Console(file=buffer, width=400, color_system=None, soft_wrap=True, highlight=False)
    return RichConsoleSink(console), buffer


@dataclass
class LoggerSandbox:
    """A :class:`ScriptLogger` wired to fakes plus the handles tests inspect."""

    root: Path
    logger: ScriptLogger
    console_buffer: io.StringIO
    clock: FixedClock
    identity: FakeIdentity
    transcript: RecordingTranscriptBackend
    frames: FakeFrameProvider | None = None
    environ: dict[str, str] = field(default_factory=dict)

    @property
    def console_output(self) -> str:
        return self.console_buffer.getvalue()

    def initialize(self, **options: object):
        options.setdefault("base_path", self.root / "logs")
        options.setdefault("job_name", "Job1")
        options.setdefault("parent_script_name", "Script1")
        return self.logger.initialize(**options)  # type: ignore[arg-type]


def create_logger_sandbox(
    tmp_path: Path,
    *,
    chain: Sequence[FrameRecord] | None = DEFAULT_CHAIN,
    environ: dict[str, str] | None = None,
    transcript: RecordingTranscriptBackend | None = None,
) -> LoggerSandbox:
    """Build a sandboxed logger; ``chain=None`` keeps the live frame provider."""

    console, buffer = make_console()
    clock = FixedClock()
    identity = FakeIdentity()
    backend = transcript or RecordingTranscriptBackend()
    frames = FakeFrameProvider(chain) if chain is not None else None
    env = dict(environ or {})
    logger = ScriptLogger(
        frame_provider=frames,
        identity=identity,
        clock=clock,
        console=console,
        transcript_backend=backend,
        environ=env,
    )
    return LoggerSandbox(
        root=tmp_path,
        logger=logger,
        console_buffer=buffer,
        clock=clock,
        identity=identity,
        transcript=backend,
        frames=frames,
        environ=env,
    )


def read_verbatim(path: Path) -> str:
    """Read *path* without newline translation."""

    return path.read_bytes().decode("utf-8")
