"""Application-layer ports describing adapter responsibilities.

Purpose
-------
Define the structural contracts the composition root wires together so the
caller resolver, the sink router and the transcript controller never depend
on live stacks, real clocks, real accounts or a real terminal.

Contents
--------
* :class:`FrameProvider` – supplies the live call chain, innermost first.
* :class:`IdentityProvider` – resolves who runs the process.
* :class:`Clock` – supplies the current local time.
* :class:`Sink` – one destination of a log event.
* :class:`TranscriptBackend` – opaque start/stop session capture resource.
* :class:`RetentionPolicy` – prunes old files of one naming group.
* :class:`SettingsLoader` – parses a settings file into a mapping.

System Role
-----------
These protocols enforce Dependency Inversion. Each adapter implements one
protocol; tests substitute deterministic fakes for all of them.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Mapping, Protocol, Sequence, runtime_checkable

from ..domain.events import FrameRecord, LogEvent, SinkResult, UserContext


@runtime_checkable
class FrameProvider(Protocol):
    """Expose the current call chain.

    Why
    ----
    Caller attribution must be testable without arranging real stack frames.
    """

    def call_chain(self, offset: int = 0, limit: int | None = None) -> Sequence[FrameRecord]:
        """Return frames innermost first, skipping *offset* frames above the caller of this method.

        ``call_chain()[0]`` describes the function that invoked ``call_chain``.
        """


@runtime_checkable
class IdentityProvider(Protocol):
    """Resolve the account and machine running the process."""

    def resolve(self) -> UserContext:
        """Return a fresh :class:`UserContext`; never raise."""


@runtime_checkable
class Clock(Protocol):
    def now(self) -> datetime:
        """Return the current local time."""


@runtime_checkable
class Sink(Protocol):
    """One independently failing destination for log events.

    Why
    ----
    Each sink reports its own outcome so the router can discard failures
    explicitly instead of relying on a blanket ``try`` around all four.
    """

    name: str

    def write(self, event: LogEvent) -> SinkResult:
        """Deliver *event* and report whether it was written, skipped or failed."""


@runtime_checkable
class TranscriptBackend(Protocol):
    """Native full-session text capture, treated as an opaque resource."""

    @property
    def active(self) -> bool:
        """``True`` while a capture is running."""

    def start(self, path: Path) -> None:
        """Begin capturing into *path*; raise ``TranscriptError`` on failure."""

    def stop(self) -> None:
        """End the running capture; raise ``TranscriptError`` when none is active."""


@runtime_checkable
class SettingsLoader(Protocol):
    def load(self, path: str) -> Mapping[str, object]:
        """Read *path* and return a mapping representation or raise ``InvalidFormat``."""


@runtime_checkable
class RetentionPolicy(Protocol):
    def enforce(self, directory: Path, pattern: str, max_count: int) -> list[Path]:
        """Keep the newest *max_count* files matching *pattern*; return the removed paths."""
