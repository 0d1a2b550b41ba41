"""Session transcript lifecycle.

Purpose
-------
Drive a :class:`TranscriptBackend` through the two states ``STOPPED`` and
``RUNNING`` and translate backend failures into return values. Neither
``start`` nor ``stop`` raises.

Contents
--------
* :class:`TranscriptState` – the two lifecycle states.
* :class:`TranscriptController` – start/stop orchestration plus rotation.

System Role
-----------
Owned by :class:`lib_script_log.core.ScriptLogger`. Failures are reported back
through the logger's own pipeline via the ``report`` callback; that callback
never touches the controller again, so the recursion stops after one step.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Callable

from ..domain.errors import TranscriptError
from ..domain.levels import LogLevel
from ..observability import log_debug, log_error
from .ports import RetentionPolicy, TranscriptBackend

TRANSCRIPT_RETENTION = 7

Reporter = Callable[[str, LogLevel], None]


class TranscriptState(Enum):
    STOPPED = "stopped"
    RUNNING = "running"


class TranscriptController:
    """Start and stop transcripts without ever raising.

    Parameters
    ----------
    backend:
        Capture resource.
    rotation:
        Retention policy applied to the transcript directory after a start.
    report:
        Callback that writes a message through the log pipeline.
    max_count:
        Transcripts kept per naming group.
    """

    def __init__(
        self,
        backend: TranscriptBackend,
        *,
        rotation: RetentionPolicy,
        report: Reporter,
        max_count: int = TRANSCRIPT_RETENTION,
    ) -> None:
        self._backend = backend
        self._rotation = rotation
        self._report = report
        self._max_count = max_count
        self._state = TranscriptState.STOPPED
        self._active_path: Path | None = None

    @property
    def state(self) -> TranscriptState:
        return self._state

    @property
    def active_path(self) -> Path | None:
        return self._active_path

    def start(self, path: Path, pattern: str) -> Path | None:
        """Begin capturing into *path* and return it, or ``None`` on failure.

        Starting while a capture runs keeps the running capture and returns its
        path. After a successful start, older transcripts matching *pattern* in
        the same directory are pruned.
        """

        if self._state is TranscriptState.RUNNING:
            self._report(f"Transcript already running: {self._active_path}", LogLevel.WARNING)
            return self._active_path
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            self._backend.start(path)
        except (TranscriptError, OSError) as exc:
            log_error("transcript_start_failed", path=str(path), error=str(exc))
            self._report(f"Failed to start transcript: {exc}", LogLevel.ERROR)
            return None
        self._state = TranscriptState.RUNNING
        self._active_path = path
        removed = self._rotation.enforce(path.parent, pattern, self._max_count)
        log_debug("transcript_started", path=str(path), removed=[str(item) for item in removed])
        return path

    def stop(self) -> bool:
        """Stop the running capture; ``False`` when none was running or stopping failed."""

        if self._state is TranscriptState.STOPPED:
            return False
        path = self._active_path
        self._state = TranscriptState.STOPPED
        self._active_path = None
        try:
            self._backend.stop()
        except (TranscriptError, OSError) as exc:
            log_error("transcript_stop_failed", path=str(path), error=str(exc))
            self._report(f"Failed to stop transcript: {exc}", LogLevel.ERROR)
            return False
        log_debug("transcript_stopped", path=str(path))
        return True


__all__ = ["TranscriptController", "TranscriptState", "TRANSCRIPT_RETENTION"]
