"""Transcript capture adapter.

Purpose
-------
Implement :class:`lib_script_log.application.ports.TranscriptBackend` by
duplicating everything written to ``sys.stdout`` and ``sys.stderr`` into a
transcript file until the capture stops.

Key behaviours
--------------
* Start and end banners frame each capture, with the host and timestamps.
* The original streams are restored on :meth:`TeeTranscriptBackend.stop`.
* A transcript file that becomes unwritable never breaks the primary stream.
"""

from __future__ import annotations

import socket
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, TextIO

from ...domain.errors import TranscriptError

_BANNER = "*" * 22


class _TeeStream:
    """Write-through wrapper copying text into the transcript handle."""

    def __init__(self, primary: TextIO, capture: TextIO) -> None:
        self._primary = primary
        self._capture = capture

    def write(self, text: str) -> int:
        written = self._primary.write(text)
        try:
            self._capture.write(text)
        except (OSError, ValueError):
            pass
        return written if written is not None else len(text)

    def flush(self) -> None:
        self._primary.flush()
        try:
            self._capture.flush()
        except (OSError, ValueError):
            pass

    def __getattr__(self, name: str) -> Any:
        return getattr(self._primary, name)


class TeeTranscriptBackend:
    """Tee the standard streams into a transcript file.

    Parameters
    ----------
    clock:
        Callable used for the banner timestamps.
    """

    def __init__(self, *, clock: Callable[[], datetime] = datetime.now) -> None:
        self._clock = clock
        self._handle: TextIO | None = None
        self._saved: tuple[TextIO, TextIO] | None = None
        self._path: Path | None = None

    @property
    def active(self) -> bool:
        return self._handle is not None

    def start(self, path: Path) -> None:
        if self._handle is not None:
            raise TranscriptError(f"transcript already active: {self._path}")
        try:
            handle = path.open("a", encoding="utf-8", newline="")
            handle.write(self._banner("Transcript started", path))
            handle.flush()
        except OSError as exc:
            raise TranscriptError(f"cannot open transcript {path}: {exc}") from exc
        self._handle = handle
        self._path = path
        self._saved = (sys.stdout, sys.stderr)
        sys.stdout = _TeeStream(sys.stdout, handle)  # type: ignore[assignment]
        sys.stderr = _TeeStream(sys.stderr, handle)  # type: ignore[assignment]

    def stop(self) -> None:
        if self._handle is None or self._saved is None:
            raise TranscriptError("no transcript is active")
        handle, path = self._handle, self._path
        sys.stdout, sys.stderr = self._saved
        self._handle = None
        self._saved = None
        self._path = None
        try:
            handle.write(self._banner("Transcript ended", path))
            handle.close()
        except OSError as exc:
            raise TranscriptError(f"cannot finish transcript {path}: {exc}") from exc

    def _banner(self, title: str, path: Path | None) -> str:
        lines = [
            _BANNER,
            f"{title}, output file is {path}",
            f"Time: {self._clock():%Y%m%d%H%M%S}",
            f"Host: {socket.gethostname()}",
            f"Process: {sys.executable}",
            _BANNER,
        ]
        return "\n".join(lines) + "\n"


__all__ = ["TeeTranscriptBackend"]
