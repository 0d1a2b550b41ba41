"""Plain-text log file sink.

Purpose
-------
Append one formatted line per event to the session log file and keep the
directory within its retention cap. Each write opens, appends and closes the
file; no handle is held between calls.

Contents
--------
* :class:`FileSink` – the sink.
* :func:`append_lines` – shared append helper (also used for the environment
  descriptor written at initialisation).
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from ...application.ports import RetentionPolicy
from ...domain.errors import SinkError
from ...domain.events import LogEvent, SinkResult, format_line
from ..paths.session import activity_pattern
from ..rotation.default import FILE_RETENTION


def append_lines(path: Path, lines: Iterable[str]) -> None:
    """Append *lines* to *path*, each terminated by ``\\n``, creating parents.

    Text is written verbatim: no newline translation, no truncation.
    """

    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8", newline="") as handle:
        for line in lines:
            handle.write(f"{line}\n")


class FileSink:
    """Write ``[ts] [LEVEL] [Parent.Function:Line] - Message`` lines."""

    name = "file"

    def __init__(
        self,
        path: Path,
        *,
        parent_script_name: str,
        rotation: RetentionPolicy,
        max_count: int = FILE_RETENTION,
    ) -> None:
        self._path = path
        self._pattern = activity_pattern(parent_script_name, "log")
        self._rotation = rotation
        self._max_count = max_count

    @property
    def path(self) -> Path:
        return self._path

    def write(self, event: LogEvent) -> SinkResult:
        try:
            append_lines(self._path, [format_line(event)])
        except OSError as exc:
            return SinkResult.failed(self.name, SinkError(self.name, str(exc)))
        self._rotation.enforce(self._path.parent, self._pattern, self._max_count)
        return SinkResult.written(self.name)


__all__ = ["FileSink", "append_lines"]
