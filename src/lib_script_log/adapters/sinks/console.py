"""Rich console sink.

Purpose
-------
Print the formatted log line to the terminal, coloured by level. Markup and
syntax highlighting stay off so messages appear exactly as logged, brackets
and all.

Contents
--------
* :data:`DEFAULT_STYLES` – Rich style per canonical level.
* :class:`RichConsoleSink` – the sink, plus :meth:`write_diagnostic` for the
  call-chain dump shown in debug mode.
"""

from __future__ import annotations

from typing import Mapping

from rich.console import Console
from rich.text import Text

from ...domain.events import LogEvent, SinkResult, format_line
from ...domain.levels import LogLevel

DEFAULT_STYLES: Mapping[LogLevel, str] = {
    LogLevel.DEBUG: "dim cyan",
    LogLevel.INFO: "white",
    LogLevel.WARNING: "yellow",
    LogLevel.ERROR: "bold red",
    LogLevel.SUCCESS: "green",
}

_DIAGNOSTIC_STYLE = "magenta"


class RichConsoleSink:
    """Write formatted lines to a :class:`rich.console.Console`.

    Parameters
    ----------
    console:
        Console to print on; a stdout console is created when omitted.
    styles:
        Per-level overrides merged over :data:`DEFAULT_STYLES`; keys may be
        level names or :class:`LogLevel` members.
    """

    name = "console"

    def __init__(
        self,
        console: Console | None = None,
        *,
        styles: Mapping[LogLevel | str, str] | None = None,
    ) -> None:
        self._console = console or Console(soft_wrap=True, highlight=False)
        self._styles = dict(DEFAULT_STYLES)
        for key, style in (styles or {}).items():
            self._styles[LogLevel.from_name(key)] = style

    @property
    def console(self) -> Console:
        return self._console

    def style_for(self, level: LogLevel) -> str:
        return self._styles.get(level, "")

    def write(self, event: LogEvent) -> SinkResult:
        self._print(Text(format_line(event), style=self.style_for(event.level)))
        return SinkResult.written(self.name)

    def write_diagnostic(self, lines: list[str]) -> None:
        """Print diagnostic *lines* (for example a call-chain dump)."""

        for line in lines:
            self._print(Text(line, style=_DIAGNOSTIC_STYLE))

    def _print(self, text: Text) -> None:
        self._console.print(text, markup=False, highlight=False, soft_wrap=True)


__all__ = ["DEFAULT_STYLES", "RichConsoleSink"]
