"""Fan-out of one log event to independently failing sinks.

Purpose
-------
Deliver a :class:`LogEvent` to the file-based sink group (local file, CSV,
network CSV) and to the console sink. Every attempt yields a
:class:`SinkResult`; failures are inspected and then discarded here, in one
visible place, so a log call never fails because a sink did.

Contents
--------
* :class:`SinkRouter` – routing and gating rules.

System Role
-----------
Owned by :class:`lib_script_log.core.ScriptLogger`, rebuilt on every
initialisation from the session's paths. Sink order is fixed: file sinks in
the order given, console last.
"""

from __future__ import annotations

from collections.abc import Sequence

from ..domain.events import LogEvent, SinkResult, SinkStatus
from ..domain.levels import LogLevel, LogMode
from ..observability import log_debug
from .ports import Sink

_FILE_LOGGING_DISABLED = "file logging disabled"


class SinkRouter:
    """Route events to sinks, applying mode and kill-switch gating.

    Parameters
    ----------
    file_sinks:
        File, CSV and network CSV sinks; skipped as a group when
        ``file_logging_enabled`` is ``False``.
    console:
        Console sink or ``None``. Evaluated independently of the file group.
    file_logging_enabled:
        Inverse of the session's ``disable_file_logging`` flag.
    """

    def __init__(
        self,
        file_sinks: Sequence[Sink],
        console: Sink | None,
        *,
        file_logging_enabled: bool = True,
    ) -> None:
        self._file_sinks = tuple(file_sinks)
        self._console = console
        self._file_logging_enabled = file_logging_enabled

    @property
    def sink_names(self) -> tuple[str, ...]:
        names = [sink.name for sink in self._file_sinks]
        if self._console is not None:
            names.append(self._console.name)
        return tuple(names)

    def emit(self, event: LogEvent, *, mode: LogMode) -> None:
        """Attempt every sink for *event* and discard the outcomes."""

        for result in self.attempt(event, mode=mode):
            _discard(result)

    def attempt(self, event: LogEvent, *, mode: LogMode) -> list[SinkResult]:
        """Attempt every sink and return one result per sink, in routing order.

        Examples
        --------
        >>> from datetime import datetime
        >>> from lib_script_log.domain.events import CallerInfo, UserContext
        >>> event = LogEvent(datetime(2025, 1, 1), LogLevel.DEBUG, "x", CallerInfo("a.py", "f", 1),
        ...                  UserContext("User", "u", "H"), "Job", "Parent", "a")
        >>> SinkRouter([], None).attempt(event, mode=LogMode.NORMAL)
        []
        """

        results = [self._attempt_file_sink(sink, event) for sink in self._file_sinks]
        if self._console is not None:
            results.append(self._attempt_console(self._console, event, mode))
        return results

    def _attempt_file_sink(self, sink: Sink, event: LogEvent) -> SinkResult:
        if not self._file_logging_enabled:
            return SinkResult.skipped(sink.name, _FILE_LOGGING_DISABLED)
        return _safe_write(sink, event)

    def _attempt_console(self, console: Sink, event: LogEvent, mode: LogMode) -> SinkResult:
        if not mode.console_enabled:
            return SinkResult.skipped(console.name, f"console disabled in {mode.value} mode")
        if event.level is LogLevel.DEBUG and not mode.debug_enabled:
            return SinkResult.skipped(console.name, "debug output disabled")
        return _safe_write(console, event)


def _safe_write(sink: Sink, event: LogEvent) -> SinkResult:
    try:
        return sink.write(event)
    except Exception as exc:  # noqa: BLE001 - a sink must never break the log call
        return SinkResult.failed(sink.name, exc)


def _discard(result: SinkResult) -> None:
    """Drop *result*; failures leave a trace on the package logger only."""

    if result.status is SinkStatus.FAILED:
        log_debug("sink_failed", sink=result.sink, reason=result.reason)


__all__ = ["SinkRouter"]
