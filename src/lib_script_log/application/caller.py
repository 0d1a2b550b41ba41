"""Caller attribution for log calls.

Purpose
-------
Turn the raw call chain handed over by a :class:`FrameProvider` into the
:class:`CallerInfo` written next to every log line. The resolver looks through
exactly one known wrapper function so helpers such as ``logger.info`` or a
script's own ``write_log`` report the line that called them.

Contents
--------
* :class:`CallerResolver` – pure resolution over a sequence of frames.

System Role
-----------
Called by :class:`lib_script_log.core.ScriptLogger` on every log call. The
chain always starts with the logger's entry point (index ``0``), followed by
its immediate caller (index ``1``) and that caller's caller (index ``2``).
Deeper wrapper chains resolve to the wrapper's caller, not the true origin.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import PurePath

from ..domain.config import DEFAULT_WRAPPER_NAMES
from ..domain.events import MAIN_SCRIPT, UNKNOWN_CALLER, UNKNOWN_SCRIPT, CallerInfo, FrameRecord

_MODULE_LEVEL = "<module>"


class CallerResolver:
    """Resolve the logical call site from an innermost-first call chain.

    Examples
    --------
    >>> chain = [
    ...     FrameRecord("log", "core.py", 200),
    ...     FrameRecord("write_log", "job.py", 4),
    ...     FrameRecord("main", "job.py", 17),
    ... ]
    >>> info = CallerResolver().resolve(chain)
    >>> info.function_name, info.line_number, info.through_wrapper, info.wrapper_name
    ('main', 17, True, 'write_log')
    >>> CallerResolver().resolve(chain[:1]).function_name
    '<Unknown>'
    """

    def __init__(self, wrapper_names: Iterable[str] = DEFAULT_WRAPPER_NAMES) -> None:
        self._wrapper_names = frozenset(wrapper_names)

    @property
    def wrapper_names(self) -> frozenset[str]:
        return self._wrapper_names

    def resolve(self, chain: Sequence[FrameRecord]) -> CallerInfo:
        """Return the :class:`CallerInfo` for *chain*; never raises.

        A wrapper at index ``1`` with nothing above it falls back to the
        wrapper frame itself, reported as a direct call.
        """

        if len(chain) < 2:
            return UNKNOWN_CALLER
        immediate = chain[1]
        if immediate.function in self._wrapper_names and len(chain) > 2:
            return _caller_info(chain[2], wrapper_name=immediate.function)
        return _caller_info(immediate, wrapper_name=None)


def _caller_info(frame: FrameRecord, *, wrapper_name: str | None) -> CallerInfo:
    function = frame.function
    if function == _MODULE_LEVEL:
        function = wrapper_name or MAIN_SCRIPT
    return CallerInfo(
        script_file_name=_script_file_name(frame.filename),
        function_name=function,
        line_number=max(frame.line_number or 0, 0),
        through_wrapper=wrapper_name is not None,
        wrapper_name=wrapper_name,
    )


def _script_file_name(filename: str) -> str:
    """Return the bare file name of *filename* or ``UnknownScript``.

    Examples
    --------
    >>> _script_file_name("/opt/jobs/nightly.py"), _script_file_name("")
    ('nightly.py', 'UnknownScript')
    """

    if not filename:
        return UNKNOWN_SCRIPT
    return PurePath(filename).name or UNKNOWN_SCRIPT


__all__ = ["CallerResolver"]
