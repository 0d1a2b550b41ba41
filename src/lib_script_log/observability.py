"""Structured diagnostics for the library's own behaviour.

Purpose
    Give host applications a way to see why a sink dropped an entry, why a
    directory could not be created, or why a transcript failed, without the
    library ever printing those diagnostics on its own.

Contents
    - ``SESSION_ID``: context variable storing the active logging session.
    - ``get_logger``: returns the shared package logger (quiet by default).
    - ``bind_session_id``: binds or clears the active session identifier.
    - ``log_debug`` / ``log_info`` / ``log_error``: emit structured entries via a
      single private emitter.
    - ``make_event``: convenience builder for sink-related payloads.

System Integration
    Used by the application layer, the adapters and the composition root. The
    script-facing log pipeline (files, CSV, console) never routes through this
    logger; it only carries diagnostics about that pipeline.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import Any, Final, Mapping

SESSION_ID: ContextVar[str | None] = ContextVar("lib_script_log_session_id", default=None)
"""Identifier of the session whose diagnostics are currently being emitted.

Why
    A host process may initialise several loggers in sequence; the identifier
    keeps their diagnostics apart.
"""

_LOGGER: Final[logging.Logger] = logging.getLogger("lib_script_log")
_LOGGER.addHandler(logging.NullHandler())


def get_logger() -> logging.Logger:
    """Expose the package logger so applications may attach handlers.

    Why
        Leaves the library silent by default while giving host applications full
        control over handler and formatter configuration.
    """

    return _LOGGER


def bind_session_id(session_id: str | None) -> None:
    """Bind or clear the active session identifier.

    What
        Stores ``session_id`` in :data:`SESSION_ID`; ``None`` clears the binding.
    Side Effects
        Mutates the context variable visible to subsequent logging helpers.

    Examples
    --------
    >>> bind_session_id('HOST-job-20250102_030405')
    >>> SESSION_ID.get()
    'HOST-job-20250102_030405'
    >>> bind_session_id(None)
    >>> SESSION_ID.get() is None
    True
    """

    SESSION_ID.set(session_id)


def log_debug(message: str, **fields: Any) -> None:
    """Emit a structured debug log entry that includes the session context."""

    _emit(logging.DEBUG, message, fields)


def log_info(message: str, **fields: Any) -> None:
    """Emit a structured info log entry that includes the session context."""

    _emit(logging.INFO, message, fields)


def log_error(message: str, **fields: Any) -> None:
    """Emit a structured error log entry that includes the session context."""

    _emit(logging.ERROR, message, fields)


def make_event(
    sink: str,
    path: str | None,
    payload: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Build a structured payload describing a sink or filesystem event.

    Inputs
        sink: Name of the sink or component being observed.
        path: Filesystem path associated with the event, if available.
        payload: Optional mapping with extra diagnostic detail.
    Outputs
        dict[str, Any]: Data safe to unpack into :func:`log_*` helpers.

    Examples
    --------
    >>> make_event('csv', None, {'removed': 2})
    {'sink': 'csv', 'path': None, 'removed': 2}
    """

    event: dict[str, Any] = {"sink": sink, "path": path}
    if payload:
        event |= dict(payload)
    return event


def _emit(level: int, message: str, fields: Mapping[str, Any]) -> None:
    """Send a log entry through the shared logger with contextual metadata."""

    _LOGGER.log(level, message, extra={"context": _with_session(fields)})


def _with_session(fields: Mapping[str, Any]) -> dict[str, Any]:
    context = {"session_id": SESSION_ID.get()}
    context.update(fields)
    return context
