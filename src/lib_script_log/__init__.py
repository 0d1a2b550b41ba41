"""Structured, multi-sink logging for scripts.

Create a :class:`ScriptLogger`, call :meth:`ScriptLogger.initialize` once per
run, then log through :meth:`ScriptLogger.log` or the level helpers. Each entry
goes to a session log file, a session CSV file, an optional network-share CSV
file and the console, each of which may fail without affecting the others.
"""

from __future__ import annotations

from .core import ScriptLogger, get_module_version, initialize, load_settings
from .domain.config import LogConfig, SessionPaths
from .domain.errors import (
    ConfigurationError,
    InvalidFormat,
    NotFound,
    NotInitializedError,
    ScriptLogError,
    SinkError,
    TranscriptError,
)
from .domain.events import CallerInfo, LogEvent, UserContext
from .domain.levels import LogLevel, LogMode
from .observability import bind_session_id, get_logger
from .testing import i_should_fail

__all__ = [
    "CallerInfo",
    "ConfigurationError",
    "InvalidFormat",
    "LogConfig",
    "LogEvent",
    "LogLevel",
    "LogMode",
    "NotFound",
    "NotInitializedError",
    "ScriptLogError",
    "ScriptLogger",
    "SessionPaths",
    "SinkError",
    "TranscriptError",
    "UserContext",
    "bind_session_id",
    "get_logger",
    "get_module_version",
    "i_should_fail",
    "initialize",
    "load_settings",
]
