"""Closed vocabularies for severities and output modes.

Purpose
-------
Replace stringly-typed level and mode checks with enums plus total mapping
functions. Callers may pass any string (or ``None``); the mappers always
return a member and never raise.

Contents
--------
* :class:`LogLevel` – the five canonical severities.
* :class:`LogMode` – console/file behaviour selected per session or per call.
* ``_LEVEL_ALIASES`` / ``_MODE_ALIASES`` – extended input vocabularies.
"""

from __future__ import annotations

from enum import Enum


class LogLevel(Enum):
    """Canonical severities written to every sink."""

    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    DEBUG = "DEBUG"
    SUCCESS = "SUCCESS"

    @classmethod
    def from_name(cls, name: object) -> "LogLevel":
        """Map *name* case-insensitively onto a canonical level.

        Unknown input (including ``None`` and non-strings) maps to
        :attr:`INFO`.

        Examples
        --------
        >>> LogLevel.from_name("critical")
        <LogLevel.ERROR: 'ERROR'>
        >>> LogLevel.from_name("Verbose")
        <LogLevel.DEBUG: 'DEBUG'>
        >>> LogLevel.from_name("nonsense")
        <LogLevel.INFO: 'INFO'>
        """

        if isinstance(name, LogLevel):
            return name
        if not isinstance(name, str):
            return cls.INFO
        return _LEVEL_ALIASES.get(name.strip().upper(), cls.INFO)


class LogMode(Enum):
    """Output behaviour for a session or a single call.

    ``NORMAL`` writes files and console (without DEBUG), ``ENABLE_DEBUG``
    also shows DEBUG on the console, ``SILENT`` writes files only and ``OFF``
    behaves like ``SILENT``.
    """

    NORMAL = "Normal"
    ENABLE_DEBUG = "EnableDebug"
    SILENT = "SilentMode"
    OFF = "Off"

    @property
    def console_enabled(self) -> bool:
        return self not in (LogMode.SILENT, LogMode.OFF)

    @property
    def debug_enabled(self) -> bool:
        return self is LogMode.ENABLE_DEBUG

    @classmethod
    def from_name(cls, name: object) -> "LogMode":
        """Map *name* onto a mode; unknown input selects :attr:`NORMAL`.

        ``False`` selects :attr:`OFF` because YAML reads a bare ``Off`` as a
        boolean.

        Examples
        --------
        >>> LogMode.from_name("EnableDebug")
        <LogMode.ENABLE_DEBUG: 'EnableDebug'>
        >>> LogMode.from_name("off").console_enabled
        False
        >>> LogMode.from_name(False)
        <LogMode.OFF: 'Off'>
        """

        if isinstance(name, LogMode):
            return name
        if name is False:
            return cls.OFF
        if not isinstance(name, str):
            return cls.NORMAL
        return _MODE_ALIASES.get(name.strip().lower(), cls.NORMAL)


_LEVEL_ALIASES: dict[str, LogLevel] = {
    "INFO": LogLevel.INFO,
    "INFORMATION": LogLevel.INFO,
    "NOTICE": LogLevel.INFO,
    "WARNING": LogLevel.WARNING,
    "WARN": LogLevel.WARNING,
    "ERROR": LogLevel.ERROR,
    "CRITICAL": LogLevel.ERROR,
    "DEBUG": LogLevel.DEBUG,
    "VERBOSE": LogLevel.DEBUG,
    "SUCCESS": LogLevel.SUCCESS,
}

_MODE_ALIASES: dict[str, LogMode] = {
    "normal": LogMode.NORMAL,
    "enabledebug": LogMode.ENABLE_DEBUG,
    "debug": LogMode.ENABLE_DEBUG,
    "verbose": LogMode.ENABLE_DEBUG,
    "silentmode": LogMode.SILENT,
    "silent": LogMode.SILENT,
    "off": LogMode.OFF,
}


__all__ = ["LogLevel", "LogMode"]
