"""Domain-level session configuration value objects.

Purpose
-------
Anchor the immutable :class:`LogConfig` that a :class:`ScriptLogger` holds for
the lifetime of a session, and the :class:`SessionPaths` derived from it once
per initialisation. No I/O happens here.

Contents
--------
* :class:`SourceInfo` – provenance of one resolved setting.
* :class:`LogConfig` – validated session configuration.
* :class:`SessionPaths` – file targets fixed for the session.
* :data:`DEFAULT_WRAPPER_NAMES` – wrapper functions skipped by caller
  resolution.
* :data:`UNINITIALIZED` – configuration used before ``initialize``.

System Role
-----------
Every log call reads the current :class:`LogConfig`; re-initialisation swaps
in a new instance instead of mutating the old one, so the paths derived from
it never change mid-session.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final, TypedDict

from .errors import ConfigurationError
from .levels import LogMode


class SourceInfo(TypedDict):
    """Describe which settings layer supplied a value.

    Attributes
    ----------
    layer:
        ``"defaults"``, ``"file"``, ``"env"`` or ``"arguments"``.
    path:
        Settings file path for the ``"file"`` layer, otherwise ``None``.
    key:
        Setting name (for example ``"network_log_path"``).
    """

    layer: str
    path: str | None
    key: str


DEFAULT_WRAPPER_NAMES: Final[frozenset[str]] = frozenset({"write_log", "log_message"})
"""Functions treated as one level of wrapper around :meth:`ScriptLogger.log`.

The logger's own level helpers are not wrappers: frames inside this package
are trimmed before resolution, so a script wrapper around ``logger.info``
still resolves to its caller. Scripts add wrapper names through the
``wrapper_names`` setting.
"""

_REQUIRED_FIELDS: Final[tuple[str, ...]] = ("base_path", "job_name", "parent_script_name")
_TRUE_WORDS: Final[frozenset[str]] = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True, slots=True)
class LogConfig:
    """Validated configuration for one logging session.

    Why
    ----
    Callers hold a logger handle wrapping this object instead of relying on
    hidden process-wide state.

    Examples
    --------
    >>> cfg = LogConfig.from_settings({"base_path": "/tmp/x", "job_name": "Job1", "parent_script_name": "Script1"})
    >>> cfg.initialized, cfg.mode
    (True, <LogMode.NORMAL: 'Normal'>)
    >>> cfg.log_root.as_posix()
    '/tmp/x'
    """

    base_path: Path | None = None
    job_name: str = ""
    parent_script_name: str = ""
    custom_log_path: Path | None = None
    network_log_path: Path | None = None
    mode: LogMode = LogMode.NORMAL
    disable_file_logging: bool = False
    wrapper_names: frozenset[str] = field(default=DEFAULT_WRAPPER_NAMES)
    initialized: bool = False

    @property
    def log_root(self) -> Path:
        """Return the directory that anchors file, CSV and transcript trees."""

        root = self.custom_log_path or self.base_path
        if root is None:
            raise ConfigurationError("logging session has no base path")
        return root

    @classmethod
    def from_settings(cls, values: Mapping[str, object]) -> "LogConfig":
        """Build an initialised configuration from resolved *values*.

        Raises
        ------
        ConfigurationError
            When a required field is missing or blank.
        """

        missing = [name for name in _REQUIRED_FIELDS if not _text(values.get(name))]
        if missing:
            raise ConfigurationError(f"missing required logging settings: {', '.join(missing)}")
        return cls(
            base_path=Path(_text(values["base_path"])),
            job_name=_text(values["job_name"]),
            parent_script_name=_text(values["parent_script_name"]),
            custom_log_path=_optional_path(values.get("custom_log_path")),
            network_log_path=_optional_path(values.get("network_log_path")),
            mode=LogMode.from_name(values.get("mode")),
            disable_file_logging=_flag(values.get("disable_file_logging")),
            wrapper_names=DEFAULT_WRAPPER_NAMES | _names(values.get("wrapper_names")),
            initialized=True,
        )


@dataclass(frozen=True, slots=True)
class SessionPaths:
    """File targets derived once per initialisation.

    ``transcript_directory`` stays ``None`` until the first transcript start.
    """

    log_file: Path
    csv_file: Path
    network_csv_file: Path | None
    date_stamp: str
    timestamp: str
    file_stem: str
    transcript_directory: Path | None = None

    @property
    def log_directory(self) -> Path:
        return self.log_file.parent

    @property
    def csv_directory(self) -> Path:
        return self.csv_file.parent


UNINITIALIZED: Final[LogConfig] = LogConfig()


def _text(value: object) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _optional_path(value: object) -> Path | None:
    text = _text(value)
    return Path(text) if text else None


def _flag(value: object) -> bool:
    """Coerce textual or native booleans; unrecognised words count as ``False``.

    Examples
    --------
    >>> _flag("Yes"), _flag(True), _flag("0"), _flag(None)
    (True, True, False, False)
    """

    if isinstance(value, bool):
        return value
    return _text(value).lower() in _TRUE_WORDS


def _names(value: object) -> frozenset[str]:
    """Accept a comma-separated string or an iterable of names."""

    if value is None:
        return frozenset()
    if isinstance(value, str):
        items: Iterable[object] = value.split(",")
    elif isinstance(value, Iterable):
        items = value
    else:
        return frozenset()
    return frozenset(text for text in (_text(item) for item in items) if text)


__all__ = [
    "DEFAULT_WRAPPER_NAMES",
    "LogConfig",
    "SessionPaths",
    "SourceInfo",
    "UNINITIALIZED",
]
