"""Session path derivation.

Purpose
-------
Compute the file targets of one logging session from the configuration, the
user context, the calling script name and the initialisation time. Paths are
derived once per initialisation and never change afterwards.

Layout
------
* Log: ``{root}/{yyyy-MM-dd}/{parent}/{stem}-activity-{ts}.log``
* CSV: ``{root}/CSV/{yyyy-MM-dd}/{parent}/{stem}-activity-{ts}.csv``
* Network CSV: ``{network}/{job}/{computer}/{yyyy-MM-dd}/{parent}/{stem}-activity-{ts}.csv``
* Transcript: ``{root}/Transcript/{yyyy-MM-dd}/{parent}/{stem}-transcript-{ts}.log``

``stem`` is ``{computer}-{calling_script}-{user_type}-{user_name}-{parent}``
and ``ts`` is ``yyyyMMdd_HHmmss``. ``root`` is ``custom_log_path`` when set,
otherwise ``base_path``.
"""

from __future__ import annotations

import glob
import re
from datetime import datetime
from pathlib import Path
from typing import Final

from ...domain.config import LogConfig, SessionPaths
from ...domain.errors import ConfigurationError
from ...domain.events import UserContext
from ...observability import log_debug, make_event

DATE_FORMAT: Final[str] = "%Y-%m-%d"
FILE_TIMESTAMP_FORMAT: Final[str] = "%Y%m%d_%H%M%S"
CSV_DIRECTORY: Final[str] = "CSV"
TRANSCRIPT_DIRECTORY: Final[str] = "Transcript"

_UNSAFE = re.compile(r'[<>:"/\\|?*\x00-\x1f]')


def sanitize_component(value: str) -> str:
    """Make *value* safe as a single file or directory name.

    Examples
    --------
    >>> sanitize_component("CORP\\\\ada")
    'CORP_ada'
    >>> sanitize_component("   ")
    '_'
    """

    cleaned = _UNSAFE.sub("_", value.strip()).rstrip(". ")
    return cleaned or "_"


def activity_pattern(parent_script_name: str, extension: str) -> str:
    """Return the retention glob for activity files of *parent_script_name*.

    Examples
    --------
    >>> activity_pattern("Nightly[1]", "log")
    '*-*-*-*-Nightly[[]1]-activity*.log'
    """

    return f"*-*-*-*-{glob.escape(sanitize_component(parent_script_name))}-activity*.{extension}"


def transcript_pattern(parent_script_name: str) -> str:
    return f"*-*-*-*-{glob.escape(sanitize_component(parent_script_name))}-transcript*.log"


class SessionPathManager:
    """Derive and prepare :class:`SessionPaths` for a session."""

    def initialize(
        self,
        config: LogConfig,
        user: UserContext,
        calling_script: str,
        now: datetime,
    ) -> SessionPaths:
        """Return the session's paths and create their directories.

        Directory creation is skipped entirely when file logging is disabled.
        Failing to create a log or CSV directory is tolerated; the sinks report
        the failure later.

        Raises
        ------
        ConfigurationError
            When the log root itself cannot be created or is not a directory.
        """

        root = config.log_root
        date_stamp = now.strftime(DATE_FORMAT)
        timestamp = now.strftime(FILE_TIMESTAMP_FORMAT)
        parent = sanitize_component(config.parent_script_name)
        stem = "-".join(
            sanitize_component(part)
            for part in (
                user.computer_name,
                calling_script,
                user.user_type,
                user.user_name,
                config.parent_script_name,
            )
        )
        file_name = f"{stem}-activity-{timestamp}"
        log_directory = root / date_stamp / parent
        csv_directory = root / CSV_DIRECTORY / date_stamp / parent
        network_csv_file = None
        if config.network_log_path is not None:
            network_csv_file = (
                config.network_log_path
                / sanitize_component(config.job_name)
                / sanitize_component(user.computer_name)
                / date_stamp
                / parent
                / f"{file_name}.csv"
            )

        paths = SessionPaths(
            log_file=log_directory / f"{file_name}.log",
            csv_file=csv_directory / f"{file_name}.csv",
            network_csv_file=network_csv_file,
            date_stamp=date_stamp,
            timestamp=timestamp,
            file_stem=stem,
        )
        if config.disable_file_logging:
            log_debug("session_directories_skipped", **make_event("session", str(root)))
            return paths

        _prepare_root(root)
        for directory in (log_directory, csv_directory):
            ensure_directory(directory)
        return paths

    @staticmethod
    def transcript_file(config: LogConfig, paths: SessionPaths, now: datetime) -> Path:
        """Return the transcript target for a capture started at *now*."""

        parent = sanitize_component(config.parent_script_name)
        directory = config.log_root / TRANSCRIPT_DIRECTORY / paths.date_stamp / parent
        return directory / f"{paths.file_stem}-transcript-{now.strftime(FILE_TIMESTAMP_FORMAT)}.log"


def ensure_directory(directory: Path) -> bool:
    """Create *directory* with parents; return ``False`` instead of raising."""

    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        log_debug("directory_create_failed", **make_event("session", str(directory), {"error": str(exc)}))
        return False
    return True


def _prepare_root(root: Path) -> None:
    try:
        root.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ConfigurationError(f"log root {root} cannot be created: {exc}") from exc
    if not root.is_dir():
        raise ConfigurationError(f"log root {root} is not a directory")


__all__ = [
    "DATE_FORMAT",
    "FILE_TIMESTAMP_FORMAT",
    "SessionPathManager",
    "activity_pattern",
    "ensure_directory",
    "sanitize_component",
    "transcript_pattern",
]
