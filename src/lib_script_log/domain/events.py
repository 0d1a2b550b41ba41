"""Per-call value objects and their textual renderings.

Purpose
-------
Describe everything that exists for the lifetime of a single log call: the
raw call-chain frames, the resolved caller, the user context, the log event
itself, and the outcome of one sink attempt. The module also owns the two
wire formats (plain-text line and CSV record) so every sink renders events
identically.

Contents
--------
* :class:`FrameRecord` – one frame of the live call chain.
* :class:`CallerInfo` – resolved call site of a log call.
* :class:`UserContext` – who is running the process.
* :class:`LogEvent` – one event fanned out to the sinks.
* :class:`SinkStatus` / :class:`SinkResult` – outcome of a sink attempt.
* :func:`format_line` / :func:`csv_row` – canonical renderings.
* :data:`CSV_COLUMNS` / :data:`NETWORK_CSV_COLUMNS` – stable column order.

System Role
-----------
Pure domain code: no I/O, no clocks. Adapters receive these objects and only
decide *where* the rendered text goes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Final

from .levels import LogLevel

TIMESTAMP_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"
"""Timestamp layout used in log lines and CSV records (``yyyy-MM-dd HH:mm:ss``)."""

UNKNOWN_SCRIPT: Final[str] = "UnknownScript"
UNKNOWN_FUNCTION: Final[str] = "<Unknown>"
MAIN_SCRIPT: Final[str] = "MainScript"

CSV_COLUMNS: Final[tuple[str, ...]] = (
    "Timestamp",
    "Level",
    "ParentScript",
    "CallingScript",
    "ScriptName",
    "FunctionName",
    "LineNumber",
    "Message",
    "Hostname",
    "UserType",
    "UserName",
    "FullUserContext",
    "CallerInfo",
)

NETWORK_CSV_COLUMNS: Final[tuple[str, ...]] = (*CSV_COLUMNS, "JobName", "LogType")


@dataclass(frozen=True, slots=True)
class FrameRecord:
    """One entry of the call chain, innermost first."""

    function: str
    filename: str
    line_number: int

    def describe(self) -> str:
        return f"{self.filename}:{self.line_number} in {self.function}"


@dataclass(frozen=True, slots=True)
class CallerInfo:
    """Resolved call site of a log call.

    Attributes
    ----------
    script_file_name:
        File name (no directory) of the source that issued the call.
    function_name:
        Calling function, ``"MainScript"`` for module-level code, or the
        wrapper name when module-level code called through a wrapper.
    line_number:
        Line in the calling source; ``0`` when unknown.
    through_wrapper / wrapper_name:
        Whether one known wrapper function was skipped and which one.
    """

    script_file_name: str
    function_name: str
    line_number: int
    through_wrapper: bool = False
    wrapper_name: str | None = None

    @property
    def summary(self) -> str:
        """Return the compact ``script:function:line`` form used in CSV records.

        Examples
        --------
        >>> CallerInfo("job.py", "main", 12, True, "write_log").summary
        'job.py:main:12 (via write_log)'
        """

        text = f"{self.script_file_name}:{self.function_name}:{self.line_number}"
        if self.through_wrapper and self.wrapper_name:
            text += f" (via {self.wrapper_name})"
        return text


UNKNOWN_CALLER: Final[CallerInfo] = CallerInfo(UNKNOWN_SCRIPT, UNKNOWN_FUNCTION, 0)


@dataclass(frozen=True, slots=True)
class UserContext:
    """Who runs the process: account type, account name, machine name."""

    user_type: str
    user_name: str
    computer_name: str

    @property
    def full_user_context(self) -> str:
        return f"{self.user_type}-{self.user_name}"


@dataclass(frozen=True, slots=True)
class LogEvent:
    """A single log event; built once, rendered by every sink, then dropped."""

    timestamp: datetime
    level: LogLevel
    message: str
    caller: CallerInfo
    user: UserContext
    job_name: str
    parent_script_name: str
    calling_script_name: str

    @property
    def timestamp_text(self) -> str:
        return self.timestamp.strftime(TIMESTAMP_FORMAT)


def format_line(event: LogEvent) -> str:
    """Render *event* as ``[ts] [LEVEL] [Parent.Function:Line] - Message``.

    A line number of ``0`` drops the ``:Line`` segment instead of printing a
    misleading location.

    Examples
    --------
    >>> from datetime import datetime
    >>> event = LogEvent(
    ...     timestamp=datetime(2025, 1, 2, 3, 4, 5),
    ...     level=LogLevel.INFO,
    ...     message="hello",
    ...     caller=CallerInfo("job.py", "main", 7),
    ...     user=UserContext("User", "ada", "HOST"),
    ...     job_name="Job1",
    ...     parent_script_name="Script1",
    ...     calling_script_name="job",
    ... )
    >>> format_line(event)
    '[2025-01-02 03:04:05] [INFO] [Script1.main:7] - hello'
    """

    location = f"{event.parent_script_name}.{event.caller.function_name}"
    if event.caller.line_number:
        location += f":{event.caller.line_number}"
    return f"[{event.timestamp_text}] [{event.level.value}] [{location}] - {event.message}"


def csv_row(event: LogEvent, *, network: bool = False) -> dict[str, str]:
    """Return the CSV record for *event* keyed by column name.

    ``network=True`` appends the ``JobName`` and ``LogType`` columns used by
    the centralised aggregation share.
    """

    caller = event.caller
    row = {
        "Timestamp": event.timestamp_text,
        "Level": event.level.value,
        "ParentScript": event.parent_script_name,
        "CallingScript": event.calling_script_name,
        "ScriptName": caller.script_file_name,
        "FunctionName": caller.function_name,
        "LineNumber": str(caller.line_number),
        "Message": event.message,
        "Hostname": event.user.computer_name,
        "UserType": event.user.user_type,
        "UserName": event.user.user_name,
        "FullUserContext": event.user.full_user_context,
        "CallerInfo": caller.summary,
    }
    if network:
        row["JobName"] = event.job_name
        row["LogType"] = "Activity"
    return row


class SinkStatus(Enum):
    WRITTEN = "written"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class SinkResult:
    """Outcome of one sink attempt.

    The router inspects and discards failed results; they never propagate to
    the caller of the log operation.
    """

    sink: str
    status: SinkStatus
    reason: str | None = None
    error: BaseException | None = field(default=None, compare=False)

    @property
    def ok(self) -> bool:
        return self.status is SinkStatus.WRITTEN

    @classmethod
    def written(cls, sink: str) -> "SinkResult":
        return cls(sink, SinkStatus.WRITTEN)

    @classmethod
    def skipped(cls, sink: str, reason: str) -> "SinkResult":
        return cls(sink, SinkStatus.SKIPPED, reason)

    @classmethod
    def failed(cls, sink: str, error: BaseException) -> "SinkResult":
        return cls(sink, SinkStatus.FAILED, str(error), error)
