"""CSV record sinks for local analysis and central aggregation.

Purpose
-------
Append one structured record per event. The local sink feeds per-machine
analysis; the network sink copies the same record, plus ``JobName`` and
``LogType``, onto a shared drive that may or may not be reachable.

Contents
--------
* :class:`CsvSink` – local CSV file, retention cap 7.
* :class:`NetworkCsvSink` – network share CSV, probed before every write,
  retention cap 5.

System Role
-----------
Both sinks report failures as :class:`SinkResult` values; the network sink
reports an unreachable share as *skipped* rather than *failed*.
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Sequence

from ...application.ports import RetentionPolicy
from ...domain.errors import SinkError
from ...domain.events import CSV_COLUMNS, NETWORK_CSV_COLUMNS, LogEvent, SinkResult, csv_row
from ...observability import log_debug, make_event
from ..paths.session import activity_pattern
from ..rotation.default import CSV_RETENTION, NETWORK_CSV_RETENTION


def append_record(path: Path, row: dict[str, str], columns: Sequence[str]) -> None:
    """Append *row* to *path*, writing the header first when the file is new."""

    path.parent.mkdir(parents=True, exist_ok=True)
    is_new = not path.exists() or path.stat().st_size == 0
    with path.open("a", encoding="utf-8", newline="") as handle:
        writer = csv.DictWriter(handle, fieldnames=list(columns))
        if is_new:
            writer.writeheader()
        writer.writerow(row)


class CsvSink:
    """Write the thirteen-column activity record to the session CSV file."""

    name = "csv"

    def __init__(
        self,
        path: Path,
        *,
        parent_script_name: str,
        rotation: RetentionPolicy,
        max_count: int = CSV_RETENTION,
    ) -> None:
        self._path = path
        self._pattern = activity_pattern(parent_script_name, "csv")
        self._rotation = rotation
        self._max_count = max_count

    @property
    def path(self) -> Path:
        return self._path

    def write(self, event: LogEvent) -> SinkResult:
        try:
            append_record(self._path, csv_row(event), CSV_COLUMNS)
        except (OSError, csv.Error) as exc:
            return SinkResult.failed(self.name, SinkError(self.name, str(exc)))
        self._rotation.enforce(self._path.parent, self._pattern, self._max_count)
        return SinkResult.written(self.name)


class NetworkCsvSink:
    """Best-effort copy of each record onto a network share.

    Parameters
    ----------
    path:
        Session CSV file below ``network_root``.
    network_root:
        Configured share; probed with :meth:`Path.exists` before every write.
    """

    name = "network_csv"

    def __init__(
        self,
        path: Path,
        *,
        network_root: Path,
        parent_script_name: str,
        rotation: RetentionPolicy,
        max_count: int = NETWORK_CSV_RETENTION,
    ) -> None:
        self._path = path
        self._network_root = network_root
        self._pattern = activity_pattern(parent_script_name, "csv")
        self._rotation = rotation
        self._max_count = max_count

    @property
    def path(self) -> Path:
        return self._path

    def write(self, event: LogEvent) -> SinkResult:
        if not self._reachable():
            log_debug("network_share_unreachable", **make_event(self.name, str(self._network_root)))
            return SinkResult.skipped(self.name, "network share unreachable")
        try:
            append_record(self._path, csv_row(event, network=True), NETWORK_CSV_COLUMNS)
        except (OSError, csv.Error) as exc:
            return SinkResult.failed(self.name, SinkError(self.name, str(exc)))
        self._rotation.enforce(self._path.parent, self._pattern, self._max_count)
        return SinkResult.written(self.name)

    def _reachable(self) -> bool:
        try:
            return self._network_root.exists()
        except OSError:
            return False


__all__ = ["CsvSink", "NetworkCsvSink", "append_record"]
