"""Retention adapter for session files.

Purpose
-------
Implement :class:`lib_script_log.application.ports.RetentionPolicy`: keep the
newest ``max_count`` files of one naming group in one directory and delete
the rest. Cleanup is best-effort; a file that cannot be listed, inspected or
deleted is left in place.

Key behaviours
--------------
* Newest first by modification time, file name as the tie breaker.
* Deletion failures are reported on the package logger at debug level only.
"""

from __future__ import annotations

from pathlib import Path

from ...observability import log_debug, make_event

FILE_RETENTION = 7
CSV_RETENTION = 7
NETWORK_CSV_RETENTION = 5


class RotationPolicy:
    """Prune old files matching a glob pattern."""

    def enforce(self, directory: Path, pattern: str, max_count: int) -> list[Path]:
        """Delete files beyond the newest *max_count* and return the removed paths.

        Examples
        --------
        >>> from tempfile import TemporaryDirectory
        >>> tmp = TemporaryDirectory()
        >>> root = Path(tmp.name)
        >>> for index in range(3):
        ...     _ = (root / f"a-{index}.log").write_text("x", encoding="utf-8")
        >>> len(RotationPolicy().enforce(root, "a-*.log", 2))
        1
        >>> tmp.cleanup()
        """

        candidates = self._candidates(directory, pattern)
        if len(candidates) <= max_count:
            return []
        removed: list[Path] = []
        for _, path in candidates[max(max_count, 0) :]:
            try:
                path.unlink()
            except OSError as exc:
                log_debug("rotation_delete_failed", **make_event("rotation", str(path), {"error": str(exc)}))
                continue
            removed.append(path)
        if removed:
            log_debug(
                "rotation_pruned",
                **make_event("rotation", str(directory), {"pattern": pattern, "removed": len(removed)}),
            )
        return removed

    @staticmethod
    def _candidates(directory: Path, pattern: str) -> list[tuple[float, Path]]:
        entries: list[tuple[float, Path]] = []
        try:
            matches = list(directory.glob(pattern))
        except OSError as exc:
            log_debug("rotation_list_failed", **make_event("rotation", str(directory), {"error": str(exc)}))
            return entries
        for path in matches:
            try:
                if not path.is_file():
                    continue
                entries.append((path.stat().st_mtime, path))
            except OSError:
                continue
        entries.sort(key=lambda item: (item[0], item[1].name), reverse=True)
        return entries


__all__ = ["CSV_RETENTION", "FILE_RETENTION", "NETWORK_CSV_RETENTION", "RotationPolicy"]
