"""Live call-chain adapter.

Purpose
-------
Implement :class:`lib_script_log.application.ports.FrameProvider` over the
interpreter's own frame objects so production code gets real caller
attribution while tests inject a fake chain.

Key behaviours
--------------
* Walks ``f_back`` links from the caller of :meth:`call_chain` outward.
* Copies each frame into an immutable :class:`FrameRecord`; no frame objects
  leave this module, so no reference cycles outlive the call.
"""

from __future__ import annotations

import inspect
from types import FrameType

from ...domain.events import FrameRecord


class InspectFrameProvider:
    """Read the current call chain via :func:`inspect.currentframe`."""

    def call_chain(self, offset: int = 0, limit: int | None = None) -> list[FrameRecord]:
        """Return frames innermost first, starting at the caller of this method.

        Parameters
        ----------
        offset:
            Additional frames to skip above the caller.
        limit:
            Maximum number of records to return; ``None`` walks the whole stack.

        Examples
        --------
        >>> def probe():
        ...     return InspectFrameProvider().call_chain(limit=1)
        >>> probe()[0].function
        'probe'
        """

        frame = inspect.currentframe()
        try:
            cursor = _skip(frame.f_back if frame is not None else None, offset)
            records: list[FrameRecord] = []
            while cursor is not None and (limit is None or len(records) < limit):
                records.append(_record(cursor))
                cursor = cursor.f_back
            return records
        finally:
            del frame


def _skip(frame: FrameType | None, count: int) -> FrameType | None:
    for _ in range(max(count, 0)):
        if frame is None:
            return None
        frame = frame.f_back
    return frame


def _record(frame: FrameType) -> FrameRecord:
    code = frame.f_code
    return FrameRecord(function=code.co_name, filename=code.co_filename, line_number=frame.f_lineno or 0)


__all__ = ["InspectFrameProvider"]
