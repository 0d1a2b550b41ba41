"""Deliberately failing helpers for error-path tests.

Purpose
    Give the CLI and the ``handle_error`` tests a real exception with a real
    traceback, raised from a known file and function.

Contents
    - ``FAILURE_MESSAGE``: stable message used when forcing a failure.
    - ``i_should_fail``: raises ``RuntimeError`` with that message.
"""

from __future__ import annotations

from typing import Final

FAILURE_MESSAGE: Final[str] = "i should fail"
"""Stable message asserted on by CLI and error-handling tests."""


def i_should_fail() -> None:
    """Raise a deterministic :class:`RuntimeError`.

    Examples
    --------
    >>> i_should_fail()
    Traceback (most recent call last):
    ...
    RuntimeError: i should fail
    """

    raise RuntimeError(FAILURE_MESSAGE)
