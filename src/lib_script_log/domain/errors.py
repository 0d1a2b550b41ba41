"""Domain-level exception hierarchy.

Purpose
-------
Expose the stable error taxonomy shared by adapters, the composition root, and
consuming scripts. The hierarchy lives in the domain layer so inner layers
never depend on adapter-specific exception types.

Contents
--------
* :class:`ScriptLogError` – umbrella base class for every library failure.
* :class:`ConfigurationError` – missing or unusable initialisation settings.
* :class:`NotInitializedError` – operation needs an initialised session.
* :class:`SinkError` – a single sink could not deliver an event.
* :class:`TranscriptError` – the capture backend refused to start or stop.
* :class:`InvalidFormat` / :class:`NotFound` – settings file problems.

System Role
-----------
Only :class:`ConfigurationError` ever reaches the caller of a public
operation. Sink and transcript errors are raised by adapters and converted
into results (``SinkResult``, ``None``, ``False``) by the application layer.
"""

from __future__ import annotations


class ScriptLogError(Exception):
    """Base type for all exceptions emitted by ``lib_script_log``.

    Why
    ----
    Scripts that want a single ``except`` clause around initialisation can
    catch this type without enumerating subclasses.
    """


class ConfigurationError(ScriptLogError):
    """Raised when :meth:`ScriptLogger.initialize` receives unusable settings.

    Typical Sources
    ---------------
    Blank ``base_path``/``job_name``/``parent_script_name`` or a log root that
    cannot be created.
    """


class NotInitializedError(ScriptLogError):
    """Signals that an operation requires a session that was never initialised."""


class SinkError(ScriptLogError):
    """Describe why one sink dropped an event.

    The router never raises this; it travels inside a ``SinkResult`` so the
    decision to discard it stays visible.
    """

    def __init__(self, sink: str, message: str) -> None:
        super().__init__(f"{sink}: {message}")
        self.sink = sink


class TranscriptError(ScriptLogError):
    """Raised by transcript backends when capture cannot start or stop."""


class InvalidFormat(ScriptLogError):
    """Raised when a settings file cannot be parsed into a mapping."""


class NotFound(ScriptLogError):
    """Represents a missing settings file or an unavailable optional parser."""
