"""Composition root for ``lib_script_log``.

Purpose
-------
Wire the frame provider, identity provider, clock, path manager, sinks,
retention policy and transcript backend into one :class:`ScriptLogger`
handle, and expose the module-level helpers scripts call directly.

Contents
--------
* :class:`SystemClock` – production clock.
* :class:`ScriptLogger` – the public logger handle (initialise, log, error
  handling, transcripts, introspection).
* :func:`initialize` – build and initialise a logger in one call.
* :func:`load_settings` – resolve settings layers with provenance.
* :func:`get_module_version` – installed distribution version.

System Role
-----------
Everything a log call touches hangs off a :class:`ScriptLogger` instance; no
session state lives at module level. Only initialisation may raise
(:class:`ConfigurationError`); log calls, transcript calls and introspection
degrade instead of failing.
"""

from __future__ import annotations

import platform
import sys
import traceback
from dataclasses import replace
from datetime import datetime
from functools import lru_cache
from importlib import metadata
from pathlib import Path, PurePath
from typing import Iterable, Mapping, Sequence

from .adapters.env.default import DefaultEnvLoader, default_env_prefix
from .adapters.file_loaders.structured import loader_for
from .adapters.frames.default import InspectFrameProvider
from .adapters.identity.default import DefaultIdentityProvider
from .adapters.paths.session import SessionPathManager, transcript_pattern
from .adapters.rotation.default import RotationPolicy
from .adapters.sinks.console import RichConsoleSink
from .adapters.sinks.csv_records import CsvSink, NetworkCsvSink
from .adapters.sinks.file import FileSink, append_lines
from .adapters.transcript.default import TeeTranscriptBackend
from .application.caller import CallerResolver
from .application.dispatch import SinkRouter
from .application.ports import Clock, FrameProvider, IdentityProvider, RetentionPolicy, Sink, TranscriptBackend
from .application.settings import merge_settings
from .application.transcript import TranscriptController, TranscriptState
from .domain.config import UNINITIALIZED, LogConfig, SessionPaths, SourceInfo
from .domain.errors import ConfigurationError, InvalidFormat, NotFound, NotInitializedError
from .domain.events import (
    TIMESTAMP_FORMAT,
    UNKNOWN_CALLER,
    UNKNOWN_SCRIPT,
    CallerInfo,
    FrameRecord,
    LogEvent,
    UserContext,
)
from .domain.levels import LogLevel, LogMode
from .observability import bind_session_id, log_debug, log_error, log_info

DISTRIBUTION_NAME = "lib_script_log"
ENV_PREFIX = default_env_prefix("lib-script-log")

_PACKAGE_DIR = Path(__file__).resolve().parent
_CHAIN_DEPTH = 8
_DIAGNOSTIC_FRAMES = 5
_DEFAULT_SETTINGS: Mapping[str, object] = {"mode": LogMode.NORMAL.value, "disable_file_logging": False}


class SystemClock:
    def now(self) -> datetime:
        return datetime.now()


class ScriptLogger:
    """Logger handle holding one session's configuration and paths.

    Why
    ----
    Scripts keep an explicit handle instead of relying on hidden process-wide
    state, and tests replace every environmental collaborator.

    Parameters
    ----------
    frame_provider / identity / clock / rotation / transcript_backend:
        Collaborators; production adapters are used when omitted.
    console:
        Console sink; a stdout :class:`RichConsoleSink` when omitted.
    environ:
        Environment mapping for the ``LIB_SCRIPT_LOG_*`` settings layer;
        :data:`os.environ` when omitted.

    Examples
    --------
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> logger = ScriptLogger(environ={})
    >>> paths = logger.initialize(tmp.name, "Job1", "Script1", mode="SilentMode")
    >>> logger.info("hello")
    >>> paths.log_file.read_text(encoding="utf-8").splitlines()[-1].endswith("- hello")
    True
    >>> tmp.cleanup()
    """

    def __init__(
        self,
        *,
        frame_provider: FrameProvider | None = None,
        identity: IdentityProvider | None = None,
        clock: Clock | None = None,
        console: RichConsoleSink | None = None,
        transcript_backend: TranscriptBackend | None = None,
        rotation: RetentionPolicy | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._frames = frame_provider or InspectFrameProvider()
        self._identity = identity or DefaultIdentityProvider()
        self._clock = clock or SystemClock()
        self._console = console if console is not None else RichConsoleSink()
        self._rotation = rotation or RotationPolicy()
        self._environ = environ
        self._path_manager = SessionPathManager()
        self._config: LogConfig = UNINITIALIZED
        self._paths: SessionPaths | None = None
        self._user: UserContext | None = None
        self._calling_script: str | None = None
        self._resolver = CallerResolver()
        self._router = SinkRouter([], self._console)
        self._report_caller: CallerInfo = UNKNOWN_CALLER
        self._transcript = TranscriptController(
            transcript_backend or TeeTranscriptBackend(clock=self._clock.now),
            rotation=self._rotation,
            report=self._report,
        )

    @property
    def config(self) -> LogConfig:
        return self._config

    @property
    def initialized(self) -> bool:
        return self._config.initialized

    @property
    def session_paths(self) -> SessionPaths:
        """Return the current session's paths.

        Raises
        ------
        NotInitializedError
            Before the first successful :meth:`initialize`.
        """

        if self._paths is None:
            raise NotInitializedError("logging session has not been initialized")
        return self._paths

    @property
    def transcript_state(self) -> TranscriptState:
        return self._transcript.state

    def initialize(
        self,
        base_path: str | Path | None = None,
        job_name: str | None = None,
        parent_script_name: str | None = None,
        *,
        custom_log_path: str | Path | None = None,
        network_log_path: str | Path | None = None,
        mode: LogMode | str | None = None,
        disable_file_logging: bool | None = None,
        wrapper_names: Iterable[str] = (),
        settings_file: str | Path | None = None,
        calling_script: str | None = None,
    ) -> SessionPaths:
        """Start a new session and return its paths.

        Why
        ----
        Fixes the log, CSV and network CSV targets once so every later log
        call of this run lands in the same files.

        What
        ----
        Resolves the settings layers (defaults, settings file, environment,
        the arguments given here), validates them, derives the session paths,
        creates their directories and writes the environment descriptor to
        the new log file. Calling it again replaces the previous session.
        ``calling_script`` overrides the name detected from the call stack.

        Raises
        ------
        ConfigurationError
            When a required setting is missing, the settings file is unusable
            or the log root cannot be created. The previous session stays
            active in that case.
        """

        overrides: dict[str, object] = {
            key: value
            for key, value in (
                ("base_path", base_path),
                ("job_name", job_name),
                ("parent_script_name", parent_script_name),
                ("custom_log_path", custom_log_path),
                ("network_log_path", network_log_path),
                ("mode", mode.value if isinstance(mode, LogMode) else mode),
                ("disable_file_logging", disable_file_logging),
            )
            if value is not None
        }
        extra_wrappers = [name for name in wrapper_names if name]
        if extra_wrappers:
            overrides["wrapper_names"] = extra_wrappers
        try:
            values, provenance = load_settings(settings_file, environ=self._environ, overrides=overrides)
        except (InvalidFormat, NotFound) as exc:
            raise ConfigurationError(str(exc)) from exc
        config = LogConfig.from_settings(values)

        user = self._identity.resolve()
        calling_script = calling_script or self.get_calling_script_name()
        now = self._clock.now()
        paths = self._path_manager.initialize(config, user, calling_script, now)

        self._config = config
        self._paths = paths
        self._user = user
        self._calling_script = calling_script
        self._resolver = CallerResolver(config.wrapper_names)
        self._router = self._build_router(config, paths)
        bind_session_id(f"{paths.file_stem}-{paths.timestamp}")
        log_info(
            "session_initialized",
            log_file=str(paths.log_file),
            csv_file=str(paths.csv_file),
            network_csv_file=str(paths.network_csv_file) if paths.network_csv_file else None,
            sources={key: info["layer"] for key, info in provenance.items()},
        )
        if not config.disable_file_logging:
            self._write_environment(config, paths, user, now)
        return paths

    def log(
        self,
        message: object,
        level: LogLevel | str | None = LogLevel.INFO,
        mode: LogMode | str | None = None,
    ) -> None:
        """Write *message* to every enabled sink; never raises.

        Parameters
        ----------
        message:
            Text to log; written verbatim.
        level:
            Canonical level or any alias (``"Warn"``, ``"critical"`` ...);
            unknown values log at INFO.
        mode:
            Per-call override of the session mode.
        """

        try:
            chain = self._caller_chain()
            self._write(message, level, mode, self._resolver.resolve(chain), chain)
        except Exception as exc:  # noqa: BLE001 - logging must never break the host script
            log_error("log_call_failed", error=str(exc), error_type=type(exc).__name__)

    def info(self, message: object, mode: LogMode | str | None = None) -> None:
        self.log(message, LogLevel.INFO, mode)

    def warning(self, message: object, mode: LogMode | str | None = None) -> None:
        self.log(message, LogLevel.WARNING, mode)

    def error(self, message: object, mode: LogMode | str | None = None) -> None:
        self.log(message, LogLevel.ERROR, mode)

    def debug(self, message: object, mode: LogMode | str | None = None) -> None:
        self.log(message, LogLevel.DEBUG, mode)

    def success(self, message: object, mode: LogMode | str | None = None) -> None:
        self.log(message, LogLevel.SUCCESS, mode)

    def handle_error(
        self,
        error: BaseException | object,
        custom_message: str | None = None,
        mode: LogMode | str | None = None,
    ) -> None:
        """Log *error* at ERROR, attributed to the caller, then its traceback at DEBUG.

        The ERROR line reads ``"{custom_message}: {Type}: {error} (at file:line)"``
        where ``file:line`` is the innermost frame of the exception's
        traceback, when it has one.

        Anything that is not an exception is logged as its text alone.
        """

        try:
            if isinstance(error, BaseException):
                summary = f"{type(error).__name__}: {error}"
                origin = _exception_origin(error)
                details = "".join(traceback.format_exception(type(error), error, error.__traceback__)).rstrip()
            else:
                summary, origin, details = str(error), None, ""
            if custom_message:
                summary = f"{custom_message}: {summary}"
            if origin:
                summary = f"{summary} (at {origin})"
        except Exception as exc:  # noqa: BLE001 - error objects may misbehave when rendered
            log_error("handle_error_failed", error=str(exc), error_type=type(exc).__name__)
            return
        self.log(summary, LogLevel.ERROR, mode)
        if details:
            self.log(f"Traceback:\n{details}", LogLevel.DEBUG, mode)

    def start_transcript(self) -> Path | None:
        """Start capturing stdout/stderr into the session transcript.

        Returns
        -------
        Path | None
            The transcript file, the running transcript's file when one is
            already active, or ``None`` when the capture could not start.
        """

        self._report_caller = self._resolver.resolve(self._caller_chain())
        if self._paths is None:
            self._report("Cannot start transcript: logging is not initialized", LogLevel.ERROR)
            return None
        target = self._path_manager.transcript_file(self._config, self._paths, self._clock.now())
        started = self._transcript.start(target, transcript_pattern(self._config.parent_script_name))
        if started is not None and self._paths.transcript_directory is None:
            self._paths = replace(self._paths, transcript_directory=started.parent)
        return started

    def stop_transcript(self) -> bool:
        """Stop the running transcript; ``False`` when none was running."""

        self._report_caller = self._resolver.resolve(self._caller_chain())
        return self._transcript.stop()

    def get_calling_script_name(self) -> str:
        """Return the stem of the first script on the stack outside this package.

        Falls back to ``sys.argv[0]`` and finally to ``"UnknownScript"``.
        """

        try:
            chain = self._frames.call_chain()
        except Exception as exc:  # noqa: BLE001 - introspection is best-effort
            log_debug("call_chain_unavailable", error=str(exc))
            chain = []
        for frame in chain:
            if frame.filename and not frame.filename.startswith("<") and not _is_package_file(frame.filename):
                return PurePath(frame.filename).stem or UNKNOWN_SCRIPT
        argv0 = sys.argv[0] if sys.argv else ""
        return (PurePath(argv0).stem if argv0 else "") or UNKNOWN_SCRIPT

    def get_user_context(self) -> UserContext:
        """Return the session's cached user context, or a fresh one before initialisation."""

        if self._user is not None:
            return self._user
        return self._identity.resolve()

    def get_module_version(self) -> str:
        return get_module_version()

    def _caller_chain(self) -> list[FrameRecord]:
        return _trim_package_frames(self._frames.call_chain(limit=_CHAIN_DEPTH))

    def _write(
        self,
        message: object,
        level: LogLevel | str | None,
        mode: LogMode | str | None,
        caller: CallerInfo,
        chain: Sequence[FrameRecord] = (),
    ) -> None:
        effective_mode = self._config.mode if mode is None else LogMode.from_name(mode)
        if self._user is None:
            self._user = self._identity.resolve()
        if self._calling_script is None:
            self._calling_script = self.get_calling_script_name()
        event = LogEvent(
            timestamp=self._clock.now(),
            level=LogLevel.from_name(level),
            message=str(message),
            caller=caller,
            user=self._user,
            job_name=self._config.job_name,
            parent_script_name=self._config.parent_script_name or self._calling_script,
            calling_script_name=self._calling_script,
        )
        self._router.emit(event, mode=effective_mode)
        if caller.line_number == 0 and effective_mode.debug_enabled:
            self._console.write_diagnostic(_describe_chain(chain))

    def _report(self, message: str, level: LogLevel) -> None:
        try:
            self._write(message, level, None, self._report_caller)
        except Exception as exc:  # noqa: BLE001 - reporting must never raise
            log_error("report_failed", error=str(exc), error_type=type(exc).__name__)

    def _build_router(self, config: LogConfig, paths: SessionPaths) -> SinkRouter:
        parent = config.parent_script_name
        file_sinks: list[Sink] = [
            FileSink(paths.log_file, parent_script_name=parent, rotation=self._rotation),
            CsvSink(paths.csv_file, parent_script_name=parent, rotation=self._rotation),
        ]
        if paths.network_csv_file is not None and config.network_log_path is not None:
            file_sinks.append(
                NetworkCsvSink(
                    paths.network_csv_file,
                    network_root=config.network_log_path,
                    parent_script_name=parent,
                    rotation=self._rotation,
                )
            )
        return SinkRouter(file_sinks, self._console, file_logging_enabled=not config.disable_file_logging)

    def _write_environment(self, config: LogConfig, paths: SessionPaths, user: UserContext, now: datetime) -> None:
        try:
            append_lines(paths.log_file, _environment_lines(config, user, now))
        except OSError as exc:
            log_debug("environment_descriptor_failed", path=str(paths.log_file), error=str(exc))


def initialize(
    base_path: str | Path | None = None,
    job_name: str | None = None,
    parent_script_name: str | None = None,
    **options: object,
) -> ScriptLogger:
    """Create a :class:`ScriptLogger`, initialise it and return it.

    ``options`` are forwarded to :meth:`ScriptLogger.initialize`.
    """

    logger = ScriptLogger()
    logger.initialize(base_path, job_name, parent_script_name, **options)  # type: ignore[arg-type]
    return logger


def load_settings(
    settings_file: str | Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    overrides: Mapping[str, object] | None = None,
) -> tuple[dict[str, object], dict[str, SourceInfo]]:
    """Resolve logging settings and their provenance.

    What
    ----
    Layers, lowest precedence first: built-in defaults, the settings file
    (explicit argument, else ``LIB_SCRIPT_LOG_SETTINGS_FILE``), environment
    variables with the ``LIB_SCRIPT_LOG_`` prefix, then *overrides*.

    Raises
    ------
    NotFound / InvalidFormat
        When the settings file is missing, unsupported or malformed.

    Examples
    --------
    >>> values, meta = load_settings(environ={"LIB_SCRIPT_LOG_MODE": "Off"}, overrides={"job_name": "Job1"})
    >>> values["mode"], meta["mode"]["layer"], meta["job_name"]["layer"]
    ('Off', 'env', 'arguments')
    """

    env_loader = DefaultEnvLoader(environ=environ)
    env_data = env_loader.load(ENV_PREFIX)
    if settings_file is None:
        candidate = env_data.pop("settings_file", None)
        settings_file = str(candidate) if candidate else None
    else:
        env_data.pop("settings_file", None)

    layers: list[tuple[str, Mapping[str, object], str | None]] = [("defaults", _DEFAULT_SETTINGS, None)]
    if settings_file is not None:
        path = str(settings_file)
        layers.append(("file", loader_for(path).load(path), path))
    if env_data:
        layers.append(("env", env_data, None))
    if overrides:
        layers.append(("arguments", overrides, None))
    return merge_settings(layers)


def get_module_version() -> str:
    """Return the installed version of ``lib_script_log`` or ``"0.0.0"``."""

    try:
        return metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        return "0.0.0"


def _environment_lines(config: LogConfig, user: UserContext, now: datetime) -> list[str]:
    """Render the policy, runtime and host descriptor lines written at initialisation."""

    prefix = f"[{now.strftime(TIMESTAMP_FORMAT)}] [INFO] [{config.parent_script_name}.Environment] -"
    network = str(config.network_log_path) if config.network_log_path else "none"
    return [
        f"{prefix} Policy: mode={config.mode.value}; file logging enabled; network log={network}",
        (
            f"{prefix} Runtime: {platform.python_implementation()} {platform.python_version()}; "
            f"{DISTRIBUTION_NAME} {get_module_version()}"
        ),
        f"{prefix} Host: {user.computer_name} ({platform.system() or 'unknown'}); user={user.full_user_context}",
    ]


def _describe_chain(chain: Sequence[FrameRecord]) -> list[str]:
    lines = ["Line number unavailable; call chain:"]
    lines.extend(f"  #{index} {frame.describe()}" for index, frame in enumerate(chain[:_DIAGNOSTIC_FRAMES]))
    return lines


def _exception_origin(error: BaseException) -> str | None:
    """Return ``file:line`` of the innermost traceback frame of *error*."""

    tb = error.__traceback__
    if tb is None:
        return None
    while tb.tb_next is not None:
        tb = tb.tb_next
    return f"{PurePath(tb.tb_frame.f_code.co_filename).name}:{tb.tb_lineno}"


def _trim_package_frames(chain: Sequence[FrameRecord]) -> list[FrameRecord]:
    """Fold the frames of this package into one entry frame.

    The outermost package frame stays at index ``0`` so the first script
    frame lands at index ``1``, whether the script called :meth:`ScriptLogger.log`
    directly or one of the level helpers.
    """

    for index in range(1, len(chain)):
        if not _is_package_file(chain[index].filename):
            return list(chain[index - 1 :])
    return list(chain)


@lru_cache(maxsize=256)
def _is_package_file(filename: str) -> bool:
    try:
        return Path(filename).resolve().is_relative_to(_PACKAGE_DIR)
    except (OSError, ValueError):
        return False


__all__ = [
    "ENV_PREFIX",
    "ScriptLogger",
    "SystemClock",
    "get_module_version",
    "initialize",
    "load_settings",
]
