"""CLI adapter for ``lib_script_log`` built on ``lib_cli_exit_tools``.

Purpose
-------
Let shell scripts and operators write entries into the same session files as
Python scripts, and inspect the installed distribution, without writing
Python code.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared Click settings ensuring ``-h`` works.
* :func:`cli` – root command that wires global traceback handling into
  ``lib_cli_exit_tools``.
* :func:`cli_info` – prints distribution metadata for quick diagnostics.
* :func:`cli_log` – initialises a session and writes one entry.
* :class:`ShellFrameProvider` – caller attribution for entries written from a shell.
* :func:`cli_fail` – deterministic failure for traceback handling tests.
* :func:`main` – entry point used by ``console_scripts`` registration.

System Role
-----------
The CLI lives in the outermost layer. It calls the composition root
(:class:`lib_script_log.core.ScriptLogger`) and never reaches into adapters.
``lib_cli_exit_tools`` centralises the exit code strategy so all commands
behave consistently across shells and CI.
"""

from __future__ import annotations

import json
import sys
from importlib import metadata
from pathlib import Path
from typing import Final, Optional, Sequence

import lib_cli_exit_tools
import rich_click as click

from .core import DISTRIBUTION_NAME, ScriptLogger, get_module_version
from .domain.errors import ConfigurationError
from .domain.events import FrameRecord
from .testing import i_should_fail

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000

LEVEL_CHOICES: Final[tuple[str, ...]] = (
    "INFO",
    "WARNING",
    "ERROR",
    "DEBUG",
    "SUCCESS",
    "INFORMATION",
    "NOTICE",
    "WARN",
    "CRITICAL",
    "VERBOSE",
)
MODE_CHOICES: Final[tuple[str, ...]] = ("Normal", "EnableDebug", "SilentMode", "Off")
CLI_CALLING_SCRIPT: Final[str] = "shell"


class ShellFrameProvider:
    """Attribute every entry to the top level of the invoking shell.

    Entries written through the CLI have no Python call site worth reporting;
    they show up as ``MainScript`` of the ``shell`` script without a line.
    """

    def call_chain(self, offset: int = 0, limit: int | None = None) -> list[FrameRecord]:
        chain = [FrameRecord("log", "", 0), FrameRecord("<module>", CLI_CALLING_SCRIPT, 0)][offset:]
        return chain if limit is None else chain[:limit]


@click.group(
    help="Structured script logging to files, CSV, network shares and the console",
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=False,
)
@click.version_option(
    version=get_module_version(),
    prog_name=DISTRIBUTION_NAME,
    message=f"{DISTRIBUTION_NAME} version %(version)s",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool) -> None:
    """Root command configuring traceback handling for all subcommands.

    Side Effects
        Mutates ``lib_cli_exit_tools.config.traceback`` and
        ``lib_cli_exit_tools.config.traceback_force_color``.
    """

    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print basic distribution metadata so users can confirm installation."""

    try:
        meta = metadata.metadata(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        click.echo(f"{DISTRIBUTION_NAME} (metadata unavailable)")
        return
    click.echo(f"Info for {meta.get('Name', DISTRIBUTION_NAME)}:")
    click.echo(f"  Version         : {meta.get('Version', get_module_version())}")
    click.echo(f"  Requires-Python : {meta.get('Requires-Python', '>=3.10')}")
    summary = meta.get("Summary")
    if summary:
        click.echo(f"  Summary         : {summary}")
    for entry in meta.get_all("Project-URL") or []:
        click.echo(f"  {entry}")


@cli.command("log", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("message")
@click.option(
    "--level",
    default="INFO",
    show_default=True,
    type=click.Choice(LEVEL_CHOICES, case_sensitive=False),
    help="Severity of the entry",
)
@click.option("--base-path", type=click.Path(path_type=Path, file_okay=False), default=None, help="Log root")
@click.option("--job-name", default=None, help="Job name used on the network share")
@click.option("--parent-script-name", default=None, help="Logical script name grouping the session files")
@click.option(
    "--custom-log-path",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Replaces the base path as log root",
)
@click.option(
    "--network-log-path",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Network share receiving a CSV copy of each entry",
)
@click.option(
    "--mode",
    type=click.Choice(MODE_CHOICES, case_sensitive=False),
    default=None,
    help="Console behaviour for this session",
)
@click.option(
    "--disable-file-logging/--enable-file-logging",
    default=None,
    help="Skip the log file, CSV and network CSV sinks",
)
@click.option(
    "--settings-file",
    type=click.Path(path_type=Path, exists=True, dir_okay=False, readable=True),
    default=None,
    help="TOML, JSON or YAML settings file",
)
@click.option(
    "--print-paths/--no-print-paths",
    default=False,
    help="Print the session file paths as JSON after logging",
)
def cli_log(
    message: str,
    level: str,
    base_path: Optional[Path],
    job_name: Optional[str],
    parent_script_name: Optional[str],
    custom_log_path: Optional[Path],
    network_log_path: Optional[Path],
    mode: Optional[str],
    disable_file_logging: Optional[bool],
    settings_file: Optional[Path],
    print_paths: bool,
) -> None:
    """Initialise a session and write MESSAGE to every enabled sink.

    Options missing on the command line fall back to the settings file and
    ``LIB_SCRIPT_LOG_*`` environment variables.
    """

    logger = ScriptLogger(frame_provider=ShellFrameProvider())
    try:
        paths = logger.initialize(
            base_path,
            job_name,
            parent_script_name,
            custom_log_path=custom_log_path,
            network_log_path=network_log_path,
            mode=mode,
            disable_file_logging=disable_file_logging,
            settings_file=settings_file,
            calling_script=CLI_CALLING_SCRIPT,
        )
    except ConfigurationError as exc:
        raise click.UsageError(str(exc)) from exc
    logger.log(message, level)
    if print_paths:
        payload = {
            "log_file": str(paths.log_file),
            "csv_file": str(paths.csv_file),
            "network_csv_file": str(paths.network_csv_file) if paths.network_csv_file else None,
        }
        click.echo(json.dumps(payload, indent=2))


@cli.command("fail", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_fail() -> None:
    """Trigger a deterministic error for testing traceback handling."""

    i_should_fail()


def main(argv: Optional[Sequence[str]] = None, *, restore_traceback: bool = True) -> int:
    """Execute the CLI with shared exit handling and return the exit code."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        try:
            return lib_cli_exit_tools.run_cli(
                cli,
                argv=list(argv) if argv is not None else None,
                prog_name=DISTRIBUTION_NAME,
            )
        except BaseException as exc:  # noqa: BLE001 - funnel through shared printers
            lib_cli_exit_tools.print_exception_message(
                trace_back=lib_cli_exit_tools.config.traceback,
                length_limit=(
                    _TRACEBACK_VERBOSE_LIMIT if lib_cli_exit_tools.config.traceback else _TRACEBACK_SUMMARY_LIMIT
                ),
            )
            return lib_cli_exit_tools.get_system_exit_code(exc)
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


if __name__ == "__main__":  # pragma: no cover - exercised via console entry point
    raise SystemExit(main(sys.argv[1:]))
