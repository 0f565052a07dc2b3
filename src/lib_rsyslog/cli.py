"""Command line adapter built on rich-click.

Purpose
-------
Let operators send or preview a single RFC5424 message from a shell, and list
the protocol code tables, using the same configuration rules as library hosts.

Contents
--------
* :func:`cli` - root group with ``--traceback`` and ``--use-dotenv`` toggles.
* ``info`` / ``send`` / ``format`` / ``codes`` subcommands.
* :func:`main` - entry point wrapping :func:`lib_cli_exit_tools.run_cli`.

System Role
-----------
Presentation layer only: every command delegates to :mod:`lib_rsyslog.config`
and :class:`lib_rsyslog.RemoteSyslog`.
"""

from __future__ import annotations

import os
from typing import Sequence

import lib_cli_exit_tools
import rich_click as click
from click.core import ParameterSource
from rich.console import Console
from rich.table import Table

from . import __init__conf__
from . import config as config_module
from .domain import Facility, RsyslogError, Severity, TransmissionError
from .lib_rsyslog import RemoteSyslog, summary_info

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(invoke_without_command=True, context_settings=CLICK_CONTEXT_SETTINGS)
@click.version_option(version=__init__conf__.version, prog_name=__init__conf__.shell_command, message="%(version)s")
@click.option(
    "--traceback/--no-traceback",
    default=False,
    help="Show full Python tracebacks for unexpected errors.",
)
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=False,
    help=f"Load environment variables from the nearest .env (also via {config_module.DOTENV_ENV_VAR}).",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool, use_dotenv: bool) -> None:
    """Send RFC5424 syslog messages over UDP."""

    explicit: bool | None = None
    if ctx.get_parameter_source("use_dotenv") is not ParameterSource.DEFAULT:
        explicit = use_dotenv
    if config_module.should_use_dotenv(explicit=explicit, env_value=os.getenv(config_module.DOTENV_ENV_VAR)):
        config_module.enable_dotenv()

    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback

    if ctx.invoked_subcommand is None:
        click.echo(summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print package metadata."""

    click.echo(summary_info(), nl=False)


def _message_options(func):
    """Attach the header options shared by ``send`` and ``format``."""

    decorators = [
        click.argument("message"),
        click.option("--severity", "-s", default="notice", show_default=True, help="Severity name or number (0-7)."),
        click.option("--facility", "-f", default=None, help="Facility name or number (0-23); RSYSLOG_FACILITY or local0 otherwise."),
        click.option("--hostname", default=None, help="HOSTNAME field; RSYSLOG_HOSTNAME or the machine name otherwise."),
        click.option("--appname", default=None, help="APP-NAME field; RSYSLOG_APPNAME or '-' otherwise."),
        click.option("--msgid", default=None, help="MSGID field; '-' when omitted."),
        click.option("--timestamp", type=int, default=None, help="Epoch milliseconds; now when omitted."),
    ]
    for decorator in reversed(decorators):
        func = decorator(func)
    return func


@cli.command("send", context_settings=CLICK_CONTEXT_SETTINGS)
@_message_options
@click.option("--host", default=None, help="Collector host; RSYSLOG_TARGET_HOST / RSYSLOG_ENDPOINT or localhost otherwise.")
@click.option("--port", default=None, type=int, help="Collector UDP port; RSYSLOG_TARGET_PORT / RSYSLOG_ENDPOINT or 514 otherwise.")
@click.option("--wait", default=2.0, show_default=True, type=float, help="Seconds to wait for the datagram to leave.")
def cli_send(
    message: str,
    severity: str,
    facility: str | None,
    hostname: str | None,
    appname: str | None,
    msgid: str | None,
    timestamp: int | None,
    host: str | None,
    port: int | None,
    wait: float,
) -> None:
    """Send MESSAGE as one datagram."""

    errors: list[TransmissionError] = []
    try:
        settings = config_module.load_settings(
            target_host=host,
            target_port=port,
            hostname=hostname,
            appname=appname,
            facility=facility,
        )
        with RemoteSyslog(**settings.as_kwargs()) as sender:
            sender.on_error(errors.append)
            sender.send(severity, message, timestamp=timestamp, msgid=msgid)
            sender.flush(wait)
    except (RsyslogError, ValueError) as exc:
        raise click.ClickException(str(exc)) from exc
    if errors:
        raise click.ClickException(str(errors[0]))
    click.echo(f"sent to {settings.target_host}:{settings.target_port}")


@cli.command("format", context_settings=CLICK_CONTEXT_SETTINGS)
@_message_options
def cli_format(
    message: str,
    severity: str,
    facility: str | None,
    hostname: str | None,
    appname: str | None,
    msgid: str | None,
    timestamp: int | None,
) -> None:
    """Print the datagram MESSAGE would produce, without sending it."""

    try:
        settings = config_module.load_settings(hostname=hostname, appname=appname, facility=facility)
        with RemoteSyslog(**settings.as_kwargs()) as sender:
            payload = sender.format(severity, message, timestamp=timestamp, msgid=msgid)
    except (RsyslogError, ValueError) as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(payload.decode("utf-8"))


@cli.command("codes", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_codes() -> None:
    """List severity and facility codes."""

    console = Console(highlight=False)
    severities = Table(title="Severities")
    severities.add_column("code", justify="right")
    severities.add_column("name")
    for severity in Severity:
        severities.add_row(str(int(severity)), severity.label)
    facilities = Table(title="Facilities")
    facilities.add_column("code", justify="right")
    facilities.add_column("name")
    for facility in Facility:
        facilities.add_row(str(int(facility)), facility.label)
    console.print(severities)
    console.print(facilities)


def main(argv: Sequence[str] | None = None, *, restore_traceback: bool = True) -> int:
    """Run the CLI through :func:`lib_cli_exit_tools.run_cli` and return its exit code.

    Traceback preferences changed by ``--traceback`` are restored afterwards so
    embedding hosts keep their own settings.
    """

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        return lib_cli_exit_tools.run_cli(
            cli,
            argv=list(argv) if argv is not None else None,
            prog_name=__init__conf__.shell_command,
        )
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


__all__ = ["cli", "main"]
