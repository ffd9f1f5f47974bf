"""CLI application entry point and command routing for dsjob.

This module is the **outer error boundary** for the application.
:func:`main` routes one invocation to a sub-command and returns its
status; :func:`cli` wraps it, catching
:class:`~dsjob.exceptions.DsjobError`, ``KeyboardInterrupt`` and any
unexpected ``Exception``, and turning them into process exit codes.

Architecture notes
------------------
* No engine work lives here; commands delegate to the core layer and
  the engine adapter.
* Global options are positional in spirit: ``-domain``, ``-server``,
  ``-user`` and ``-password`` are recognised only in that relative
  order and only before the command name.
* Whatever the command's outcome, the engine's last recorded error
  message is reported once the command returns.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TextIO

from dsjob.cli import exit_codes
from dsjob.cli.commands import COMMANDS, Command, CommandContext
from dsjob.cli.console import console, escape
from dsjob.cli.grammar import is_option
from dsjob.cli.logging_config import configure_logging
from dsjob.core.models import ConnectionParams
from dsjob.core.protocols import Engine
from dsjob.exceptions import DsjobError, UnknownCommandError, UsageError
from dsjob.settings import DsjobSettings, load_settings

logger = logging.getLogger(__name__)

GLOBAL_OPTIONS: tuple[str, ...] = ("domain", "server", "user", "password")
"""Connection options, in the only order in which they are accepted."""


# ---------------------------------------------------------------------------
# Invocation parsing
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Invocation:
    """A routed command line: connection values, the command, its args."""

    connection: dict[str, str]
    command: Command
    args: tuple[str, ...]


def parse_invocation(argv: Sequence[str]) -> Invocation:
    """Split *argv* into global options, command and command arguments.

    Raises
    ------
    UsageError
        When a global option lacks its value or no command token follows.
    UnknownCommandError
        When the command token is not a registered command name.
    """
    values: dict[str, str] = {}
    index = 0
    for name in GLOBAL_OPTIONS:
        if index < len(argv) and argv[index] == f"-{name}":
            if index + 2 >= len(argv):
                raise UsageError(f"Option '-{name}' requires a value and a command")
            values[name] = argv[index + 1]
            index += 2

    if index >= len(argv):
        raise UsageError("No command given")
    token = argv[index]
    if not token or not is_option(token):
        raise UsageError(f"Expected a command, got '{token}'")
    command = COMMANDS.get(token[1:])
    if command is None:
        raise UnknownCommandError(f"Unknown command '{token}'")
    return Invocation(connection=values, command=command, args=tuple(argv[index + 1:]))


def _print_syntax(*, unknown: bool = False) -> None:
    if unknown:
        console.print("Invalid/unknown primary command switch.")
    console.print("Command syntax:")
    console.print(
        escape("\tdsjob [-domain <domain>][-server <server>][-user <user>][-password <password>]"),
    )
    console.print(escape("\t\t\t<primary command> [<arguments>]"))
    console.print("")
    console.print("Valid primary command options are:")
    for name in COMMANDS:
        console.print(f"\t-{name}")


def _connection_params(values: dict[str, str], settings: DsjobSettings) -> ConnectionParams:
    return ConnectionParams(
        domain=values.get("domain", settings.domain),
        server=values.get("server", settings.server),
        user=values.get("user", settings.user),
        password=values.get("password", settings.password_value()),
    )


def _report_last_error(engine: Engine) -> None:
    lines = engine.get_last_error_message()
    if not lines:
        return
    console.print("")
    console.print("Last recorded error message =")
    for line in lines:
        console.print(escape(line))
    console.print("")


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(
    argv: Sequence[str] | None = None,
    *,
    engine: Engine | None = None,
    stdin: TextIO | None = None,
) -> int:
    """Run one dsjob invocation.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.
    engine:
        Engine to drive.  Defaults to the native ``vmdsapi`` adapter;
        tests pass a fake.
    stdin:
        Stream the ``-log`` command reads its message from.

    Returns
    -------
    int
        The command's status: ``0`` on success, the engine status on an
        engine failure, or ``USAGE_ERROR`` for malformed input.
    """
    settings = load_settings()
    configure_logging(settings.log_level)
    if argv is None:
        argv = sys.argv[1:]

    try:
        invocation = parse_invocation(argv)
    except UnknownCommandError:
        _print_syntax(unknown=True)
        return exit_codes.USAGE_ERROR
    except UsageError as exc:
        logger.debug("Rejected command line: %s", exc)
        _print_syntax()
        return exit_codes.USAGE_ERROR

    if engine is None:
        from dsjob.infra.dsapi_engine import DsapiEngine

        engine = DsapiEngine(settings.dsapi_library, encoding=settings.encoding)

    engine.set_server_params(_connection_params(invocation.connection, settings))
    context = CommandContext(
        engine=engine,
        stdin=stdin if stdin is not None else sys.stdin,
        encoding=settings.encoding,
    )
    logger.debug("Running -%s with %d argument(s)", invocation.command.name, len(invocation.args))
    try:
        status = invocation.command.execute(invocation.args, context)
        if status != exit_codes.SUCCESS:
            console.print("")
            console.print(f"Status code = {status}")
    finally:
        _report_last_error(engine)
    return status


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except DsjobError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape(str(exc))}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
