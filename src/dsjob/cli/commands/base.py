"""Shared machinery for sub-commands.

A sub-command is a :class:`Command` subclass with a ``name``, a
:class:`~dsjob.cli.grammar.Grammar`, a :meth:`Command.parse` hook that
turns grammar output into a request, and a :meth:`Command.run` method
that performs the engine work.  :meth:`Command.execute` is the single
entry point used by the dispatcher and is the command-level error
boundary:

* :class:`~dsjob.exceptions.UsageError` → usage text, ``USAGE_ERROR``.
* :class:`~dsjob.exceptions.EngineError` → error line, engine status.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, ClassVar, TextIO

from dsjob.cli import exit_codes
from dsjob.cli.console import console, escape, stdout
from dsjob.cli.grammar import Grammar, ParsedArgs
from dsjob.core.protocols import Engine
from dsjob.exceptions import DsjobError, EngineError, UsageError


@dataclass(frozen=True, slots=True)
class CommandContext:
    """Everything a command needs besides its own arguments."""

    engine: Engine
    stdin: TextIO
    encoding: str = "utf-8"
    """Codec for bytes read from ``stdin``."""


def report_error(exc: DsjobError) -> None:
    """Render *exc* (and its hint, if any) on stderr."""
    console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
    if exc.hint:
        console.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}")


def emit(lines: Iterable[str]) -> None:
    for line in lines:
        stdout.print(line)


@contextmanager
def relabel(message: str) -> Iterator[None]:
    """Re-raise engine errors from the block with *message*, keeping the status."""
    try:
        yield
    except EngineError as exc:
        raise exc.with_message(message) from exc


class Command:
    """Base class for sub-commands."""

    name: ClassVar[str]
    grammar: ClassVar[Grammar] = Grammar()
    notes: ClassVar[tuple[str, ...]] = ()

    def usage_lines(self) -> list[str]:
        lines = [f"dsjob -{self.name}"]
        lines.extend(f"\t\t\t{line}" for line in self.grammar.usage_lines())
        if self.notes:
            lines.append("")
            lines.extend(self.notes)
        return lines

    def print_usage(self, reason: str | None = None) -> None:
        if reason:
            console.print(f"[red]{escape(reason)}[/red]")
        head, *rest = self.usage_lines()
        console.print(f"Invalid arguments: {escape(head)}")
        for line in rest:
            console.print(escape(line))

    def parse(self, parsed: ParsedArgs) -> Any:
        """Turn grammar output into this command's request.

        Raise :class:`UsageError` for input the grammar alone cannot
        reject.  The default passes the parsed arguments through.
        """
        return parsed

    def run(self, request: Any, context: CommandContext) -> int:
        raise NotImplementedError

    def execute(self, args: Sequence[str], context: CommandContext) -> int:
        """Validate *args*, then run the command; return its status."""
        try:
            request = self.parse(self.grammar.parse(args))
        except UsageError as exc:
            self.print_usage(str(exc))
            return exit_codes.USAGE_ERROR
        try:
            return self.run(request, context)
        except EngineError as exc:
            report_error(exc)
            return exc.status
