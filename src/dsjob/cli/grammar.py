"""Per-command argument grammar.

Every sub-command accepts the same shape of arguments::

    [flag [value]]... positional... [optional positional]...

Flags form a contiguous prefix of option-prefixed tokens.  A flag is
either a switch or takes exactly one value; the value token is taken as
is, even when it starts with the option prefix (so ``-warn -5`` works).
The first token without the prefix ends the flags, and the remaining
tokens must match the positional count exactly.

Anything else is a :class:`~dsjob.exceptions.UsageError`.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence
from dataclasses import dataclass

from dsjob.exceptions import UsageError

OPTION_PREFIXES: tuple[str, ...] = ("-", "/") if sys.platform == "win32" else ("-",)
"""Characters that introduce a flag or a command name on this platform."""


def is_option(token: str) -> bool:
    return token[:1] in OPTION_PREFIXES


@dataclass(frozen=True, slots=True)
class Flag:
    """A flag recognised by one sub-command.

    A flag with a ``metavar`` or ``choices`` takes a value; otherwise it
    is a switch.
    """

    name: str
    metavar: str | None = None
    choices: tuple[str, ...] = ()

    @property
    def takes_value(self) -> bool:
        return self.metavar is not None or bool(self.choices)

    def usage(self) -> str:
        if self.choices:
            return f"[-{self.name} <{' | '.join(self.choices)}>]"
        if self.metavar is not None:
            return f"[-{self.name} {self.metavar}]"
        return f"[-{self.name}]"


@dataclass(frozen=True, slots=True)
class ParsedArgs:
    """Flags in the order given, plus positional tokens."""

    options: tuple[tuple[str, str | None], ...] = ()
    positionals: tuple[str, ...] = ()

    def has(self, name: str) -> bool:
        return any(option == name for option, _ in self.options)

    def values(self, name: str) -> list[str]:
        """All values given for flag *name*, in command-line order."""
        return [value for option, value in self.options if option == name and value is not None]

    def last(self, name: str) -> str | None:
        """The last value given for flag *name*, or ``None``."""
        found = self.values(name)
        return found[-1] if found else None

    def last_of(self, *names: str) -> str | None:
        """Which of the switches *names* appeared last, or ``None``."""
        chosen: str | None = None
        for option, _ in self.options:
            if option in names:
                chosen = option
        return chosen


@dataclass(frozen=True, slots=True)
class Grammar:
    flags: tuple[Flag, ...] = ()
    positionals: tuple[str, ...] = ()
    optional_positionals: tuple[str, ...] = ()

    def usage_lines(self) -> list[str]:
        """Synthesised usage, one flag per line, positionals last."""
        lines = [flag.usage() for flag in self.flags]
        tail = [f"<{name}>" for name in self.positionals]
        tail.extend(f"[<{name}>]" for name in self.optional_positionals)
        if tail:
            lines.append(" ".join(tail))
        return lines

    def parse(self, args: Sequence[str]) -> ParsedArgs:
        """Match *args* against this grammar.

        Raises
        ------
        UsageError
            On an unknown flag, a missing or invalid flag value, or a
            wrong number of positionals.
        """
        by_name = {flag.name: flag for flag in self.flags}
        options: list[tuple[str, str | None]] = []
        index = 0
        while index < len(args) and is_option(args[index]):
            token = args[index]
            flag = by_name.get(token[1:])
            if flag is None:
                raise UsageError(f"Unknown option '{token}'")
            if not flag.takes_value:
                options.append((flag.name, None))
                index += 1
                continue
            if index + 1 >= len(args):
                raise UsageError(f"Option '{token}' requires a value")
            value = args[index + 1]
            if flag.choices and value not in flag.choices:
                raise UsageError(f"Invalid value '{value}' for option '{token}'")
            options.append((flag.name, value))
            index += 2

        positionals = tuple(args[index:])
        required = len(self.positionals)
        allowed = required + len(self.optional_positionals)
        if not required <= len(positionals) <= allowed:
            raise UsageError(
                f"Expected {required}"
                + (f" to {allowed}" if allowed != required else "")
                + f" positional argument(s), got {len(positionals)}",
            )
        return ParsedArgs(options=tuple(options), positionals=positionals)
