"""Tests for per-command argument grammars (cli/grammar.py)."""

from __future__ import annotations

import pytest

from dsjob.cli.grammar import Flag, Grammar
from dsjob.exceptions import UsageError

RUN_LIKE = Grammar(
    flags=(
        Flag("mode", choices=("NORMAL", "RESET")),
        Flag("param", metavar="<name>=<value>"),
        Flag("warn", metavar="<n>"),
        Flag("wait"),
    ),
    positionals=("project", "job"),
)


class TestParse:
    def test_flags_then_positionals(self) -> None:
        parsed = RUN_LIKE.parse(["-mode", "RESET", "-wait", "p", "j"])
        assert parsed.last("mode") == "RESET"
        assert parsed.has("wait")
        assert parsed.positionals == ("p", "j")

    def test_repeated_flag_keeps_order(self) -> None:
        parsed = RUN_LIKE.parse(["-param", "a=1", "-param", "b=2", "p", "j"])
        assert parsed.values("param") == ["a=1", "b=2"]

    def test_value_may_start_with_prefix(self) -> None:
        parsed = RUN_LIKE.parse(["-warn", "-5", "p", "j"])
        assert parsed.last("warn") == "-5"

    def test_last_of_reports_latest_switch(self) -> None:
        grammar = Grammar(flags=(Flag("info"), Flag("warn")), positionals=("p",))
        assert grammar.parse(["-warn", "-info", "p"]).last_of("info", "warn") == "info"
        assert grammar.parse(["p"]).last_of("info", "warn") is None

    def test_optional_positional(self) -> None:
        grammar = Grammar(positionals=("p",), optional_positionals=("type",))
        assert grammar.parse(["p"]).positionals == ("p",)
        assert grammar.parse(["p", "FATAL"]).positionals == ("p", "FATAL")


class TestRejections:
    @pytest.mark.parametrize(
        "args",
        [
            ["-bogus", "p", "j"],
            ["-mode", "FAST", "p", "j"],
            ["p"],
            ["p", "j", "extra"],
            ["-warn"],
            [],
        ],
    )
    def test_malformed_input(self, args: list[str]) -> None:
        with pytest.raises(UsageError):
            RUN_LIKE.parse(args)

    def test_flag_after_positional_counts_as_positional(self) -> None:
        with pytest.raises(UsageError):
            RUN_LIKE.parse(["p", "-wait", "j"])


class TestUsage:
    def test_usage_lines(self) -> None:
        assert RUN_LIKE.usage_lines() == [
            "[-mode <NORMAL | RESET>]",
            "[-param <name>=<value>]",
            "[-warn <n>]",
            "[-wait]",
            "<project> <job>",
        ]
