"""Regression tests for the optional Rich dependency.

Usage, listings and error reporting must keep working when Rich cannot
be imported; output then falls back to plain ``print``.
"""

from __future__ import annotations

import sys

import pytest

from dsjob import engine_status
from dsjob.cli import exit_codes
from dsjob.cli.app import main
from dsjob.cli.console import escape

from conftest import FakeEngine


def _hide_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(sys.modules, "rich", None)
    monkeypatch.setitem(sys.modules, "rich.console", None)
    monkeypatch.setitem(sys.modules, "rich.markup", None)
    monkeypatch.setitem(sys.modules, "rich.logging", None)


def test_usage_works_without_rich(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    _hide_rich(monkeypatch)
    code = main(["-launch"], engine=FakeEngine())
    err = capsys.readouterr().err
    assert code == exit_codes.USAGE_ERROR
    assert "\t-run\n" in err


def test_listing_works_without_rich(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    _hide_rich(monkeypatch)
    assert main(["-lprojects"], engine=FakeEngine()) == exit_codes.SUCCESS
    assert capsys.readouterr().out == "dstage1\ndstage2\n"


def test_errors_render_without_rich(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    _hide_rich(monkeypatch)
    engine = FakeEngine()
    engine.failures["open_project"] = engine_status.BAD_PROJECT
    assert main(["-ljobs", "nope"], engine=engine) == engine_status.BAD_PROJECT
    err = capsys.readouterr().err
    assert "Failed to open project 'nope'" in err
    assert f"Status code = {engine_status.BAD_PROJECT}" in err


def test_escape_is_identity_without_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)
    assert escape("[bold]x[/bold]") == "[bold]x[/bold]"
