"""CLI console helpers with optional Rich support.

Two proxies are exposed:

* ``console`` — diagnostics on stderr, rendered through Rich with markup
  enabled.
* ``stdout`` — listings on stdout, written verbatim.  Rich is bypassed
  here because it expands tabs and may wrap, and scripts scrape these
  tab-separated lines.

This module intentionally avoids module-level imports of optional UI
dependencies so that usage and error paths remain functional even when
Rich is not installed.
"""

from __future__ import annotations

import sys
from typing import Any

from dsjob.exceptions import EnvironmentError


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise EnvironmentError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console


def get_rich_console() -> Any:
	"""Create a Rich console instance targeting stderr."""
	console_class = _load_rich_console_class()
	return console_class(stderr=True, highlight=False)


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with Rich fallback."""

	def print(self, *objects: object) -> None:
		"""Render with Rich when available, else plain print."""
		try:
			rich_console = get_rich_console()
		except EnvironmentError:
			print(*objects, file=sys.stderr)
			return
		rich_console.print(*objects)


class _StdoutWriter:
	"""Line writer for command output; text is never reinterpreted."""

	def print(self, *objects: object) -> None:
		print(*objects, file=sys.stdout)


console = _ConsoleProxy()
stdout = _StdoutWriter()


def escape(text: str) -> str:
	"""Escape Rich markup in engine-supplied *text* bound for ``console``."""
	try:
		from rich.markup import escape as rich_escape
	except ModuleNotFoundError:
		return text
	return rich_escape(text)
