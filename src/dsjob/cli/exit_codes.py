"""Exit-code constants used by the CLI layer.

Centralised here so that every exit path uses a well-known, tested
value rather than magic integers scattered across the codebase.  Engine
status codes are passed through as exit codes unchanged, so these local
values are chosen to never collide with one.
"""

from __future__ import annotations

from dsjob import engine_status

SUCCESS: int = engine_status.NO_ERROR
"""Clean exit — command completed without error."""

USAGE_ERROR: int = -9999
"""Command-line input was malformed.  Usage text was displayed."""

GENERAL_ERROR: int = 1
"""A known DsjobError escaped to the process boundary."""

KEYBOARD_INTERRUPT: int = 130
"""User pressed Ctrl+C.  Follows POSIX convention (128 + SIGINT=2)."""

UNEXPECTED_ERROR: int = 2
"""An unhandled exception escaped all known error boundaries."""
