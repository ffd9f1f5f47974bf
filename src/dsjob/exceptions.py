"""Custom exception hierarchy for dsjob.

All exceptions that cross layer boundaries must inherit from
:class:`DsjobError`.  Raw errors from the native engine library must
NEVER propagate beyond the infrastructure layer — they are mapped to an
:class:`EngineError` carrying the engine's status code.

Hierarchy
---------
DsjobError
├── UsageError
│   └── UnknownCommandError
├── CursorStateError
├── EnvironmentError
│   └── EngineLibraryNotFoundError
└── EngineError
    ├── NoMoreEntriesError
    └── NotAvailableError
"""

from __future__ import annotations

from dsjob import engine_status


class DsjobError(Exception):
    """Base exception for all dsjob errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Local validation ------------------------------------------------------

class UsageError(DsjobError):
    """Raised when command-line input does not match a command grammar."""


class UnknownCommandError(UsageError):
    """Raised when the primary command switch names no registered command."""


class CursorStateError(DsjobError):
    """Raised when a log cursor is driven out of protocol order."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(DsjobError):
    """Raised when a required runtime dependency is not available."""


class EngineLibraryNotFoundError(EnvironmentError):
    """Raised when the engine's native client library cannot be loaded."""


# --- Engine ----------------------------------------------------------------

class EngineError(DsjobError):
    """Raised when an engine call returns a non-success status.

    The numeric :attr:`status` is authoritative: it becomes the command
    result and, ultimately, the process exit status.
    """

    def __init__(
        self,
        status: int,
        message: str | None = None,
        *,
        hint: str | None = None,
    ) -> None:
        super().__init__(
            message or engine_status.describe(status),
            hint=hint,
        )
        self.status: int = status

    def with_message(self, message: str) -> EngineError:
        """Return a copy of this error with *message*, keeping the status."""
        return type(self)(self.status, message, hint=self.hint)


class NoMoreEntriesError(EngineError):
    """The log cursor has no further entries."""


class NotAvailableError(EngineError):
    """The requested information does not exist at the engine."""


_STATUS_ERRORS: dict[int, type[EngineError]] = {
    engine_status.NO_MORE: NoMoreEntriesError,
    engine_status.NOT_AVAILABLE: NotAvailableError,
}


def engine_error(status: int, message: str | None = None) -> EngineError:
    """Build the :class:`EngineError` subclass matching *status*."""
    error_class = _STATUS_ERRORS.get(status, EngineError)
    return error_class(status, message)
