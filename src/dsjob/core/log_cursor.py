"""Cursor over the log entries of one job.

The engine pages through a job's log with a first/next protocol.  This
module wraps it in a small state machine::

    INIT --find_first--> ITERATING --find_next--> ITERATING
      |                      |
      +--> DONE / FAILED     +--> DONE / FAILED

"No more entries" is the normal way an iteration ends and is never
reported as an error.  Iterating a cursor yields entries lazily, one
engine round-trip per entry; a cursor cannot be restarted.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Iterator

from dsjob.core.models import LogEvent, LogFilter
from dsjob.core.protocols import Engine, JobHandle
from dsjob.exceptions import (
    CursorStateError,
    EngineError,
    NoMoreEntriesError,
    NotAvailableError,
)

logger = logging.getLogger(__name__)


class CursorState(enum.Enum):
    INIT = "init"
    ITERATING = "iterating"
    DONE = "done"
    FAILED = "failed"


class LogCursor:
    """Stateful first/next iteration over a job's log entries."""

    def __init__(
        self,
        engine: Engine,
        job: JobHandle,
        log_filter: LogFilter | None = None,
    ) -> None:
        self._engine: Engine = engine
        self._job: JobHandle = job
        self._filter: LogFilter = log_filter or LogFilter()
        self._state: CursorState = CursorState.INIT

    @property
    def state(self) -> CursorState:
        return self._state

    @property
    def log_filter(self) -> LogFilter:
        return self._filter

    def find_first(self) -> LogEvent | None:
        """Start the search and return the first entry, or ``None`` if empty.

        Raises
        ------
        CursorStateError
            If the cursor has already been started.
        EngineError
            If the engine fails for any reason other than having no data.
        """
        if self._state is not CursorState.INIT:
            raise CursorStateError(
                f"find_first called on a cursor in state {self._state.name}",
            )
        try:
            event = self._engine.find_first_log_entry(self._job, self._filter)
        except (NoMoreEntriesError, NotAvailableError):
            return self._finish()
        except EngineError:
            self._fail()
            raise
        self._state = CursorState.ITERATING
        return event

    def find_next(self) -> LogEvent | None:
        """Return the next entry, or ``None`` once the log is exhausted."""
        if self._state is not CursorState.ITERATING:
            raise CursorStateError(
                f"find_next called on a cursor in state {self._state.name}",
            )
        try:
            return self._engine.find_next_log_entry(self._job)
        except NoMoreEntriesError:
            return self._finish()
        except EngineError:
            self._fail()
            raise

    def __iter__(self) -> Iterator[LogEvent]:
        event = self.find_first()
        while event is not None:
            yield event
            event = self.find_next()

    def _finish(self) -> None:
        logger.debug("Log cursor exhausted")
        self._state = CursorState.DONE
        return None

    def _fail(self) -> None:
        logger.debug("Log cursor failed")
        self._state = CursorState.FAILED
