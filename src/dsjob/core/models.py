"""Domain models for dsjob.

Enumerations mirror the integer codes of the engine client API.  Values
coming back from the engine are kept as plain ``int`` where the engine
may legitimately report a code this client does not know about; the
label functions in :mod:`dsjob.core.labels` handle those.

All record types are **frozen** dataclasses — immutable value objects
with no behaviour beyond data access.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dsjob.core.param_values import ParamValue


# ---------------------------------------------------------------------------
# Engine enumerations
# ---------------------------------------------------------------------------

class ParamType(IntEnum):
    """Declared type of a job parameter."""

    STRING = 1
    ENCRYPTED = 2
    INTEGER = 3
    FLOAT = 4
    PATHNAME = 5
    LIST = 6
    DATE = 7
    TIME = 8


class LogType(IntEnum):
    """Classification of a log entry.  ``ANY`` is only valid as a filter."""

    ANY = 0
    INFO = 1
    WARNING = 2
    FATAL = 3
    REJECT = 4
    STARTED = 5
    RESET = 6
    BATCH = 7
    OTHER = 98


class JobStatus(IntEnum):
    """Run state of a job as reported by the engine."""

    RUNNING = 0
    RUN_OK = 1
    RUN_WARN = 2
    RUN_FAILED = 3
    VAL_OK = 11
    VAL_WARN = 12
    VAL_FAILED = 13
    RESET = 21
    CRASHED = 96
    STOPPED = 97
    NOT_RUNNABLE = 98
    NOT_RUNNING = 99


class RunMode(IntEnum):
    NORMAL = 1
    RESET = 2
    VALIDATE = 3


class JobLimit(IntEnum):
    WARNINGS = 1
    ROWS = 2


class ProjectInfoKey(IntEnum):
    JOB_LIST = 1


class JobInfoKey(IntEnum):
    STATUS = 1
    NAME = 2
    CONTROLLER = 3
    START_TIMESTAMP = 4
    WAVE_NUMBER = 5
    PARAM_LIST = 6
    STAGE_LIST = 7
    USER_STATUS = 8


class StageInfoKey(IntEnum):
    LAST_ERROR = 1
    NAME = 2
    TYPE = 3
    IN_ROW_NUMBER = 4
    LINK_LIST = 5


class LinkInfoKey(IntEnum):
    LAST_ERROR = 1
    NAME = 2
    ROW_COUNT = 3


# ---------------------------------------------------------------------------
# Connection context
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ConnectionParams:
    """Server connection values established once per invocation.

    Any field may be ``None``; the engine then applies its own default.
    """

    domain: str | None = None
    server: str | None = None
    user: str | None = None
    password: str | None = None


# ---------------------------------------------------------------------------
# Logs
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class LogEvent:
    """One row of a log summary, as produced by the log cursor."""

    event_id: int
    timestamp: datetime
    type: int
    """A :class:`LogType` code; unknown codes are kept verbatim."""

    message: str
    """First line of the entry's message text."""


@dataclass(frozen=True, slots=True)
class LogDetail:
    """Full content of a single log entry."""

    event_id: int
    """Engine event id.  Negative when the engine could not assign one."""

    timestamp: datetime
    type: int
    message_lines: tuple[str, ...]

    @property
    def has_event_id(self) -> bool:
        return self.event_id >= 0


@dataclass(frozen=True, slots=True)
class LogFilter:
    """Selection criteria for a log cursor.

    ``max_count`` of zero means no limit.  ``None`` times leave that end
    of the range open.
    """

    log_type: LogType = LogType.ANY
    start_time: datetime | None = None
    end_time: datetime | None = None
    max_count: int = 0


# ---------------------------------------------------------------------------
# Parameters
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ParamInfo:
    """Declaration of a job parameter as held by the engine."""

    param_type: int
    """A :class:`ParamType` code; unknown codes are kept verbatim."""

    help_text: str = ""
    prompt: str = ""
    prompt_at_run: bool = False
    default_value: ParamValue | None = None
    design_default_value: ParamValue | None = None
    list_values: tuple[str, ...] = ()
    design_list_values: tuple[str, ...] = ()
