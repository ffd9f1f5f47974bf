"""Status codes returned by the engine client API.

The engine reports every outcome as a signed integer.  Zero is success,
negative values are errors.  Codes not listed here are still legal and
are passed through to the process exit status unchanged.
"""

from __future__ import annotations

NO_ERROR: int = 0

BAD_HANDLE: int = -1
BAD_STATE: int = -2
BAD_PARAM: int = -3
BAD_VALUE: int = -4
BAD_TYPE: int = -5
WRONG_JOB: int = -6
BAD_STAGE: int = -7
NOT_IN_STAGE: int = -8
BAD_LINK: int = -9
JOB_LOCKED: int = -10
JOB_DELETED: int = -11
BAD_NAME: int = -12
BAD_TIME: int = -13
TIMEOUT: int = -14

NO_MORE: int = -1001
"""Log cursor exhausted — the expected end of an iteration."""

BAD_PROJECT: int = -1002
NO_ENGINE: int = -1003
OPEN_FAILED: int = -1004
NO_MEMORY: int = -1005
SERVER_ERROR: int = -1006

NOT_AVAILABLE: int = -1007
"""Requested information does not exist (e.g. a job with no stages)."""

_DESCRIPTIONS: dict[int, str] = {
    NO_ERROR: "no error",
    BAD_HANDLE: "invalid project or job handle",
    BAD_STATE: "job is not in the right state",
    BAD_PARAM: "unknown parameter name",
    BAD_VALUE: "invalid parameter value",
    BAD_TYPE: "invalid information or limit type",
    WRONG_JOB: "job handle does not belong to this job",
    BAD_STAGE: "unknown stage name",
    NOT_IN_STAGE: "internal engine error",
    BAD_LINK: "unknown link name",
    JOB_LOCKED: "job is locked by another user",
    JOB_DELETED: "job has been deleted",
    BAD_NAME: "invalid job name",
    BAD_TIME: "invalid timestamp",
    TIMEOUT: "engine did not respond in time",
    NO_MORE: "no more entries",
    BAD_PROJECT: "unknown project name",
    NO_ENGINE: "engine is not installed on the server",
    OPEN_FAILED: "failed to open the job",
    NO_MEMORY: "engine ran out of memory",
    SERVER_ERROR: "error while communicating with the server",
    NOT_AVAILABLE: "requested information not available",
}


def describe(status: int) -> str:
    """Return a short human-readable description for *status*."""
    return _DESCRIPTIONS.get(status, "unrecognised engine status")
