"""Display labels for engine enumeration codes.

Each function is total: every enum member has a label, and any code the
engine reports that this client does not recognise maps to an explicit
fallback rather than raising.
"""

from __future__ import annotations

from dsjob.core.models import JobStatus, LogType, ParamType

UNKNOWN_JOB_STATUS: str = "UNKNOWN"
UNKNOWN_LOG_TYPE: str = "????"
UNKNOWN_PARAM_TYPE: str = "*** ERROR - UNKNOWN TYPE ***"

_JOB_STATUS_LABELS: dict[int, str] = {
    JobStatus.RUNNING: "RUNNING",
    JobStatus.RUN_OK: "RUN OK",
    JobStatus.RUN_WARN: "RUN with WARNINGS",
    JobStatus.RUN_FAILED: "RUN FAILED",
    JobStatus.VAL_OK: "VALIDATED OK",
    JobStatus.VAL_WARN: "VALIDATE with WARNINGS",
    JobStatus.VAL_FAILED: "VALIDATION FAILED",
    JobStatus.RESET: "RESET",
    JobStatus.CRASHED: "CRASHED",
    JobStatus.STOPPED: "STOPPED",
    JobStatus.NOT_RUNNABLE: "NOT COMPILED",
    JobStatus.NOT_RUNNING: "NOT RUNNING",
}

_LOG_TYPE_LABELS: dict[int, str] = {
    LogType.ANY: "ANY",
    LogType.INFO: "INFO",
    LogType.WARNING: "WARNING",
    LogType.FATAL: "FATAL",
    LogType.REJECT: "REJECT",
    LogType.STARTED: "STARTED",
    LogType.RESET: "RESET",
    LogType.BATCH: "BATCH",
    LogType.OTHER: "OTHER",
}

_PARAM_TYPE_LABELS: dict[int, str] = {
    ParamType.STRING: "String",
    ParamType.ENCRYPTED: "Encrypted",
    ParamType.INTEGER: "Integer",
    ParamType.FLOAT: "Float",
    ParamType.PATHNAME: "Pathname",
    ParamType.LIST: "List",
    ParamType.DATE: "Date",
    ParamType.TIME: "Time",
}


def job_status_label(status: int) -> str:
    return _JOB_STATUS_LABELS.get(status, UNKNOWN_JOB_STATUS)


def log_type_label(log_type: int) -> str:
    return _LOG_TYPE_LABELS.get(log_type, UNKNOWN_LOG_TYPE)


def param_type_label(param_type: int) -> str:
    return _PARAM_TYPE_LABELS.get(param_type, UNKNOWN_PARAM_TYPE)


def parse_log_type(name: str) -> LogType | None:
    """Map an operator-supplied type name (e.g. ``"WARNING"``) to a filter.

    ``ANY`` is not accepted; it is what an absent filter means.  Matching
    is exact and case-sensitive.
    """
    for log_type, label in _LOG_TYPE_LABELS.items():
        if log_type != LogType.ANY and label == name:
            return LogType(log_type)
    return None
