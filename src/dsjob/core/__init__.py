"""Core / service layer — pure orchestration over the engine protocol.

Rules
-----
* No ``print()`` calls.
* No filesystem, console or native-library access.
* No imports from ``cli`` or ``infra``.
* Engine access only through :class:`~dsjob.core.protocols.Engine`.
"""

from dsjob.core.log_cursor import CursorState, LogCursor
from dsjob.core.models import (
    ConnectionParams,
    JobInfoKey,
    JobLimit,
    JobStatus,
    LinkInfoKey,
    LogDetail,
    LogEvent,
    LogFilter,
    LogType,
    ParamInfo,
    ParamType,
    ProjectInfoKey,
    RunMode,
    StageInfoKey,
)
from dsjob.core.param_values import ParamValue, make_param_value
from dsjob.core.parameter_service import ParameterService
from dsjob.core.protocols import Engine
from dsjob.core.sessions import job_session, locked_job, open_job, open_project

__all__: list[str] = [
    "ConnectionParams",
    "CursorState",
    "Engine",
    "JobInfoKey",
    "JobLimit",
    "JobStatus",
    "LinkInfoKey",
    "LogCursor",
    "LogDetail",
    "LogEvent",
    "LogFilter",
    "LogType",
    "ParamInfo",
    "ParamType",
    "ParamValue",
    "ParameterService",
    "ProjectInfoKey",
    "RunMode",
    "StageInfoKey",
    "job_session",
    "locked_job",
    "make_param_value",
    "open_job",
    "open_project",
]
