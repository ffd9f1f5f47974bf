"""Protocols (interfaces) consumed by the core layer.

These define the contract that the engine adapter must satisfy.  Core
code depends ONLY on this protocol, never on a concrete implementation.

Error contract
--------------
Every method signals failure by raising
:class:`~dsjob.exceptions.EngineError` (or one of its subclasses, built
with :func:`~dsjob.exceptions.engine_error`) carrying the engine's
status code.  Calls that open a resource raise with the engine's
last-error status when no handle is returned.  Nothing else may escape.
"""

from __future__ import annotations

from typing import Any, Protocol

from dsjob.core.models import (
    ConnectionParams,
    JobInfoKey,
    JobLimit,
    LinkInfoKey,
    LogDetail,
    LogEvent,
    LogFilter,
    LogType,
    ParamInfo,
    ProjectInfoKey,
    RunMode,
    StageInfoKey,
)
from dsjob.core.param_values import ParamValue

ProjectHandle = Any
"""Opaque reference to an open project."""

JobHandle = Any
"""Opaque reference to an open job."""


class Engine(Protocol):
    """Request/response surface of the job-orchestration engine.

    Information queries return a value whose Python type depends on the
    key:

    * lists (job, stage, link, parameter names) → ``list[str]``
    * names, controller, user status, stage type → ``str``
    * status, wave number, row counts → ``int``
    * start timestamp → ``datetime``
    * last error of a stage or link → :class:`LogDetail`
    """

    # -- connection --------------------------------------------------------

    def set_server_params(self, params: ConnectionParams) -> None:
        ...  # pragma: no cover

    def get_project_list(self) -> list[str]:
        ...  # pragma: no cover

    def get_last_error_message(self) -> list[str] | None:
        """Return the engine's last recorded error text, one entry per line."""
        ...  # pragma: no cover

    # -- handles -----------------------------------------------------------

    def open_project(self, name: str) -> ProjectHandle:
        ...  # pragma: no cover

    def close_project(self, project: ProjectHandle) -> None:
        ...  # pragma: no cover

    def open_job(self, project: ProjectHandle, name: str) -> JobHandle:
        ...  # pragma: no cover

    def close_job(self, job: JobHandle) -> None:
        ...  # pragma: no cover

    def lock_job(self, job: JobHandle) -> None:
        ...  # pragma: no cover

    def unlock_job(self, job: JobHandle) -> None:
        ...  # pragma: no cover

    # -- job control -------------------------------------------------------

    def run_job(self, job: JobHandle, mode: RunMode) -> None:
        ...  # pragma: no cover

    def stop_job(self, job: JobHandle) -> None:
        ...  # pragma: no cover

    def wait_for_job(self, job: JobHandle) -> None:
        """Block until the job finishes.  No client-side timeout applies."""
        ...  # pragma: no cover

    def set_job_limit(self, job: JobHandle, limit: JobLimit, value: int) -> None:
        ...  # pragma: no cover

    # -- information -------------------------------------------------------

    def get_project_info(self, project: ProjectHandle, key: ProjectInfoKey) -> Any:
        ...  # pragma: no cover

    def get_job_info(self, job: JobHandle, key: JobInfoKey) -> Any:
        ...  # pragma: no cover

    def get_stage_info(self, job: JobHandle, stage: str, key: StageInfoKey) -> Any:
        ...  # pragma: no cover

    def get_link_info(
        self,
        job: JobHandle,
        stage: str,
        link: str,
        key: LinkInfoKey,
    ) -> Any:
        ...  # pragma: no cover

    # -- parameters --------------------------------------------------------

    def get_param_info(self, job: JobHandle, name: str) -> ParamInfo:
        ...  # pragma: no cover

    def set_param(self, job: JobHandle, name: str, value: ParamValue) -> None:
        ...  # pragma: no cover

    # -- logs --------------------------------------------------------------

    def log_event(self, job: JobHandle, log_type: LogType, message: str) -> None:
        ...  # pragma: no cover

    def find_first_log_entry(self, job: JobHandle, log_filter: LogFilter) -> LogEvent:
        """Start a log search.  Raises ``NoMoreEntriesError`` when empty."""
        ...  # pragma: no cover

    def find_next_log_entry(self, job: JobHandle) -> LogEvent:
        """Continue a log search.  Raises ``NoMoreEntriesError`` at the end."""
        ...  # pragma: no cover

    def get_log_entry(self, job: JobHandle, event_id: int) -> LogDetail:
        ...  # pragma: no cover

    def get_newest_log_id(self, job: JobHandle, log_type: LogType) -> int:
        ...  # pragma: no cover
