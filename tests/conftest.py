"""Shared pytest fixtures and configuration for the dsjob test suite.

Guidelines
----------
* No native engine library is ever loaded; commands drive ``FakeEngine``.
* Core tests must be pure — no side effects.
* Tests must not depend on OS state or ``DSJOB_*`` variables.
"""

from __future__ import annotations

import io
from collections.abc import Iterator
from datetime import datetime
from typing import Any

import pytest

from dsjob import engine_status
from dsjob.cli.commands import CommandContext
from dsjob.core.models import (
    ConnectionParams,
    JobInfoKey,
    LinkInfoKey,
    LogDetail,
    LogEvent,
    LogFilter,
    LogType,
    ParamInfo,
    ParamType,
    ProjectInfoKey,
    StageInfoKey,
)
from dsjob.exceptions import engine_error

T0 = datetime(2024, 3, 1, 12, 30, 0)


class FakeEngine:
    """In-memory engine that records every call.

    ``failures`` maps an operation name to the status it should fail
    with.  Handles are plain strings so tests can assert on them.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[Any, ...]] = []
        self.failures: dict[str, int] = {}
        self.server_params: ConnectionParams | None = None
        self.projects: list[str] = ["dstage1", "dstage2"]
        self.jobs: list[str] = ["LoadCustomers", "LoadOrders"]
        self.job_info: dict[int, Any] = {
            JobInfoKey.STATUS: 1,
            JobInfoKey.CONTROLLER: "",
            JobInfoKey.START_TIMESTAMP: T0,
            JobInfoKey.WAVE_NUMBER: 3,
            JobInfoKey.USER_STATUS: "done",
            JobInfoKey.STAGE_LIST: ["Extract", "Transform"],
            JobInfoKey.PARAM_LIST: ["Region", "BatchSize"],
        }
        self.stage_info: dict[int, Any] = {
            StageInfoKey.TYPE: "CTransformerStage",
            StageInfoKey.IN_ROW_NUMBER: 120,
            StageInfoKey.LINK_LIST: ["DSLink3"],
        }
        self.link_info: dict[int, Any] = {
            LinkInfoKey.ROW_COUNT: 4200,
        }
        self.params: dict[str, ParamInfo] = {
            "Region": ParamInfo(param_type=ParamType.STRING, help_text="Sales region"),
            "BatchSize": ParamInfo(param_type=ParamType.INTEGER),
            "Ratio": ParamInfo(param_type=ParamType.FLOAT),
        }
        self.param_values: dict[str, Any] = {}
        self.log_events: list[LogEvent] = []
        self.log_details: dict[int, LogDetail] = {}
        self.logged: list[tuple[LogType, str]] = []
        self.newest_id: int = 0
        self.last_error_message: list[str] | None = None

    # -- plumbing ----------------------------------------------------------

    def _record(self, op: str, *args: Any) -> None:
        self.calls.append((op, *args))
        status = self.failures.get(op)
        if status is not None:
            raise engine_error(status)

    def count(self, op: str) -> int:
        return sum(1 for call in self.calls if call[0] == op)

    def ops(self) -> list[str]:
        return [call[0] for call in self.calls]

    def _lookup(self, table: dict[int, Any], key: int) -> Any:
        if key not in table:
            raise engine_error(engine_status.NOT_AVAILABLE)
        return table[key]

    # -- connection --------------------------------------------------------

    def set_server_params(self, params: ConnectionParams) -> None:
        self.calls.append(("set_server_params", params))
        self.server_params = params

    def get_project_list(self) -> list[str]:
        self._record("get_project_list")
        return list(self.projects)

    def get_last_error_message(self) -> list[str] | None:
        return self.last_error_message

    # -- handles -----------------------------------------------------------

    def open_project(self, name: str) -> str:
        self._record("open_project", name)
        return f"project:{name}"

    def close_project(self, project: str) -> None:
        self._record("close_project", project)

    def open_job(self, project: str, name: str) -> str:
        self._record("open_job", project, name)
        return f"job:{name}"

    def close_job(self, job: str) -> None:
        self._record("close_job", job)

    def lock_job(self, job: str) -> None:
        self._record("lock_job", job)

    def unlock_job(self, job: str) -> None:
        self._record("unlock_job", job)

    # -- job control -------------------------------------------------------

    def run_job(self, job: str, mode: Any) -> None:
        self._record("run_job", job, mode)

    def stop_job(self, job: str) -> None:
        self._record("stop_job", job)

    def wait_for_job(self, job: str) -> None:
        self._record("wait_for_job", job)

    def set_job_limit(self, job: str, limit: Any, value: int) -> None:
        self._record("set_job_limit", job, limit, value)

    # -- information -------------------------------------------------------

    def get_project_info(self, project: str, key: ProjectInfoKey) -> Any:
        self._record("get_project_info", project, key)
        if key == ProjectInfoKey.JOB_LIST:
            return list(self.jobs)
        raise engine_error(engine_status.NOT_AVAILABLE)

    def get_job_info(self, job: str, key: JobInfoKey) -> Any:
        self._record("get_job_info", job, key)
        return self._lookup(self.job_info, key)

    def get_stage_info(self, job: str, stage: str, key: StageInfoKey) -> Any:
        self._record("get_stage_info", job, stage, key)
        return self._lookup(self.stage_info, key)

    def get_link_info(self, job: str, stage: str, link: str, key: LinkInfoKey) -> Any:
        self._record("get_link_info", job, stage, link, key)
        return self._lookup(self.link_info, key)

    # -- parameters --------------------------------------------------------

    def get_param_info(self, job: str, name: str) -> ParamInfo:
        self._record("get_param_info", job, name)
        if name not in self.params:
            raise engine_error(engine_status.BAD_PARAM)
        return self.params[name]

    def set_param(self, job: str, name: str, value: Any) -> None:
        self._record("set_param", job, name, value)
        self.param_values[name] = value

    # -- logs --------------------------------------------------------------

    def log_event(self, job: str, log_type: LogType, message: str) -> None:
        self._record("log_event", job, log_type, message)
        self.logged.append((log_type, message))

    def find_first_log_entry(self, job: str, log_filter: LogFilter) -> LogEvent:
        self._record("find_first_log_entry", job, log_filter)
        self._pending: Iterator[LogEvent] = iter(self.log_events)
        return self._advance()

    def find_next_log_entry(self, job: str) -> LogEvent:
        self._record("find_next_log_entry", job)
        return self._advance()

    def _advance(self) -> LogEvent:
        try:
            return next(self._pending)
        except StopIteration:
            raise engine_error(engine_status.NO_MORE) from None

    def get_log_entry(self, job: str, event_id: int) -> LogDetail:
        self._record("get_log_entry", job, event_id)
        if event_id not in self.log_details:
            raise engine_error(engine_status.BAD_PARAM)
        return self.log_details[event_id]

    def get_newest_log_id(self, job: str, log_type: LogType) -> int:
        self._record("get_newest_log_id", job, log_type)
        return self.newest_id


def make_events(count: int) -> list[LogEvent]:
    return [
        LogEvent(event_id=index, timestamp=T0, type=LogType.INFO, message=f"event {index}")
        for index in range(count)
    ]


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Any) -> None:
    """Keep ``DSJOB_*`` variables and any local ``.env`` out of tests."""
    import os

    for key in list(os.environ):
        if key.upper().startswith("DSJOB_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture()
def engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture()
def context(engine: FakeEngine) -> CommandContext:
    return CommandContext(engine=engine, stdin=io.StringIO(""))
