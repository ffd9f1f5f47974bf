"""``-jobinfo``, ``-stageinfo``, ``-linkinfo`` and ``-paraminfo``.

The first three query several independent fields.  A field that fails
is reported and the remaining fields are still shown; a field the
engine reports as not available is shown as such and is not an error.
The command result is the status of the last field that failed.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from dsjob.cli import exit_codes
from dsjob.cli.commands.base import Command, CommandContext, emit, relabel, report_error
from dsjob.cli.grammar import Grammar, ParsedArgs
from dsjob.cli.render import (
    NONE_MARKER,
    NOT_AVAILABLE,
    format_timestamp,
    job_status_line,
    log_detail_lines,
    param_info_lines,
)
from dsjob.core.models import JobInfoKey, LinkInfoKey, StageInfoKey
from dsjob.core.sessions import job_session
from dsjob.exceptions import EngineError, NotAvailableError


def _scalar(format_value: Callable[[Any], str] = str) -> Callable[[str, Any], list[str]]:
    def render(label: str, value: Any) -> list[str]:
        return [f"{label}: {format_value(value)}"]

    return render


def _detail(label: str, value: Any) -> list[str]:
    return [f"{label}:", *log_detail_lines(value, indent=1)]


@dataclass(frozen=True, slots=True)
class InfoField:
    key: int
    label: str
    what: str
    render: Callable[[str, Any], list[str]]
    missing: str = NOT_AVAILABLE


def show_fields(fields: Sequence[InfoField], fetch: Callable[[int], Any]) -> int:
    """Query and print each field in turn; return the last failure status."""
    status = exit_codes.SUCCESS
    for info_field in fields:
        try:
            value = fetch(info_field.key)
        except NotAvailableError:
            emit([f"{info_field.label}: {info_field.missing}"])
        except EngineError as exc:
            report_error(exc.with_message(f"Failed to get {info_field.what}"))
            status = exc.status
        else:
            emit(info_field.render(info_field.label, value))
    return status


_JOB_FIELDS: tuple[InfoField, ...] = (
    InfoField(JobInfoKey.STATUS, "Job Status\t", "job status", lambda _, value: [job_status_line(value)]),
    InfoField(JobInfoKey.CONTROLLER, "Job Controller\t", "job controller", _scalar()),
    InfoField(JobInfoKey.START_TIMESTAMP, "Job Start Time\t", "job start time", _scalar(format_timestamp)),
    InfoField(JobInfoKey.WAVE_NUMBER, "Job Wave Number\t", "job wave number", _scalar()),
    InfoField(JobInfoKey.USER_STATUS, "User Status\t", "job user status", _scalar()),
)

_STAGE_FIELDS: tuple[InfoField, ...] = (
    InfoField(StageInfoKey.TYPE, "Stage Type\t", "stage type", _scalar()),
    InfoField(StageInfoKey.IN_ROW_NUMBER, "In Row Number\t", "stage row number", _scalar()),
    InfoField(StageInfoKey.LAST_ERROR, "Stage Last Error", "stage last error", _detail, NONE_MARKER),
)

_LINK_FIELDS: tuple[InfoField, ...] = (
    InfoField(LinkInfoKey.ROW_COUNT, "Link Row Count\t", "link row count", _scalar()),
    InfoField(LinkInfoKey.LAST_ERROR, "Link Last Error", "link last error", _detail, NONE_MARKER),
)


class JobInfoCommand(Command):
    name = "jobinfo"
    grammar = Grammar(positionals=("project", "job"))

    def run(self, request: ParsedArgs, context: CommandContext) -> int:
        engine = context.engine
        project, job_name = request.positionals
        with job_session(engine, project, job_name) as job:
            return show_fields(_JOB_FIELDS, lambda key: engine.get_job_info(job, key))


class StageInfoCommand(Command):
    name = "stageinfo"
    grammar = Grammar(positionals=("project", "job", "stage"))

    def run(self, request: ParsedArgs, context: CommandContext) -> int:
        engine = context.engine
        project, job_name, stage = request.positionals
        with job_session(engine, project, job_name) as job:
            return show_fields(
                _STAGE_FIELDS,
                lambda key: engine.get_stage_info(job, stage, key),
            )


class LinkInfoCommand(Command):
    name = "linkinfo"
    grammar = Grammar(positionals=("project", "job", "stage", "link"))

    def run(self, request: ParsedArgs, context: CommandContext) -> int:
        engine = context.engine
        project, job_name, stage, link = request.positionals
        with job_session(engine, project, job_name) as job:
            return show_fields(
                _LINK_FIELDS,
                lambda key: engine.get_link_info(job, stage, link, key),
            )


class ParamInfoCommand(Command):
    name = "paraminfo"
    grammar = Grammar(positionals=("project", "job", "param"))

    def run(self, request: ParsedArgs, context: CommandContext) -> int:
        engine = context.engine
        project, job_name, param = request.positionals
        with job_session(engine, project, job_name) as job:
            with relabel(f"Failed to get info for parameter '{param}'"):
                info = engine.get_param_info(job, param)
            emit(param_info_lines(info))
        return exit_codes.SUCCESS
