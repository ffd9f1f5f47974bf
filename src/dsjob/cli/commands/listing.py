"""``-lprojects``, ``-ljobs``, ``-lstages``, ``-llinks`` and ``-lparams``.

Each prints one name per line.  When the engine reports that the list
is not available the command prints ``<none>`` and succeeds.
"""

from __future__ import annotations

from collections.abc import Callable

from dsjob.cli import exit_codes
from dsjob.cli.commands.base import Command, CommandContext, emit, relabel
from dsjob.cli.console import stdout
from dsjob.cli.grammar import Grammar, ParsedArgs
from dsjob.cli.render import NONE_MARKER, name_list
from dsjob.core.models import JobInfoKey, ProjectInfoKey, StageInfoKey
from dsjob.core.sessions import job_session, open_project
from dsjob.exceptions import NotAvailableError


def _show_names(fetch: Callable[[], list[str]], what: str) -> int:
    try:
        with relabel(f"Failed to get {what}"):
            names = fetch()
    except NotAvailableError:
        stdout.print(NONE_MARKER)
        return exit_codes.SUCCESS
    emit(name_list(names))
    return exit_codes.SUCCESS


class ListProjectsCommand(Command):
    name = "lprojects"

    def run(self, request: ParsedArgs, context: CommandContext) -> int:
        return _show_names(context.engine.get_project_list, "project list")


class ListJobsCommand(Command):
    name = "ljobs"
    grammar = Grammar(positionals=("project",))

    def run(self, request: ParsedArgs, context: CommandContext) -> int:
        engine = context.engine
        (project_name,) = request.positionals
        with open_project(engine, project_name) as project:
            return _show_names(
                lambda: engine.get_project_info(project, ProjectInfoKey.JOB_LIST),
                "job list",
            )


class ListStagesCommand(Command):
    name = "lstages"
    grammar = Grammar(positionals=("project", "job"))

    def run(self, request: ParsedArgs, context: CommandContext) -> int:
        engine = context.engine
        project, job_name = request.positionals
        with job_session(engine, project, job_name) as job:
            return _show_names(
                lambda: engine.get_job_info(job, JobInfoKey.STAGE_LIST),
                "stage list",
            )


class ListLinksCommand(Command):
    name = "llinks"
    grammar = Grammar(positionals=("project", "job", "stage"))

    def run(self, request: ParsedArgs, context: CommandContext) -> int:
        engine = context.engine
        project, job_name, stage = request.positionals
        with job_session(engine, project, job_name) as job:
            return _show_names(
                lambda: engine.get_stage_info(job, stage, StageInfoKey.LINK_LIST),
                "link list",
            )


class ListParamsCommand(Command):
    name = "lparams"
    grammar = Grammar(positionals=("project", "job"))

    def run(self, request: ParsedArgs, context: CommandContext) -> int:
        engine = context.engine
        project, job_name = request.positionals
        with job_session(engine, project, job_name) as job:
            return _show_names(
                lambda: engine.get_job_info(job, JobInfoKey.PARAM_LIST),
                "parameter list",
            )
