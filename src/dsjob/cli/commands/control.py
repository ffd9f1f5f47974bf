"""``-run`` and ``-stop``: commands that change a job's run state."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from dsjob.cli import exit_codes
from dsjob.cli.commands.base import Command, CommandContext, relabel
from dsjob.cli.console import stdout
from dsjob.cli.grammar import Flag, Grammar, ParsedArgs
from dsjob.core.models import JobLimit, RunMode
from dsjob.core.parameter_service import ParameterService
from dsjob.core.sessions import job_session
from dsjob.exceptions import UsageError
from dsjob.utils import lenient_int

logger = logging.getLogger(__name__)

_JOB = ("project", "job")


@dataclass(frozen=True, slots=True)
class RunRequest:
    project: str
    job: str
    mode: RunMode = RunMode.NORMAL
    params: tuple[str, ...] = ()
    warning_limit: int | None = None
    """Forwarded verbatim when given, negative values included."""

    row_limit: int = 0
    """Zero means no row limit is set."""

    wait: bool = False


class RunCommand(Command):
    name = "run"
    grammar = Grammar(
        flags=(
            Flag("mode", choices=tuple(mode.name for mode in RunMode)),
            Flag("param", metavar="<name>=<value>"),
            Flag("warn", metavar="<n>"),
            Flag("rows", metavar="<n>"),
            Flag("wait"),
        ),
        positionals=_JOB,
    )

    def parse(self, parsed: ParsedArgs) -> RunRequest:
        params = tuple(parsed.values("param"))
        for assignment in params:
            if "=" not in assignment:
                raise UsageError(f"Parameter '{assignment}' is not of the form <name>=<value>")
        mode = parsed.last("mode")
        warn = parsed.last("warn")
        rows = parsed.last("rows")
        project, job = parsed.positionals
        return RunRequest(
            project=project,
            job=job,
            mode=RunMode[mode] if mode is not None else RunMode.NORMAL,
            params=params,
            warning_limit=lenient_int(warn) if warn is not None else None,
            row_limit=lenient_int(rows) if rows is not None else 0,
            wait=parsed.has("wait"),
        )

    def run(self, request: RunRequest, context: CommandContext) -> int:
        engine = context.engine
        with job_session(engine, request.project, request.job, lock=True) as job:
            if request.warning_limit is not None:
                with relabel("Failed to set warning limit"):
                    engine.set_job_limit(job, JobLimit.WARNINGS, request.warning_limit)
            if request.row_limit != 0:
                with relabel("Failed to set row limit"):
                    engine.set_job_limit(job, JobLimit.ROWS, request.row_limit)

            ParameterService(engine).set_parameters(job, request.params)

            logger.info("Running %s/%s in %s mode", request.project, request.job, request.mode.name)
            with relabel("Failed to run job"):
                engine.run_job(job, request.mode)

            if request.wait:
                stdout.print("Waiting for job...")
                with relabel("Failed waiting for job"):
                    engine.wait_for_job(job)
        return exit_codes.SUCCESS


class StopCommand(Command):
    name = "stop"
    grammar = Grammar(positionals=_JOB)

    def run(self, request: ParsedArgs, context: CommandContext) -> int:
        project, job_name = request.positionals
        with job_session(context.engine, project, job_name) as job:
            with relabel("Failed to stop job"):
                context.engine.stop_job(job)
        return exit_codes.SUCCESS
