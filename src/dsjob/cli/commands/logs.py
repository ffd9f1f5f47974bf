"""``-log``, ``-logsum``, ``-logdetail`` and ``-lognewest``."""

from __future__ import annotations

from dataclasses import dataclass

from dsjob.cli import exit_codes
from dsjob.cli.commands.base import Command, CommandContext, emit, relabel
from dsjob.cli.console import stdout
from dsjob.cli.grammar import Flag, Grammar, ParsedArgs
from dsjob.cli.message_reader import read_message
from dsjob.cli.render import log_detail_lines, log_summary_lines
from dsjob.core.labels import log_type_label, parse_log_type
from dsjob.core.log_cursor import LogCursor
from dsjob.core.models import LogFilter, LogType
from dsjob.core.sessions import job_session
from dsjob.exceptions import UsageError
from dsjob.utils import lenient_int

_JOB = ("project", "job")

EVENT_TYPE_NAMES: tuple[str, ...] = tuple(
    log_type_label(log_type) for log_type in LogType if log_type is not LogType.ANY
)


@dataclass(frozen=True, slots=True)
class LogRequest:
    project: str
    job: str
    log_type: LogType


class LogCommand(Command):
    """Append an entry to a job's log, reading the text from stdin."""

    name = "log"
    grammar = Grammar(flags=(Flag("info"), Flag("warn")), positionals=_JOB)
    notes = ("Log message is read from stdin.",)

    def parse(self, parsed: ParsedArgs) -> LogRequest:
        project, job = parsed.positionals
        chosen = parsed.last_of("info", "warn")
        log_type = LogType.WARNING if chosen == "warn" else LogType.INFO
        return LogRequest(project=project, job=job, log_type=log_type)

    def run(self, request: LogRequest, context: CommandContext) -> int:
        engine = context.engine
        with job_session(engine, request.project, request.job) as job:
            stdout.print("Enter message text, terminating with Ctrl-d")
            message = read_message(context.stdin, encoding=context.encoding)
            stdout.print("")
            stdout.print("Message read.")
            with relabel("Failed to add log entry"):
                engine.log_event(job, request.log_type, message)
        return exit_codes.SUCCESS


@dataclass(frozen=True, slots=True)
class LogSummaryRequest:
    project: str
    job: str
    log_filter: LogFilter


class LogSummaryCommand(Command):
    """Print one summary row per log entry.  The last ``-type`` given wins."""

    name = "logsum"
    grammar = Grammar(
        flags=(Flag("type", choices=EVENT_TYPE_NAMES), Flag("max", metavar="<n>")),
        positionals=_JOB,
    )

    def parse(self, parsed: ParsedArgs) -> LogSummaryRequest:
        project, job = parsed.positionals
        type_name = parsed.last("type")
        max_count = parsed.last("max")
        log_type = LogType.ANY
        if type_name is not None:
            log_type = parse_log_type(type_name) or LogType.ANY
        log_filter = LogFilter(
            log_type=log_type,
            max_count=lenient_int(max_count) if max_count is not None else 0,
        )
        return LogSummaryRequest(project=project, job=job, log_filter=log_filter)

    def run(self, request: LogSummaryRequest, context: CommandContext) -> int:
        engine = context.engine
        with job_session(engine, request.project, request.job) as job:
            cursor = LogCursor(engine, job, request.log_filter)
            with relabel("Failed to get log summary"):
                for event in cursor:
                    emit(log_summary_lines(event))
        return exit_codes.SUCCESS


class LogDetailCommand(Command):
    name = "logdetail"
    grammar = Grammar(positionals=("project", "job", "event id"))

    def run(self, request: ParsedArgs, context: CommandContext) -> int:
        engine = context.engine
        project, job_name, event_id = request.positionals
        with job_session(engine, project, job_name) as job:
            with relabel("Failed to get event details"):
                detail = engine.get_log_entry(job, lenient_int(event_id))
            emit(log_detail_lines(detail))
        return exit_codes.SUCCESS


@dataclass(frozen=True, slots=True)
class LogNewestRequest:
    project: str
    job: str
    log_type: LogType = LogType.ANY


class LogNewestCommand(Command):
    name = "lognewest"
    grammar = Grammar(positionals=_JOB, optional_positionals=("event type",))
    notes = (f"\t event type = {' | '.join(EVENT_TYPE_NAMES)}",)

    def parse(self, parsed: ParsedArgs) -> LogNewestRequest:
        project, job, *rest = parsed.positionals
        if not rest:
            return LogNewestRequest(project=project, job=job)
        log_type = parse_log_type(rest[0])
        if log_type is None:
            raise UsageError(f"Unknown event type '{rest[0]}'")
        return LogNewestRequest(project=project, job=job, log_type=log_type)

    def run(self, request: LogNewestRequest, context: CommandContext) -> int:
        engine = context.engine
        with job_session(engine, request.project, request.job) as job:
            with relabel("Failed to get newest event id"):
                event_id = engine.get_newest_log_id(job, request.log_type)
            stdout.print(f"Newest id = {event_id}")
        return exit_codes.SUCCESS
