"""Text formatting for command output.

Pure functions from domain values to output lines; the commands decide
where the lines go.  Layout follows the classic tab-separated style of
the controller so existing scripts that scrape the output keep working.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime

from dsjob.core.labels import job_status_label, log_type_label, param_type_label
from dsjob.core.models import LogDetail, LogEvent, ParamInfo, ParamType
from dsjob.core.param_values import FloatValue, IntegerValue, ParamValue

NONE_MARKER: str = "<none>"
NOT_AVAILABLE: str = "not available"


def format_timestamp(moment: datetime) -> str:
    return moment.ctime()


def indented(lines: Iterable[str], indent: int) -> list[str]:
    prefix = "\t" * indent
    return [f"{prefix}{line}" for line in lines]


def name_list(names: Sequence[str], indent: int = 0) -> list[str]:
    return indented(names, indent)


def log_detail_lines(detail: LogDetail, indent: int = 0) -> list[str]:
    event_id = str(detail.event_id) if detail.has_event_id else "unknown"
    lines = [
        f"Event Id: {event_id}",
        f"Time\t: {format_timestamp(detail.timestamp)}",
        f"Type\t: {log_type_label(detail.type)}",
        "Message\t:",
    ]
    return indented(lines, indent) + indented(detail.message_lines, indent + 1)


def log_summary_lines(event: LogEvent) -> list[str]:
    return [
        f"{event.event_id}\t{log_type_label(event.type)}\t{format_timestamp(event.timestamp)}",
        f"\t{event.message}",
    ]


def job_status_line(status: int) -> str:
    return f"Job Status\t: {job_status_label(status)} ({status})"


def format_param_value(value: ParamValue | None) -> str:
    if value is None:
        return ""
    if isinstance(value, FloatValue):
        return f"{value.value:G}"
    if isinstance(value, IntegerValue):
        return str(value.value)
    return value.value


def param_info_lines(info: ParamInfo) -> list[str]:
    lines = [
        f"Type\t\t: {param_type_label(info.param_type)} ({info.param_type})",
        f"Help Text\t: {info.help_text}",
        f"Prompt\t\t: {info.prompt}",
        f"Prompt At Run\t: {int(info.prompt_at_run)}",
        f"Default Value\t: {format_param_value(info.default_value)}",
        f"Original Default: {format_param_value(info.design_default_value)}",
    ]
    if info.param_type == ParamType.LIST:
        lines.append("List Values\t:")
        lines.extend(indented(info.list_values, 2))
        lines.append("Original List\t:")
        lines.extend(indented(info.design_list_values, 2))
    return lines
