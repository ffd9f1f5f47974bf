"""Sub-command registry.

:data:`COMMANDS` maps each command name to its handler.  It is built
once at import time and is read-only; iteration order is the order in
which commands are listed in usage text.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from dsjob.cli.commands.base import Command, CommandContext, report_error
from dsjob.cli.commands.control import RunCommand, StopCommand
from dsjob.cli.commands.info import (
    JobInfoCommand,
    LinkInfoCommand,
    ParamInfoCommand,
    StageInfoCommand,
)
from dsjob.cli.commands.listing import (
    ListJobsCommand,
    ListLinksCommand,
    ListParamsCommand,
    ListProjectsCommand,
    ListStagesCommand,
)
from dsjob.cli.commands.logs import (
    LogCommand,
    LogDetailCommand,
    LogNewestCommand,
    LogSummaryCommand,
)

COMMANDS: Mapping[str, Command] = MappingProxyType(
    {
        command.name: command
        for command in (
            RunCommand(),
            StopCommand(),
            ListProjectsCommand(),
            ListJobsCommand(),
            ListStagesCommand(),
            ListLinksCommand(),
            JobInfoCommand(),
            StageInfoCommand(),
            LinkInfoCommand(),
            ListParamsCommand(),
            ParamInfoCommand(),
            LogCommand(),
            LogSummaryCommand(),
            LogDetailCommand(),
            LogNewestCommand(),
        )
    },
)

__all__: list[str] = [
    "COMMANDS",
    "Command",
    "CommandContext",
    "report_error",
]
