"""Reading crontab listings and cron task logs."""

from __future__ import annotations

import re
from datetime import datetime

from .models import CronTask
from .utils import split_string

_CRONTAB_LINE_RE = re.compile(r"(\S+)\s+(\S+)\s+(\S+)\s+(\S+)\s+(\S+)\s+(.+)", re.ASCII)

_FIELD = r"(?:\*|\d+|\d+-\d+|\d+(?:,\d+)*|\*/\d+|\d+-\d+/\d+)"
_CRON_EXPRESSION_RE = re.compile(_FIELD + r"(?:\s+" + _FIELD + r"){4}", re.ASCII)

_LOG_ID_RE = re.compile(r"ID: (\d+) \|\|", re.ASCII)
_LOG_COMMAND_RE = re.compile(r"Command: ([^|]*) \|\|")
_LOG_DESCRIPTION_RE = re.compile(r"Description: ([^|]*) \|\|")
_LOG_CREATED_RE = re.compile(
    r"Created at: (\d{2}:\d{2}:\d{2} \d{4}/\d{2}/\d{2}) \|\|", re.ASCII
)
_LOG_EXPRESSION_RE = re.compile(r"Cron expression: ([^|]*) \|\|")
_LOG_ORIGINAL_RE = re.compile(r"Original crontab line: ([^|]*) \|\|")
_LOG_ACTIVE_RE = re.compile(r"Is active: (true|false) \|\|")

_CREATED_FORMAT = "%H:%M:%S %Y/%m/%d"


def parse_crontab_output(output: str) -> list[CronTask]:
    """Turn ``crontab -l`` output into tasks, skipping comments and blank lines."""
    tasks = []
    for line in split_string(output, "\n"):
        if not line or line.startswith("#"):
            continue
        match = _CRONTAB_LINE_RE.fullmatch(line)
        if match is None:
            continue
        *fields, command = match.groups()
        tasks.append(
            CronTask(
                cron_expression=" ".join(fields),
                command=command,
                original_crontab_line=line,
            )
        )
    return tasks


def parse_crontab_logs(output: str) -> list[CronTask]:
    """Read the cron task log, one task per line."""
    tasks = []
    for line in split_string(output, "\n"):
        task = CronTask()
        if match := _LOG_ID_RE.search(line):
            task.id = match.group(1)
        if match := _LOG_COMMAND_RE.search(line):
            task.command = match.group(1)
        if match := _LOG_DESCRIPTION_RE.search(line):
            task.description = match.group(1)
        if match := _LOG_CREATED_RE.search(line):
            try:
                task.created_at = datetime.strptime(match.group(1), _CREATED_FORMAT)
            except ValueError:
                pass
        if match := _LOG_EXPRESSION_RE.search(line):
            task.cron_expression = match.group(1)
        if match := _LOG_ORIGINAL_RE.search(line):
            task.original_crontab_line = match.group(1)
        if match := _LOG_ACTIVE_RE.search(line):
            task.is_active = match.group(1) == "true"
        tasks.append(task)
    return tasks


def is_valid_cron_expression(expression: str) -> bool:
    """Tell whether a string is a five-field cron schedule."""
    return _CRON_EXPRESSION_RE.fullmatch(expression) is not None


def create_crontab_line(task: CronTask) -> str:
    """Return the crontab line that runs a task."""
    return f"{task.cron_expression} {task.command}"