"""Reading the at queue and at task logs, and at time formats."""

from __future__ import annotations

import logging
import re
from datetime import datetime

from .executor import CommandExecutor
from .models import AtTask
from .utils import split_string

_log = logging.getLogger(__name__)

_ATQ_LINE_RE = re.compile(
    r"(\d+)\s+([a-zA-Z]+\s+[a-zA-Z]+\s+\d+\s+\d{2}:\d{2}:\d{2}\s+\d{4})\s+([a-z])\s+\w+",
    re.ASCII,
)

_LOG_ID_RE = re.compile(r"ID:\s*([^|]*)\s*\|\|")
_LOG_COMMAND_RE = re.compile(r"Command:\s*([^|]*)\s*\|\|")
_LOG_QUEUE_RE = re.compile(r"Queue:\s*([^|]*)\s*\|\|")
_LOG_DESCRIPTION_RE = re.compile(r"Description:\s*([^|]*)\s*\|\|")
_LOG_CREATED_RE = re.compile(
    r"Created at:\s*(\d{2}:\d{2} \d{2}/\d{2}/\d{4})\s*\|\|", re.ASCII
)
_LOG_START_RE = re.compile(
    r"Start time:\s*(\d{2}:\d{2} \d{2}/\d{2}/\d{4})\s*\|\|", re.ASCII
)
_LOG_JOB_ID_RE = re.compile(r"Id from atq:\s*([^|]*)\s*\|\|")
_LOG_ACTIVE_RE = re.compile(r"Is active:\s*(true|false)\s*\|\|")
_LOG_EXECUTED_RE = re.compile(r"Is executed:\s*(true|false)\s*(?:\|\|)?\Z")

_AT_FORMAT = "%H:%M %m/%d/%Y"
_ATQ_TIME_FORMAT = "%a %b %d %H:%M:%S %Y"
_COMMAND_BLANKS = " \n\r\t"


def _read_job_command(job_id: str, executor: CommandExecutor) -> str:
    """Pull the command out of ``at -c``, between the heredoc delimiters."""
    delimiter = executor.execute(f"at -c {job_id} 2>/dev/null | tail -1").strip()
    script = executor.execute(f"at -c {job_id}")
    position = script.find(delimiter)
    if position == -1:
        return ""
    start = position + len(delimiter) + 1
    end = script.find(delimiter, start)
    command = script[start:] if end == -1 else script[start:end]
    return command.strip(_COMMAND_BLANKS)


def parse_atq_output(output: str, executor: CommandExecutor) -> list[AtTask]:
    """Turn ``atq`` output into tasks, asking ``at -c`` for each job's command."""
    tasks = []
    for line in split_string(output, "\n"):
        match = _ATQ_LINE_RE.fullmatch(line)
        if match is None:
            continue
        job_id = match.group(1).strip()
        task = AtTask(
            at_job_id=job_id,
            scheduled_time=parse_at_time(match.group(2)),
            queue=match.group(3),
        )
        try:
            task.command = _read_job_command(job_id, executor)
            task.description = f"At job #{job_id}".strip()
            task.created_at = datetime.now()
            task.is_active = True
        except Exception:
            task.command = ""
            task.description = f"At job #{job_id}"
        tasks.append(task)
    return tasks


def parse_at_logs(output: str) -> list[AtTask]:
    """Read the at task log, one task per line."""
    tasks = []
    for line in split_string(output, "\n"):
        task = AtTask()
        if match := _LOG_ID_RE.search(line):
            task.id = match.group(1).strip()
        if match := _LOG_COMMAND_RE.search(line):
            task.command = match.group(1).strip()
        if match := _LOG_QUEUE_RE.search(line):
            task.queue = match.group(1).strip()
        if match := _LOG_DESCRIPTION_RE.search(line):
            task.description = match.group(1).strip()
        if match := _LOG_CREATED_RE.search(line):
            task.created_at = parse_at_time_slash(match.group(1).strip())
        if match := _LOG_START_RE.search(line):
            task.scheduled_time = parse_at_time_slash(match.group(1).strip())
        if match := _LOG_JOB_ID_RE.search(line):
            task.at_job_id = match.group(1).strip()
        if match := _LOG_ACTIVE_RE.search(line):
            task.is_active = match.group(1) == "true"
        if match := _LOG_EXECUTED_RE.search(line):
            task.is_executed = match.group(1) == "true"
        else:
            _log.warning("Executed not found in line: %s", line)
        tasks.append(task)
    return tasks


def format_at_time(moment: datetime) -> str:
    """Format a time as ``HH:MM mm/dd/YYYY``."""
    return moment.strftime(_AT_FORMAT)


def parse_at_time(text: str) -> datetime:
    """Parse an ``atq`` time such as ``Sun Jun 29 13:00:00 2025``; fall back to now."""
    try:
        return datetime.strptime(text.strip(), _ATQ_TIME_FORMAT)
    except ValueError:
        return datetime.now()


def parse_at_time_slash(text: str) -> datetime:
    """Parse a time in the form ``HH:MM mm/dd/YYYY``."""
    try:
        return datetime.strptime(text.strip(), _AT_FORMAT)
    except ValueError as exc:
        raise ValueError("Failed to parse time string") from exc