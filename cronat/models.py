"""Task records for cron and at jobs."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(kw_only=True)
class Task:
    """A scheduled shell command."""

    command: str = ""
    description: str = ""
    id: str = ""
    created_at: datetime = field(default_factory=datetime.now)
    is_active: bool = True


@dataclass(kw_only=True)
class CronTask(Task):
    """A recurring job kept in the user's crontab."""

    cron_expression: str = ""
    original_crontab_line: str = ""


@dataclass(kw_only=True)
class AtTask(Task):
    """A one-off job scheduled through at."""

    scheduled_time: datetime = field(default_factory=datetime.now)
    at_job_id: str = ""
    queue: str = "a"
    is_executed: bool = False