"""One entry point for managing both cron and at tasks."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from .atmanager import AtManager
from .cronmanager import CronManager
from .cronparser import is_valid_cron_expression
from .exceptions import TaskSchedulerError
from .executor import SystemExecutor
from .models import AtTask, CronTask

_log = logging.getLogger(__name__)


@dataclass
class AtTaskFilter:
    """Which at tasks to show: a queue letter (empty for all) and a status."""

    queue_filter: str = ""
    show_only_pending: bool = False
    show_only_completed: bool = False

    def reset(self) -> None:
        """Show every task again."""
        self.queue_filter = ""
        self.show_only_pending = False
        self.show_only_completed = False


@dataclass
class AtTaskSort:
    """How to order at tasks; ties always fall back to the at job id."""

    by_scheduled_time: bool = False
    by_queue: bool = False
    by_status: bool = False
    by_at_id: bool = False
    ascending: bool = True

    def reset(self) -> None:
        """Go back to ascending order by job id."""
        self.by_scheduled_time = False
        self.by_queue = False
        self.by_status = False
        self.by_at_id = False
        self.ascending = True


class TaskSchedulerService:
    """Cron and at task management behind one set of operations."""

    def __init__(
        self,
        cron_manager: CronManager | None = None,
        at_manager: AtManager | None = None,
    ) -> None:
        self.cron_manager = (
            cron_manager if cron_manager is not None else CronManager(SystemExecutor())
        )
        self.at_manager = (
            at_manager if at_manager is not None else AtManager(SystemExecutor())
        )

    def initialize(self) -> bool:
        """Synchronise with the system; return whether that worked."""
        try:
            self.sync_all_tasks()
        except Exception as exc:
            _log.error("Initialization failed: %s", exc)
            return False
        return True

    def sync_all_tasks(self) -> None:
        """Merge the crontab and the at queue into the known tasks."""
        self.cron_manager.sync_with_system()
        self.at_manager.sync_with_system()

    # Cron tasks

    def add_cron_task(self, cron_expr: str, command: str, description: str = "") -> bool:
        """Install a new cron task; refuse an invalid schedule."""
        if not is_valid_cron_expression(cron_expr):
            return False
        task = CronTask(cron_expression=cron_expr, command=command, description=description)
        return self.cron_manager.add_task(task)

    def remove_cron_task(self, task_id: str) -> bool:
        """Remove a cron task by id."""
        return self.cron_manager.remove_task(task_id)

    def update_cron_task_status(self, task_id: str) -> bool:
        """Switch a cron task between active and stopped."""
        return self.cron_manager.toggle_task(task_id)

    def get_cron_tasks(self) -> list[CronTask]:
        """Return every cron task."""
        return self.cron_manager.get_all_tasks()

    def get_cron_tasks_filtered(
        self, show_all: bool = True, show_active: bool = True
    ) -> list[CronTask]:
        """Return all cron tasks, or only the active or only the stopped ones."""
        tasks = self.cron_manager.get_all_tasks()
        if show_all:
            return tasks
        return [task for task in tasks if task.is_active == show_active]

    def get_cron_task(self, task_id: str) -> CronTask:
        """Return a cron task by id."""
        task = self.cron_manager.get_task_by_id(task_id)
        if task is None:
            raise TaskSchedulerError("Cron Task not found with id: " + task_id)
        return task

    def update_cron_task(self, task: CronTask) -> bool:
        """Replace a cron task; refuse an invalid schedule."""
        return self.cron_manager.update_task(task)

    def cron_sync_with_system(self) -> None:
        """Merge the crontab into the known cron tasks."""
        self.cron_manager.sync_with_system()

    def clear_cron(self) -> None:
        """Remove every cron task."""
        self.cron_manager.clear()

    # At tasks

    def add_at_task(
        self, time: datetime, command: str, description: str = "", queue: str = "a"
    ) -> bool:
        """Schedule a one-off job with at."""
        task = AtTask(
            scheduled_time=time, command=command, description=description, queue=queue
        )
        return self.at_manager.add_task(task)

    def remove_at_task(self, task_id: str) -> bool:
        """Cancel and forget an at task."""
        return self.at_manager.remove_task(task_id)

    def update_at_task(self, task: AtTask) -> bool:
        """Replace an at task by id."""
        return self.at_manager.update_task(task)

    def get_at_tasks(self) -> list[AtTask]:
        """Return every at task."""
        return self.at_manager.get_all_tasks()

    def get_at_tasks_filtered(
        self, task_filter: AtTaskFilter | None = None, sort: AtTaskSort | None = None
    ) -> list[AtTask]:
        """Return the at tasks that pass a filter, in the requested order."""
        task_filter = task_filter if task_filter is not None else AtTaskFilter()
        sort = sort if sort is not None else AtTaskSort()

        def keep(task: AtTask) -> bool:
            if task_filter.queue_filter and task.queue != task_filter.queue_filter:
                return False
            if task_filter.show_only_pending and task.is_executed:
                return False
            if task_filter.show_only_completed and not task.is_executed:
                return False
            return True

        def key(task: AtTask) -> tuple:
            parts: list = []
            if sort.by_status:
                parts.append(task.is_executed)
            if sort.by_scheduled_time:
                parts.append(task.scheduled_time)
            if sort.by_queue:
                parts.append(task.queue)
            parts.append(task.at_job_id)
            return tuple(parts)

        selected = [task for task in self.at_manager.get_all_tasks() if keep(task)]
        return sorted(selected, key=key, reverse=not sort.ascending)

    def get_at_task(self, task_id: str) -> AtTask:
        """Return an at task by id."""
        task = self.at_manager.get_task_by_id(task_id)
        if task is None:
            raise TaskSchedulerError("At Task not found with id: " + task_id)
        return task

    def at_sync_with_system(self) -> None:
        """Merge the at queue into the known at tasks."""
        self.at_manager.sync_with_system()

    def clear_at(self) -> None:
        """Cancel and forget every at task."""
        self.at_manager.clear()