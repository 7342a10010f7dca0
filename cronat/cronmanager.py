"""Keeping cron tasks in step with the user's crontab and a task log."""

from __future__ import annotations

import dataclasses
import hashlib
import logging
import os
import shlex
import tempfile
from datetime import datetime
from pathlib import Path

from .conf import get_config_path
from .cronparser import (
    create_crontab_line,
    is_valid_cron_expression,
    parse_crontab_logs,
    parse_crontab_output,
)
from .exceptions import CronParseError, TaskSchedulerError
from .executor import CommandExecutor
from .models import CronTask

_log = logging.getLogger(__name__)

_LOG_FILE_NAME = "cronTasks.log"
_CREATED_FORMAT = "%H:%M:%S %Y/%m/%d"


def _stable_hash(text: str) -> int:
    digest = hashlib.sha256(text.encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big")


class CronManager:
    """Cron tasks keyed by id, mirrored to the crontab and to a log file."""

    def __init__(
        self, executor: CommandExecutor | None, log_path: str | Path | None = None
    ) -> None:
        if executor is None:
            raise TaskSchedulerError("SystemExecutor cannot be null")
        self.executor = executor
        self.log_path = (
            Path(log_path) if log_path is not None else get_config_path() / _LOG_FILE_NAME
        )
        self._tasks: dict[str, CronTask] = {}
        self._load_from_logs()

    def get_all_tasks(self) -> list[CronTask]:
        """Return every known task, ordered by id."""
        return [task for _, task in sorted(self._tasks.items())]

    def add_task(self, task: CronTask) -> bool:
        """Install a new task in the crontab; return whether it was added."""
        try:
            if not is_valid_cron_expression(task.cron_expression):
                _log.error("Invalid cron expression: %s", task.cron_expression)
                return False
            new_task = dataclasses.replace(task)
            if not new_task.id:
                new_task.id = self._generate_task_id(new_task)
            if new_task.id in self._tasks:
                _log.error("Task with ID %s already exists", new_task.id)
                return False
            new_task.created_at = datetime.now()
            self._tasks[new_task.id] = new_task
            if not self.apply_changes_to_system():
                del self._tasks[new_task.id]
                return False
            self._write_task_to_log(new_task)
            return True
        except Exception as exc:
            _log.error("Error adding cron task: %s", exc)
            return False

    def update_task(self, task: CronTask) -> bool:
        """Replace a task by id; refuse an invalid schedule."""
        if not is_valid_cron_expression(task.cron_expression):
            _log.error("Invalid cron expression: %s", task.cron_expression)
            return False
        self._tasks[task.id] = task
        self.apply_changes_to_system()
        return True

    def remove_task(self, task_id: str) -> bool:
        """Drop a task and reinstall the crontab."""
        self._tasks.pop(task_id, None)
        self.apply_changes_to_system()
        return True

    def toggle_task(self, task_id: str) -> bool:
        """Switch a task between active and stopped."""
        task = self._tasks.get(task_id)
        if task is None:
            return False
        task.is_active = not task.is_active
        self.apply_changes_to_system()
        return True

    def get_task_by_id(self, task_id: str) -> CronTask | None:
        """Return the task with this id, or None."""
        return self._tasks.get(task_id)

    def sync_with_system(self) -> None:
        """Merge the current crontab into the known tasks, logging failures."""
        try:
            self._load_from_crontab()
        except Exception as exc:
            _log.error("Error syncing with crontab: %s", exc)

    def apply_changes_to_system(self) -> bool:
        """Install the active tasks as the user's crontab and rewrite the log."""
        try:
            with tempfile.NamedTemporaryFile(
                "w", prefix="crontab_", delete=False, encoding="utf-8"
            ) as handle:
                for _, task in sorted(self._tasks.items()):
                    if task.is_active:
                        handle.write(create_crontab_line(task) + "\n")
                temp_path = handle.name
            try:
                output = self.executor.execute("crontab " + shlex.quote(temp_path))
            finally:
                os.unlink(temp_path)
            if self.executor.last_exit_code != 0:
                _log.error("Failed to install crontab: %s", output)
                return False
            self.update_logs()
            return True
        except Exception as exc:
            _log.error("Error applying crontab changes: %s", exc)
            return False

    def update_logs(self) -> None:
        """Rewrite the log file from the known tasks."""
        self.log_path.unlink(missing_ok=True)
        for _, task in sorted(self._tasks.items()):
            self._write_task_to_log(task)

    def clear(self) -> None:
        """Forget every task and install an empty crontab."""
        self._tasks.clear()
        self.apply_changes_to_system()

    def _ensure_log_file(self) -> None:
        try:
            self.log_path.touch(exist_ok=True)
        except OSError as exc:
            _log.error("Failed to create crontab file: %s (%s)", self.log_path, exc)

    def _load_from_logs(self) -> None:
        try:
            self._ensure_log_file()
            try:
                content = self.log_path.read_text(encoding="utf-8")
            except OSError:
                _log.error("Cannot open crontab file: %s", self.log_path)
                return
            parsed = parse_crontab_logs(content)
            self._tasks.clear()
            for task in parsed:
                if not task.id:
                    task.id = self._generate_task_id(task)
                self._tasks[task.id] = task
        except Exception as exc:
            raise CronParseError("Failed to load crontab logs" + str(exc)) from exc

    def _load_from_crontab(self) -> None:
        try:
            output = self.executor.execute("crontab -l 2>/dev/null")
            if self.executor.last_exit_code != 0:
                _log.info("Not found cron tasks")
                return
            for existing in self._tasks.values():
                existing.is_active = False
            for task in parse_crontab_output(output):
                if not task.id:
                    task.id = self._generate_task_id(task)
                if task.id in self._tasks:
                    self._tasks[task.id].is_active = True
                else:
                    task.created_at = datetime.now()
                    task.is_active = True
                    self._tasks[task.id] = task
                    self._write_task_to_log(task)
        except Exception as exc:
            raise CronParseError("Failed to load crontab" + str(exc)) from exc

    @staticmethod
    def _generate_task_id(task: CronTask) -> str:
        return f"cron_{_stable_hash(task.command + task.cron_expression)}"

    def _write_task_to_log(self, task: CronTask) -> None:
        self._ensure_log_file()
        line = (
            f"ID: {task.id} || "
            f"Command: {task.command} || "
            f"Description: {task.description} || "
            f"Created at: {task.created_at.strftime(_CREATED_FORMAT)} || "
            f"Cron expression: {task.cron_expression} || "
            f"Original crontab line: {task.original_crontab_line} || "
            f"Is active: {'true' if task.is_active else 'false'}"
        )
        try:
            with self.log_path.open("a", encoding="utf-8") as handle:
                handle.write(line + "\n")
        except OSError:
            _log.error("Failed to open file: %s", self.log_path)