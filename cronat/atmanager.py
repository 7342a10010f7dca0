"""Keeping at jobs in step with the at queue and a task log."""

from __future__ import annotations

import dataclasses
import hashlib
import logging
import re
from datetime import datetime
from pathlib import Path

from .atparser import format_at_time, parse_at_logs, parse_atq_output
from .conf import get_config_path
from .exceptions import AtParseError, TaskSchedulerError
from .executor import CommandExecutor
from .models import AtTask

_log = logging.getLogger(__name__)

_LOG_FILE_NAME = "atTasks.log"
_JOB_RE = re.compile(r"job\s+(\d+)", re.ASCII)


def _stable_hash(text: str) -> int:
    digest = hashlib.sha256(text.encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big")


class AtManager:
    """At jobs keyed by id, mirrored to the at queue and to a log file."""

    def __init__(
        self, executor: CommandExecutor | None, log_path: str | Path | None = None
    ) -> None:
        if executor is None:
            raise TaskSchedulerError("SystemExecutor cannot be null")
        self.executor = executor
        self.log_path = (
            Path(log_path) if log_path is not None else get_config_path() / _LOG_FILE_NAME
        )
        self._tasks: dict[str, AtTask] = {}
        self._load_from_logs()

    def get_all_tasks(self) -> list[AtTask]:
        """Return every known task, ordered by id."""
        return [task for _, task in sorted(self._tasks.items())]

    def add_task(self, task: AtTask) -> bool:
        """Schedule a job with at; return whether it was added."""
        new_task = dataclasses.replace(task)
        if not new_task.id:
            new_task.id = self._generate_task_id(new_task)
        if new_task.id in self._tasks:
            _log.error("Task with ID %s already exists", new_task.id)
            return False

        time_text = format_at_time(new_task.scheduled_time)
        command = f"at -q {task.queue} <<< '{task.command}' {time_text} 2>&1"
        output = self.executor.execute(command)
        if self.executor.last_exit_code != 0:
            _log.error("Failed to schedule at job: %s", output)
            return False

        match = _JOB_RE.search(output)
        if match is None:
            _log.error("Could not extract job ID from at output: %s", output)
            return False
        new_task.at_job_id = match.group(1)
        new_task.is_active = True
        self._tasks[new_task.id] = new_task
        self._write_task_to_log(new_task)
        return True

    def remove_task(self, task_id: str) -> bool:
        """Cancel a pending job and forget it."""
        task = self._tasks.pop(task_id, None)
        if task is not None and task.is_active:
            self.executor.execute("at -r " + task.at_job_id)
        self._rewrite_log()
        return True

    def get_task_by_id(self, task_id: str) -> AtTask | None:
        """Return the task with this id, or None."""
        return self._tasks.get(task_id)

    def update_task(self, task: AtTask) -> bool:
        """Replace a task by id and rewrite the log."""
        self._tasks[task.id] = task
        self._rewrite_log()
        return True

    def sync_with_system(self) -> None:
        """Merge the current at queue into the known tasks, logging failures."""
        try:
            self._load_from_atq()
        except Exception as exc:
            _log.error("Error syncing with at queue: %s", exc)

    def clear(self) -> None:
        """Cancel every pending job and forget all tasks."""
        self.log_path.unlink(missing_ok=True)
        for _, task in sorted(self._tasks.items()):
            if task.is_active:
                self.executor.execute("at -r " + task.at_job_id)
        self._tasks.clear()

    def _load_from_atq(self) -> None:
        try:
            output = self.executor.execute("atq")
            if self.executor.last_exit_code != 0:
                _log.error("Failed to get at queue")
                return
            parsed_tasks = parse_atq_output(output, self.executor)
            queued_ids = {parsed.at_job_id for parsed in parsed_tasks}

            need_rewrite = False
            for task in self._tasks.values():
                if task.at_job_id not in queued_ids and task.is_active:
                    task.is_active = False
                    task.is_executed = True
                    need_rewrite = True

            for parsed in parsed_tasks:
                if any(t.at_job_id == parsed.at_job_id for t in self._tasks.values()):
                    continue
                if not parsed.id:
                    parsed.id = self._generate_task_id(parsed)
                parsed.is_active = True
                parsed.is_executed = False
                parsed.created_at = datetime.now()
                self._tasks[parsed.id] = parsed
                self._write_task_to_log(parsed)

            if need_rewrite:
                self._rewrite_log()
        except Exception as exc:
            raise AtParseError("Failed to load at queue: " + str(exc)) from exc

    def _ensure_log_file(self) -> None:
        try:
            self.log_path.touch(exist_ok=True)
        except OSError as exc:
            _log.error("Failed to create at file: %s (%s)", self.log_path, exc)

    def _load_from_logs(self) -> None:
        try:
            self._ensure_log_file()
            try:
                content = self.log_path.read_text(encoding="utf-8")
            except OSError:
                _log.error("Cannot open at logs file %s", self.log_path)
                return
            self._tasks.clear()
            for task in parse_at_logs(content):
                if not task.id:
                    task.id = self._generate_task_id(task)
                self._tasks[task.id] = task
        except Exception as exc:
            raise AtParseError("Failed to load at logs" + str(exc)) from exc

    @staticmethod
    def _generate_task_id(task: AtTask) -> str:
        seconds = int(task.scheduled_time.timestamp())
        return f"at_{_stable_hash(task.command + str(seconds))}"

    def _rewrite_log(self) -> None:
        self.log_path.unlink(missing_ok=True)
        for _, task in sorted(self._tasks.items()):
            self._write_task_to_log(task)

    def _write_task_to_log(self, task: AtTask) -> None:
        line = (
            f"ID: {task.id} || "
            f"Command: {task.command} || "
            f"Queue: {task.queue} || "
            f"Description: {task.description} || "
            f"Created at: {format_at_time(task.created_at)} || "
            f"Start time: {format_at_time(task.scheduled_time)} || "
            f"Id from atq: {task.at_job_id} || "
            f"Is active: {'true' if task.is_active else 'false'} || "
            f"Is executed: {'true' if task.is_executed else 'false'}"
        )
        try:
            with self.log_path.open("a", encoding="utf-8") as handle:
                handle.write(line + "\n")
        except OSError:
            _log.error("Failed to open file: %s", self.log_path)