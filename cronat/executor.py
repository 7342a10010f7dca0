"""Running shell commands and remembering their exit status."""

from __future__ import annotations

import subprocess
from abc import ABC, abstractmethod

from .exceptions import SystemExecutionError


class CommandExecutor(ABC):
    """Runs shell commands; ``last_exit_code`` holds the status of the latest one."""

    def __init__(self) -> None:
        self.last_exit_code = 0

    @abstractmethod
    def execute(self, command: str) -> str:
        """Run a command and return its standard output."""


class SystemExecutor(CommandExecutor):
    """Runs commands through the system shell."""

    def execute(self, command: str) -> str:
        try:
            completed = subprocess.run(
                command,
                shell=True,
                stdout=subprocess.PIPE,
                check=False,
            )
        except OSError as exc:
            raise SystemExecutionError("Failed to execute command: " + command) from exc
        self.last_exit_code = completed.returncode
        return completed.stdout.decode("utf-8", errors="replace")