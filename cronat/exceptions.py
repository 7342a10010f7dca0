"""Error types raised by the task scheduler."""


class TaskSchedulerError(Exception):
    """Base error for everything the scheduler reports."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class AtParseError(TaskSchedulerError):
    """Raised when at queue output or at logs cannot be read."""

    def __init__(self, message: str) -> None:
        super().__init__("At parse error: " + message)


class CronParseError(TaskSchedulerError):
    """Raised when crontab output or cron logs cannot be read."""

    def __init__(self, message: str) -> None:
        super().__init__("Cron parse error: " + message)


class SystemExecutionError(TaskSchedulerError):
    """Raised when a shell command cannot be started."""

    def __init__(self, message: str) -> None:
        super().__init__("System execution error: " + message)