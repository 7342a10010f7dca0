from unittest import mock

import pytest

from cronat.exceptions import SystemExecutionError
from cronat.executor import CommandExecutor, SystemExecutor


def test_abstract_base_cannot_be_instantiated():
    with pytest.raises(TypeError):
        CommandExecutor()


def test_system_executor_starts_with_zero_exit_code():
    executor = SystemExecutor()
    assert executor.last_exit_code == 0
    assert isinstance(executor, CommandExecutor)


def test_captures_stdout_and_success():
    executor = SystemExecutor()
    assert executor.execute("echo hello") == "hello\n"
    assert executor.last_exit_code == 0


def test_records_failure_status():
    executor = SystemExecutor()
    executor.execute("exit 3")
    assert executor.last_exit_code == 3


def test_stderr_is_not_captured():
    executor = SystemExecutor()
    assert executor.execute("echo err 1>&2") == ""


def test_start_failure_raises():
    executor = SystemExecutor()
    with mock.patch("subprocess.run", side_effect=OSError("no shell")):
        with pytest.raises(SystemExecutionError, match="Failed to execute command: ls"):
            executor.execute("ls")