import pytest

from cronat.exceptions import (
    AtParseError,
    CronParseError,
    SystemExecutionError,
    TaskSchedulerError,
)


def test_base_error_keeps_message():
    err = TaskSchedulerError("SystemExecutor cannot be null")
    assert str(err) == "SystemExecutor cannot be null"
    assert err.message == "SystemExecutor cannot be null"


@pytest.mark.parametrize(
    "cls, prefix",
    [
        (AtParseError, "At parse error: "),
        (CronParseError, "Cron parse error: "),
        (SystemExecutionError, "System execution error: "),
    ],
)
def test_subclass_prefixes_message(cls, prefix):
    err = cls("boom")
    assert str(err) == prefix + "boom"


@pytest.mark.parametrize(
    "cls, prefix",
    [
        (AtParseError, "At parse error: "),
        (CronParseError, "Cron parse error: "),
        (SystemExecutionError, "System execution error: "),
    ],
)
def test_subclasses_caught_as_base(cls, prefix):
    with pytest.raises(TaskSchedulerError) as excinfo:
        raise cls("detail")
    assert type(excinfo.value) is cls
    assert str(excinfo.value) == prefix + "detail"
    assert excinfo.value.message == prefix + "detail"