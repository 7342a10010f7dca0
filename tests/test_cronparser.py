from datetime import datetime

import pytest

from cronat.cronparser import (
    create_crontab_line,
    is_valid_cron_expression,
    parse_crontab_logs,
    parse_crontab_output,
)
from cronat.models import CronTask


def test_parse_crontab_output_skips_comments_and_blank_lines():
    output = "# a comment\n\n*/5 * * * * echo hi there\n"
    tasks = parse_crontab_output(output)
    assert len(tasks) == 1
    task = tasks[0]
    assert task.cron_expression == "*/5 * * * *"
    assert task.command == "echo hi there"
    assert task.original_crontab_line == "*/5 * * * * echo hi there"


def test_parse_crontab_output_joins_fields_with_single_spaces():
    tasks = parse_crontab_output("0\t1  * * *\tcmd")
    assert [t.cron_expression for t in tasks] == ["0 1 * * *"]
    assert tasks[0].command == "cmd"


def test_parse_crontab_output_ignores_short_lines():
    assert parse_crontab_output("* * * * *\n* * *\n") == []


def test_parse_crontab_output_keeps_order():
    output = "1 * * * * first\n2 * * * * second\n"
    assert [t.command for t in parse_crontab_output(output)] == ["first", "second"]


def test_parse_crontab_logs_reads_fields():
    line = (
        "ID: 123 || Command: echo hi || Description: desc || "
        "Created at: 10:20:30 2024/01/02 || Cron expression: * * * * * || "
        "Original crontab line: * * * * * echo hi || Is active: false ||"
    )
    tasks = parse_crontab_logs(line + "\n")
    assert len(tasks) == 1
    task = tasks[0]
    assert task.id == "123"
    assert task.command == "echo hi"
    assert task.description == "desc"
    assert task.created_at == datetime(2024, 1, 2, 10, 20, 30)
    assert task.cron_expression == "* * * * *"
    assert task.original_crontab_line == "* * * * * echo hi"
    assert task.is_active is False


def test_parse_crontab_logs_active_flag_needs_separator():
    line = "Command: run || Is active: false"
    tasks = parse_crontab_logs(line)
    assert tasks[0].command == "run"
    assert tasks[0].is_active is True


def test_parse_crontab_logs_non_numeric_id_is_left_empty():
    tasks = parse_crontab_logs("ID: cron_42 || Command: x ||")
    assert tasks[0].id == ""
    assert tasks[0].command == "x"


def test_parse_crontab_logs_blank_line_gives_empty_task():
    tasks = parse_crontab_logs("\nCommand: a ||\n")
    assert len(tasks) == 2
    assert tasks[0].command == ""
    assert tasks[0].cron_expression == ""
    assert tasks[1].command == "a"


def test_parse_crontab_logs_empty_input():
    assert parse_crontab_logs("") == []


@pytest.mark.parametrize(
    "expression",
    ["* * * * *", "0 0 1 * *", "0 0 * * 0", "*/15 0-6 1,15 * 1-5/2", "5  4 * *  *"],
)
def test_valid_cron_expressions(expression):
    assert is_valid_cron_expression(expression) is True


@pytest.mark.parametrize(
    "expression",
    ["", "* * * *", "* * * * * *", "a * * * *", "*/ * * * *", " * * * * *", "1- * * * *"],
)
def test_invalid_cron_expressions(expression):
    assert is_valid_cron_expression(expression) is False


def test_create_crontab_line_round_trips_through_parser():
    task = CronTask(cron_expression="0 * * * *", command="echo hourly")
    line = create_crontab_line(task)
    assert line == "0 * * * * echo hourly"
    parsed = parse_crontab_output(line)
    assert parsed[0].cron_expression == task.cron_expression
    assert parsed[0].command == task.command