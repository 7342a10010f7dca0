from datetime import date, datetime, timedelta

import pytest

from cronat.cli import (
    build_cron_expression,
    main,
    parse_run_time,
    preset_expression,
    resolve_quick_date,
)
from cronat.cronparser import is_valid_cron_expression


def test_build_cron_expression_fills_stars():
    assert build_cron_expression("5", "", "", "", "") == "5 * * * *"


def test_build_cron_expression_keeps_field_order():
    result = build_cron_expression(" 1 ", "2", "3", "4", "5")
    assert result == "1 2 3 4 5"
    assert is_valid_cron_expression(result)


def test_build_cron_expression_requires_a_field():
    with pytest.raises(ValueError):
        build_cron_expression("", " ", "", "", "")


@pytest.mark.parametrize(
    "name, expected",
    [
        ("every-minute", "* * * * *"),
        ("hourly", "0 * * * *"),
        ("daily", "0 0 * * *"),
        ("weekly", "0 0 * * 0"),
        ("monthly", "0 0 1 * *"),
    ],
)
def test_presets(name, expected):
    assert preset_expression(name) == expected
    assert is_valid_cron_expression(preset_expression(name))


def test_unknown_preset():
    with pytest.raises(ValueError):
        preset_expression("yearly")


def test_quick_dates():
    today = date(2024, 5, 10)
    assert resolve_quick_date(None, today) == today
    assert resolve_quick_date("tomorrow", today) == today + timedelta(days=1)
    assert resolve_quick_date("next-week", today) == today + timedelta(days=7)
    assert resolve_quick_date("next-month", today) == date(2024, 6, 10)


def test_next_month_clamps_to_month_end():
    assert resolve_quick_date("next-month", date(2024, 1, 31)) == date(2024, 2, 29)


def test_next_month_rolls_over_year():
    assert resolve_quick_date("next-month", date(2024, 12, 5)) == date(2025, 1, 5)


def test_unknown_quick_date():
    with pytest.raises(ValueError):
        resolve_quick_date("someday", date(2024, 5, 10))


def test_parse_run_time_future():
    now = datetime(2024, 5, 10, 12, 0, 30)
    result = parse_run_time("2024-05-11", "09:15", now)
    assert result == datetime(2024, 5, 11, 9, 15)


def test_parse_run_time_defaults_to_today():
    now = datetime(2024, 5, 10, 12, 0)
    result = parse_run_time(None, "13:30", now)
    assert result.date() == now.date()
    assert result > now


def test_parse_run_time_rejects_past():
    with pytest.raises(ValueError):
        parse_run_time("2024-05-09", "10:00", datetime(2024, 5, 10, 12, 0))


@pytest.mark.parametrize(
    "date_text, time_text", [("2024-13-01", "10:00"), ("2024-05-11", "25:00"), ("x", "y")]
)
def test_parse_run_time_rejects_bad_text(date_text, time_text):
    with pytest.raises(ValueError):
        parse_run_time(date_text, time_text, datetime(2024, 5, 10))


def test_main_add_cron_without_schedule():
    assert main(["add-cron", "echo hi"]) == 2


def test_main_add_cron_unknown_preset():
    with pytest.raises(SystemExit) as info:
        main(["add-cron", "echo hi", "--preset", "yearly"])
    assert info.value.code == 2


def test_main_add_at_in_past():
    assert main(["add-at", "echo hi", "--date", "2000-01-01", "--time", "10:00"]) == 2


def test_main_add_at_empty_command():
    assert main(["add-at", "  ", "--when", "tomorrow", "--time", "10:00"]) == 2


def test_main_requires_action():
    with pytest.raises(SystemExit) as info:
        main([])
    assert info.value.code == 2