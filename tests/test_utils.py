from datetime import datetime

import pytest

from cronat.utils import (
    full_time_point_to_string,
    generate_uuid,
    is_valid_tag_name,
    split_string,
    string_to_time_point,
    time_point_to_string,
)


def test_generate_uuid_shape():
    value = generate_uuid()
    assert value[:3] == "at_"
    assert len(value) == 11
    assert set(value[3:]) <= set("0123456789abcdef")


def test_generate_uuid_varies():
    values = {generate_uuid() for _ in range(50)}
    assert len(values) > 1


@pytest.mark.parametrize("tag", ["backup", "db_dump-2", "A"])
def test_valid_tags(tag):
    assert is_valid_tag_name(tag) is True


@pytest.mark.parametrize("tag", ["", "has space", "bad!", "x" * 51, "tag\n"])
def test_invalid_tags(tag):
    assert is_valid_tag_name(tag) is False


def test_tag_length_limit_inclusive():
    assert is_valid_tag_name("x" * 50) is True


def test_split_string_basic():
    assert split_string("a,b,c", ",") == ["a", "b", "c"]


def test_split_string_trailing_and_leading():
    assert split_string("a,b,", ",") == ["a", "b"]
    assert split_string(",a", ",") == ["", "a"]
    assert split_string("", ",") == []


def test_string_to_time_point():
    assert string_to_time_point("12:30 05.06.2024") == datetime(2024, 6, 5, 12, 30)


def test_string_to_time_point_rejects_garbage():
    with pytest.raises(ValueError):
        string_to_time_point("not a time")


def test_short_round_trip():
    text = "09:05 31.12.2029"
    assert time_point_to_string(string_to_time_point(text)) == text


def test_full_format_includes_seconds():
    moment = datetime(2024, 6, 5, 12, 30, 45)
    text = full_time_point_to_string(moment)
    assert text.startswith(time_point_to_string(moment)[:5])
    assert datetime.strptime(text, "%H:%M:%S %d.%m.%Y") == moment