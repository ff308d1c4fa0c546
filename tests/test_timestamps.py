"""Tests for timestamp parsing and rendering."""

from datetime import datetime, timezone

import pytest
import pytz

from visitorlog.engine.timestamps import (
    PLACEHOLDER,
    parse_in_time,
    parse_range_bound,
    resolve_timezone,
    sort_timestamp,
    split_in_time,
)

KOLKATA = pytz.timezone("Asia/Kolkata")


def test_parse_in_time_accepts_z_suffix():
    assert parse_in_time("2024-01-03T10:00:00Z") == datetime(2024, 1, 3, 10, tzinfo=timezone.utc)


@pytest.mark.parametrize("value", [None, "", "   ", "03/01/2024", "garbage"])
def test_parse_in_time_invalid_is_none(value):
    assert parse_in_time(value) is None


def test_naive_in_time_is_display_wall_clock():
    parsed = parse_in_time("2024-01-03T10:00:00", KOLKATA)
    assert parsed.utcoffset().total_seconds() == 5.5 * 3600


def test_date_only_bounds_cover_whole_day():
    start = parse_range_bound("2024-01-03", tz=KOLKATA)
    end = parse_range_bound("2024-01-03", end_of_day=True, tz=KOLKATA)
    assert (start.hour, start.minute) == (0, 0)
    assert (end.hour, end.minute, end.second, end.microsecond) == (23, 59, 59, 999999)
    assert end.tzinfo is not None


def test_range_bound_blank_is_none():
    assert parse_range_bound(None) is None
    assert parse_range_bound("  ") is None


def test_range_bound_rejects_garbage():
    with pytest.raises(ValueError):
        parse_range_bound("2024-13-45")
    with pytest.raises(ValueError):
        parse_range_bound("next tuesday")


def test_split_in_time_zero_pads():
    assert split_in_time("2024-03-05T01:02:03+00:00", pytz.utc) == ("05-03-2024", "01:02:03")


def test_split_in_time_placeholder():
    assert split_in_time("bad", pytz.utc) == (PLACEHOLDER, PLACEHOLDER)


def test_sort_timestamp_invalid_is_negative_infinity():
    assert sort_timestamp("bad") == float("-inf")
    assert sort_timestamp("2024-01-01T00:00:00Z") > sort_timestamp("2023-12-31T23:59:59Z")


def test_resolve_timezone():
    assert resolve_timezone(None) is None
    assert resolve_timezone("Asia/Kolkata").zone == "Asia/Kolkata"
