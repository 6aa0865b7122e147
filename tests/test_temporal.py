from datetime import date, datetime, timezone

import pytest

from calendar_engine.errors import InvalidDateError, InvalidTimestampError
from calendar_engine.temporal import (
    date_key,
    format_timestamp,
    is_date_only,
    local_date,
    parse_clock,
    parse_timestamp,
    resolve_timezone,
    to_calendar_date,
)


def test_to_calendar_date_accepts_common_shapes():
    assert to_calendar_date("2024-02-29") == date(2024, 2, 29)
    assert to_calendar_date((2024, 2, 29)) == date(2024, 2, 29)
    assert to_calendar_date(datetime(2024, 2, 29, 23, 0)) == date(2024, 2, 29)
    assert date_key(date(2024, 3, 5)) == "2024-03-05"


@pytest.mark.parametrize("value", ["2023-02-29", "2024-13-01", "2024-1-1", "", (2024, 2), (2024, "2", 1), None])
def test_to_calendar_date_rejects_invalid(value):
    with pytest.raises(InvalidDateError):
        to_calendar_date(value)


def test_parse_and_format_timestamp():
    dt = parse_timestamp("2024-03-10T14:30:00Z")
    assert dt.tzinfo is not None and dt.utcoffset().total_seconds() == 0
    assert format_timestamp(dt) == "2024-03-10T14:30:00Z"
    assert format_timestamp(parse_timestamp("2024-03-10T14:30:00.250000+02:00")) == "2024-03-10T14:30:00.250000+02:00"


@pytest.mark.parametrize("value", ["2024-03-10T14:30:00", "not a time", 12])
def test_parse_timestamp_rejects(value):
    with pytest.raises(InvalidTimestampError):
        parse_timestamp(value)


def test_local_date_uses_own_offset_unless_zone_given():
    dt = parse_timestamp("2024-03-10T23:30:00-05:00")
    assert local_date(dt) == date(2024, 3, 10)
    assert local_date(dt, timezone.utc) == date(2024, 3, 11)


def test_misc_helpers():
    assert is_date_only("2024-03-10")
    assert not is_date_only("2024-03-10T00:00:00Z")
    assert parse_clock("09:30").hour == 9
    assert resolve_timezone("") is None
    with pytest.raises(InvalidTimestampError):
        resolve_timezone("Nowhere/Special")
    with pytest.raises(InvalidTimestampError):
        parse_clock("25:99")
