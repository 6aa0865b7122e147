"""Shared date and timestamp helpers.

Timestamps travel as ISO-8601 strings with an embedded offset (or ``Z``).
Calendar dates are ``datetime.date`` values keyed as ``YYYY-MM-DD``.
Nothing here reads the system clock or the system timezone.
"""

from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from calendar_engine.errors import InvalidDateError, InvalidTimestampError

_DATE_ONLY = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_ZERO = timedelta(0)


def to_calendar_date(value) -> date:
    """Validate and convert a calendar date given as date, string or (y, m, d) tuple."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    if isinstance(value, str):
        match = _DATE_ONLY.match(value.strip())
        if not match:
            raise InvalidDateError(f"Malformed calendar date {value!r}, expected YYYY-MM-DD")
        parts = tuple(int(group) for group in match.groups())
    elif isinstance(value, (tuple, list)) and len(value) == 3:
        parts = tuple(value)
        if not all(isinstance(part, int) and not isinstance(part, bool) for part in parts):
            raise InvalidDateError(f"Calendar date parts must be integers, got {value!r}")
    else:
        raise InvalidDateError(f"Unsupported calendar date value {value!r}")

    try:
        return date(*parts)
    except ValueError as exc:
        raise InvalidDateError(f"Out-of-range calendar date {value!r}", details=str(exc)) from exc


def is_date_only(value) -> bool:
    return isinstance(value, str) and bool(_DATE_ONLY.match(value.strip()))


def parse_timestamp(value) -> datetime:
    """Parse an ISO-8601 timestamp into an aware datetime."""

    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str):
        try:
            dt = datetime.fromisoformat(value.strip())
        except ValueError as exc:
            raise InvalidTimestampError(f"Malformed timestamp {value!r}") from exc
    else:
        raise InvalidTimestampError(f"Unsupported timestamp value {value!r}")

    if dt.tzinfo is None or dt.utcoffset() is None:
        raise InvalidTimestampError(f"Timestamp {value!r} has no UTC offset")
    return dt


def format_timestamp(dt: datetime) -> str:
    """Render an aware datetime as ISO-8601, using ``Z`` for UTC."""

    text = dt.isoformat()
    if dt.utcoffset() == _ZERO and text.endswith("+00:00"):
        text = text[: -len("+00:00")] + "Z"
    return text


def date_key(value) -> str:
    return to_calendar_date(value).isoformat()


def in_zone(dt: datetime, tz: tzinfo | None = None) -> datetime:
    return dt.astimezone(tz) if tz is not None else dt


def local_date(dt: datetime, tz: tzinfo | None = None) -> date:
    """Calendar date of ``dt`` in ``tz``, or in its own offset when no zone is given."""

    return in_zone(dt, tz).date()


def time_of_day(dt: datetime, tz: tzinfo | None = None) -> time:
    return in_zone(dt, tz).time()


def combine(day: date, clock: time, tz: tzinfo) -> datetime:
    """Attach a wall-clock time and zone to a calendar date."""

    return datetime.combine(day, clock.replace(tzinfo=None), tzinfo=tz)


def resolve_timezone(name) -> tzinfo | None:
    """Turn an IANA zone name into a tzinfo; ``None`` or empty means 'no zone'."""

    if name is None or isinstance(name, tzinfo):
        return name
    cleaned = str(name).strip()
    if not cleaned:
        return None
    try:
        return ZoneInfo(cleaned)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise InvalidTimestampError(f"Unknown timezone {cleaned!r}") from exc


def parse_clock(value) -> time:
    """Parse an ``HH:MM`` or ``HH:MM:SS`` wall-clock time."""

    if isinstance(value, time):
        return value
    try:
        return time.fromisoformat(str(value).strip())
    except ValueError as exc:
        raise InvalidTimestampError(f"Malformed time of day {value!r}") from exc
