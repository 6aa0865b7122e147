"""Calendar cell generation for month, week and day views."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone, tzinfo

from dateutil.relativedelta import relativedelta

from calendar_engine.schema import VIEWS, WEEK_STARTS, CalendarDay, EventItem
from calendar_engine.temporal import combine, parse_timestamp, to_calendar_date

_MIDNIGHT = time(0, 0)


def _check_view(view: str) -> str:
    if view not in VIEWS:
        raise ValueError(f"Unknown view '{view}', expected one of {VIEWS}")
    return view


def _check_week_start(week_starts_on: str) -> str:
    if week_starts_on not in WEEK_STARTS:
        raise ValueError(f"Unknown week start '{week_starts_on}', expected one of {WEEK_STARTS}")
    return week_starts_on


def week_start(day, week_starts_on: str = "monday") -> date:
    """Return the first day of the week containing ``day``."""

    day = to_calendar_date(day)
    if _check_week_start(week_starts_on) == "monday":
        offset = day.weekday()
    else:
        offset = (day.weekday() + 1) % 7
    return day - timedelta(days=offset)


def month_bounds(day) -> tuple[date, date]:
    """Return the first and last calendar day of ``day``'s month."""

    day = to_calendar_date(day)
    first = day.replace(day=1)
    return first, first + relativedelta(day=31)


def _view_dates(reference: date, view: str, week_starts_on: str) -> list[date]:
    if view == "day":
        return [reference]

    if view == "week":
        start = week_start(reference, week_starts_on)
        return [start + timedelta(days=offset) for offset in range(7)]

    first, last = month_bounds(reference)
    start = week_start(first, week_starts_on)
    end = week_start(last, week_starts_on) + timedelta(days=6)
    return [start + timedelta(days=offset) for offset in range((end - start).days + 1)]


def generate_days(reference_date, view: str, week_starts_on: str = "monday", *, today) -> list[CalendarDay]:
    """Produce the ordered calendar cells rendered for a view.

    ``month`` pads the month out to whole weeks, ``week`` yields the seven days
    of the week containing the reference date and ``day`` yields the reference
    date alone. ``today`` is supplied by the caller so the result only depends
    on the arguments.
    """

    reference = to_calendar_date(reference_date)
    today = to_calendar_date(today)
    _check_view(view)
    _check_week_start(week_starts_on)

    return [
        CalendarDay(
            date=day,
            is_current_view_month=(day.year, day.month) == (reference.year, reference.month),
            is_today=day == today,
        )
        for day in _view_dates(reference, view, week_starts_on)
    ]


def shift_reference(reference_date, view: str, steps: int) -> date:
    """Move the reference date by whole months, weeks or days for prev/next navigation."""

    reference = to_calendar_date(reference_date)
    if _check_view(view) == "month":
        return reference + relativedelta(months=steps)
    if view == "week":
        return reference + timedelta(weeks=steps)
    return reference + timedelta(days=steps)


def day_window(day, tz: tzinfo | None = None) -> tuple[datetime, datetime]:
    """Half-open ``[start, end)`` instant range covering one calendar day."""

    day = to_calendar_date(day)
    zone = tz or timezone.utc
    return combine(day, _MIDNIGHT, zone), combine(day + timedelta(days=1), _MIDNIGHT, zone)


def view_window(
    reference_date, view: str, week_starts_on: str = "monday", tz: tzinfo | None = None
) -> tuple[datetime, datetime]:
    """Half-open instant range covering every cell of a view, for range queries."""

    reference = to_calendar_date(reference_date)
    dates = _view_dates(reference, _check_view(view), _check_week_start(week_starts_on))
    start, _ = day_window(dates[0], tz)
    _, end = day_window(dates[-1], tz)
    return start, end


def overlaps(event: EventItem, window_start, window_end) -> bool:
    """True when the event intersects ``[window_start, window_end)``."""

    start = parse_timestamp(event.start_time)
    end = parse_timestamp(event.end_time)
    return start < parse_timestamp(window_end) and end > parse_timestamp(window_start)
