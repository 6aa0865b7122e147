"""Drag-and-drop rescheduling of tasks and events.

A move only changes the calendar date. Tasks keep their time of day; events
keep their time of day and their exact duration, so an event that crosses
midnight (or a DST change) still ends the same amount of time after it starts.
Nothing here commits anything: callers forward the returned payload to storage.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, time, timezone, tzinfo

from calendar_engine.errors import InvalidDurationError
from calendar_engine.schema import EventItem, EventMove, ScheduleItem, TaskItem
from calendar_engine.temporal import (
    combine,
    format_timestamp,
    in_zone,
    is_date_only,
    parse_clock,
    parse_timestamp,
    to_calendar_date,
)

DEFAULT_TASK_TIME = time(9, 0)


def _move_to(moment: datetime, target: date, tz: tzinfo | None) -> datetime:
    local = in_zone(moment, tz)
    return combine(target, local.time(), local.tzinfo)


def reschedule_task(task: TaskItem, target_date, *, default_time=None, tz: tzinfo | None = None) -> str:
    """Return the new ``due_date`` for a task dropped on ``target_date``."""

    target = to_calendar_date(target_date)

    if not task.due_date:
        clock = parse_clock(default_time) if default_time is not None else DEFAULT_TASK_TIME
        return format_timestamp(combine(target, clock, tz or timezone.utc))

    if is_date_only(task.due_date):
        return target.isoformat()

    return format_timestamp(_move_to(parse_timestamp(task.due_date), target, tz))


def reschedule_event(event: EventItem, target_date, *, tz: tzinfo | None = None) -> EventMove:
    """Return the new start and end of an event dropped on ``target_date``."""

    target = to_calendar_date(target_date)
    start = parse_timestamp(event.start_time)
    end = parse_timestamp(event.end_time)

    duration = end.astimezone(timezone.utc) - start.astimezone(timezone.utc)
    if duration.total_seconds() < 0:
        raise InvalidDurationError(event.id, event.start_time, event.end_time)

    new_start = _move_to(start, target, tz)
    new_end = (new_start.astimezone(timezone.utc) + duration).astimezone(new_start.tzinfo)
    return EventMove(new_start_time=format_timestamp(new_start), new_end_time=format_timestamp(new_end))


def reschedule(item: ScheduleItem, target_date, *, default_time=None, tz: tzinfo | None = None) -> dict:
    """Compute the commit payload for moving any schedule item."""

    if isinstance(item, TaskItem):
        return {"id": item.id, "due_date": reschedule_task(item, target_date, default_time=default_time, tz=tz)}
    if isinstance(item, EventItem):
        move = reschedule_event(item, target_date, tz=tz)
        return {"id": item.id, "start_time": move.new_start_time, "end_time": move.new_end_time}
    raise TypeError(f"Unsupported schedule item {type(item).__name__}")


def apply_payload(item: ScheduleItem, payload: dict) -> ScheduleItem:
    fields = {name: value for name, value in payload.items() if name != "id"}
    return replace(item, **fields)


def apply_reschedule(item: ScheduleItem, target_date, *, default_time=None, tz: tzinfo | None = None) -> ScheduleItem:
    """Return a copy of ``item`` with the rescheduled timestamps applied."""

    return apply_payload(item, reschedule(item, target_date, default_time=default_time, tz=tz))
