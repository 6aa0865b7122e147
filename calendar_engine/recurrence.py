"""Recurring task roll-over and follow-up date helpers."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, time, timedelta, tzinfo
from typing import Iterable, Optional

from dateutil.relativedelta import relativedelta

from calendar_engine.schema import RECURRENCE_TYPES, TaskItem
from calendar_engine.temporal import (
    combine,
    format_timestamp,
    in_zone,
    is_date_only,
    parse_timestamp,
    to_calendar_date,
)

_STEPS = {
    "daily": lambda n: relativedelta(days=n),
    "weekly": lambda n: relativedelta(weeks=n),
    "monthly": lambda n: relativedelta(months=n),
    "yearly": lambda n: relativedelta(years=n),
}


def next_due_date(task: TaskItem, *, now, tz: tzinfo | None = None) -> Optional[str]:
    """Due date of the task spawned when a recurring task is completed.

    Month and year steps clamp to the end of the month (Jan 31 + 1 month is
    Feb 28/29). A task without a due date recurs from ``now``. With ``tz`` the
    step keeps the wall-clock time in that zone across DST changes.
    """

    recurrence = task.recurrence_type or "none"
    if recurrence not in RECURRENCE_TYPES:
        raise ValueError(f"Unknown recurrence type '{recurrence}'")
    if recurrence == "none":
        return None

    step = _STEPS[recurrence](max(1, task.recurrence_interval or 1))

    if task.due_date and is_date_only(task.due_date):
        return (to_calendar_date(task.due_date) + step).isoformat()

    base = parse_timestamp(task.due_date) if task.due_date else parse_timestamp(now)
    if tz is None:
        return format_timestamp(base + step)

    shifted = in_zone(base, tz).replace(tzinfo=None) + step
    return format_timestamp(combine(shifted.date(), shifted.time(), tz))


def spawn_next(task: TaskItem, *, now, new_id: str, tz: tzinfo | None = None) -> Optional[TaskItem]:
    """Follow-on task for a completed recurring task, or None when it does not recur."""

    due = next_due_date(task, now=now, tz=tz)
    if due is None:
        return None
    return replace(task, id=new_id, status="todo", due_date=due, follow_up_at=None)


def effective_date(task: TaskItem, *, prefer: str = "due") -> Optional[str]:
    """The date a task is scheduled by; ``prefer`` picks which of due and follow-up wins."""

    if prefer == "due":
        return task.due_date or task.follow_up_at or None
    if prefer == "follow_up":
        return task.follow_up_at or task.due_date or None
    raise ValueError(f"Unknown preference '{prefer}', expected 'due' or 'follow_up'")


def upcoming_followups(
    tasks: Iterable[TaskItem], *, now, days_ahead: int = 7, tz: tzinfo | None = None
) -> list[TaskItem]:
    """Tasks with a follow-up between ``now`` and the end of the day ``days_ahead`` days out."""

    start = parse_timestamp(now)
    local_now = in_zone(start, tz)
    end = combine(local_now.date() + timedelta(days=days_ahead + 1), time(0, 0), local_now.tzinfo)

    due: list[tuple[datetime, TaskItem]] = []
    for task in tasks:
        if not task.follow_up_at:
            continue
        moment = parse_timestamp(task.follow_up_at)
        if start <= moment < end:
            due.append((moment, task))
    return [task for _, task in sorted(due, key=lambda pair: pair[0])]
