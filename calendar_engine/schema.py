"""Core data schema for schedulable items and calendar cells."""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Union

TASK_STATUSES = ("todo", "in_progress", "done")
TASK_PRIORITIES = ("low", "medium", "high")
RECURRENCE_TYPES = ("none", "daily", "weekly", "monthly", "yearly")
VIEWS = ("month", "week", "day")
WEEK_STARTS = ("monday", "sunday")


@dataclass(frozen=True)
class TaskItem:
    """Task record; ``due_date`` of ``None`` means unscheduled."""

    id: str
    title: str
    status: str = "todo"
    due_date: Optional[str] = None
    priority: Optional[str] = None
    follow_up_at: Optional[str] = None
    recurrence_type: Optional[str] = None
    recurrence_interval: Optional[int] = None


@dataclass(frozen=True)
class EventItem:
    """Calendar event; a persisted event always has ``end_time >= start_time``."""

    id: str
    title: str
    start_time: str
    end_time: str
    is_all_day: bool = False
    location: Optional[str] = None
    description: Optional[str] = None


ScheduleItem = Union[TaskItem, EventItem]
DayBucket = dict[str, list[ScheduleItem]]


@dataclass(frozen=True)
class CalendarDay:
    """One rendered calendar cell."""

    date: date
    is_current_view_month: bool
    is_today: bool


@dataclass
class BucketResult:
    """Per-day index plus the ids of items that had no resolvable date."""

    buckets: DayBucket = field(default_factory=dict)
    skipped: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class EventMove:
    new_start_time: str
    new_end_time: str
