"""Row-to-item conversion shared by the CSV and JSON adapters.

Rows use the storage column names (``due_date``, ``start_time``, ``is_all_day`` ...).
"""

from __future__ import annotations

from calendar_engine.schema import RECURRENCE_TYPES, TASK_PRIORITIES, TASK_STATUSES, EventItem, ScheduleItem, TaskItem
from calendar_engine.temporal import is_date_only, parse_timestamp, to_calendar_date

_TASK_FIELDS = {"id", "title"}
_EVENT_FIELDS = {"id", "title", "start_time", "end_time"}
_TRUE = {"true", "1", "yes", "t"}
_FALSE = {"false", "0", "no", "f", ""}


def _text(value) -> str | None:
    if value is None:
        return None
    cleaned = str(value).strip()
    return cleaned or None


def _timestamp(row: dict, name: str, label: str, *, allow_date: bool = False) -> str | None:
    value = _text(row.get(name))
    if value is None:
        return value
    try:
        if allow_date and is_date_only(value):
            to_calendar_date(value)
        else:
            parse_timestamp(value)
    except ValueError as exc:
        raise ValueError(f"{label}: malformed {name}") from exc
    return value


def _flag(value, label: str) -> bool:
    if isinstance(value, bool):
        return value
    cleaned = str(value if value is not None else "").strip().lower()
    if cleaned in _TRUE:
        return True
    if cleaned in _FALSE:
        return False
    raise ValueError(f"{label}: invalid is_all_day '{value}'")


def _choice(row: dict, name: str, allowed: tuple, label: str, default=None):
    value = _text(row.get(name))
    if value is None:
        return default
    if value not in allowed:
        raise ValueError(f"{label}: invalid {name} '{value}'")
    return value


def _kind(row: dict) -> str:
    kind = _text(row.get("kind"))
    if kind:
        return kind
    return "event" if _text(row.get("start_time")) else "task"


def build_item(row: dict, label: str) -> ScheduleItem:
    """Validate one storage row and turn it into a task or an event."""

    kind = _kind(row)
    if kind not in ("task", "event"):
        raise ValueError(f"{label}: invalid kind '{kind}'")

    required = _EVENT_FIELDS if kind == "event" else _TASK_FIELDS
    missing = sorted(field for field in required if not _text(row.get(field)))
    if missing:
        raise ValueError(f"{label}: missing required fields {missing}")

    if kind == "event":
        return EventItem(
            id=_text(row["id"]),
            title=_text(row["title"]),
            start_time=_timestamp(row, "start_time", label),
            end_time=_timestamp(row, "end_time", label),
            is_all_day=_flag(row.get("is_all_day", False), label),
            location=_text(row.get("location")),
            description=_text(row.get("description")),
        )

    interval_raw = _text(row.get("recurrence_interval"))
    interval = None
    if interval_raw is not None:
        try:
            interval = int(interval_raw)
        except ValueError as exc:
            raise ValueError(f"{label}: invalid recurrence_interval") from exc

    return TaskItem(
        id=_text(row["id"]),
        title=_text(row["title"]),
        status=_choice(row, "status", TASK_STATUSES, label, default="todo"),
        due_date=_timestamp(row, "due_date", label, allow_date=True),
        priority=_choice(row, "priority", TASK_PRIORITIES, label),
        follow_up_at=_timestamp(row, "follow_up_at", label),
        recurrence_type=_choice(row, "recurrence_type", RECURRENCE_TYPES, label),
        recurrence_interval=interval,
    )
