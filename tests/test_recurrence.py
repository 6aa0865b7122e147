import pytest

from calendar_engine.recurrence import effective_date, next_due_date, spawn_next, upcoming_followups
from calendar_engine.schema import TaskItem
from calendar_engine.temporal import parse_timestamp, resolve_timezone

NOW = "2024-03-10T12:00:00Z"


def recurring(kind, due="2024-01-31T09:00:00Z", interval=1):
    return TaskItem("t1", "Repeat", "done", due, recurrence_type=kind, recurrence_interval=interval)


def test_next_due_date_steps():
    assert next_due_date(recurring("daily", interval=3), now=NOW) == "2024-02-03T09:00:00Z"
    assert next_due_date(recurring("weekly", interval=2), now=NOW) == "2024-02-14T09:00:00Z"
    assert next_due_date(recurring("monthly"), now=NOW) == "2024-02-29T09:00:00Z"
    assert next_due_date(recurring("yearly", due="2024-02-29T09:00:00Z"), now=NOW) == "2025-02-28T09:00:00Z"


def test_next_due_date_without_due_or_recurrence():
    assert next_due_date(recurring("daily", due=None), now=NOW) == "2024-03-11T12:00:00Z"
    assert next_due_date(recurring("none"), now=NOW) is None
    assert next_due_date(TaskItem("t1", "Once", "done", NOW), now=NOW) is None
    assert next_due_date(recurring("monthly", due="2024-01-31"), now=NOW) == "2024-02-29"


def test_invalid_interval_treated_as_one():
    assert next_due_date(recurring("daily", interval=0), now=NOW) == "2024-02-01T09:00:00Z"


def test_spawn_next():
    task = TaskItem("t1", "Repeat", "done", "2024-03-04T09:00:00+01:00", follow_up_at=NOW,
                    recurrence_type="weekly", recurrence_interval=1)
    nxt = spawn_next(task, now=NOW, new_id="t2")
    assert nxt.id == "t2"
    assert nxt.status == "todo"
    assert nxt.due_date == "2024-03-11T09:00:00+01:00"
    assert nxt.recurrence_type == "weekly"
    assert nxt.follow_up_at is None
    assert spawn_next(TaskItem("t3", "Once", "done"), now=NOW, new_id="t4") is None


def test_effective_date_precedence():
    assert effective_date(TaskItem("t1", "A", due_date="2024-03-01T00:00:00Z", follow_up_at=NOW)) == "2024-03-01T00:00:00Z"
    assert effective_date(TaskItem("t1", "A", follow_up_at=NOW)) == NOW
    assert effective_date(TaskItem("t1", "A")) is None


def test_upcoming_followups_window():
    tasks = [
        TaskItem("late", "Late", follow_up_at="2024-03-17T23:59:00Z"),
        TaskItem("past", "Past", follow_up_at="2024-03-10T11:59:00Z"),
        TaskItem("soon", "Soon", follow_up_at="2024-03-11T08:00:00Z"),
        TaskItem("far", "Far", follow_up_at="2024-03-18T00:00:00Z"),
        TaskItem("none", "None"),
    ]
    assert [t.id for t in upcoming_followups(tasks, now=NOW)] == ["soon", "late"]
    assert [t.id for t in upcoming_followups(tasks, now=NOW, days_ahead=8)] == ["soon", "late", "far"]


def test_weekly_step_keeps_local_time_across_dst():
    tz = resolve_timezone("Europe/Budapest")
    task = recurring("weekly", due="2024-03-25T09:00:00+01:00")
    nxt = next_due_date(task, now=NOW, tz=tz)
    assert nxt == "2024-04-01T09:00:00+02:00"
    assert parse_timestamp(nxt).astimezone(tz).hour == 9
    assert next_due_date(task, now=NOW) == "2024-04-01T09:00:00+01:00"
    assert spawn_next(task, now=NOW, new_id="t2", tz=tz).due_date == nxt


def test_effective_date_follow_up_preference():
    task = TaskItem("t1", "A", due_date="2024-03-01T00:00:00Z", follow_up_at=NOW)
    assert effective_date(task, prefer="follow_up") == NOW
    assert effective_date(TaskItem("t1", "A", due_date=NOW), prefer="follow_up") == NOW
    with pytest.raises(ValueError):
        effective_date(task, prefer="latest")
