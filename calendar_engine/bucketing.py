"""Per-day grouping of tasks and events."""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date, time, tzinfo
from typing import Iterable, Optional

from calendar_engine.schema import BucketResult, EventItem, ScheduleItem, TaskItem
from calendar_engine.temporal import (
    date_key,
    is_date_only,
    local_date,
    parse_timestamp,
    time_of_day,
    to_calendar_date,
)

logger = logging.getLogger(__name__)


def _placement(item: ScheduleItem, tz: tzinfo | None) -> Optional[tuple[date, bool, time]]:
    """Return (day, all_day, clock) for an item, or None when it has no date."""

    if isinstance(item, TaskItem):
        if not item.due_date:
            return None
        if is_date_only(item.due_date):
            return to_calendar_date(item.due_date), True, time.min
        moment = parse_timestamp(item.due_date)
        return local_date(moment, tz), False, time_of_day(moment, tz)

    if isinstance(item, EventItem):
        moment = parse_timestamp(item.start_time)
        if item.is_all_day:
            # All-day events are stored at midnight; shifting zones would move them a day.
            return local_date(moment), True, time.min
        return local_date(moment, tz), False, time_of_day(moment, tz)

    raise TypeError(f"Unsupported schedule item {type(item).__name__}")


def bucketize(items: Iterable[ScheduleItem], *, tz: tzinfo | None = None) -> BucketResult:
    """Group items by calendar day, all-day first and then by time of day.

    Tasks are keyed by ``due_date``, events by ``start_time`` only, so an event
    running past midnight stays in its start day. Undated tasks are reported
    in ``skipped``. Ties keep their input order. Without ``tz`` each timed item
    is placed and ordered by the wall-clock time of its own offset, so items
    written in different offsets sort by local time, not by instant; pass
    ``tz`` to compare them in one zone.
    """

    grouped: dict[str, list[tuple[int, time, ScheduleItem]]] = defaultdict(list)
    skipped: list[str] = []

    for item in items:
        placement = _placement(item, tz)
        if placement is None:
            skipped.append(item.id)
            continue
        day, all_day, clock = placement
        grouped[day.isoformat()].append((0 if all_day else 1, clock, item))

    buckets = {
        key: [entry[2] for entry in sorted(grouped[key], key=lambda entry: (entry[0], entry[1]))]
        for key in sorted(grouped)
    }
    logger.debug("Bucketed items into %d days, %d unscheduled", len(buckets), len(skipped))
    return BucketResult(buckets=buckets, skipped=skipped)


def items_for_day(result: BucketResult, day) -> list[ScheduleItem]:
    """Items scheduled on ``day``; empty when nothing is."""

    return list(result.buckets.get(date_key(day), []))


def flatten(result: BucketResult) -> list[ScheduleItem]:
    return [item for key in sorted(result.buckets) for item in result.buckets[key]]


def day_counts(result: BucketResult) -> dict[str, int]:
    return {key: len(entries) for key, entries in result.buckets.items()}


def agenda(
    items: Iterable[ScheduleItem], reference_date, *, tz: tzinfo | None = None
) -> list[tuple[str, list[ScheduleItem]]]:
    """List-view rows: days of the reference month that have items, in date order."""

    reference = to_calendar_date(reference_date)
    prefix = f"{reference.year:04d}-{reference.month:02d}-"
    result = bucketize(items, tz=tz)
    return [(key, entries) for key, entries in result.buckets.items() if key.startswith(prefix)]
