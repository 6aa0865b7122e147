"""Render a calendar view from a CSV/JSON item export, optionally moving one item."""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import asdict
from datetime import date
from pathlib import Path

from calendar_engine.adapters import csv_adapter, json_adapter
from calendar_engine.bucketing import bucketize, items_for_day
from calendar_engine.date_range import generate_days
from calendar_engine.logging_config import configure_logging
from calendar_engine.reschedule import apply_payload, reschedule
from calendar_engine.schema import VIEWS, WEEK_STARTS, EventItem
from calendar_engine.settings import get_settings
from calendar_engine.temporal import resolve_timezone

logger = logging.getLogger(__name__)


def _load_items(path: Path):
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return csv_adapter.parse(str(path))
    if suffix == ".json":
        return json_adapter.parse(str(path))
    raise ValueError("Unsupported input format, expected .csv or .json")


def _describe(item) -> dict:
    row = asdict(item)
    row["kind"] = "event" if isinstance(item, EventItem) else "task"
    return row


def build_view(items, reference_date, view, week_starts_on, today, tz) -> dict:
    """Days of a view with the items bucketed under each of them."""

    index = bucketize(items, tz=tz)
    days = generate_days(reference_date, view, week_starts_on, today=today)
    return {
        "view": view,
        "days": [
            {
                "date": day.date.isoformat(),
                "is_current_view_month": day.is_current_view_month,
                "is_today": day.is_today,
                "items": [_describe(item) for item in items_for_day(index, day.date)],
            }
            for day in days
        ],
        "skipped": index.skipped,
    }


def main() -> None:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Render a calendar view as JSON")
    parser.add_argument("--data", required=True, help="Path to CSV/JSON items file")
    parser.add_argument("--date", required=True, help="Reference date, YYYY-MM-DD")
    parser.add_argument("--view", choices=VIEWS, default="month")
    parser.add_argument("--week-start", choices=WEEK_STARTS, default=settings.week_starts_on)
    parser.add_argument("--today", default=None, help="Date highlighted as today (defaults to the current date)")
    parser.add_argument("--tz", default=settings.timezone, help="IANA timezone for day keys")
    parser.add_argument("--move", metavar="ITEM_ID", help="Item to reschedule")
    parser.add_argument("--to", metavar="YYYY-MM-DD", help="Target date for --move")
    parser.add_argument("--out", help="Write the commit payload of --move to this JSON file")
    args = parser.parse_args()

    configure_logging()
    if args.move and not args.to:
        parser.error("--move requires --to")

    tz = resolve_timezone(args.tz)
    items = _load_items(Path(args.data))
    logger.info("Loaded %d items from %s", len(items), args.data)

    payload = None
    if args.move:
        matches = [item for item in items if item.id == args.move]
        if not matches:
            parser.error(f"No item with id {args.move!r}")
        payload = reschedule(matches[0], args.to, default_time=settings.default_task_time, tz=tz)
        items = [apply_payload(item, payload) if item.id == args.move else item for item in items]

    report = build_view(items, args.date, args.view, args.week_start, args.today or date.today(), tz)
    report["payload"] = payload
    print(json.dumps(report, indent=2, default=str))

    if payload is not None and args.out:
        json_adapter.dump_payloads([payload], args.out)
        print(f"Saved commit payload to {args.out}")


if __name__ == "__main__":
    main()
