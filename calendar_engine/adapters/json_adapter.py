"""JSON adapter for task and event records."""

from __future__ import annotations

import json

from calendar_engine.adapters.records import build_item
from calendar_engine.schema import ScheduleItem


def parse_records(payload) -> list[ScheduleItem]:
    """Turn a decoded list of storage rows into schedule items."""

    if not isinstance(payload, list):
        raise ValueError("JSON payload must be a list of objects")

    items: list[ScheduleItem] = []
    for index, row in enumerate(payload, start=1):
        if not isinstance(row, dict):
            raise ValueError(f"Item {index}: expected an object")
        items.append(build_item(row, f"Item {index}"))
    return items


def parse(file_path: str) -> list[ScheduleItem]:
    """Parse JSON file into schedule items."""

    with open(file_path, encoding="utf-8") as handle:
        payload = json.load(handle)

    return parse_records(payload)


def dump_payloads(payloads: list[dict], file_path: str) -> None:
    """Write reschedule commit requests as a JSON list."""

    with open(file_path, "w", encoding="utf-8") as handle:
        json.dump(payloads, handle, indent=2)
