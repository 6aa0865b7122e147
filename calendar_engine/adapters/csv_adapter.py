"""CSV adapter for task and event records."""

from __future__ import annotations

import csv

from calendar_engine.adapters.records import build_item
from calendar_engine.schema import ScheduleItem


def parse(file_path: str) -> list[ScheduleItem]:
    """Parse CSV export into schedule items; blank cells count as missing."""

    with open(file_path, newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            return []

        items: list[ScheduleItem] = []
        for row_number, row in enumerate(reader, start=2):
            items.append(build_item(row, f"Row {row_number}"))
        return items
