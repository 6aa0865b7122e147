"""Demo script for calendar-engine."""

from calendar_engine.adapters.json_adapter import parse
from calendar_engine.bucketing import bucketize, items_for_day
from calendar_engine.date_range import generate_days
from calendar_engine.reschedule import reschedule


def main() -> None:
    items = parse("examples/sample_items.json")
    index = bucketize(items)
    for day in generate_days("2024-03-10", "week", today="2024-03-10"):
        titles = [item.title for item in items_for_day(index, day.date)]
        marker = "*" if day.is_today else " "
        print(f"{marker} {day.date.isoformat()}: {', '.join(titles) or '-'}")
    print("Unscheduled:", index.skipped)

    by_id = {item.id: item for item in items}
    print("Move t1:", reschedule(by_id["t1"], "2024-03-15"))
    print("Move e1:", reschedule(by_id["e1"], "2024-03-20"))


if __name__ == "__main__":
    main()
