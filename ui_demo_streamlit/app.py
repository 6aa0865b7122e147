"""Streamlit demo UI for calendar-engine."""

from __future__ import annotations

import tempfile
from collections import Counter
from datetime import date
from pathlib import Path
from typing import Any

from calendar_engine.adapters import csv_adapter, json_adapter
from calendar_engine.board import ScheduleBoard
from calendar_engine.bucketing import agenda, day_counts, items_for_day
from calendar_engine.date_range import generate_days, shift_reference
from calendar_engine.logging_config import configure_logging
from calendar_engine.reschedule import apply_payload
from calendar_engine.schema import VIEWS, WEEK_STARTS, EventItem
from calendar_engine.settings import get_settings
from calendar_engine.temporal import parse_timestamp, resolve_timezone, time_of_day

DEMO_DATASET = "examples/sample_items.json"
WEEKDAY_LABELS = {
    "monday": ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"],
    "sunday": ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"],
}


def _parse_items_from_path(file_path: str) -> list:
    suffix = Path(file_path).suffix.lower()
    if suffix == ".csv":
        return csv_adapter.parse(file_path)
    if suffix == ".json":
        return json_adapter.parse(file_path)
    raise ValueError("Unsupported file type. Please use .csv or .json")


def _parse_uploaded(uploaded_file) -> list:
    suffix = Path(uploaded_file.name).suffix.lower()
    with tempfile.NamedTemporaryFile(delete=False, suffix=suffix) as handle:
        handle.write(uploaded_file.getbuffer())
        temp_path = handle.name
    try:
        return _parse_items_from_path(temp_path)
    finally:
        Path(temp_path).unlink(missing_ok=True)


def _label(item, tz) -> str:
    if isinstance(item, EventItem):
        if item.is_all_day:
            return f"All day · {item.title}"
        return f"{time_of_day(parse_timestamp(item.start_time), tz):%H:%M} · {item.title}"
    return f"[{item.status}] {item.title}"


def build_calendar(board: ScheduleBoard, reference: date, view: str, week_starts_on: str, today: date) -> dict[str, Any]:
    """Everything the page renders for one view, as plain data."""

    days = generate_days(reference, view, week_starts_on, today=today)
    kinds = Counter("event" if isinstance(item, EventItem) else "task" for item in board.items)
    return {
        "days": [
            {
                "day": day,
                "labels": [_label(item, board.tz) for item in items_for_day(board.index, day.date)],
            }
            for day in days
        ],
        "counts": day_counts(board.index),
        "agenda": agenda(board.items, reference, tz=board.tz),
        "summary": {
            "tasks": kinds.get("task", 0),
            "events": kinds.get("event", 0),
            "unscheduled": len(board.index.skipped),
        },
    }


def _render_grid(st, payload: dict, week_starts_on: str) -> None:
    days = payload["days"]
    if len(days) >= 7:
        header = st.columns(7)
        for column, label in zip(header, WEEKDAY_LABELS[week_starts_on]):
            column.markdown(f"**{label}**")

    for row_start in range(0, len(days), 7):
        row = days[row_start : row_start + 7]
        columns = st.columns(len(row))
        for column, cell in zip(columns, row):
            day = cell["day"]
            title = f"**{day.date.day}**" if day.is_current_view_month else f"_{day.date.day}_"
            if day.is_today:
                title += " (today)"
            column.markdown(title)
            for label in cell["labels"]:
                column.caption(label)


def _make_board(items: list, tz, default_time, fail_commits: bool) -> ScheduleBoard:
    store = {"items": list(items)}

    def fetch():
        return store["items"]

    def commit(payload: dict):
        if fail_commits:
            raise RuntimeError("Simulated storage failure")
        store["items"] = [apply_payload(item, payload) if item.id == payload["id"] else item for item in store["items"]]

    board = ScheduleBoard(fetch, commit, tz=tz, default_time=default_time)
    board.refresh()
    return board


def main() -> None:
    import streamlit as st

    configure_logging()
    settings = get_settings()

    st.set_page_config(page_title="Calendar Engine Demo", layout="wide")
    st.title("Calendar Engine — Streamlit Demo")

    with st.sidebar:
        st.header("Controls")
        uploaded = st.file_uploader("Upload item export", type=["csv", "json"])
        use_demo = st.checkbox("Load demo dataset", value=True)
        view = st.selectbox("View", options=list(VIEWS), index=0)
        week_starts_on = st.selectbox(
            "Week starts on", options=list(WEEK_STARTS), index=WEEK_STARTS.index(settings.week_starts_on)
        )
        tz_name = st.text_input("Timezone (IANA, blank keeps offsets)", value=settings.timezone or "")
        reference = st.date_input("Reference date", value=date(2024, 3, 10))
        steps = st.number_input("Navigate (views forward/back)", min_value=-24, max_value=24, value=0, step=1)
        fail_commits = st.checkbox("Simulate commit failures", value=False)

    try:
        tz = resolve_timezone(tz_name)
        if use_demo:
            items = _parse_items_from_path(DEMO_DATASET)
            source = DEMO_DATASET
        elif uploaded is not None:
            items = _parse_uploaded(uploaded)
            source = f"upload:{uploaded.name}:{uploaded.size}"
        else:
            st.info("Upload a CSV/JSON export or enable 'Load demo dataset'.")
            return

        board_key = (source, fail_commits)
        if st.session_state.get("board_key") != board_key:
            st.session_state["board"] = _make_board(items, tz, settings.default_task_time, fail_commits)
            st.session_state["board_key"] = board_key
        board: ScheduleBoard = st.session_state["board"]
        if board.tz != tz:
            board.set_timezone(tz)

        shown = shift_reference(reference, view, int(steps))
        st.subheader(f"{view.title()} of {shown.isoformat()}")

        with st.form("move"):
            ids = [item.id for item in board.items]
            item_id = st.selectbox("Item to move", options=ids)
            target = st.date_input("Drop on", value=shown)
            if st.form_submit_button("Move") and item_id:
                if board.move(item_id, target):
                    st.success(f"Moved {item_id} to {target.isoformat()}")
                else:
                    st.warning("Commit failed; calendar reloaded from storage.")

        payload = build_calendar(board, shown, view, week_starts_on, date.today())
        s1, s2, s3 = st.columns(3)
        s1.metric("Tasks", payload["summary"]["tasks"])
        s2.metric("Events", payload["summary"]["events"])
        s3.metric("Unscheduled", payload["summary"]["unscheduled"])

        _render_grid(st, payload, week_starts_on)

        st.subheader("Agenda")
        if not payload["agenda"]:
            st.write("Nothing scheduled this month.")
        for key, entries in payload["agenda"]:
            st.markdown(f"**{key}**")
            for item in entries:
                st.write(_label(item, tz))

    except ValueError as exc:
        st.error(f"Input error: {exc}")


if __name__ == "__main__":
    main()
