import pytest

from calendar_engine.board import ScheduleBoard
from calendar_engine.errors import InvalidDurationError
from calendar_engine.reschedule import apply_payload
from calendar_engine.schema import EventItem, TaskItem
from calendar_engine.temporal import resolve_timezone


class FakeStore:
    def __init__(self, items, fail=False):
        self.items = list(items)
        self.fail = fail
        self.commits = []
        self.fetches = 0

    def fetch(self):
        self.fetches += 1
        return list(self.items)

    def commit(self, payload):
        self.commits.append(payload)
        if self.fail:
            raise ConnectionError("storage unavailable")
        self.items = [apply_payload(item, payload) if item.id == payload["id"] else item for item in self.items]


def sample_items():
    return [
        TaskItem("t1", "Invoice", "todo", "2024-03-10T14:30:00Z"),
        TaskItem("t2", "Undated", "todo", None),
        EventItem("e1", "Meetup", "2024-03-10T23:00:00Z", "2024-03-11T00:30:00Z"),
    ]


def test_move_commits_and_rebuilds():
    store = FakeStore(sample_items())
    board = ScheduleBoard(store.fetch, store.commit)
    board.refresh()
    assert board.index.skipped == ["t2"]

    assert board.move("e1", "2024-03-20") is True
    assert store.commits == [{"id": "e1", "start_time": "2024-03-20T23:00:00Z", "end_time": "2024-03-21T00:30:00Z"}]
    assert [item.id for item in board.day("2024-03-20")] == ["e1"]
    assert [item.id for item in board.day("2024-03-10")] == ["t1"]
    assert store.fetches == 1


def test_undated_task_uses_board_default_time():
    store = FakeStore(sample_items())
    board = ScheduleBoard(store.fetch, store.commit, default_time="07:30")
    board.refresh()
    assert board.move("t2", "2024-03-12")
    assert store.commits[-1] == {"id": "t2", "due_date": "2024-03-12T07:30:00Z"}
    assert board.index.skipped == []


def test_failed_commit_refetches_everything():
    store = FakeStore(sample_items(), fail=True)
    board = ScheduleBoard(store.fetch, store.commit)
    board.refresh()

    assert board.move("t1", "2024-03-15") is False
    assert store.fetches == 2
    assert [item.id for item in board.day("2024-03-10")] == ["t1", "e1"]
    assert board.day("2024-03-15") == []


def test_unknown_item_and_invalid_event():
    broken = EventItem("bad", "Broken", "2024-03-10T10:00:00Z", "2024-03-10T09:00:00Z")
    store = FakeStore(sample_items() + [broken])
    board = ScheduleBoard(store.fetch, store.commit)
    board.refresh()

    with pytest.raises(KeyError):
        board.move("missing", "2024-03-15")
    with pytest.raises(InvalidDurationError):
        board.move("bad", "2024-03-15")
    assert store.commits == []
    assert board.find("bad").start_time == "2024-03-10T10:00:00Z"


def test_set_timezone_rebuilds_day_keys():
    store = FakeStore([TaskItem("t1", "Late", "todo", "2024-03-10T23:30:00Z")])
    board = ScheduleBoard(store.fetch, store.commit)
    board.refresh()
    assert [item.id for item in board.day("2024-03-10")] == ["t1"]

    board.set_timezone(resolve_timezone("Europe/Budapest"))
    assert [item.id for item in board.day("2024-03-11")] == ["t1"]
    assert board.day("2024-03-10") == []
    assert store.fetches == 1


def test_failed_refetch_restores_pre_move_state():
    store = FakeStore(sample_items(), fail=True)
    board = ScheduleBoard(store.fetch, store.commit)
    board.refresh()
    before_items, before_index = board.items, board.index

    def broken_fetch():
        raise ConnectionError("still offline")

    board._fetch = broken_fetch
    with pytest.raises(ConnectionError):
        board.move("t1", "2024-03-15")
    assert board.items == before_items
    assert board.index == before_index
    assert board.day("2024-03-15") == []
