"""Optimistic drag-and-drop cycle around the scheduling core.

The board owns the raw item collection and the per-day index derived from
it. A move is applied locally first and then committed; if the commit fails
the whole collection is fetched again and the index rebuilt, never patched.
Concurrent moves are last-write-wins.
"""

from __future__ import annotations

import logging
from datetime import tzinfo
from typing import Callable, Iterable

from calendar_engine.bucketing import bucketize, items_for_day
from calendar_engine.reschedule import apply_payload, reschedule
from calendar_engine.schema import BucketResult, ScheduleItem

logger = logging.getLogger(__name__)

Fetch = Callable[[], Iterable[ScheduleItem]]
Commit = Callable[[dict], object]


class ScheduleBoard:
    """Item collection plus its rebuilt-on-change day index."""

    def __init__(self, fetch: Fetch, commit: Commit, *, tz: tzinfo | None = None, default_time=None):
        self._fetch = fetch
        self._commit = commit
        self.tz = tz
        self.default_time = default_time
        self.items: list[ScheduleItem] = []
        self.index = BucketResult()

    def _rebuild(self, items: Iterable[ScheduleItem]) -> None:
        self.items = list(items)
        self.index = bucketize(self.items, tz=self.tz)

    def refresh(self) -> BucketResult:
        """Fetch every item again and rebuild the index."""

        self._rebuild(self._fetch())
        return self.index

    def set_timezone(self, tz: tzinfo | None) -> BucketResult:
        """Switch the zone used for day keys and rebuild the index from the current items."""

        self.tz = tz
        self._rebuild(self.items)
        return self.index

    def find(self, item_id: str) -> ScheduleItem:
        for item in self.items:
            if item.id == item_id:
                return item
        raise KeyError(item_id)

    def day(self, day) -> list[ScheduleItem]:
        return items_for_day(self.index, day)

    def move(self, item_id: str, target_date) -> bool:
        """Move an item to ``target_date``; False when the commit failed and state was re-fetched."""

        payload = reschedule(self.find(item_id), target_date, default_time=self.default_time, tz=self.tz)
        previous_items, previous_index = self.items, self.index
        self._rebuild(apply_payload(item, payload) if item.id == item_id else item for item in self.items)

        try:
            self._commit(payload)
        except Exception:  # noqa: BLE001
            logger.warning("Commit of %s failed, re-fetching all items", item_id, exc_info=True)
            try:
                self.refresh()
            except Exception:
                self.items, self.index = previous_items, previous_index
                raise
            return False

        logger.debug("Committed move of %s to %s", item_id, target_date)
        return True
