"""Error types raised by the scheduling core."""

from __future__ import annotations

from typing import Any, Optional


class CalendarEngineError(ValueError):
    """Base error for structurally invalid input."""

    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class InvalidDateError(CalendarEngineError):
    """Calendar date with an out-of-range month or day, or not a date at all."""


class InvalidTimestampError(CalendarEngineError):
    """Timestamp that is not ISO-8601 or carries no UTC offset."""


class InvalidDurationError(CalendarEngineError):
    """Event whose end time lies before its start time."""

    def __init__(self, event_id: str, start_time: str, end_time: str):
        super().__init__(
            f"Event {event_id!r} ends before it starts ({end_time} < {start_time})",
            details={"id": event_id, "start_time": start_time, "end_time": end_time},
        )
        self.event_id = event_id
