from __future__ import annotations

from datetime import time

from ..core.exceptions import MalformedTimeSlotError
from .model import TimeSlot


def _parse_clock(raw: str, whole: str) -> time:
    parts = raw.strip().split(":")
    if len(parts) != 2:
        raise MalformedTimeSlotError(whole, f"expected H:MM, got {raw!r}")

    hour_s, minute_s = (p.strip() for p in parts)
    if not (hour_s.isascii() and hour_s.isdigit() and minute_s.isascii() and minute_s.isdigit()):
        raise MalformedTimeSlotError(whole, f"non-numeric time {raw!r}")

    hour, minute = int(hour_s), int(minute_s)
    if hour > 23 or minute > 59:
        raise MalformedTimeSlotError(whole, f"time out of range {raw!r}")
    return time(hour=hour, minute=minute)


def parse_time_slot(value: str) -> TimeSlot:
    """Parse "H:MM-H:MM" / "HH:MM-HH:MM" into start and end times.

    Hours are taken literally (no AM/PM inference), so "01:30" is 01:30.
    """

    if not isinstance(value, str):
        raise MalformedTimeSlotError(value, "not a string")

    halves = value.split("-")
    if len(halves) != 2:
        raise MalformedTimeSlotError(value, "expected exactly one '-'")

    start = _parse_clock(halves[0], value)
    end = _parse_clock(halves[1], value)
    return TimeSlot(start=start, end=end)
