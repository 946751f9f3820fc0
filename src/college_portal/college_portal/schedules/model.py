from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional

from ..core.enums import DayOfWeek


@dataclass(frozen=True)
class ClassGroup:
    """One class group; a timetable is scoped to exactly one."""

    branch: str
    year: int
    semester: int
    section: str


@dataclass(frozen=True)
class TimeSlot:
    start: time
    end: time


@dataclass(frozen=True)
class TimetableEntry:
    """Weekly template entry, not tied to a calendar date."""

    day_of_week: DayOfWeek
    time_slot: str
    subject: str
    entry_id: Optional[str] = None
    group: Optional[ClassGroup] = None
