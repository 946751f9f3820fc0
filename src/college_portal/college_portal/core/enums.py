from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Optional


class Role(str, Enum):
    """Roles carried by the identity the auth provider issues."""

    ADMIN = "admin"
    STUDENT = "student"


class DayOfWeek(str, Enum):
    """Teaching days. There are no Sunday classes."""

    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"

    @classmethod
    def for_date(cls, value: date) -> Optional["DayOfWeek"]:
        """Day for a calendar date, None on Sunday."""
        weekday = value.weekday()
        if weekday > 5:
            return None
        return list(cls)[weekday]


class EntryStatus(str, Enum):
    """Attendance state of a finished class in today's view."""

    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    UNMARKED = "UNMARKED"


class AttendanceBand(str, Enum):
    GOOD = "good"
    WARNING = "warning"
    CRITICAL = "critical"
