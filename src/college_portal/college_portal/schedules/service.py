from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.access import Identity, require_role
from ..common.validators import require_non_empty
from ..core.enums import DayOfWeek, Role
from ..core.exceptions import ValidationError
from .matcher import ScheduleMatcher, WeeklyGrid
from .model import ClassGroup, TimetableEntry
from .repository import TimetableRepository
from .time_slot import parse_time_slot

logger = logging.getLogger(__name__)


class TimetableService:
    """Use case: read and (admin-only) maintain a class group's weekly timetable."""

    def __init__(self, timetables: TimetableRepository, matcher: Optional[ScheduleMatcher] = None):
        self._timetables = timetables
        self._matcher = matcher or ScheduleMatcher()

    @staticmethod
    def _parse_day(value) -> DayOfWeek:
        if isinstance(value, DayOfWeek):
            return value
        try:
            return DayOfWeek(str(value or "").strip().capitalize())
        except ValueError:
            raise ValidationError(f"Invalid day of week: {value!r}")

    @staticmethod
    def _validate(day_of_week, time_slot: str, subject: str) -> tuple[DayOfWeek, str, str]:
        day = TimetableService._parse_day(day_of_week)
        subject = require_non_empty(subject, "Subject")
        time_slot = require_non_empty(time_slot, "Time slot")
        # MalformedTimeSlotError is a ValidationError
        parse_time_slot(time_slot)
        return day, time_slot, subject

    def week(self, group: ClassGroup) -> Sequence[TimetableEntry]:
        return self._timetables.list_for_group(group)

    def grid(self, group: ClassGroup) -> WeeklyGrid:
        return self._matcher.weekly_grid(list(self._timetables.list_for_group(group)))

    def subject_counts(self, group: ClassGroup) -> dict[str, int]:
        return self._matcher.subject_weekly_counts(self._timetables.list_for_group(group))

    def add_entry(
        self,
        *,
        identity: Optional[Identity],
        group: ClassGroup,
        day_of_week,
        time_slot: str,
        subject: str,
    ) -> str:
        require_role(identity, Role.ADMIN)
        day, time_slot, subject = self._validate(day_of_week, time_slot, subject)

        entry_id = self._timetables.create(group=group, day_of_week=day, time_slot=time_slot, subject=subject)
        logger.info("Timetable entry %s added: %s %s %s for %s", entry_id, day.value, time_slot, subject, group)
        return entry_id

    def update_entry(
        self,
        *,
        identity: Optional[Identity],
        entry_id: str,
        day_of_week,
        time_slot: str,
        subject: str,
    ) -> None:
        require_role(identity, Role.ADMIN)
        day, time_slot, subject = self._validate(day_of_week, time_slot, subject)

        if not self._timetables.update(entry_id=entry_id, day_of_week=day, time_slot=time_slot, subject=subject):
            raise ValidationError("Timetable entry not found")
        logger.info("Timetable entry %s updated: %s %s %s", entry_id, day.value, time_slot, subject)

    def delete_entry(self, *, identity: Optional[Identity], entry_id: str) -> None:
        require_role(identity, Role.ADMIN)

        if not self._timetables.delete(entry_id=entry_id):
            raise ValidationError("Timetable entry not found")
        logger.info("Timetable entry %s deleted", entry_id)
