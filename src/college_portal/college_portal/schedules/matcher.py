from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..core import constants
from ..core.enums import DayOfWeek
from .model import TimetableEntry
from .time_slot import parse_time_slot


@dataclass(frozen=True)
class WeeklyGrid:
    """Day x slot grid; a `None` cell is a free period."""

    days: list[DayOfWeek]
    time_slots: list[str]
    cells: dict[str, dict[DayOfWeek, Optional[str]]]


@dataclass(frozen=True)
class ScheduleMatcher:
    """Matches a fixed weekly timetable against a caller-supplied `now`.

    Every method is pure; `now` is never read from the system clock. Any entry
    whose slot cannot be parsed raises MalformedTimeSlotError.
    """

    active_window_minutes: int = constants.ACTIVE_WINDOW_MINUTES
    reminder_delay_minutes: int = constants.REMINDER_DELAY_MINUTES
    reminder_window_minutes: int = constants.REMINDER_WINDOW_MINUTES

    def entries_for_day(self, timetable: Iterable[TimetableEntry], day: Optional[DayOfWeek]) -> list[TimetableEntry]:
        if day is None:
            return []
        return [e for e in timetable if e.day_of_week == day]

    def entries_for_date(self, timetable: Iterable[TimetableEntry], when: date) -> list[TimetableEntry]:
        return self.entries_for_day(timetable, DayOfWeek.for_date(when))

    @staticmethod
    def _start_end(entry: TimetableEntry, on: date) -> tuple[datetime, datetime]:
        slot = parse_time_slot(entry.time_slot)
        return datetime.combine(on, slot.start), datetime.combine(on, slot.end)

    def is_active(self, entry: TimetableEntry, now: datetime) -> bool:
        # One hour from the start, regardless of the slot's declared end.
        start, _ = self._start_end(entry, now.date())
        return start <= now <= start + timedelta(minutes=self.active_window_minutes)

    def is_upcoming(self, entry: TimetableEntry, now: datetime) -> bool:
        start, _ = self._start_end(entry, now.date())
        return start > now

    def is_reminder_due(self, entry: TimetableEntry, now: datetime) -> bool:
        _, end = self._start_end(entry, now.date())
        opens = end + timedelta(minutes=self.reminder_delay_minutes)
        closes = opens + timedelta(minutes=self.reminder_window_minutes)
        return opens <= now <= closes

    def active_entries(self, todays_entries: Iterable[TimetableEntry], now: datetime) -> list[TimetableEntry]:
        return [e for e in todays_entries if self.is_active(e, now)]

    def upcoming_entries(self, todays_entries: Iterable[TimetableEntry], now: datetime) -> list[TimetableEntry]:
        return [e for e in todays_entries if self.is_upcoming(e, now)]

    def finished_entries(self, todays_entries: Iterable[TimetableEntry], now: datetime) -> list[TimetableEntry]:
        return [e for e in todays_entries if not self.is_upcoming(e, now) and not self.is_active(e, now)]

    def next_entry(self, todays_entries: Iterable[TimetableEntry], now: datetime) -> Optional[TimetableEntry]:
        upcoming = self.upcoming_entries(todays_entries, now)
        if not upcoming:
            return None
        return min(upcoming, key=lambda e: parse_time_slot(e.time_slot).start)

    def due_reminders(
        self,
        todays_entries: Iterable[TimetableEntry],
        now: datetime,
        attendance_records_today: Iterable[AttendanceRecord],
    ) -> list[TimetableEntry]:
        """Entries whose reminder window is open and that have no record today.

        Stateless: repeated calls inside the window report the same entries,
        de-duplication is the caller's job.
        """

        marked = {r.subject for r in attendance_records_today if r.date == now.date()}
        return [e for e in todays_entries if e.subject not in marked and self.is_reminder_due(e, now)]

    def weekly_grid(self, timetable: Sequence[TimetableEntry]) -> WeeklyGrid:
        days = list(DayOfWeek)
        slots: list[str] = []
        for e in timetable:
            if e.time_slot not in slots:
                slots.append(e.time_slot)

        cells: dict[str, dict[DayOfWeek, Optional[str]]] = {s: {d: None for d in days} for s in slots}
        for e in timetable:
            # First entry wins if the admin double-booked a cell.
            if cells[e.time_slot][e.day_of_week] is None:
                cells[e.time_slot][e.day_of_week] = e.subject

        return WeeklyGrid(days=days, time_slots=slots, cells=cells)

    def subject_weekly_counts(self, timetable: Iterable[TimetableEntry]) -> dict[str, int]:
        return dict(Counter(e.subject for e in timetable))
