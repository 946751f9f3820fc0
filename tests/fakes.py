from __future__ import annotations

from datetime import date
from typing import Optional

from src.college_portal.college_portal.attendance.model import AttendanceRecord
from src.college_portal.college_portal.core.enums import DayOfWeek
from src.college_portal.college_portal.schedules.model import ClassGroup, TimetableEntry

# 2026-02-02 is a Monday
MONDAY = date(2026, 2, 2)
SUNDAY = date(2026, 2, 1)

CSE_3A = ClassGroup(branch="Computer Science", year=3, semester=5, section="A")


class InMemoryAttendance:
    def __init__(self, records=()):
        self._by_key: dict[tuple[str, date, str], AttendanceRecord] = {}
        self._groups: dict[tuple[str, date, str], ClassGroup] = {}
        for r in records:
            self._by_key[(r.student_id, r.date, r.subject)] = r

    def list_for_student(self, student_id: str):
        return [r for (sid, _, _), r in self._by_key.items() if sid == student_id]

    def list_for_student_on(self, student_id: str, on: date):
        return [r for (sid, d, _), r in self._by_key.items() if sid == student_id and d == on]

    def list_recent_for_student(self, student_id: str, limit: int):
        items = self.list_for_student(student_id)
        items.sort(key=lambda r: r.date, reverse=True)
        return items[:limit]

    def upsert(self, *, student_id, on, subject, is_present, group, time_slot=None) -> None:
        key = (student_id, on, subject)
        self._by_key[key] = AttendanceRecord(
            subject=subject,
            date=on,
            is_present=is_present,
            student_id=student_id,
            time_slot=time_slot,
        )
        self._groups[key] = group

    def marks_for_session(self, *, group, subject, on):
        return {
            sid: r.is_present
            for (sid, d, subj), r in self._by_key.items()
            if d == on and subj == subject and self._groups.get((sid, d, subj)) == group
        }

    def get(self, student_id: str, on: date, subject: str) -> Optional[AttendanceRecord]:
        return self._by_key.get((student_id, on, subject))


class InMemoryTimetables:
    def __init__(self, entries=()):
        self._entries: dict[str, TimetableEntry] = {}
        self._next_id = 1
        for e in entries:
            self._store(e)

    def _store(self, e: TimetableEntry) -> str:
        entry_id = e.entry_id or f"tt-{self._next_id}"
        self._next_id += 1
        self._entries[entry_id] = TimetableEntry(
            day_of_week=e.day_of_week,
            time_slot=e.time_slot,
            subject=e.subject,
            entry_id=entry_id,
            group=e.group,
        )
        return entry_id

    def list_for_group(self, group):
        return [e for e in self._entries.values() if e.group == group]

    def get_by_id(self, entry_id):
        return self._entries.get(entry_id)

    def create(self, *, group, day_of_week, time_slot, subject) -> str:
        return self._store(TimetableEntry(day_of_week=day_of_week, time_slot=time_slot, subject=subject, group=group))

    def update(self, *, entry_id, day_of_week, time_slot, subject) -> bool:
        old = self._entries.get(entry_id)
        if not old:
            return False
        self._entries[entry_id] = TimetableEntry(
            day_of_week=day_of_week,
            time_slot=time_slot,
            subject=subject,
            entry_id=entry_id,
            group=old.group,
        )
        return True

    def delete(self, *, entry_id) -> bool:
        return self._entries.pop(entry_id, None) is not None


def entry(day: DayOfWeek, slot: str, subject: str, group: ClassGroup = CSE_3A) -> TimetableEntry:
    return TimetableEntry(day_of_week=day, time_slot=slot, subject=subject, group=group)


def monday_timetable() -> list[TimetableEntry]:
    return [
        entry(DayOfWeek.MONDAY, "09:00-10:00", "Mathematics"),
        entry(DayOfWeek.MONDAY, "10:00-11:00", "Physics"),
        entry(DayOfWeek.MONDAY, "11:30-12:30", "Chemistry"),
        entry(DayOfWeek.TUESDAY, "09:00-10:00", "Physics Lab"),
    ]


