from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Iterable, Mapping, Optional, Sequence

from ..attendance.model import AttendanceRecord, ClassSessionStats, OverallAttendance, SubjectAttendanceSummary
from ..attendance.projector import AttendanceProjector
from ..core.enums import DayOfWeek, EntryStatus
from ..core.exceptions import MalformedTimeSlotError
from ..schedules.matcher import ScheduleMatcher
from ..schedules.model import TimetableEntry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DoneEntry:
    entry: TimetableEntry
    status: EntryStatus


@dataclass(frozen=True)
class TodayView:
    day: Optional[DayOfWeek]
    active: list[TimetableEntry]
    upcoming: list[TimetableEntry]
    done_with_status: list[DoneEntry]
    skipped: list[TimetableEntry] = field(default_factory=list)


class DashboardAggregator:
    """Combines projector and matcher outputs into dashboard values."""

    def __init__(self, projector: Optional[AttendanceProjector] = None, matcher: Optional[ScheduleMatcher] = None):
        self._projector = projector or AttendanceProjector()
        self._matcher = matcher or ScheduleMatcher()

    @property
    def projector(self) -> AttendanceProjector:
        return self._projector

    def overall_attendance(self, records: Iterable[AttendanceRecord]) -> OverallAttendance:
        """Flat count across all subjects, not an average of subject percentages."""
        records = list(records)
        total = len(records)
        attended = sum(1 for r in records if r.is_present)
        return OverallAttendance(
            attended_classes=attended,
            total_classes=total,
            percentage=self._projector.display_percentage(attended, total),
        )

    def subject_breakdown(self, records: Iterable[AttendanceRecord]) -> list[SubjectAttendanceSummary]:
        counts: dict[str, list[int]] = {}
        for r in records:
            c = counts.setdefault(r.subject, [0, 0])
            c[1] += 1
            if r.is_present:
                c[0] += 1

        return [self._projector.summarize(subject, attended, total) for subject, (attended, total) in counts.items()]

    def _partition(
        self, entries: Sequence[TimetableEntry], check: Callable[[TimetableEntry], bool], skipped: list[TimetableEntry]
    ) -> list[TimetableEntry]:
        out: list[TimetableEntry] = []
        for e in entries:
            if e in skipped:
                continue
            try:
                if check(e):
                    out.append(e)
            except MalformedTimeSlotError as exc:
                logger.warning("Skipping timetable entry %s (%s): %s", e.entry_id, e.subject, exc)
                skipped.append(e)
        return out

    def today_view(
        self,
        timetable: Iterable[TimetableEntry],
        records_today: Iterable[AttendanceRecord],
        now: datetime,
    ) -> TodayView:
        day = DayOfWeek.for_date(now.date())
        todays = self._matcher.entries_for_day(timetable, day)
        skipped: list[TimetableEntry] = []

        active = self._partition(todays, lambda e: self._matcher.is_active(e, now), skipped)
        upcoming = self._partition(todays, lambda e: self._matcher.is_upcoming(e, now), skipped)
        done = [e for e in todays if e not in skipped and e not in active and e not in upcoming]

        by_subject = {r.subject: r for r in records_today if r.date == now.date()}
        done_with_status = []
        for e in done:
            rec = by_subject.get(e.subject)
            if rec is None:
                status = EntryStatus.UNMARKED
            else:
                status = EntryStatus.PRESENT if rec.is_present else EntryStatus.ABSENT
            done_with_status.append(DoneEntry(entry=e, status=status))

        return TodayView(day=day, active=active, upcoming=upcoming, done_with_status=done_with_status, skipped=skipped)

    def due_reminders(
        self,
        timetable: Iterable[TimetableEntry],
        records_today: Iterable[AttendanceRecord],
        now: datetime,
    ) -> list[TimetableEntry]:
        todays = self._matcher.entries_for_date(timetable, now.date())
        records_today = list(records_today)
        due: list[TimetableEntry] = []
        for e in todays:
            try:
                due.extend(self._matcher.due_reminders([e], now, records_today))
            except MalformedTimeSlotError as exc:
                logger.warning("Skipping reminder check for %s (%s): %s", e.entry_id, e.subject, exc)
        return due

    def class_session_stats(self, marks: Mapping[str, bool]) -> ClassSessionStats:
        total = len(marks)
        present = sum(1 for v in marks.values() if v)
        return ClassSessionStats(
            total=total,
            present=present,
            absent=total - present,
            percentage=self._projector.display_percentage(present, total),
        )
