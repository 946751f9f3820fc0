from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from fractions import Fraction
from typing import Optional

from ..attendance.model import SubjectAttendanceSummary
from ..attendance.projector import AttendanceProjector
from ..attendance.repository import AttendanceRepository
from ..common.access import Identity, require_student
from ..core import constants
from ..core.enums import AttendanceBand
from ..core.exceptions import InvalidInputError
from ..schedules.matcher import ScheduleMatcher
from ..schedules.model import TimetableEntry
from ..schedules.repository import TimetableRepository
from .aggregator import DashboardAggregator, TodayView


@dataclass(frozen=True)
class PollingHints:
    """How often clients should re-request the today view and reminders."""

    active_seconds: int = constants.ACTIVE_POLL_SECONDS
    reminder_seconds: int = constants.REMINDER_POLL_SECONDS


def _entry_dict(e: TimetableEntry) -> dict:
    return {
        "id": e.entry_id,
        "day_of_week": e.day_of_week.value,
        "time_slot": e.time_slot,
        "subject": e.subject,
    }


class DashboardService:
    """Student dashboard read-models, recomputed from raw records on every call."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        timetables: TimetableRepository,
        *,
        aggregator: Optional[DashboardAggregator] = None,
        matcher: Optional[ScheduleMatcher] = None,
        polling: Optional[PollingHints] = None,
    ):
        self._attendance = attendance
        self._timetables = timetables
        self._matcher = matcher or ScheduleMatcher()
        self._aggregator = aggregator or DashboardAggregator(matcher=self._matcher)
        self._polling = polling or PollingHints()

    def _band(self, attended: int, total: int, projector: AttendanceProjector) -> AttendanceBand:
        # bands follow the exact ratio; the rounded percentage is display only
        if not projector.meets_threshold(attended, total):
            return AttendanceBand.CRITICAL
        if Fraction(100 * attended, total) >= constants.GOOD_ATTENDANCE_PERCENT:
            return AttendanceBand.GOOD
        return AttendanceBand.WARNING

    def _summary_dict(self, s: SubjectAttendanceSummary, projector: AttendanceProjector, ndigits: int = 0) -> dict:
        return {
            "subject": s.subject,
            "attended": s.attended,
            "total": s.total,
            "percentage": projector.display_percentage(s.attended, s.total, ndigits=ndigits),
            "classes_needed": s.classes_needed,
            "max_absences": s.max_absences,
            "meets_threshold": s.meets_threshold,
            "band": self._band(s.attended, s.total, projector).value,
        }

    def _projector_for(self, target_percent: Optional[int]) -> AttendanceProjector:
        if target_percent is None:
            return self._aggregator.projector
        if not constants.MIN_TARGET_PERCENT <= int(target_percent) <= constants.MAX_TARGET_PERCENT:
            raise InvalidInputError(
                f"Target must be between {constants.MIN_TARGET_PERCENT} and {constants.MAX_TARGET_PERCENT}"
            )
        return self._aggregator.projector.with_threshold(int(target_percent) / 100)

    def calculator(self, *, identity: Optional[Identity], target_percent: Optional[int] = None) -> dict:
        identity = require_student(identity)
        projector = self._projector_for(target_percent)
        aggregator = DashboardAggregator(projector=projector, matcher=self._matcher)

        records = list(self._attendance.list_for_student(identity.student_id))
        overall = aggregator.overall_attendance(records)
        attended, total = overall.attended_classes, overall.total_classes

        return {
            "target_percent": projector.threshold_percent,
            "overall": {
                "attended_classes": attended,
                "total_classes": total,
                "percentage": projector.display_percentage(attended, total, ndigits=1),
                "meets_threshold": projector.meets_threshold(attended, total),
                "classes_needed": projector.classes_needed(attended, total),
                "max_absences": projector.max_absences(attended, total),
            },
            "subjects": [self._summary_dict(s, projector, ndigits=1) for s in aggregator.subject_breakdown(records)],
        }

    def today(self, *, identity: Optional[Identity], now: datetime) -> dict:
        identity = require_student(identity)
        timetable = list(self._timetables.list_for_group(identity.group))
        records_today = list(self._attendance.list_for_student_on(identity.student_id, now.date()))
        view = self._aggregator.today_view(timetable, records_today, now)
        next_up = self._next_entry(view, now)
        return self._today_dict(view, next_up)

    def _next_entry(self, view: TodayView, now: datetime) -> Optional[TimetableEntry]:
        # upcoming entries already parsed cleanly inside today_view
        return self._matcher.next_entry(view.upcoming, now)

    def _today_dict(self, view: TodayView, next_up: Optional[TimetableEntry]) -> dict:
        return {
            "day": view.day.value if view.day else None,
            "active": [_entry_dict(e) for e in view.active],
            "upcoming": [_entry_dict(e) for e in view.upcoming],
            "done": [dict(_entry_dict(d.entry), status=d.status.value) for d in view.done_with_status],
            "skipped": [_entry_dict(e) for e in view.skipped],
            "next": _entry_dict(next_up) if next_up else None,
            "poll_seconds": {
                "active": self._polling.active_seconds,
                "reminders": self._polling.reminder_seconds,
            },
        }

    def reminders(self, *, identity: Optional[Identity], now: datetime) -> list[dict]:
        identity = require_student(identity)
        timetable = list(self._timetables.list_for_group(identity.group))
        records_today = list(self._attendance.list_for_student_on(identity.student_id, now.date()))
        return [_entry_dict(e) for e in self._aggregator.due_reminders(timetable, records_today, now)]

    def student_dashboard(self, *, identity: Optional[Identity], now: datetime) -> dict:
        identity = require_student(identity)
        projector = self._aggregator.projector

        records = list(self._attendance.list_for_student(identity.student_id))
        overall = self._aggregator.overall_attendance(records)

        return {
            "threshold_percent": projector.threshold_percent,
            "overall": {
                "attended_classes": overall.attended_classes,
                "total_classes": overall.total_classes,
                "percentage": overall.percentage,
                "band": self._band(overall.attended_classes, overall.total_classes, projector).value,
            },
            "subjects": [self._summary_dict(s, projector) for s in self._aggregator.subject_breakdown(records)],
            "today": self.today(identity=identity, now=now),
            "reminders": self.reminders(identity=identity, now=now),
        }
