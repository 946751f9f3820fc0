from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Iterable, Mapping, Optional

from ..common.access import Identity, require_role, require_student
from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..dashboard.aggregator import DashboardAggregator
from ..schedules.matcher import ScheduleMatcher
from ..schedules.model import ClassGroup
from ..schedules.repository import TimetableRepository
from .model import AttendanceRecord, ClassSessionStats
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Use cases that write attendance: student self-marking and admin bulk entry."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        timetables: TimetableRepository,
        *,
        matcher: Optional[ScheduleMatcher] = None,
        aggregator: Optional[DashboardAggregator] = None,
    ):
        self._attendance = attendance
        self._timetables = timetables
        self._matcher = matcher or ScheduleMatcher()
        self._aggregator = aggregator or DashboardAggregator(matcher=self._matcher)

    def mark_self(self, *, identity: Optional[Identity], subject: str, is_present: bool, now: datetime) -> AttendanceRecord:
        identity = require_student(identity)
        subject = require_non_empty(subject, "Subject")

        todays = self._matcher.entries_for_date(self._timetables.list_for_group(identity.group), now.date())
        entry = next((e for e in todays if e.subject == subject), None)
        if entry is None:
            raise ValidationError(f"{subject} is not scheduled today")

        self._attendance.upsert(
            student_id=identity.student_id,
            on=now.date(),
            subject=subject,
            is_present=bool(is_present),
            group=identity.group,
            time_slot=entry.time_slot,
        )
        logger.info(
            "Student %s marked %s for %s on %s",
            identity.student_id,
            "present" if is_present else "absent",
            subject,
            now.date(),
        )
        return AttendanceRecord(
            subject=subject,
            date=now.date(),
            is_present=bool(is_present),
            student_id=identity.student_id,
            time_slot=entry.time_slot,
        )

    def bulk_mark(
        self,
        *,
        identity: Optional[Identity],
        group: ClassGroup,
        subject: str,
        on: date,
        marks: Mapping[str, bool],
    ) -> ClassSessionStats:
        require_role(identity, Role.ADMIN)
        subject = require_non_empty(subject, "Subject")
        if not marks:
            raise ValidationError("No students to mark")

        for student_id, is_present in marks.items():
            self._attendance.upsert(
                student_id=str(student_id),
                on=on,
                subject=subject,
                is_present=bool(is_present),
                group=group,
            )

        stats = self._aggregator.class_session_stats(marks)
        logger.info(
            "Admin %s saved %s attendance for %s on %s: %s/%s present",
            identity.user_id,
            subject,
            group,
            on,
            stats.present,
            stats.total,
        )
        return stats

    def mark_all(
        self,
        *,
        identity: Optional[Identity],
        group: ClassGroup,
        subject: str,
        on: date,
        student_ids: Iterable[str],
        is_present: bool,
    ) -> ClassSessionStats:
        marks = {str(sid): bool(is_present) for sid in student_ids}
        return self.bulk_mark(identity=identity, group=group, subject=subject, on=on, marks=marks)

    def session_stats(self, *, identity: Optional[Identity], group: ClassGroup, subject: str, on: date) -> ClassSessionStats:
        require_role(identity, Role.ADMIN)
        return self._aggregator.class_session_stats(self._attendance.marks_for_session(group=group, subject=subject, on=on))

    def history_ui(self, student_id: str, *, limit: int = 15) -> list[dict]:
        rows = self._attendance.list_recent_for_student(student_id, limit)
        return [self._to_ui(r) for r in rows]

    def _to_ui(self, r: AttendanceRecord) -> dict:
        return {
            "date": r.date.strftime("%Y-%m-%d"),
            "subject": r.subject,
            "time_slot": r.time_slot or "-",
            "status": "Present" if r.is_present else "Absent",
            "css_class": "bg-success" if r.is_present else "bg-danger",
        }
