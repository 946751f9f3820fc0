from __future__ import annotations

from datetime import date
from typing import Mapping, Optional, Protocol, Sequence

from ..schedules.model import ClassGroup
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    """Store of raw attendance marks. Derived numbers are never stored."""

    def list_for_student(self, student_id: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_student_on(self, student_id: str, on: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_recent_for_student(self, student_id: str, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def upsert(
        self,
        *,
        student_id: str,
        on: date,
        subject: str,
        is_present: bool,
        group: ClassGroup,
        time_slot: Optional[str] = None,
    ) -> None:
        """Create or replace the record keyed on (student_id, on, subject)."""

        raise NotImplementedError

    def marks_for_session(self, *, group: ClassGroup, subject: str, on: date) -> Mapping[str, bool]:
        """student_id -> is_present for one class session."""

        raise NotImplementedError
