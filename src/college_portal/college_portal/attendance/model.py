from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one class attendance mark.

    The store keeps at most one record per (student, date, subject).
    """

    subject: str
    date: date
    is_present: bool
    student_id: Optional[str] = None
    time_slot: Optional[str] = None


@dataclass(frozen=True)
class SubjectAttendanceSummary:
    """Read-model derived from raw records on every read; never persisted."""

    subject: str
    attended: int
    total: int
    percentage: float
    classes_needed: int
    max_absences: int
    meets_threshold: bool


@dataclass(frozen=True)
class OverallAttendance:
    attended_classes: int
    total_classes: int
    percentage: float


@dataclass(frozen=True)
class ClassSessionStats:
    """Totals for one admin marking sheet (one subject, date and class group)."""

    total: int
    present: int
    absent: int
    percentage: float
