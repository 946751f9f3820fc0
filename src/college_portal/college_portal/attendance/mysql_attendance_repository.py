from __future__ import annotations

from datetime import date
from typing import Mapping, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, normalize_mysql_date
from ..schedules.model import ClassGroup
from .model import AttendanceRecord
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _to_record(r: dict) -> AttendanceRecord:
        return AttendanceRecord(
            subject=r["subject"],
            date=normalize_mysql_date(r["date"]),
            is_present=bool(r["is_present"]),
            student_id=str(r["student_id"]) if r.get("student_id") is not None else None,
            time_slot=r.get("time_slot") or None,
        )

    def list_for_student(self, student_id: str) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT student_id, date, subject, is_present, time_slot
                FROM attendance
                WHERE student_id=%s
                ORDER BY date ASC, subject ASC
                """,
                (student_id,),
            )
            return [self._to_record(r) for r in fetchall(cur)]

    def list_for_student_on(self, student_id: str, on: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT student_id, date, subject, is_present, time_slot
                FROM attendance
                WHERE student_id=%s AND date=%s
                """,
                (student_id, on),
            )
            return [self._to_record(r) for r in fetchall(cur)]

    def list_recent_for_student(self, student_id: str, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT student_id, date, subject, is_present, time_slot
                FROM attendance
                WHERE student_id=%s
                ORDER BY date DESC, updated_at DESC
                LIMIT %s
                """,
                (student_id, int(limit)),
            )
            return [self._to_record(r) for r in fetchall(cur)]

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
        # Relies on the store's UNIQUE (student_id, date, subject).
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(student_id, date, subject, branch, year, semester, section, is_present, time_slot)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    is_present=VALUES(is_present),
                    time_slot=COALESCE(VALUES(time_slot), time_slot),
                    updated_at=CURRENT_TIMESTAMP
                """,
                (
                    student_id,
                    on,
                    subject,
                    group.branch,
                    int(group.year),
                    int(group.semester),
                    group.section,
                    bool(is_present),
                    time_slot,
                ),
            )

    def marks_for_session(self, *, group: ClassGroup, subject: str, on: date) -> Mapping[str, bool]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT student_id, is_present
                FROM attendance
                WHERE date=%s AND subject=%s AND branch=%s AND year=%s AND semester=%s AND section=%s
                """,
                (on, subject, group.branch, int(group.year), int(group.semester), group.section),
            )
            return {str(r["student_id"]): bool(r["is_present"]) for r in fetchall(cur) if r.get("student_id")}
