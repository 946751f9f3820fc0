from __future__ import annotations

import uuid
from typing import Optional, Sequence

from ..core.enums import DayOfWeek
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import ClassGroup, TimetableEntry
from .repository import TimetableRepository

# FIELD() keeps Monday..Saturday order instead of alphabetical.
_DAY_ORDER = ", ".join(f"'{d.value}'" for d in DayOfWeek)


class MySQLTimetableRepository(TimetableRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _to_entry(r: dict) -> TimetableEntry:
        return TimetableEntry(
            day_of_week=DayOfWeek(r["day_of_week"]),
            time_slot=r["time_slot"],
            subject=r["subject"],
            entry_id=str(r["id"]),
            group=ClassGroup(
                branch=r["branch"],
                year=int(r["year"]),
                semester=int(r["semester"]),
                section=r["section"],
            ),
        )

    def list_for_group(self, group: ClassGroup) -> Sequence[TimetableEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT id, day_of_week, time_slot, subject, branch, year, semester, section
                FROM timetables
                WHERE branch=%s AND year=%s AND semester=%s AND section=%s
                ORDER BY FIELD(day_of_week, {_DAY_ORDER}), time_slot ASC
                """,
                (group.branch, int(group.year), int(group.semester), group.section),
            )
            return [self._to_entry(r) for r in fetchall(cur)]

    def get_by_id(self, entry_id: str) -> Optional[TimetableEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, day_of_week, time_slot, subject, branch, year, semester, section
                FROM timetables
                WHERE id=%s
                """,
                (entry_id,),
            )
            r = fetchone(cur)
            return self._to_entry(r) if r else None

    def create(self, *, group: ClassGroup, day_of_week: DayOfWeek, time_slot: str, subject: str) -> str:
        entry_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO timetables(id, day_of_week, time_slot, subject, branch, year, semester, section)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    entry_id,
                    day_of_week.value,
                    time_slot,
                    subject,
                    group.branch,
                    int(group.year),
                    int(group.semester),
                    group.section,
                ),
            )
        return entry_id

    def update(self, *, entry_id: str, day_of_week: DayOfWeek, time_slot: str, subject: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE timetables
                SET day_of_week=%s, time_slot=%s, subject=%s, updated_at=CURRENT_TIMESTAMP
                WHERE id=%s
                """,
                (day_of_week.value, time_slot, subject, entry_id),
            )
            return cur.rowcount > 0

    def delete(self, *, entry_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM timetables WHERE id=%s", (entry_id,))
            return cur.rowcount > 0
