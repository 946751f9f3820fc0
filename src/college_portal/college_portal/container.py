from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.projector import AttendanceProjector
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core import constants
from .dashboard.aggregator import DashboardAggregator
from .dashboard.service import DashboardService, PollingHints
from .database.connection import DBConfig, DatabaseConnection
from .schedules.matcher import ScheduleMatcher
from .schedules.mysql_timetable_repository import MySQLTimetableRepository
from .schedules.repository import TimetableRepository
from .schedules.service import TimetableService


@dataclass(frozen=True)
class Container:
    attendance_repo: AttendanceRepository
    timetables_repo: TimetableRepository

    projector: AttendanceProjector
    matcher: ScheduleMatcher
    aggregator: DashboardAggregator

    attendance_service: AttendanceService
    timetable_service: TimetableService
    dashboard_service: DashboardService

    history_limit: int = constants.DEFAULT_HISTORY_LIMIT
    conn: Optional[DatabaseConnection] = None


def build_services(
    *,
    attendance_repo: AttendanceRepository,
    timetables_repo: TimetableRepository,
    settings: Any = None,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services over any repository implementation (MySQL in the app, in-memory in tests)."""

    def setting(name: str, default):
        return getattr(settings, name, default) if settings is not None else default

    projector = AttendanceProjector(threshold=float(setting("ATTENDANCE_THRESHOLD", constants.DEFAULT_ATTENDANCE_THRESHOLD)))
    matcher = ScheduleMatcher(
        active_window_minutes=int(setting("ACTIVE_WINDOW_MINUTES", constants.ACTIVE_WINDOW_MINUTES)),
        reminder_delay_minutes=int(setting("REMINDER_DELAY_MINUTES", constants.REMINDER_DELAY_MINUTES)),
        reminder_window_minutes=int(setting("REMINDER_WINDOW_MINUTES", constants.REMINDER_WINDOW_MINUTES)),
    )
    aggregator = DashboardAggregator(projector=projector, matcher=matcher)
    polling = PollingHints(
        active_seconds=int(setting("ACTIVE_POLL_SECONDS", constants.ACTIVE_POLL_SECONDS)),
        reminder_seconds=int(setting("REMINDER_POLL_SECONDS", constants.REMINDER_POLL_SECONDS)),
    )

    attendance_service = AttendanceService(attendance_repo, timetables_repo, matcher=matcher, aggregator=aggregator)
    timetable_service = TimetableService(timetables_repo, matcher=matcher)
    dashboard_service = DashboardService(
        attendance_repo,
        timetables_repo,
        aggregator=aggregator,
        matcher=matcher,
        polling=polling,
    )

    return Container(
        attendance_repo=attendance_repo,
        timetables_repo=timetables_repo,
        projector=projector,
        matcher=matcher,
        aggregator=aggregator,
        attendance_service=attendance_service,
        timetable_service=timetable_service,
        dashboard_service=dashboard_service,
        history_limit=int(setting("HISTORY_LIMIT", constants.DEFAULT_HISTORY_LIMIT)),
        conn=conn,
    )


def build_container(*, db_config: dict, settings: Any = None) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
    )
    conn = DatabaseConnection.get_instance(config)
    return build_services(
        attendance_repo=MySQLAttendanceRepository(conn),
        timetables_repo=MySQLTimetableRepository(conn),
        settings=settings,
        conn=conn,
    )
