from __future__ import annotations

from datetime import datetime

import pytest

from src.college_portal.college_portal.common.access import Identity
from src.college_portal.college_portal.core.enums import Role
from tests.fakes import CSE_3A, InMemoryAttendance, InMemoryTimetables, monday_timetable


@pytest.fixture
def fixed_now() -> datetime:
    # Monday, during the 09:00 Mathematics class
    return datetime(2026, 2, 2, 9, 30)


@pytest.fixture
def student() -> Identity:
    return Identity(user_id="u-1", role=Role.STUDENT, student_id="s-1", group=CSE_3A)


@pytest.fixture
def admin() -> Identity:
    return Identity(user_id="u-admin", role=Role.ADMIN)


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def timetables_repo() -> InMemoryTimetables:
    return InMemoryTimetables(monday_timetable())
