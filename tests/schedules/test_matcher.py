from __future__ import annotations

from datetime import datetime

import pytest

from src.college_portal.college_portal.attendance.model import AttendanceRecord
from src.college_portal.college_portal.core.enums import DayOfWeek
from src.college_portal.college_portal.core.exceptions import MalformedTimeSlotError
from src.college_portal.college_portal.schedules.matcher import ScheduleMatcher
from tests.fakes import MONDAY, SUNDAY, entry, monday_timetable


def at(hour: int, minute: int) -> datetime:
    return datetime(MONDAY.year, MONDAY.month, MONDAY.day, hour, minute)


def test_entries_for_day_is_exact_match():
    m = ScheduleMatcher()
    timetable = monday_timetable()

    monday = m.entries_for_day(timetable, DayOfWeek.MONDAY)
    assert [e.subject for e in monday] == ["Mathematics", "Physics", "Chemistry"]
    assert [e.subject for e in m.entries_for_day(timetable, DayOfWeek.TUESDAY)] == ["Physics Lab"]
    assert m.entries_for_day(timetable, DayOfWeek.SATURDAY) == []


def test_sunday_has_no_entries():
    m = ScheduleMatcher()

    assert DayOfWeek.for_date(SUNDAY) is None
    assert m.entries_for_date(monday_timetable(), SUNDAY) == []
    assert len(m.entries_for_date(monday_timetable(), MONDAY)) == 3


def test_entry_is_active_inside_its_hour():
    m = ScheduleMatcher()
    math = entry(DayOfWeek.MONDAY, "09:00-10:00", "Mathematics")

    assert m.active_entries([math], at(9, 30)) == [math]
    assert m.active_entries([math], at(9, 0)) == [math]
    assert m.active_entries([math], at(10, 0)) == [math]
    assert m.active_entries([math], at(8, 59)) == []
    assert m.active_entries([math], at(10, 1)) == []


def test_short_slot_stays_active_for_a_full_hour_from_start():
    m = ScheduleMatcher()
    short = entry(DayOfWeek.MONDAY, "09:00-09:40", "Seminar")

    # Declared end is 09:40 but the active window runs to 10:00.
    assert m.active_entries([short], at(9, 50)) == [short]
    assert m.active_entries([short], at(10, 5)) == []


def test_active_window_is_configurable():
    m = ScheduleMatcher(active_window_minutes=30)
    math = entry(DayOfWeek.MONDAY, "09:00-10:00", "Mathematics")

    assert m.active_entries([math], at(9, 45)) == []


def test_reminder_fires_between_ten_and_fifteen_minutes_after_end():
    m = ScheduleMatcher()
    math = entry(DayOfWeek.MONDAY, "09:00-10:00", "Mathematics")

    assert m.due_reminders([math], at(10, 12), []) == [math]
    assert m.due_reminders([math], at(10, 10), []) == [math]
    assert m.due_reminders([math], at(10, 15), []) == [math]
    assert m.due_reminders([math], at(10, 9), []) == []
    assert m.due_reminders([math], at(10, 20), []) == []


def test_reminder_skips_subjects_already_marked_today():
    m = ScheduleMatcher()
    math = entry(DayOfWeek.MONDAY, "09:00-10:00", "Mathematics")
    absent_today = AttendanceRecord(subject="Mathematics", date=MONDAY, is_present=False)

    assert m.due_reminders([math], at(10, 12), [absent_today]) == []


def test_reminder_ignores_records_from_other_days():
    m = ScheduleMatcher()
    math = entry(DayOfWeek.MONDAY, "09:00-10:00", "Mathematics")
    last_week = AttendanceRecord(subject="Mathematics", date=datetime(2026, 1, 26).date(), is_present=True)

    assert m.due_reminders([math], at(10, 12), [last_week]) == [math]


def test_reminder_is_reported_on_every_call_within_window():
    m = ScheduleMatcher()
    math = entry(DayOfWeek.MONDAY, "09:00-10:00", "Mathematics")

    first = m.due_reminders([math], at(10, 11), [])
    second = m.due_reminders([math], at(10, 11), [])
    assert first == second == [math]


def test_upcoming_finished_and_next():
    m = ScheduleMatcher()
    todays = m.entries_for_date(monday_timetable(), MONDAY)
    now = at(10, 30)

    assert [e.subject for e in m.active_entries(todays, now)] == ["Physics"]
    assert [e.subject for e in m.upcoming_entries(todays, now)] == ["Chemistry"]
    assert [e.subject for e in m.finished_entries(todays, now)] == ["Mathematics"]
    assert m.next_entry(todays, now).subject == "Chemistry"
    assert m.next_entry(todays, at(13, 0)) is None


def test_malformed_slot_raises_from_matching():
    m = ScheduleMatcher()
    broken = entry(DayOfWeek.MONDAY, "9am-10am", "Mathematics")

    with pytest.raises(MalformedTimeSlotError):
        m.active_entries([broken], at(9, 30))
    with pytest.raises(MalformedTimeSlotError):
        m.due_reminders([broken], at(10, 12), [])


def test_weekly_grid_marks_free_periods():
    m = ScheduleMatcher()
    grid = m.weekly_grid(monday_timetable())

    assert grid.days[0] == DayOfWeek.MONDAY
    assert grid.days[-1] == DayOfWeek.SATURDAY
    assert grid.time_slots == ["09:00-10:00", "10:00-11:00", "11:30-12:30"]
    assert grid.cells["09:00-10:00"][DayOfWeek.MONDAY] == "Mathematics"
    assert grid.cells["09:00-10:00"][DayOfWeek.TUESDAY] == "Physics Lab"
    assert grid.cells["10:00-11:00"][DayOfWeek.TUESDAY] is None


def test_subject_weekly_counts():
    m = ScheduleMatcher()
    timetable = monday_timetable() + [entry(DayOfWeek.FRIDAY, "11:30-12:30", "Physics")]

    counts = m.subject_weekly_counts(timetable)
    assert counts["Physics"] == 2
    assert counts["Mathematics"] == 1
