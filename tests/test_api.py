from __future__ import annotations

from datetime import datetime

import pytest

from src.college_portal.college_portal.common import datetime_utils
from src.college_portal.college_portal.container import build_services
from src.college_portal.college_portal.main import create_app
from tests.fakes import MONDAY, InMemoryAttendance, InMemoryTimetables, monday_timetable

STUDENT_SESSION = {
    "user_id": "u-1",
    "role": "student",
    "student_id": "s-1",
    "branch": "Computer Science",
    "year": 3,
    "semester": 5,
    "section": "A",
}
ADMIN_SESSION = {"user_id": "u-admin", "role": "admin"}
GROUP = {"branch": "Computer Science", "year": 3, "semester": 5, "section": "A"}


@pytest.fixture
def repos():
    return InMemoryAttendance(), InMemoryTimetables(monday_timetable())


@pytest.fixture
def client(monkeypatch, repos):
    monkeypatch.setenv("APP_ENV", "testing")
    monkeypatch.setattr(datetime_utils, "now_local", lambda: datetime(2026, 2, 2, 10, 12))

    attendance_repo, timetables_repo = repos
    container = build_services(attendance_repo=attendance_repo, timetables_repo=timetables_repo)
    app = create_app(container)
    return app.test_client()


def sign_in(client, data: dict) -> None:
    with client.session_transaction() as sess:
        sess.update(data)


def test_requires_identity(client):
    resp = client.get("/api/dashboard")

    assert resp.status_code == 401
    assert resp.get_json()["success"] is False


def test_student_dashboard(client):
    sign_in(client, STUDENT_SESSION)

    resp = client.get("/api/dashboard")

    assert resp.status_code == 200
    data = resp.get_json()
    assert data["overall"]["total_classes"] == 0
    assert [e["subject"] for e in data["today"]["active"]] == ["Physics"]
    assert [e["subject"] for e in data["reminders"]] == ["Mathematics"]


def test_mark_then_reminder_disappears(client, repos):
    sign_in(client, STUDENT_SESSION)

    resp = client.post("/api/attendance/mark", json={"subject": "Mathematics", "is_present": True})
    assert resp.status_code == 200
    assert resp.get_json()["success"] is True
    assert repos[0].get("s-1", MONDAY, "Mathematics").is_present is True

    assert client.get("/api/attendance/reminders").get_json() == {"reminders": []}
    history = client.get("/api/attendance/history").get_json()["history"]
    assert history[0]["status"] == "Present"


def test_mark_unscheduled_subject_is_bad_request(client):
    sign_in(client, STUDENT_SESSION)

    resp = client.post("/api/attendance/mark", json={"subject": "Physics Lab", "is_present": True})

    assert resp.status_code == 400
    assert "not scheduled" in resp.get_json()["message"]


def test_calculator_target_parameter(client):
    sign_in(client, STUDENT_SESSION)

    assert client.get("/api/attendance/calculator?target=80").get_json()["target_percent"] == 80
    assert client.get("/api/attendance/calculator?target=abc").status_code == 400
    assert client.get("/api/attendance/calculator?target=20").status_code == 400


def test_student_cannot_use_admin_endpoints(client):
    sign_in(client, STUDENT_SESSION)

    resp = client.post("/api/admin/timetable", json=dict(GROUP, day_of_week="Monday", time_slot="14:00-15:00", subject="English"))

    assert resp.status_code == 403


def test_admin_timetable_crud(client, repos):
    sign_in(client, ADMIN_SESSION)

    resp = client.post("/api/admin/timetable", json=dict(GROUP, day_of_week="Monday", time_slot="14:00-15:00", subject="English"))
    assert resp.status_code == 201
    entry_id = resp.get_json()["id"]

    resp = client.put(f"/api/admin/timetable/{entry_id}", json={"day_of_week": "Tuesday", "time_slot": "14:00-15:00", "subject": "English"})
    assert resp.status_code == 200

    grid = client.get("/api/timetable", query_string=GROUP).get_json()["grid"]
    row = next(r for r in grid["rows"] if r["time_slot"] == "14:00-15:00")
    assert row["cells"]["Tuesday"] == "English"
    assert row["cells"]["Monday"] is None

    assert client.delete(f"/api/admin/timetable/{entry_id}").status_code == 200
    assert client.delete(f"/api/admin/timetable/{entry_id}").status_code == 400


def test_admin_rejects_malformed_slot(client):
    sign_in(client, ADMIN_SESSION)

    resp = client.post("/api/admin/timetable", json=dict(GROUP, day_of_week="Monday", time_slot="2pm-3pm", subject="English"))

    assert resp.status_code == 400
    assert "Malformed time slot" in resp.get_json()["message"]


def test_admin_bulk_attendance(client):
    sign_in(client, ADMIN_SESSION)
    payload = dict(GROUP, subject="Mathematics", date="2026-02-02", marks={"s-1": True, "s-2": False})

    resp = client.post("/api/admin/attendance", json=payload)

    assert resp.status_code == 200
    assert resp.get_json()["stats"] == {"total": 2, "present": 1, "absent": 1, "percentage": 50}

    stats = client.get("/api/admin/attendance", query_string=dict(GROUP, subject="Mathematics", date="2026-02-02")).get_json()
    assert stats["present"] == 1


def test_admin_bulk_attendance_bad_date(client):
    sign_in(client, ADMIN_SESSION)

    resp = client.post("/api/admin/attendance", json=dict(GROUP, subject="Mathematics", date="02/02/2026", marks={"s-1": True}))

    assert resp.status_code == 400


def test_student_timetable_uses_own_group(client):
    sign_in(client, STUDENT_SESSION)

    data = client.get("/api/timetable").get_json()

    assert len(data["entries"]) == 4
    assert data["subject_counts"]["Mathematics"] == 1


@pytest.mark.parametrize("value", ["false", 0, None])
def test_mark_requires_json_boolean(client, repos, value):
    sign_in(client, STUDENT_SESSION)

    resp = client.post("/api/attendance/mark", json={"subject": "Mathematics", "is_present": value})

    assert resp.status_code == 400
    assert repos[0].get("s-1", MONDAY, "Mathematics") is None


@pytest.mark.parametrize("payload", [{"marks": {"s-1": "false"}}, {"marks": {"s-1": 1}}, {"mark_all": "true", "student_ids": ["s-1"]}])
def test_admin_attendance_requires_json_booleans(client, repos, payload):
    sign_in(client, ADMIN_SESSION)

    resp = client.post("/api/admin/attendance", json=dict(GROUP, subject="Mathematics", date="2026-02-02", **payload))

    assert resp.status_code == 400
    assert repos[0].get("s-1", MONDAY, "Mathematics") is None


def test_malformed_session_is_treated_as_signed_out(client):
    sign_in(client, dict(STUDENT_SESSION, year="third"))

    resp = client.get("/api/dashboard")

    assert resp.status_code == 401
