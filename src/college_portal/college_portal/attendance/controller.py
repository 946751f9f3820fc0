from __future__ import annotations

from datetime import date

from flask import Flask, jsonify, request

from ..common import datetime_utils
from ..common.access import require_student
from ..common.web import current_identity, group_from_mapping, login_required
from ..container import Container
from ..core.exceptions import ValidationError


def _session_date(value) -> date:
    try:
        return datetime_utils.parse_optional_iso_date(value) or datetime_utils.now_local().date()
    except ValueError:
        raise ValidationError("Date must be YYYY-MM-DD")


def _json_bool(value, name: str) -> bool:
    if not isinstance(value, bool):
        raise ValidationError(f"{name} must be true or false")
    return value


def _stats_dict(stats) -> dict:
    return {
        "total": stats.total,
        "present": stats.present,
        "absent": stats.absent,
        "percentage": stats.percentage,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/history", methods=["GET"], endpoint="api_attendance_history")
    @login_required
    def api_attendance_history():
        identity = require_student(current_identity())
        rows = container.attendance_service.history_ui(identity.student_id, limit=container.history_limit)
        return jsonify({"history": rows})

    @app.route("/api/attendance/mark", methods=["POST"], endpoint="api_attendance_mark")
    @login_required
    def api_attendance_mark():
        data = request.get_json(silent=True) or {}

        record = container.attendance_service.mark_self(
            identity=current_identity(),
            subject=str(data.get("subject") or ""),
            is_present=_json_bool(data.get("is_present"), "is_present"),
            now=datetime_utils.now_local(),
        )
        return jsonify(
            {
                "success": True,
                "message": f"Attendance marked as {'Present' if record.is_present else 'Absent'} for {record.subject}",
            }
        )

    @app.route("/api/admin/attendance", methods=["GET", "POST"], endpoint="api_admin_attendance")
    @login_required
    def api_admin_attendance():
        if request.method == "GET":
            group = group_from_mapping(request.args)
            on = _session_date(request.args.get("date"))
            stats = container.attendance_service.session_stats(
                identity=current_identity(),
                group=group,
                subject=request.args.get("subject") or "",
                on=on,
            )
            return jsonify(_stats_dict(stats))

        data = request.get_json(silent=True) or {}
        group = group_from_mapping(data)
        on = _session_date(data.get("date"))

        if "mark_all" in data:
            stats = container.attendance_service.mark_all(
                identity=current_identity(),
                group=group,
                subject=str(data.get("subject") or ""),
                on=on,
                student_ids=data.get("student_ids") or [],
                is_present=_json_bool(data["mark_all"], "mark_all"),
            )
        else:
            marks = data.get("marks") or {}
            if not isinstance(marks, dict):
                raise ValidationError("marks must map student ids to true/false")
            stats = container.attendance_service.bulk_mark(
                identity=current_identity(),
                group=group,
                subject=str(data.get("subject") or ""),
                on=on,
                marks={str(k): _json_bool(v, f"Mark for {k}") for k, v in marks.items()},
            )

        return jsonify({"success": True, "stats": _stats_dict(stats)})
