from __future__ import annotations

from flask import Flask, jsonify, request

from ..common import datetime_utils
from ..common.web import current_identity, login_required
from ..container import Container
from ..core.exceptions import InvalidInputError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/dashboard", methods=["GET"], endpoint="api_dashboard")
    @login_required
    def api_dashboard():
        data = container.dashboard_service.student_dashboard(identity=current_identity(), now=datetime_utils.now_local())
        return jsonify(data)

    @app.route("/api/attendance/calculator", methods=["GET"], endpoint="api_attendance_calculator")
    @login_required
    def api_attendance_calculator():
        target_s = request.args.get("target")
        target = None
        if target_s:
            try:
                target = int(target_s)
            except ValueError:
                raise InvalidInputError("Target must be a whole percentage")

        data = container.dashboard_service.calculator(identity=current_identity(), target_percent=target)
        return jsonify(data)

    @app.route("/api/attendance/today", methods=["GET"], endpoint="api_attendance_today")
    @login_required
    def api_attendance_today():
        data = container.dashboard_service.today(identity=current_identity(), now=datetime_utils.now_local())
        return jsonify(data)

    @app.route("/api/attendance/reminders", methods=["GET"], endpoint="api_attendance_reminders")
    @login_required
    def api_attendance_reminders():
        items = container.dashboard_service.reminders(identity=current_identity(), now=datetime_utils.now_local())
        return jsonify({"reminders": items})
