from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.access import has_role
from ..common.web import current_identity, group_from_mapping, login_required
from ..container import Container
from ..core.enums import Role


def _entry_dict(e) -> dict:
    return {
        "id": e.entry_id,
        "day_of_week": e.day_of_week.value,
        "time_slot": e.time_slot,
        "subject": e.subject,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/timetable", methods=["GET"], endpoint="api_timetable")
    @login_required
    def api_timetable():
        identity = current_identity()
        # Students always see their own group; admins pick one.
        if has_role(identity, Role.ADMIN) or identity.group is None:
            group = group_from_mapping(request.args)
        else:
            group = identity.group

        grid = container.timetable_service.grid(group)
        return jsonify(
            {
                "entries": [_entry_dict(e) for e in container.timetable_service.week(group)],
                "grid": {
                    "days": [d.value for d in grid.days],
                    "time_slots": grid.time_slots,
                    "rows": [
                        {"time_slot": slot, "cells": {d.value: grid.cells[slot][d] for d in grid.days}}
                        for slot in grid.time_slots
                    ],
                },
                "subject_counts": container.timetable_service.subject_counts(group),
            }
        )

    @app.route("/api/admin/timetable", methods=["POST"], endpoint="api_admin_timetable_add")
    @login_required
    def api_admin_timetable_add():
        data = request.get_json(silent=True) or {}
        entry_id = container.timetable_service.add_entry(
            identity=current_identity(),
            group=group_from_mapping(data),
            day_of_week=data.get("day_of_week"),
            time_slot=str(data.get("time_slot") or ""),
            subject=str(data.get("subject") or ""),
        )
        return jsonify({"success": True, "id": entry_id}), 201

    @app.route("/api/admin/timetable/<entry_id>", methods=["PUT"], endpoint="api_admin_timetable_update")
    @login_required
    def api_admin_timetable_update(entry_id: str):
        data = request.get_json(silent=True) or {}
        container.timetable_service.update_entry(
            identity=current_identity(),
            entry_id=entry_id,
            day_of_week=data.get("day_of_week"),
            time_slot=str(data.get("time_slot") or ""),
            subject=str(data.get("subject") or ""),
        )
        return jsonify({"success": True})

    @app.route("/api/admin/timetable/<entry_id>", methods=["DELETE"], endpoint="api_admin_timetable_delete")
    @login_required
    def api_admin_timetable_delete(entry_id: str):
        container.timetable_service.delete_entry(identity=current_identity(), entry_id=entry_id)
        return jsonify({"success": True})
