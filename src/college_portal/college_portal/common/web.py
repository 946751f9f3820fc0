from __future__ import annotations

import logging
from functools import wraps
from typing import Optional

from flask import Flask, jsonify, session
from werkzeug.exceptions import HTTPException

from ..core.exceptions import AuthorizationError, DomainError, ValidationError
from ..schedules.model import ClassGroup
from .access import Identity

logger = logging.getLogger(__name__)


def json_error(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def current_identity() -> Optional[Identity]:
    """Identity placed in the session by the external auth provider."""
    return Identity.from_session(session)


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if current_identity() is None:
            return json_error("Please sign in to continue", 401)
        return view(*args, **kwargs)

    return wrapper


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(AuthorizationError)
    def _forbidden(e: AuthorizationError):
        return json_error(str(e), 403)

    @app.errorhandler(ValidationError)
    def _invalid(e: ValidationError):
        return json_error(str(e), 400)

    @app.errorhandler(DomainError)
    def _domain(e: DomainError):
        return json_error(str(e), 400)

    @app.errorhandler(Exception)
    def _unexpected(e: Exception):
        if isinstance(e, HTTPException):
            return json_error(e.description or e.name, e.code or 500)
        logger.exception("Unhandled error")
        return json_error("Internal server error", 500)


def group_from_mapping(data) -> ClassGroup:
    """Class group from request args or a JSON body."""

    try:
        group = ClassGroup(
            branch=str(data.get("branch") or "").strip(),
            year=int(data.get("year") or 0),
            semester=int(data.get("semester") or 0),
            section=str(data.get("section") or "").strip(),
        )
    except (TypeError, ValueError):
        raise ValidationError("Invalid class group")

    if not group.branch or not group.section or group.year <= 0 or group.semester <= 0:
        raise ValidationError("Branch, year, semester and section are required")
    return group
