from __future__ import annotations

from ..core.exceptions import InvalidInputError, ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_count(value: object, field_name: str) -> int:
    # bool is an int subclass but never a valid class count
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInputError(f"{field_name} must be an integer, got {value!r}")
    if value < 0:
        raise InvalidInputError(f"{field_name} must not be negative, got {value}")
    return value


def require_counts(attended: object, total: object) -> tuple[int, int]:
    attended = require_count(attended, "attended")
    total = require_count(total, "total")
    if attended > total:
        raise InvalidInputError(f"attended ({attended}) cannot exceed total ({total})")
    return attended, total
