from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..core.enums import Role
from ..core.exceptions import AuthorizationError
from ..schedules.model import ClassGroup


@dataclass(frozen=True)
class Identity:
    """Who is calling, as established by the external auth provider.

    Passed explicitly to services; nothing reads a global session object.
    """

    user_id: str
    role: Role
    student_id: Optional[str] = None
    group: Optional[ClassGroup] = None

    @classmethod
    def from_session(cls, data: Mapping[str, Any]) -> Optional["Identity"]:
        user_id = data.get("user_id")
        role = data.get("role")
        if not user_id or not role:
            return None

        try:
            parsed_role = Role(role)
        except ValueError:
            return None

        group = None
        if data.get("branch") and data.get("section"):
            try:
                group = ClassGroup(
                    branch=str(data["branch"]),
                    year=int(data.get("year") or 0),
                    semester=int(data.get("semester") or 0),
                    section=str(data["section"]),
                )
            except (TypeError, ValueError):
                return None

        student_id = data.get("student_id")
        return cls(
            user_id=str(user_id),
            role=parsed_role,
            student_id=str(student_id) if student_id else None,
            group=group,
        )


def has_role(identity: Optional[Identity], role: Role) -> bool:
    return identity is not None and identity.role == role


def require_role(identity: Optional[Identity], role: Role) -> Identity:
    if not has_role(identity, role):
        raise AuthorizationError("You do not have permission for this action")
    return identity


def require_student(identity: Optional[Identity]) -> Identity:
    identity = require_role(identity, Role.STUDENT)
    if not identity.student_id or identity.group is None:
        raise AuthorizationError("No student record is linked to this account")
    return identity
