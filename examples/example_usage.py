"""Example: use the pure core and service layer without Flask.

Controllers stay thin; every number below comes from the same services the API uses.
"""

import importlib
import sys

from config import get_settings_module

from src.college_portal.college_portal.attendance.projector import AttendanceProjector
from src.college_portal.college_portal.common.access import Identity
from src.college_portal.college_portal.common.datetime_utils import now_local
from src.college_portal.college_portal.container import build_container
from src.college_portal.college_portal.core.enums import Role
from src.college_portal.college_portal.schedules.model import ClassGroup


def calculator_demo():
    projector = AttendanceProjector(threshold=0.75)
    for attended, total in [(30, 40), (20, 40), (36, 40)]:
        print(
            f"{attended}/{total}: {projector.display_percentage(attended, total)}% "
            f"need={projector.classes_needed(attended, total)} "
            f"can_miss={projector.max_absences(attended, total)}"
        )


def main(student_id: str):
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, settings=settings)
    identity = Identity(
        user_id=student_id,
        role=Role.STUDENT,
        student_id=student_id,
        group=ClassGroup(branch="Computer Science", year=3, semester=5, section="A"),
    )
    print(container.dashboard_service.student_dashboard(identity=identity, now=now_local()))


if __name__ == "__main__":
    if len(sys.argv) > 1:
        main(sys.argv[1])
    else:
        calculator_demo()
