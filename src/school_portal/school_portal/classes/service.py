from __future__ import annotations

import logging
from typing import Any, Sequence, Tuple

from ..access.policy import Caller, Scope, enforce, require_staff
from ..common.validators import require_list, require_mapping, require_non_empty
from ..core.exceptions import NotFoundError
from .model import ClassRoster, Student
from .repository import RosterRepository

logger = logging.getLogger(__name__)


def parse_students(raw: Any) -> Tuple[Student, ...]:
    """Validate a posted student list.

    Order is kept and duplicate rolls are passed through as given.
    """

    items = require_list(raw, "students")
    students = []
    for i, item in enumerate(items):
        item = require_mapping(item, f"students[{i}]")
        roll = require_non_empty(item.get("roll"), f"students[{i}].roll")
        students.append(Student(roll=roll, name=str(item.get("name") or "").strip()))
    return tuple(students)


class RosterService:
    """Use cases around class rosters.

    Rosters are owned by the staff of their department; the principal only
    reaches them through the department directory and attendance summaries.
    """

    def __init__(self, rosters: RosterRepository):
        self._rosters = rosters

    def list_classes(self, caller: Caller) -> Sequence[ClassRoster]:
        caller = require_staff(caller)
        return self._rosters.list_for_department(department=caller.department)

    def get_roster(self, caller: Caller, *, department: str, class_code: str) -> ClassRoster:
        require_staff(caller, department=department)
        class_code = require_non_empty(class_code, "classCode")

        roster = self._rosters.get(department=department, class_code=class_code)
        if not roster:
            raise NotFoundError("Class not found for your department", code="roster-not-found")
        return roster

    def get_students(self, caller: Caller, *, class_code: str) -> Tuple[Student, ...]:
        """Students of one class in the caller's department; unknown classes have none."""

        caller = require_staff(caller)
        class_code = require_non_empty(class_code, "classCode")

        roster = self._rosters.get(department=caller.department, class_code=class_code)
        return roster.students if roster else ()

    def replace_students(self, caller: Caller, *, class_code: str, students: Any) -> ClassRoster:
        caller = require_staff(caller)
        class_code = require_non_empty(class_code, "classCode")
        parsed = parse_students(students)

        roster = self._rosters.replace(
            department=caller.department,
            class_code=class_code,
            display_name=class_code,
            students=parsed,
        )
        logger.info(
            "Roster %s/%s replaced with %d students by user %s",
            caller.department,
            class_code,
            len(parsed),
            caller.user_id,
        )
        return roster

    def list_departments(self, caller: Caller) -> Sequence[str]:
        enforce(caller, Scope.PRINCIPAL_ONLY)
        return sorted(self._rosters.list_departments())
