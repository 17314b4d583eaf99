from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Student:
    roll: str
    name: str

    def to_dict(self) -> dict:
        return {"roll": self.roll, "name": self.name}


@dataclass(frozen=True)
class ClassRoster:
    """Domain entity: a department class and its ordered student list.

    ``(department, class_code)`` identifies a roster.
    """

    department: str
    class_code: str
    display_name: str
    students: Tuple[Student, ...] = ()
    roster_id: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "id": self.roster_id,
            "dept": self.department,
            "classCode": self.class_code,
            "name": self.display_name,
            "students": [s.to_dict() for s in self.students],
        }
