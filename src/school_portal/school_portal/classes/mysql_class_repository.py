from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json, fetchall, fetchone, load_json
from .model import ClassRoster, Student
from .repository import RosterRepository


def _to_roster(row: dict) -> ClassRoster:
    students = load_json(row.get("students")) or []
    return ClassRoster(
        roster_id=int(row["roster_id"]),
        department=row["dept"],
        class_code=row["class_code"],
        display_name=row["display_name"],
        students=tuple(Student(roll=str(s.get("roll", "")), name=str(s.get("name", ""))) for s in students),
    )


class MySQLRosterRepository(RosterRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, *, department: str, class_code: str) -> Optional[ClassRoster]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT roster_id, dept, class_code, display_name, students
                FROM class_rosters
                WHERE dept=%s AND class_code=%s
                """,
                (department, class_code),
            )
            row = fetchone(cur)
            return _to_roster(row) if row else None

    def replace(
        self,
        *,
        department: str,
        class_code: str,
        display_name: str,
        students: Sequence[Student],
    ) -> ClassRoster:
        payload = dump_json([s.to_dict() for s in students])
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO class_rosters(dept, class_code, display_name, students)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE display_name=VALUES(display_name), students=VALUES(students)
                """,
                (department, class_code, display_name, payload),
            )
            cur.execute(
                """
                SELECT roster_id, dept, class_code, display_name, students
                FROM class_rosters
                WHERE dept=%s AND class_code=%s
                """,
                (department, class_code),
            )
            return _to_roster(fetchone(cur))

    def list_for_department(self, *, department: str) -> Sequence[ClassRoster]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT roster_id, dept, class_code, display_name, students
                FROM class_rosters
                WHERE dept=%s
                ORDER BY class_code ASC
                """,
                (department,),
            )
            return [_to_roster(r) for r in fetchall(cur)]

    def list_departments(self) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT DISTINCT dept FROM class_rosters ORDER BY dept")
            return [r["dept"] for r in fetchall(cur)]
