from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json, fetchall, fetchone, load_json
from .model import AttendanceEntry, AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "attendance_id, dept, class_code, work_date, entries, recorded_by, created_at, updated_at"


def _to_record(r: dict) -> AttendanceRecord:
    entries = load_json(r.get("entries")) or []
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        department=r["dept"],
        class_code=r["class_code"],
        work_date=r["work_date"],
        entries=tuple(
            AttendanceEntry(
                roll=str(e.get("roll", "")),
                name=str(e.get("name", "")),
                status=AttendanceStatus.parse(e.get("status", "")),
            )
            for e in entries
        ),
        recorded_by=int(r["recorded_by"]) if r.get("recorded_by") is not None else None,
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, *, department: str, class_code: str, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE dept=%s AND class_code=%s AND work_date=%s
                """,
                (department, class_code, work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def upsert(
        self,
        *,
        department: str,
        class_code: str,
        work_date: date,
        entries: Sequence[AttendanceEntry],
        recorded_by: int,
    ) -> AttendanceRecord:
        payload = dump_json([e.to_dict() for e in entries])
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(dept, class_code, work_date, entries, recorded_by)
                VALUES(%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    entries=VALUES(entries),
                    recorded_by=VALUES(recorded_by),
                    updated_at=CURRENT_TIMESTAMP
                """,
                (department, class_code, work_date, payload, int(recorded_by)),
            )
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE dept=%s AND class_code=%s AND work_date=%s
                """,
                (department, class_code, work_date),
            )
            return _to_record(fetchone(cur))

    def list_for_department_and_date(self, *, department: str, work_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE dept=%s AND work_date=%s
                ORDER BY attendance_id ASC
                """,
                (department, work_date),
            )
            return [_to_record(r) for r in fetchall(cur)]
