from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Tuple

from ..common.datetime_utils import format_iso_date, format_timestamp
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceEntry:
    roll: str
    name: str
    status: AttendanceStatus

    def to_dict(self) -> dict:
        return {"roll": self.roll, "name": self.name, "status": self.status.value}


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: attendance of one class on one calendar day.

    ``(department, class_code, work_date)`` is the natural key. A record with
    ``attendance_id=None`` is a synthesized default that was never saved.
    """

    department: str
    class_code: str
    work_date: date
    entries: Tuple[AttendanceEntry, ...]
    recorded_by: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    attendance_id: Optional[int] = None

    @property
    def persisted(self) -> bool:
        return self.attendance_id is not None

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "dept": self.department,
            "classCode": self.class_code,
            "date": format_iso_date(self.work_date),
            "records": [e.to_dict() for e in self.entries],
            "createdBy": self.recorded_by,
            "createdAt": format_timestamp(self.created_at),
            "updatedAt": format_timestamp(self.updated_at),
            "saved": self.persisted,
        }
