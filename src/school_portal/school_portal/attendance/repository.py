from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceEntry, AttendanceRecord


class AttendanceRepository(Protocol):
    """The attendance ledger: one record per (department, class, day)."""

    def get(self, *, department: str, class_code: str, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def upsert(
        self,
        *,
        department: str,
        class_code: str,
        work_date: date,
        entries: Sequence[AttendanceEntry],
        recorded_by: int,
    ) -> AttendanceRecord:
        """Insert the record or replace its whole entry list.

        Returns the stored record.
        """

        raise NotImplementedError

    def list_for_department_and_date(self, *, department: str, work_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError
