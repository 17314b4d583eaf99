from __future__ import annotations

from typing import Sequence

from ..access.policy import Caller, Scope, enforce
from ..attendance.repository import AttendanceRepository
from ..attendance.service import DateLike, as_work_date
from ..common.validators import require_non_empty
from ..core.exceptions import NotFoundError
from .calculator import summarize_entries
from .model import ClassSummary, Summary


class SummaryService:
    """Present/absent aggregation over committed attendance.

    Only saved records count; defaults are never synthesized here.
    """

    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def summarize_one(self, caller: Caller, *, department: str, class_code: str, work_date: DateLike) -> Summary:
        enforce(caller, Scope.PRINCIPAL_ONLY)
        department = require_non_empty(department, "dept")
        class_code = require_non_empty(class_code, "classCode")
        work_date = as_work_date(work_date)

        record = self._attendance.get(department=department, class_code=class_code, work_date=work_date)
        if not record:
            raise NotFoundError("No attendance found", code="attendance-not-found")
        return summarize_entries(record.entries)

    def summarize_department(self, caller: Caller, *, department: str, work_date: DateLike) -> Sequence[ClassSummary]:
        enforce(caller, Scope.PRINCIPAL_ONLY)
        department = require_non_empty(department, "dept")
        work_date = as_work_date(work_date)

        records = self._attendance.list_for_department_and_date(department=department, work_date=work_date)
        if not records:
            raise NotFoundError("No attendance found", code="attendance-not-found")

        # Retrieval order is kept as-is.
        return [ClassSummary(class_code=r.class_code, summary=summarize_entries(r.entries)) for r in records]
