from __future__ import annotations

import logging
from datetime import date
from typing import Any, Callable, Optional, Tuple, Union

from ..access.policy import Caller, Scope, enforce, require_staff
from ..classes.model import ClassRoster
from ..classes.repository import RosterRepository
from ..common.datetime_utils import is_before_today, parse_iso_date, today_local
from ..common.validators import require_list, require_mapping, require_non_empty
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError, PastDateLockedError, ValidationError
from .model import AttendanceEntry, AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

DateLike = Union[date, str]


def as_work_date(value: DateLike) -> date:
    if isinstance(value, date):
        return value
    return parse_iso_date(require_non_empty(value, "date"))


def parse_entries(raw: Any) -> Tuple[AttendanceEntry, ...]:
    """Validate posted attendance entries.

    Rolls are taken as given: they are not checked against the roster.
    """

    items = require_list(raw, "records")
    entries = []
    for i, item in enumerate(items):
        item = require_mapping(item, f"records[{i}]")
        roll = require_non_empty(item.get("roll"), f"records[{i}].roll")
        try:
            status = AttendanceStatus.parse(item.get("status"))
        except ValueError:
            raise ValidationError(f"records[{i}].status must be present or absent", code="invalid-status")
        entries.append(AttendanceEntry(roll=roll, name=str(item.get("name") or "").strip(), status=status))
    return tuple(entries)


def default_record(roster: ClassRoster, work_date: date, *, recorded_by: Optional[int] = None) -> AttendanceRecord:
    """Unsaved record with every roster student marked present."""

    return AttendanceRecord(
        department=roster.department,
        class_code=roster.class_code,
        work_date=work_date,
        entries=tuple(AttendanceEntry(roll=s.roll, name=s.name, status=AttendanceStatus.PRESENT) for s in roster.students),
        recorded_by=recorded_by,
    )


class AttendanceService:
    """Daily class attendance: default synthesis, past-date lock and upsert."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        rosters: RosterRepository,
        *,
        clock: Optional[Callable[[], date]] = None,
    ):
        self._attendance = attendance
        self._rosters = rosters
        self._clock = clock or today_local

    def _require_roster(self, department: str, class_code: str) -> ClassRoster:
        roster = self._rosters.get(department=department, class_code=class_code)
        if not roster:
            raise NotFoundError("Class not found for your department", code="roster-not-found")
        return roster

    def get_or_default(
        self,
        caller: Caller,
        *,
        department: str,
        class_code: str,
        work_date: DateLike,
    ) -> AttendanceRecord:
        caller = require_staff(caller, department=department)
        class_code = require_non_empty(class_code, "classCode")
        work_date = as_work_date(work_date)

        roster = self._require_roster(department, class_code)

        existing = self._attendance.get(department=department, class_code=class_code, work_date=work_date)
        if existing:
            return existing
        return default_record(roster, work_date, recorded_by=caller.user_id)

    def save(
        self,
        caller: Caller,
        *,
        department: str,
        class_code: str,
        work_date: DateLike,
        entries: Any,
        today: Optional[date] = None,
    ) -> AttendanceRecord:
        work_date = as_work_date(work_date)
        today = today or self._clock()
        if is_before_today(work_date, today):
            logger.warning(
                "Rejected attendance write for %s/%s on locked date %s by user %s",
                department,
                class_code,
                work_date,
                getattr(caller, "user_id", None),
            )
            raise PastDateLockedError("Cannot modify past attendance")

        caller = require_staff(caller, department=department)
        class_code = require_non_empty(class_code, "classCode")
        parsed = parse_entries(entries)

        self._require_roster(department, class_code)

        record = self._attendance.upsert(
            department=department,
            class_code=class_code,
            work_date=work_date,
            entries=parsed,
            recorded_by=caller.user_id,
        )
        logger.info(
            "Attendance %s/%s %s saved (%d entries) by user %s",
            department,
            class_code,
            work_date,
            len(parsed),
            caller.user_id,
        )
        return record

    def get_saved(
        self,
        caller: Caller,
        *,
        department: str,
        class_code: str,
        work_date: DateLike,
    ) -> AttendanceRecord:
        """Principal view of any department: committed attendance only, no defaults."""

        enforce(caller, Scope.PRINCIPAL_ONLY)
        department = require_non_empty(department, "dept")
        class_code = require_non_empty(class_code, "classCode")
        work_date = as_work_date(work_date)

        record = self._attendance.get(department=department, class_code=class_code, work_date=work_date)
        if not record:
            raise NotFoundError("No attendance found", code="attendance-not-found")
        return record
