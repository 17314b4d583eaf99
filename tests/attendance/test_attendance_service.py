from __future__ import annotations

from datetime import date

import pytest

from src.school_portal.school_portal.attendance.service import AttendanceService, parse_entries
from src.school_portal.school_portal.classes.model import Student
from src.school_portal.school_portal.core.enums import AttendanceStatus
from src.school_portal.school_portal.core.exceptions import (
    AuthorizationError,
    NotFoundError,
    PastDateLockedError,
    ValidationError,
)
from tests.fakes import InMemoryAttendance, InMemoryRosters


def _setup(today: date):
    rosters = InMemoryRosters()
    rosters.replace(
        department="CSE",
        class_code="CSE-A",
        display_name="CSE-A",
        students=_students([("1", "Ann"), ("2", "Bob")]),
    )
    attendance = InMemoryAttendance()
    return AttendanceService(attendance, rosters, clock=lambda: today), attendance


def _students(pairs):
    return tuple(Student(roll=r, name=n) for r, n in pairs)


def test_default_marks_everyone_present_and_writes_nothing(cse_staff, today):
    svc, attendance = _setup(today)

    record = svc.get_or_default(cse_staff, department="CSE", class_code="CSE-A", work_date="2025-01-01")

    assert not record.persisted
    assert [(e.roll, e.status) for e in record.entries] == [
        ("1", AttendanceStatus.PRESENT),
        ("2", AttendanceStatus.PRESENT),
    ]
    assert attendance.upsert_calls == 0
    assert attendance.count() == 0


def test_default_for_past_date_is_still_readable(cse_staff, today):
    svc, _ = _setup(today)
    record = svc.get_or_default(cse_staff, department="CSE", class_code="CSE-A", work_date=date(2024, 12, 1))
    assert len(record.entries) == 2


def test_save_then_read_returns_saved_entries(cse_staff, today):
    svc, _ = _setup(today)
    payload = [{"roll": "1", "name": "Ann", "status": "present"}, {"roll": "2", "name": "Bob", "status": "absent"}]

    saved = svc.save(cse_staff, department="CSE", class_code="CSE-A", work_date="2025-01-01", entries=payload)
    read = svc.get_or_default(cse_staff, department="CSE", class_code="CSE-A", work_date="2025-01-01")

    assert saved.persisted
    assert read == saved
    assert read.entries[1].status == AttendanceStatus.ABSENT
    assert read.recorded_by == cse_staff.user_id


def test_save_twice_keeps_one_record(cse_staff, today):
    svc, attendance = _setup(today)
    svc.save(cse_staff, department="CSE", class_code="CSE-A", work_date="2025-01-01", entries=[{"roll": "1", "status": "present"}])
    second = svc.save(
        cse_staff, department="CSE", class_code="CSE-A", work_date="2025-01-01", entries=[{"roll": "1", "status": "absent"}]
    )

    assert attendance.count() == 1
    assert second.entries[0].status == AttendanceStatus.ABSENT
    assert second.updated_at > second.created_at


def test_future_date_is_writable(cse_staff, today):
    svc, _ = _setup(today)
    rec = svc.save(cse_staff, department="CSE", class_code="CSE-A", work_date="2025-01-02", entries=[])
    assert rec.persisted
    assert rec.entries == ()


def test_past_date_is_locked(cse_staff, today):
    svc, attendance = _setup(today)
    with pytest.raises(PastDateLockedError):
        svc.save(cse_staff, department="CSE", class_code="CSE-A", work_date="2024-12-31", entries=[])
    assert attendance.upsert_calls == 0


def test_past_date_lock_wins_over_role_and_payload(principal, today):
    svc, _ = _setup(today)
    with pytest.raises(PastDateLockedError):
        svc.save(principal, department="ECE", class_code="", work_date="2024-12-31", entries="garbage")


def test_explicit_today_overrides_clock(cse_staff, today):
    svc, _ = _setup(today)
    with pytest.raises(PastDateLockedError):
        svc.save(
            cse_staff,
            department="CSE",
            class_code="CSE-A",
            work_date="2025-01-01",
            entries=[],
            today=date(2025, 1, 2),
        )


def test_cross_department_write_denied(ece_staff, today):
    svc, attendance = _setup(today)
    with pytest.raises(AuthorizationError) as exc:
        svc.save(ece_staff, department="CSE", class_code="CSE-A", work_date="2025-01-01", entries=[])
    assert exc.value.reason == "cross-department"
    assert attendance.upsert_calls == 0


def test_principal_cannot_read_staff_view(principal, today):
    svc, _ = _setup(today)
    with pytest.raises(AuthorizationError) as exc:
        svc.get_or_default(principal, department="CSE", class_code="CSE-A", work_date="2025-01-01")
    assert exc.value.reason == "staff-only"


def test_unknown_class(cse_staff, today):
    svc, _ = _setup(today)
    with pytest.raises(NotFoundError) as exc:
        svc.get_or_default(cse_staff, department="CSE", class_code="CSE-Z", work_date="2025-01-01")
    assert exc.value.code == "roster-not-found"


def test_invalid_date(cse_staff, today):
    svc, _ = _setup(today)
    with pytest.raises(ValidationError) as exc:
        svc.get_or_default(cse_staff, department="CSE", class_code="CSE-A", work_date="01/01/2025")
    assert exc.value.code == "invalid-date"


def test_invalid_status_rejected(cse_staff, today):
    svc, _ = _setup(today)
    with pytest.raises(ValidationError) as exc:
        svc.save(
            cse_staff, department="CSE", class_code="CSE-A", work_date="2025-01-01", entries=[{"roll": "1", "status": "late"}]
        )
    assert exc.value.code == "invalid-status"


def test_parse_entries_accepts_legacy_codes_and_unknown_rolls():
    entries = parse_entries([{"roll": "99", "status": "P"}, {"roll": "1", "name": "Ann", "status": "a"}])
    assert [e.status for e in entries] == [AttendanceStatus.PRESENT, AttendanceStatus.ABSENT]
    assert entries[0].name == ""


def test_get_saved_requires_commit(principal, cse_staff, today):
    svc, _ = _setup(today)
    with pytest.raises(NotFoundError) as exc:
        svc.get_saved(principal, department="CSE", class_code="CSE-A", work_date="2025-01-01")
    assert exc.value.code == "attendance-not-found"

    svc.save(cse_staff, department="CSE", class_code="CSE-A", work_date="2025-01-01", entries=[{"roll": "1", "status": "absent"}])
    record = svc.get_saved(principal, department="CSE", class_code="CSE-A", work_date="2025-01-01")
    assert record.entries[0].status == AttendanceStatus.ABSENT


def test_date_must_be_zero_padded(cse_staff, today):
    svc, _ = _setup(today)
    for bad in ("2025-1-1", "2025-02-30", ""):
        with pytest.raises(ValidationError):
            svc.get_or_default(cse_staff, department="CSE", class_code="CSE-A", work_date=bad)


@pytest.mark.parametrize("status", [1, True, None, ["present"]])
def test_non_string_status_is_invalid_input(cse_staff, today, status):
    svc, attendance = _setup(today)
    with pytest.raises(ValidationError) as exc:
        svc.save(
            cse_staff, department="CSE", class_code="CSE-A", work_date="2025-01-01", entries=[{"roll": "1", "status": status}]
        )
    assert exc.value.code == "invalid-status"
    assert attendance.upsert_calls == 0
