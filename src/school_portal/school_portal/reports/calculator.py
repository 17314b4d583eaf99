from __future__ import annotations

from typing import Iterable

from ..attendance.model import AttendanceEntry
from ..core.enums import AttendanceStatus
from .model import Summary


def percent_half_up(count: int, total: int) -> int:
    """``round(count / total * 100)`` rounding halves up; 0 when total is 0."""

    if total <= 0:
        return 0
    return (200 * count + total) // (2 * total)


def summarize_entries(entries: Iterable[AttendanceEntry]) -> Summary:
    entries = list(entries)
    total = len(entries)
    present_count = sum(1 for e in entries if e.status == AttendanceStatus.PRESENT)
    absent_count = total - present_count

    present_percent = percent_half_up(present_count, total)
    # Complement, not round(absent / total * 100): differs when both halves end in .5 (1 of 8 -> 13 + 87).
    absent_percent = 100 - present_percent if total else 0

    return Summary(
        total=total,
        present_count=present_count,
        absent_count=absent_count,
        present_percent=present_percent,
        absent_percent=absent_percent,
    )
