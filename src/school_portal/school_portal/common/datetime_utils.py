from __future__ import annotations

import re
from datetime import date, datetime
from typing import Optional

from ..core.constants import ISO_DATE_FORMAT
from ..core.exceptions import ValidationError

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_iso_date(value: str) -> date:
    """Parse a zero-padded ``YYYY-MM-DD`` string into a date."""
    text = (value or "").strip()
    try:
        if not _ISO_DATE_RE.match(text):
            raise ValueError("not zero-padded")
        return datetime.strptime(text, ISO_DATE_FORMAT).date()
    except ValueError:
        raise ValidationError(f"Invalid date {value!r} (expected YYYY-MM-DD)", code="invalid-date")


def format_iso_date(value: date) -> str:
    return value.strftime(ISO_DATE_FORMAT)


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mock easier.
    """
    return datetime.now()


def today_local() -> date:
    return now_local().date()


def is_before_today(work_date: date, today: date) -> bool:
    """True when ``work_date`` is strictly earlier than ``today`` (calendar days)."""
    return work_date < today
