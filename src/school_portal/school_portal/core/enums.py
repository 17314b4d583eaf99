from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for authorization."""

    PRINCIPAL = "principal"
    STAFF = "staff"


class AttendanceStatus(str, Enum):
    """Per-student attendance state. There is no third state."""

    PRESENT = "present"
    ABSENT = "absent"

    @classmethod
    def parse(cls, value: str) -> "AttendanceStatus":
        """Accept the canonical values as well as the legacy ``P``/``A`` codes."""

        if not isinstance(value, str):
            raise ValueError(f"Invalid attendance status: {value!r}")

        v = value.strip().lower()
        if v in {"p", "present"}:
            return cls.PRESENT
        if v in {"a", "absent"}:
            return cls.ABSENT
        raise ValueError(f"Invalid attendance status: {value!r}")
