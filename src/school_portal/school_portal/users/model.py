from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Identity:
    """Domain entity: a principal or staff account.

    Note: ``department`` is set if and only if ``role`` is STAFF.
    """

    user_id: int
    name: str
    email: str
    password_hash: str
    role: Role
    department: Optional[str] = None

    def to_dict(self) -> dict:
        # Never expose the password hash.
        return {
            "id": self.user_id,
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
            "dept": self.department,
        }
