from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import Identity


class UserRepository(Protocol):
    """Repository interface for accounts (the identity directory).

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[Identity]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Identity]:
        raise NotImplementedError

    def create_user(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        role: Role,
        department: Optional[str],
    ) -> int:
        raise NotImplementedError

    def delete_by_id(self, user_id: int) -> bool:
        raise NotImplementedError

    def list_all(self) -> Sequence[Identity]:
        raise NotImplementedError
