from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Identity
from .repository import UserRepository

_COLUMNS = "user_id, name, email, password_hash, role, dept"


def _to_identity(row: dict) -> Identity:
    return Identity(
        user_id=int(row["user_id"]),
        name=row["name"],
        email=row["email"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        department=row.get("dept"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[Identity]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE user_id=%s", (int(user_id),))
            row = fetchone(cur)
            return _to_identity(row) if row else None

    def get_by_email(self, email: str) -> Optional[Identity]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE email=%s", (email,))
            row = fetchone(cur)
            return _to_identity(row) if row else None

    def create_user(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        role: Role,
        department: Optional[str],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(name, email, password_hash, role, dept)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (name, email, password_hash, role.value, department),
            )
            return int(cur.lastrowid)

    def delete_by_id(self, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM users WHERE user_id=%s", (int(user_id),))
            return cur.rowcount > 0

    def list_all(self) -> Sequence[Identity]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users ORDER BY user_id")
            return [_to_identity(r) for r in fetchall(cur)]
