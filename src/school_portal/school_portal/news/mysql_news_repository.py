from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import NewsPost
from .repository import NewsRepository

_COLUMNS = "news_id, title, content, dept, image_url, created_at, updated_at"


def _to_post(r: dict) -> NewsPost:
    return NewsPost(
        news_id=int(r["news_id"]),
        title=r["title"],
        content=r["content"],
        department=r["dept"],
        image_url=r.get("image_url"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLNewsRepository(NewsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, title: str, content: str, department: str, image_url: Optional[str] = None) -> NewsPost:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO news(title, content, dept, image_url)
                VALUES(%s,%s,%s,%s)
                """,
                (title, content, department, image_url),
            )
            news_id = int(cur.lastrowid)
            cur.execute(f"SELECT {_COLUMNS} FROM news WHERE news_id=%s", (news_id,))
            return _to_post(fetchone(cur))

    def get_by_id(self, news_id: int) -> Optional[NewsPost]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM news WHERE news_id=%s", (int(news_id),))
            r = fetchone(cur)
            return _to_post(r) if r else None

    def list_recent(self, *, department: Optional[str] = None) -> Sequence[NewsPost]:
        clauses = []
        params: list[object] = []
        if department:
            clauses.append("dept=%s")
            params.append(department)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM news
                {where}
                ORDER BY created_at DESC, news_id DESC
                """,
                tuple(params),
            )
            return [_to_post(r) for r in fetchall(cur)]

    def delete_by_id(self, news_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM news WHERE news_id=%s", (int(news_id),))
            return cur.rowcount > 0
