"""Schema bootstrap for the MySQL store.

``database/schema.sql`` is applied statement by statement; every statement in it
is idempotent so startup may run it repeatedly.
"""

from __future__ import annotations

import logging
import re
from contextlib import closing
from pathlib import Path
from typing import Iterator, Optional

import mysql.connector

from .connection import DBConfig

logger = logging.getLogger(__name__)

_CREATE_DB_RE = re.compile(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$")
_USE_DB_RE = re.compile(r"(?im)^\s*USE\b.*?;\s*$")


def _strip_create_db_and_use(sql: str) -> str:
    # The configured database wins over whatever name the file hardcodes.
    return _USE_DB_RE.sub("", _CREATE_DB_RE.sub("", sql))


def iter_sql_statements(sql: str) -> Iterator[str]:
    """Yield ``;``-terminated statements.

    Semicolons inside quoted strings are kept; ``--`` line comments are dropped.
    """

    buf: list[str] = []
    quote: Optional[str] = None
    i, n = 0, len(sql)

    while i < n:
        ch = sql[i]

        if quote:
            buf.append(ch)
            if ch == "\\" and i + 1 < n:
                buf.append(sql[i + 1])
                i += 2
                continue
            if ch == quote:
                quote = None
            i += 1
            continue

        if sql.startswith("--", i):
            newline = sql.find("\n", i)
            i = n if newline == -1 else newline
            continue

        if ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            stmt = "".join(buf).strip()
            buf = []
            if stmt:
                yield stmt
            i += 1
            continue

        buf.append(ch)
        i += 1

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _connect(target: DBConfig, *, with_database: bool = True):
    params = {
        "host": target.host,
        "port": target.port,
        "user": target.user,
        "password": target.password,
        "use_pure": True,
    }
    if with_database:
        params["database"] = target.database
    return mysql.connector.connect(**params)


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    with closing(_connect(target, with_database=False)) as conn:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> int:
    """Create the database if needed and run every schema statement.

    Returns the number of statements executed.
    """

    target = DBConfig.from_dict(db_config)
    ensure_database_exists(db_config)

    schema_path = Path(schema_path)
    statements = list(iter_sql_statements(_strip_create_db_and_use(schema_path.read_text(encoding="utf-8"))))

    with closing(_connect(target)) as conn:
        cur = conn.cursor()
        for stmt in statements:
            logger.debug("schema: %s", stmt.splitlines()[0])
            cur.execute(stmt)
        conn.commit()

    logger.info("Applied %s (%d statements) to %s@%s/%s", schema_path.name, len(statements), target.user, target.host, target.database)
    return len(statements)


def list_tables(db_config: dict) -> list[str]:
    with closing(_connect(DBConfig.from_dict(db_config))) as conn:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return sorted(row[0] for row in cur.fetchall())
