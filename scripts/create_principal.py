"""Create the single principal account if it does not exist yet.

Credentials come from PRINCIPAL_NAME / PRINCIPAL_EMAIL / PRINCIPAL_PASSWORD.
"""

from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import load_settings

from src.school_portal.school_portal.database.connection import DBConfig, DatabaseConnection
from src.school_portal.school_portal.users.mysql_user_repository import MySQLUserRepository
from src.school_portal.school_portal.users.service import ensure_principal


def main() -> int:
    load_dotenv(override=False)
    settings = load_settings()

    conn = DatabaseConnection(DBConfig.from_dict(dict(settings.DB_CONFIG)))
    identity, created = ensure_principal(
        MySQLUserRepository(conn),
        name=getattr(settings, "PRINCIPAL_NAME", "Principal"),
        email=getattr(settings, "PRINCIPAL_EMAIL", ""),
        password=getattr(settings, "PRINCIPAL_PASSWORD", ""),
    )

    if created:
        print(f"Principal created: {identity.email}")
    else:
        print(f"Principal already exists: {identity.email}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
