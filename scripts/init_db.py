"""Apply database/schema.sql to the configured MySQL database.

Usage: APP_ENV=production python scripts/init_db.py
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import load_settings

from src.school_portal.school_portal.database.bootstrap import apply_schema, list_tables

logger = logging.getLogger("init_db")


def main() -> int:
    load_dotenv(override=False)
    settings = load_settings()
    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"), format="%(levelname)s %(message)s")

    db_config = dict(settings.DB_CONFIG)
    executed = apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")

    logger.info("%d statements applied, tables: %s", executed, ", ".join(list_tables(db_config)))
    return 0


if __name__ == "__main__":
    sys.exit(main())
