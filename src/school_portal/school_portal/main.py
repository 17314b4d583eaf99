from __future__ import annotations

import logging
from datetime import timedelta
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask
from flask_jwt_extended import JWTManager

from config import get_settings_module, load_settings

from .attendance.controller import register as register_attendance
from .classes.controller import register as register_classes
from .common.errors import register_error_handlers, register_jwt_handlers
from .container import Container, build_container
from .core.constants import DEFAULT_TOKEN_DAYS
from .database.bootstrap import apply_schema, list_tables
from .news.controller import register as register_news
from .users.controller import register as register_users

REPO_ROOT = Path(__file__).resolve().parents[3]


def create_app(*, container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = load_settings(settings_module)

    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["SECRET_KEY"] = getattr(settings, "SECRET_KEY")
    app.config["JWT_SECRET_KEY"] = getattr(settings, "JWT_SECRET_KEY", app.config["SECRET_KEY"])
    app.config["JWT_ACCESS_TOKEN_EXPIRES"] = timedelta(days=int(getattr(settings, "JWT_EXPIRES_DAYS", DEFAULT_TOKEN_DAYS)))
    app.config["UPLOAD_FOLDER"] = str(getattr(settings, "UPLOAD_FOLDER", REPO_ROOT / "uploads"))
    app.config["MAX_CONTENT_LENGTH"] = int(getattr(settings, "MAX_CONTENT_LENGTH", 5 * 1024 * 1024))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    jwt = JWTManager(app)
    register_jwt_handlers(jwt)
    register_error_handlers(app)

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        app.logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
            app.logger.info("schema ready: %s", ", ".join(list_tables(db_config)))

        container = build_container(db_config=db_config, upload_folder=app.config["UPLOAD_FOLDER"])

    app.extensions["school_portal"] = container

    @app.route("/", methods=["GET"], endpoint="index")
    def index():
        return "School portal backend running"

    register_users(app, container)
    register_classes(app, container)
    register_attendance(app, container)
    register_news(app, container)

    return app
