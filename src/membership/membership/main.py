from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import Container, build_container
from .core.constants import DEFAULT_ADMIN_ROLE_NAME, DEFAULT_COOKIE_KEY, DEFAULT_REMEMBER_ME_DAYS
from .database.bootstrap import apply_schema, ensure_admin_user, list_tables
from .users.controller import register as register_users
from .web.extension import init_app

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def create_app(container: Optional[Container] = None, *, settings_module: Optional[str] = None) -> Flask:
    """Application factory.

    ``container`` lets callers (tests) supply pre-wired services; otherwise
    one is built against the configured MySQL database.
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["REGISTER_ROLE_ID"] = int(getattr(settings, "REGISTER_ROLE_ID", 0))
    app.config["REGISTER_ENABLED"] = bool(getattr(settings, "REGISTER_ENABLED", True))
    app.config["ADMIN_ROLE_NAME"] = getattr(settings, "ADMIN_ROLE_NAME", DEFAULT_ADMIN_ROLE_NAME)
    app.config["SESSION_COOKIE_SECURE"] = bool(getattr(settings, "SESSION_COOKIE_SECURE", False))

    logging.basicConfig(
        level=logging.DEBUG if app.config["DEBUG"] else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=SCHEMA_PATH)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            ensure_admin_user(db_config, role_name=app.config["ADMIN_ROLE_NAME"])
            logger.info("admin account ready")

        container = build_container(
            db_config=db_config,
            cookie_key=getattr(settings, "COOKIE_KEY", DEFAULT_COOKIE_KEY),
            remember_days=int(getattr(settings, "REMEMBER_ME_DAYS", DEFAULT_REMEMBER_ME_DAYS)),
            audit_log_enabled=bool(getattr(settings, "AUDIT_LOG_ENABLED", True)),
        )

    init_app(app, container.manage_provider, auto_login=bool(getattr(settings, "AUTO_LOGIN", True)))
    register_users(app, container)

    return app
