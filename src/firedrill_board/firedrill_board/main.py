from __future__ import annotations

import atexit
import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .access.controller import register as register_access
from .common.cookie_domain import get_cookie_domain
from .container import Container, build_container
from .core.constants import DEFAULT_POLL_SECONDS, DEFAULT_PORTAL_NAME
from .core.enums import AdminRole
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_admins, list_tables, missing_tables
from .database.connection import DBConfig
from .drill.controller import register as register_drill

logger = logging.getLogger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(container: Optional[Container] = None, *, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__, template_folder="../../../templates", static_folder="../../../static")

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["DEV_LOGIN"] = bool(getattr(settings, "DEV_LOGIN", False))
    app.config["AUTH_EMAIL_HEADER"] = getattr(settings, "AUTH_EMAIL_HEADER", "X-Forwarded-Email")
    app.config["SESSION_COOKIE_DOMAIN"] = get_cookie_domain(
        getattr(settings, "SITE_HOST", None),
        production=not app.config["DEBUG"] and not app.config["TESTING"],
    )
    app.config["SESSION_COOKIE_SAMESITE"] = "Lax"
    app.config["SESSION_COOKIE_SECURE"] = not app.config["DEBUG"] and not app.config["TESTING"]

    _configure_logging(app.config["DEBUG"])

    if container is None:
        if app.config["DEBUG"]:
            logger.debug("settings=%s db=%s", settings_module, DBConfig.from_dict(db_config).label)

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
            missing = missing_tables(list_tables(db_config))
            if missing:
                logger.warning("schema applied but drill tables are missing: %s", ", ".join(missing))
            else:
                logger.info("drill schema ready")
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
            ensure_admins(db_config, getattr(settings, "BOOTSTRAP_ADMINS", []))
            logger.info("demo seed ready")

        container = build_container(
            db_config=db_config,
            allowed_domain=getattr(settings, "ALLOWED_EMAIL_DOMAIN"),
            reset_tier=AdminRole(getattr(settings, "RESET_ADMIN_TIER", AdminRole.ADMIN.value)),
            portal=getattr(settings, "PORTAL_NAME", DEFAULT_PORTAL_NAME),
            poll_seconds=float(getattr(settings, "CHANGE_POLL_SECONDS", DEFAULT_POLL_SECONDS)),
        )
        container.start()
        atexit.register(container.shutdown)

    app.extensions["firedrill"] = container

    register_access(app, container)
    register_drill(app, container)

    return app
