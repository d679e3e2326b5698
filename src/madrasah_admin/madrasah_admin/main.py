from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import build_container
from .core.constants import LATE_AFTER_HOURS, OVERDUE_AFTER_HOURS
from .database.bootstrap import apply_schema, list_tables
from .invoices.controller import register as register_invoices
from .leads.controller import register as register_leads

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def create_app(container=None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        container = build_container(
            db_config=db_config,
            late_after_hours=int(getattr(settings, "LATE_AFTER_HOURS", LATE_AFTER_HOURS)),
            overdue_after_hours=int(getattr(settings, "OVERDUE_AFTER_HOURS", OVERDUE_AFTER_HOURS)),
            smtp_config=getattr(settings, "SMTP_CONFIG", None),
        )
        logger.info("settings=%s db=%s", settings_module, container.conn.config.describe())

        if getattr(settings, "AUTO_INIT_DB", False):
            apply_schema(container.conn, schema_path=SCHEMA_PATH)
            logger.info("Schema ready (tables=%d)", len(list_tables(container.conn)))

    register_invoices(app, container)
    register_attendance(app, container)
    register_leads(app, container)

    return app
