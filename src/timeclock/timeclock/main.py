from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import build_container
from .core.enums import BreakKind
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .employees.controller import register as register_employees
from .reports.controller import register as register_reports
from .timesheet.controller import register as register_timesheet

logger = logging.getLogger("timeclock")

REPO_ROOT = Path(__file__).resolve().parents[3]


def configure_logging(settings) -> None:
    default_level = "DEBUG" if getattr(settings, "DEBUG", False) else "INFO"
    level = str(getattr(settings, "LOG_LEVEL", None) or default_level).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(settings)

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    db_config = getattr(settings, "DB_CONFIG")

    # Helpful startup info to see which database the app actually talks to.
    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
        logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
        logger.info("demo seed ready")

    container = build_container(
        db_config=db_config,
        timezone_name=getattr(settings, "TIMEZONE", "UTC"),
        break_limits={
            BreakKind.PAID: int(getattr(settings, "PAID_BREAK_LIMIT_MINUTES", 15)),
            BreakKind.UNPAID: int(getattr(settings, "UNPAID_BREAK_LIMIT_MINUTES", 30)),
        },
    )

    register_employees(app, container)
    register_timesheet(app, container)
    register_reports(app, container)

    return app
