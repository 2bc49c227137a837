from __future__ import annotations

import importlib
from pathlib import Path

import structlog
from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .breaks.controller import register as register_breaks
from .container import build_container
from .core.constants import (
    DEFAULT_EXCESSIVE_WORK_THRESHOLD_MINUTES,
    DEFAULT_MERGE_GAP_MINUTES,
    DEFAULT_MISMATCH_THRESHOLD_MINUTES,
    DEFAULT_SCAN_MAX_WORKERS,
    DEFAULT_TIMEZONE,
)
from .core.logging import setup_logging
from .database.bootstrap import apply_schema, list_tables
from .reconciliation.controller import register as register_reconciliation
from .reconciliation.model import ReconciliationSettings

log = structlog.get_logger(__name__)


def load_settings(settings) -> ReconciliationSettings:
    return ReconciliationSettings(
        timezone=str(getattr(settings, "TIMEZONE", DEFAULT_TIMEZONE)),
        mismatch_threshold_minutes=int(
            getattr(settings, "MISMATCH_THRESHOLD_MINUTES", DEFAULT_MISMATCH_THRESHOLD_MINUTES)
        ),
        excessive_work_threshold_minutes=int(
            getattr(settings, "EXCESSIVE_WORK_THRESHOLD_MINUTES", DEFAULT_EXCESSIVE_WORK_THRESHOLD_MINUTES)
        ),
        merge_gap_minutes=int(getattr(settings, "MERGE_GAP_MINUTES", DEFAULT_MERGE_GAP_MINUTES)),
        scan_max_workers=int(getattr(settings, "SCAN_MAX_WORKERS", DEFAULT_SCAN_MAX_WORKERS)),
    )


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    reconciliation_settings = load_settings(settings)
    log.info(
        "app_configured",
        settings=settings_module,
        db=f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}",
        timezone=reconciliation_settings.timezone,
    )

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
        apply_schema(db_config, schema_path=schema_path)
        log.info("schema_ready", tables=len(list_tables(db_config)))

    container = build_container(db_config=db_config, settings=reconciliation_settings)

    register_breaks(app, container)
    register_attendance(app, container)
    register_reconciliation(app, container)

    return app
