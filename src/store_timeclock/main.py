from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .attendance.controller import register as register_attendance
from .config import get_settings_module
from .container import Container, build_container
from .database.bootstrap import apply_schema, list_tables
from .employees.controller import register as register_employees
from .payroll.controller import register as register_payroll
from .schedules.controller import register as register_schedules
from .shifts.controller import register as register_shifts
from .stores.controller import register as register_stores

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None, *, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["ADMIN_PASSWORD"] = getattr(settings, "ADMIN_PASSWORD")

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        container = build_container(
            db_config=db_config,
            radius_meters=float(getattr(settings, "GEOFENCE_RADIUS_METERS", 500)),
            position_timeout_seconds=float(getattr(settings, "POSITION_TIMEOUT_SECONDS", 10)),
        )
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(container.conn)
            logger.info("schema ready (tables=%d)", len(list_tables(container.conn)))

    app.extensions["store_timeclock"] = container

    register_attendance(app, container)
    register_employees(app, container)
    register_stores(app, container)
    register_shifts(app, container)
    register_schedules(app, container)
    register_payroll(app, container)

    return app
