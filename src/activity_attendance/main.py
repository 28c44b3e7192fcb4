from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import build_container
from .database.bootstrap import apply_schema
from .thresholds.controller import register as register_thresholds
from .timing.windows import TimeWindowPolicy

logger = logging.getLogger(__name__)


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    threshold_store = str(getattr(settings, "THRESHOLD_STORE", "mysql"))
    timezone = str(getattr(settings, "TIMEZONE", "") or "")

    if app.config["DEBUG"]:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logger.info(
        "settings=%s threshold_store=%s timezone=%s db=%s@%s:%s/%s",
        settings_module,
        threshold_store,
        timezone or "local",
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    policy = TimeWindowPolicy(
        on_time_minutes=int(getattr(settings, "ON_TIME_TOLERANCE_MINUTES", 15)),
        late_minutes=int(getattr(settings, "LATE_WINDOW_MINUTES", 30)),
    )
    container = build_container(
        db_config=db_config, threshold_store=threshold_store, policy=policy, timezone=timezone
    )

    if bool(getattr(settings, "AUTO_INIT_DB", False)) and container.conn is not None:
        apply_schema(container.conn)

    register_attendance(app, container)
    register_thresholds(app, container)

    return app
