from __future__ import annotations

import importlib
import logging
from typing import Any, Mapping, Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.logging_setup import configure_logging
from .common.web import register_error_handlers
from .container import build_container
from .reports.controller import register as register_reports
from .users.controller import register as register_users

log = logging.getLogger(__name__)


def create_app(overrides: Optional[Mapping[str, Any]] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.config.from_object(settings)
    if overrides:
        app.config.update(overrides)

    app.secret_key = app.config["SECRET_KEY"]
    configure_logging(app.config.get("LOG_LEVEL", "INFO"))
    log.info("settings=%s data_dir=%s", settings_module, app.config["DATA_DIR"])

    container = build_container(
        data_dir=app.config["DATA_DIR"],
        work_start_time=app.config["WORK_START_TIME"],
        work_hours_required=int(app.config["WORK_HOURS_REQUIRED"]),
        gemini_api_key=app.config.get("GEMINI_API_KEY", ""),
        gemini_model=app.config["GEMINI_MODEL"],
        tip_timeout_seconds=float(app.config["TIP_TIMEOUT_SECONDS"]),
        ticker_enabled=bool(app.config["SESSION_TICKER_ENABLED"]),
        tick_interval_seconds=float(app.config["TICK_INTERVAL_SECONDS"]),
        alarm_sound_url=app.config["ALARM_SOUND_URL"],
    )
    app.extensions["chrono_sync"] = container

    register_error_handlers(app)
    register_users(app, container)
    register_attendance(app, container)
    register_reports(app, container)

    return app


def run() -> None:
    app = create_app()
    app.run(host="127.0.0.1", port=5000, debug=bool(app.config.get("DEBUG")), use_reloader=False)
