from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask
from flask_cors import CORS

from config import get_settings_module

from .api.router import ActionRouter, register_error_handlers
from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .core.constants import DEFAULT_PUBLIC_BASE_URL
from .database.bootstrap import apply_schema, list_tables
from .reports.controller import register as register_reports
from .trainees.controller import register as register_trainees
from .trainings.controller import register as register_trainings
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )


def _register_system_actions(api: ActionRouter, container: Container) -> None:
    @api.before_dispatch
    def ensure_ready(action: str) -> None:
        if action == "init" and container.conn is not None:
            apply_schema(container.conn)
        container.auth_service.enforce_single_super_admin()

    @api.action("init", public=True)
    def init():
        return {"ok": True}


def create_app(container: Optional[Container] = None, *, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["PUBLIC_BASE_URL"] = getattr(settings, "PUBLIC_BASE_URL", DEFAULT_PUBLIC_BASE_URL)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    CORS(app, resources={r"/api*": {"origins": getattr(settings, "CORS_ORIGINS", "*")}})

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
        container = build_container(db_config=db_config)
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(container.conn)
            logger.info("Schema ready (tables=%s)", len(list_tables(container.conn)))

    app.extensions["traintrack"] = container

    api = ActionRouter()
    api.set_authenticator(container.auth_service.authenticate_token)
    _register_system_actions(api, container)
    register_users(api, container)
    register_trainings(api, container)
    register_trainees(api, container)
    register_attendance(api, container)
    register_reports(api, container)

    app.register_blueprint(api.blueprint)
    register_error_handlers(app)

    return app
