from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from flask_cors import CORS

from config import get_settings_module

from .art_types.controller import register as register_art_types
from .common.datetime_utils import now_local, to_ms
from .container import Container, build_container
from .database.bootstrap import apply_schema, ensure_demo_data, list_tables
from .database.connection import DBConfig
from .demands.controller import register as register_demands
from .feedbacks.controller import register as register_feedbacks
from .lessons.controller import register as register_lessons
from .reports.controller import register as register_reports
from .settings.controller import register as register_settings
from .users.controller import register as register_users
from .work_sessions.controller import register as register_work_sessions

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _install_cors(app: Flask, origins: list[str]) -> None:
    allow_any = "*" in origins
    CORS(
        app,
        resources={r"/api/*": {"origins": "*" if allow_any else origins}},
        supports_credentials=not allow_any,
        max_age=600,
    )


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(404)
    def not_found(_error):
        return jsonify({"error": "Não encontrado"}), 404

    @app.errorhandler(405)
    def method_not_allowed(_error):
        return jsonify({"error": "Method not allowed"}), 405


def create_app(container: Optional[Container] = None, *, settings_module: Optional[str] = None) -> Flask:
    """Build the JSON API.

    Pass ``container`` to run against pre-built services (tests use in-memory
    repositories); otherwise Postgres repositories are wired from ``DB_CONFIG``.
    """

    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)

    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"), format=LOG_FORMAT)

    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["AUTH_REQUIRED"] = bool(getattr(settings, "AUTH_REQUIRED", False))
    app.config["APP_TIMEZONE"] = getattr(settings, "APP_TIMEZONE", None)
    app.json.ensure_ascii = False

    if container is None:
        logger.info("settings=%s db=%s", settings_module, DBConfig.from_mapping(db_config).describe())

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            ensure_demo_data(db_config)
            logger.info("demo seed ready")

        container = build_container(db_config=db_config, timezone=app.config["APP_TIMEZONE"])

    _install_cors(app, list(getattr(settings, "CORS_ORIGINS", ["*"])))
    _register_error_handlers(app)

    register_users(app, container)
    register_art_types(app, container)
    register_settings(app, container)
    register_demands(app, container)
    register_work_sessions(app, container)
    register_feedbacks(app, container)
    register_lessons(app, container)
    register_reports(app, container)

    @app.route("/api/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "ok", "timestamp": to_ms(now_local(container.tz))})

    return app
