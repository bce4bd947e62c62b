from __future__ import annotations

import logging
import os

from flask import Flask, jsonify, request
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from dotenv import load_dotenv
from werkzeug.exceptions import HTTPException

db = SQLAlchemy()
migrate = Migrate()

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def create_app(test_config: dict | None = None) -> Flask:
    load_dotenv()

    app = Flask(__name__, static_folder="static", template_folder="templates")

    app.config.update(
        SECRET_KEY=os.getenv("SECRET_KEY", "dev-secret-key"),
        SQLALCHEMY_DATABASE_URI=database_url(),
        SQLALCHEMY_TRACK_MODIFICATIONS=False,
        LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO"),
        DEFAULT_VAT_RATE=os.getenv("DEFAULT_VAT_RATE", "7"),
        DEFAULT_CREDIT_DAYS=int(os.getenv("DEFAULT_CREDIT_DAYS") or 30),
    )
    if test_config:
        app.config.update(test_config)

    # ส่งภาษาไทยออกไปตรง ๆ ไม่ต้อง escape
    app.json.ensure_ascii = False

    _setup_logging(app)

    db.init_app(app)
    migrate.init_app(app, db)

    # Register blueprints
    from .blueprints.api import bp_api
    from .blueprints.docs import bp_docs
    from .blueprints.settings import bp_settings
    app.register_blueprint(bp_api, url_prefix="/api")
    app.register_blueprint(bp_docs, url_prefix="/api")
    app.register_blueprint(bp_settings, url_prefix="/api")

    # Thai amount-to-text + money helpers for Jinja
    from .utils import format_date_th, format_money, thai_baht_text
    app.jinja_env.globals["thai_baht_text"] = thai_baht_text
    app.jinja_env.filters["thai_baht_text"] = thai_baht_text
    app.jinja_env.filters["money"] = format_money
    app.jinja_env.filters["date_th"] = format_date_th

    @app.errorhandler(HTTPException)
    def _http_error(e: HTTPException):
        # API ตอบเป็น JSON เสมอ
        if request.path.startswith("/api/"):
            return jsonify({"ok": False, "error": e.description}), e.code
        return e

    # Ensure models are imported
    from . import models  # noqa: F401

    return app


def database_url() -> str:
    url = os.getenv("DATABASE_URL") or "sqlite:///salesdocs.db"
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql://", 1)
    return url


def _setup_logging(app: Flask) -> None:
    level = str(app.config.get("LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)
    app.logger.setLevel(getattr(logging, level, logging.INFO))
