from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .container import Container, build_container
from .database.bootstrap import apply_schema, list_tables
from .settings import AppSettings
from .attendance.controller import register as register_attendance
from .businesscard.controller import register as register_business_card
from .diagnostics.controller import register as register_diagnostics
from .forms.controller import register as register_forms
from .leave.controller import register as register_leave
from .salary.controller import register as register_salary

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def register_routes(app: Flask, container: Container) -> None:
    register_attendance(app, container)
    register_leave(app, container)
    register_salary(app, container)
    register_forms(app, container)
    register_business_card(app, container)
    if app.config.get("DIAGNOSTICS_ENABLED"):
        register_diagnostics(app, container)

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "ok"})


def create_app(*, container: Container | None = None) -> Flask:
    """Flask app factory; tests pass a pre-built container with fakes."""
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["DIAGNOSTICS_ENABLED"] = bool(getattr(settings, "DIAGNOSTICS_ENABLED", False))
    app.json.ensure_ascii = False

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    if container is None:
        app_settings = AppSettings.from_module(settings)
        db = app_settings.db
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module, db.get("user"), db.get("host"), db.get("port", 3306), db.get("database"),
        )
        container = build_container(settings=app_settings)

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(container.conn, schema_path=SCHEMA_PATH)
            logger.info("schema ready (tables=%s)", len(list_tables(container.conn)))

    register_routes(app, container)
    return app
