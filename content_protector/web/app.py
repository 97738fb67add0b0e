"""Flask application factory."""

import os
from pathlib import Path

from flask import Flask

from ..config import load_config
from ..db import Database
from ..gate import AccessGate
from ..settings import SettingsStore


def create_app(config_path: str | None = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        config_path: Path to config.yaml.
                     Defaults to CONFIG_PATH env var or 'config.yaml'.
    """
    app = Flask(
        __name__,
        template_folder=str(Path(__file__).parent / "templates"),
    )

    if config_path is None:
        config_path = os.environ.get("CONFIG_PATH", "config.yaml")

    cp_config = load_config(config_path)
    app.config["CP_CONFIG"] = cp_config
    app.config["SECRET_KEY"] = cp_config.web.secret_key or "content-protector-dev-key"

    # Initialize database
    db = Database(cp_config.database_path)
    db.init_db()
    app.config["DB"] = db

    app.config["SETTINGS"] = SettingsStore(db)
    app.config["GATE"] = AccessGate(session_max_age=cp_config.protection.session_max_age)

    # Register routes
    from .routes import bp
    from .api import api_bp
    from .admin import admin_bp
    app.register_blueprint(bp)
    app.register_blueprint(api_bp, url_prefix=cp_config.protection.api_prefix.rstrip("/"))
    app.register_blueprint(admin_bp, url_prefix=cp_config.protection.admin_prefix.rstrip("/"))

    # Gate content requests behind the configured passwords
    from .protect import init_protection
    init_protection(app)

    return app
