"""
Flask application factory for the Task Manager service.

This module creates and configures the Flask application using
the factory pattern, allowing for different configurations
(development, testing, production).

The factory wires four things together:
  * the SQLAlchemy extension (``db``),
  * a ``TaskGateway`` bound to ``db.session`` and stored in
    ``app.extensions["task_gateway"]`` for the handlers to use,
  * the route blueprints plus request logging / error middleware,
  * the ``init-db`` CLI command. The schema is never created on boot.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from flask import Flask
from flask_sqlalchemy import SQLAlchemy

from .config import get_config

# Initialize SQLAlchemy without binding to app
db = SQLAlchemy()

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

GATEWAY_EXTENSION_KEY = "task_gateway"


def _ensure_sqlite_db_parent_exists(database_uri: str) -> None:
    """Create parent directories for absolute file-based SQLite URIs when missing."""
    sqlite_prefix = "sqlite:///"
    if not database_uri.startswith(sqlite_prefix):
        return

    sqlite_path = database_uri[len(sqlite_prefix):].split("?", 1)[0]
    if not sqlite_path or sqlite_path == ":memory:":
        return

    path = Path(sqlite_path)
    # Relative paths are resolved by Flask-SQLAlchemy inside the instance folder.
    if path.is_absolute():
        path.parent.mkdir(parents=True, exist_ok=True)


def create_app(config_name: str | None = None) -> Flask:
    """
    Create and configure the Flask application.

    Args:
        config_name: Configuration environment name.
                     If None, uses FLASK_ENV environment variable.

    Returns:
        Configured Flask application instance.
    """
    app = Flask(__name__, instance_relative_config=True)

    # Load configuration
    config_class = get_config(config_name)
    app.config.from_object(config_class)

    logger.info("Creating app with config: %s", config_class.__name__)

    os.makedirs(app.instance_path, exist_ok=True)
    _ensure_sqlite_db_parent_exists(app.config.get("SQLALCHEMY_DATABASE_URI", ""))

    # Initialize extensions
    db.init_app(app)

    from .gateway import TaskGateway

    app.extensions[GATEWAY_EXTENSION_KEY] = TaskGateway(
        db.session,
        soft_delete=app.config.get("TASKS_SOFT_DELETE", True),
    )

    # Register blueprints
    from .cli import register_commands
    from .middleware import register_middleware
    from .routes.api import api_bp
    from .routes.root import root_bp

    app.register_blueprint(root_bp)
    app.register_blueprint(api_bp, url_prefix="/tasks")
    register_middleware(app)
    register_commands(app)

    return app
