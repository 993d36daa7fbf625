"""
Flask application factory for the Tasklist service.

This module creates and configures the Flask application using
the factory pattern, allowing for different configurations
(development, testing, production).

The factory wires the pieces together explicitly:
  * **db** -- the Flask-SQLAlchemy extension bound to the app.
  * **TaskStore** -- built once around ``db.session`` and published on
    ``app.extensions["task_store"]`` for the API handlers.
  * **api_bp** -- JSON REST endpoints mounted at ``/api``.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from flask import Flask
from flask_sqlalchemy import SQLAlchemy

from tasklist.config import get_config

# Initialize SQLAlchemy without binding to app
db = SQLAlchemy()

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def _ensure_sqlite_db_parent_exists(database_uri: str) -> None:
    """Create parent directories for file-based SQLite URIs when missing."""
    sqlite_prefix = "sqlite:///"
    if not database_uri.startswith(sqlite_prefix):
        return

    sqlite_path = database_uri[len(sqlite_prefix) :].split("?", 1)[0]
    if not sqlite_path or sqlite_path == ":memory:":
        return

    Path(sqlite_path).parent.mkdir(parents=True, exist_ok=True)


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

    from tasklist.store import TaskStore

    app.extensions["task_store"] = TaskStore(db.session)

    # Register blueprints
    from tasklist.routes.api import api_bp

    app.register_blueprint(api_bp, url_prefix="/api")

    # Create database tables
    with app.app_context():
        db.create_all()
        logger.info("Database tables created")

    return app
