"""
Flask application factory module.

This module creates and configures the Task Manager REST API using
the factory pattern, allowing for different configurations
(development, testing, production).

The application registers one blueprint:
  * **api_bp** -- JSON task endpoints mounted at ``/v1``.

A bare ``/health`` liveness route and the JSON error handlers are
registered on the application itself so that they also cover URLs
outside the blueprint.
"""

import logging
import os
from pathlib import Path

from flask import Flask
from flask_sqlalchemy import SQLAlchemy

from config import get_config

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

    sqlite_path = database_uri[len(sqlite_prefix):].split("?", 1)[0]
    if sqlite_path == ":memory:":
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

    # Register blueprints and error handlers
    from task_manager.errors import register_error_handlers
    from task_manager.routes.api import api_bp, health_check

    app.register_blueprint(api_bp, url_prefix="/v1")
    app.add_url_rule("/health", view_func=health_check, methods=["GET"])
    register_error_handlers(app)

    # Create database tables
    with app.app_context():
        db.create_all()
        logger.info("Database tables created")

    return app
