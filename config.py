"""
Application configuration module.

This module defines configuration classes for different environments
(development, testing, production). Configuration values are loaded
from environment variables with sensible defaults.

The same classes configure both halves of the project: the REST API
(database location) and the frontend board (API base URL, request
timeout, search debounce interval).
"""

import os
from pathlib import Path

# Base directory of the project
BASE_DIR = Path(__file__).resolve().parent


class Config:
    """Base configuration with default settings."""

    SECRET_KEY: str = os.environ.get("SECRET_KEY", "dev-secret-key-change-in-production")
    SQLALCHEMY_TRACK_MODIFICATIONS: bool = False

    # Default database location
    SQLALCHEMY_DATABASE_URI: str = os.environ.get(
        "DATABASE_URL",
        f"sqlite:///{BASE_DIR / 'instance' / 'tasks.db'}"
    )

    # Frontend board settings
    TASK_API_URL: str = os.environ.get("TASK_API_URL", "http://localhost:5000")
    TASK_API_TIMEOUT: int = int(os.environ.get("TASK_API_TIMEOUT", "5"))
    SEARCH_DEBOUNCE_MS: int = int(os.environ.get("SEARCH_DEBOUNCE_MS", "300"))


class DevelopmentConfig(Config):
    """Development environment configuration."""

    DEBUG: bool = True
    TESTING: bool = False


class TestingConfig(Config):
    """Testing environment configuration."""

    DEBUG: bool = True
    TESTING: bool = True

    # In-memory SQLite; Flask-SQLAlchemy shares one connection across threads
    SQLALCHEMY_DATABASE_URI: str = os.environ.get("TEST_DATABASE_URL", "sqlite://")

    TASK_API_URL: str = os.environ.get("TEST_TASK_API_URL", "http://task-api")
    TASK_API_TIMEOUT: int = int(os.environ.get("TEST_TASK_API_TIMEOUT", "1"))


class ProductionConfig(Config):
    """Production environment configuration."""

    DEBUG: bool = False
    TESTING: bool = False


# Configuration mapping for easy access
config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}


def get_config(env: str | None = None) -> type[Config]:
    """
    Get the configuration class for the specified environment.

    Args:
        env: Environment name (development, testing, production).
             If None, uses FLASK_ENV environment variable.

    Returns:
        Configuration class for the specified environment.
    """
    if env is None:
        env = os.environ.get("FLASK_ENV", "development")
    return config.get(env, config["default"])
