"""Bootstrap helpers for configuring the Flask application."""

from __future__ import annotations

import logging

from flask import Flask

from . import error_handlers
from .extensions import db
from .logging_config import setup_logging
from .module_registry import register_default_modules


def configure_logging(app: Flask) -> None:
    """Configure the package logger.

    ``app.logger`` is named after the import name, so it is the same
    ``classdesk_app`` logger that module loggers propagate to.
    """

    level = app.config.get("LOG_LEVEL", "INFO")
    if app.debug:
        level = "DEBUG"

    setup_logging(
        log_level=level,
        log_dir=app.config.get("LOG_DIR"),
        json_format=app.config.get("LOG_JSON", False),
    )
    logging.getLogger("werkzeug").setLevel(logging.WARNING)
    app.logger.info("Flask app logger configured successfully.")


def register_extensions(app: Flask) -> None:
    """Initialize shared extensions with the Flask app instance."""

    db.init_app(app)


def register_error_handlers(app: Flask) -> None:
    """Render ClassDesk errors as JSON."""

    error_handlers.register_error_handlers(app)


def register_blueprints(app: Flask) -> None:
    """Register all default blueprints with the app."""

    register_default_modules(app)


def initialize_database(app: Flask) -> None:
    """Create database tables for every registered model."""

    from .. import models  # noqa: F401
    from ..modules.srs import models as srs_models  # noqa: F401

    db.create_all()
    app.logger.info("Database tables ready at %s", app.config.get("SQLALCHEMY_DATABASE_URI"))
