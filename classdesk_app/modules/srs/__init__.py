"""Spaced-repetition practice for SRS workbooks."""

from flask import Blueprint

srs_bp = Blueprint('srs', __name__)

module_metadata = {
    'name': 'SRS Practice',
    'icon': 'repeat',
    'category': 'Learning',
    'url_prefix': '/api',
    'enabled': True
}


def setup_module(app):
    """Apply module defaults and attach the API routes."""
    from .config import SrsDefaultConfig
    from . import models  # noqa: F401
    from .routes import api  # noqa: F401

    for key, value in vars(SrsDefaultConfig).items():
        if key.isupper():
            app.config.setdefault(key, value)
