"""Student tasks: status, progress and assignment completion."""

from flask import Blueprint

tasks_bp = Blueprint('tasks', __name__)

module_metadata = {
    'name': 'Student Tasks',
    'icon': 'list-check',
    'category': 'Learning',
    'url_prefix': '/api',
    'enabled': True
}


def setup_module(app):
    """Attach the API routes and listen to SRS progress signals."""
    from .routes import api  # noqa: F401
    from .events import register_events

    register_events()
