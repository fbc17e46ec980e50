from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from classdesk_app.modules.srs.signals import progress_changed

from .services.task_service import TaskService


def on_srs_progress_changed(sender, task_id, progress_pct, status, **kwargs):
    """
    Mirror SRS mastery progress onto the student task row.
    The answer is already saved by then, so a failed sync is logged, not raised.
    """
    try:
        task = TaskService.apply_srs_progress(task_id, progress_pct, status)
    except SQLAlchemyError as e:
        current_app.logger.error(f"Failed to sync task {task_id} to {status} at {progress_pct}%: {e}")
        return
    if task is not None:
        current_app.logger.debug(f"Task {task_id} now {task.status} at {task.progress_pct}%")


def register_events():
    """Connect signals."""
    progress_changed.connect(on_srs_progress_changed)
