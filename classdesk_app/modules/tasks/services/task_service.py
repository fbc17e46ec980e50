import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from classdesk_app.core.extensions import db
from classdesk_app.models import Assignment, Profile, StudentTask

from ..exceptions import AssignmentNotFoundError, InvalidTaskStatusError, TaskNotFoundError
from ..logics import completion_rate

logger = logging.getLogger(__name__)


class TaskService:
    """Reads and updates student tasks and the completion figures of assignments."""

    @staticmethod
    def get_task(task_id: int) -> StudentTask:
        task = db.session.get(StudentTask, task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    @staticmethod
    def get_assignment(assignment_id: int) -> Assignment:
        assignment = db.session.get(Assignment, assignment_id)
        if assignment is None:
            raise AssignmentNotFoundError(assignment_id)
        return assignment

    @staticmethod
    def list_student_tasks(user_id: int) -> List[StudentTask]:
        """All tasks of a student, newest first."""
        return (
            StudentTask.query
            .filter_by(user_id=user_id)
            .order_by(StudentTask.created_at.desc(), StudentTask.task_id.desc())
            .all()
        )

    @staticmethod
    def update_task_status(task_id: int, status: str, progress_pct: Optional[int] = None) -> StudentTask:
        """Set a task's status and, when given, its progress percentage."""
        if status not in StudentTask.STATUSES:
            raise InvalidTaskStatusError(status)

        task = TaskService.get_task(task_id)
        task.status = status
        if progress_pct is not None:
            task.progress_pct = progress_pct

        TaskService._commit()
        logger.info("Task %s status set to %s (progress %s%%)", task_id, status, task.progress_pct)
        return task

    @staticmethod
    def apply_srs_progress(task_id: int, progress_pct: int, status: str) -> Optional[StudentTask]:
        """
        Store progress reported by SRS practice.

        A completed task stays completed; later reports cannot move it back.
        Returns ``None`` when the report was ignored.
        """
        task = TaskService.get_task(task_id)
        if task.status == StudentTask.STATUS_COMPLETED and status != StudentTask.STATUS_COMPLETED:
            logger.debug("Task %s already completed, ignoring %s report", task_id, status)
            return None

        task.status = status
        task.progress_pct = progress_pct
        TaskService._commit()
        return task

    @staticmethod
    def incomplete_students(assignment_id: int) -> List[Profile]:
        TaskService.get_assignment(assignment_id)
        return (
            Profile.query
            .join(StudentTask, StudentTask.user_id == Profile.user_id)
            .filter(
                StudentTask.assignment_id == assignment_id,
                StudentTask.status != StudentTask.STATUS_COMPLETED,
            )
            .order_by(Profile.name, Profile.user_id)
            .all()
        )

    @staticmethod
    def assignment_completion_stats(assignment_id: int) -> Dict[str, Any]:
        assignment = TaskService.get_assignment(assignment_id)
        tasks = assignment.tasks
        completed = sum(1 for task in tasks if task.status == StudentTask.STATUS_COMPLETED)

        return {
            'assignment_id': assignment_id,
            'total_students': len(tasks),
            'completed_students': completed,
            'completion_rate': completion_rate(completed, len(tasks)),
            'incomplete_students': TaskService.incomplete_students(assignment_id),
        }

    @staticmethod
    def _commit() -> None:
        try:
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            logger.exception("Failed to save student task")
            raise
