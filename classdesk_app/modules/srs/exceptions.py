from classdesk_app.core.error_handlers import ClassDeskError


class SrsError(ClassDeskError):
    """Base exception for the SRS module."""

    def __init__(self, message: str, code: str = 'SRS_ERROR', status_code: int = 400, details=None):
        super().__init__(message=message, code=code, status_code=status_code, details=details)


class NotAnSrsTaskError(SrsError):
    """Raised when SRS practice is requested for a non-SRS workbook."""

    def __init__(self, task_id: int, workbook_type: str):
        super().__init__(
            f"Task {task_id} is a {workbook_type} task, not an SRS task",
            code='NOT_SRS_TASK',
            status_code=400,
            details={'task_id': task_id, 'workbook_type': workbook_type},
        )


class QuestionNotInTaskError(SrsError):
    """Raised when the submitted item does not belong to the task's workbook."""

    def __init__(self, task_id: int, item_id: int):
        super().__init__(
            f"Question {item_id} is not part of task {task_id}",
            code='QUESTION_NOT_IN_TASK',
            status_code=404,
            details={'task_id': task_id, 'item_id': item_id},
        )


class QuestionNotDueError(SrsError):
    """Raised when answering a question whose review time has not come yet."""

    def __init__(self, item_id: int, next_due_at=None):
        super().__init__(
            f"Question {item_id} is not due for review yet",
            code='QUESTION_NOT_DUE',
            status_code=409,
            details={
                'item_id': item_id,
                'next_due_at': next_due_at.isoformat() if next_due_at else None,
            },
        )


class QuestionMasteredError(SrsError):
    """Raised when answering a question that is already mastered."""

    def __init__(self, item_id: int):
        super().__init__(
            f"Question {item_id} is already mastered",
            code='QUESTION_MASTERED',
            status_code=409,
            details={'item_id': item_id},
        )
