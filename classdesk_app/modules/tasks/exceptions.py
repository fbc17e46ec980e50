from classdesk_app.core.error_handlers import NotFoundError, ValidationError


class TaskNotFoundError(NotFoundError):
    """Raised when a student task id does not exist."""

    def __init__(self, task_id: int):
        self.task_id = task_id
        super().__init__(f"Student task {task_id} not found", resource='student_task')


class AssignmentNotFoundError(NotFoundError):
    """Raised when an assignment id does not exist."""

    def __init__(self, assignment_id: int):
        self.assignment_id = assignment_id
        super().__init__(f"Assignment {assignment_id} not found", resource='assignment')


class InvalidTaskStatusError(ValidationError):
    """Raised when a status outside pending/in_progress/completed is requested."""

    def __init__(self, status: str):
        self.status = status
        super().__init__(f"Invalid task status '{status}'", errors={'status': [status]})
