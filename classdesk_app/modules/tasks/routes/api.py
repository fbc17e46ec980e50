from flask import current_app, jsonify

from classdesk_app.core.error_handlers import load_json_body, success_response
from classdesk_app.models import Workbook
from classdesk_app.modules.srs.interface import SrsInterface
from classdesk_app.utils.time_utils import utcnow

from .. import tasks_bp
from ..logics import days_until_due, format_due_date
from ..schemas import AssignmentStatsSchema, StudentSummarySchema, StudentTaskSchema, TaskStatusUpdateSchema
from ..services.task_service import TaskService


def _serialize_task(task, now):
    data = StudentTaskSchema().dump(task)
    due_at = task.assignment.due_at
    data['days_until_due'] = days_until_due(due_at, now)
    data['due_label'] = format_due_date(due_at, now, current_app.config.get('SYSTEM_TIMEZONE', 'UTC'))
    return data


@tasks_bp.route('/students/<int:user_id>/tasks', methods=['GET'])
def list_student_tasks(user_id):
    """All tasks of a student, newest first."""
    now = utcnow()
    tasks = TaskService.list_student_tasks(user_id)
    return jsonify(success_response([_serialize_task(task, now) for task in tasks]))


@tasks_bp.route('/tasks/<int:task_id>', methods=['GET'])
def get_task(task_id):
    task = TaskService.get_task(task_id)
    data = _serialize_task(task, utcnow())

    workbook = task.workbook
    if workbook is not None and workbook.workbook_type == Workbook.TYPE_SRS:
        data['srs_progress'] = SrsInterface.get_progress(task_id).to_dict()
    return jsonify(success_response(data))


@tasks_bp.route('/tasks/<int:task_id>/status', methods=['PATCH'])
def update_task_status(task_id):
    """
    Manually change a task's status.
    Input: {"status": "pending" | "in_progress" | "completed", "progress_pct": int (optional)}
    """
    payload = load_json_body(TaskStatusUpdateSchema(), 'Invalid status update')
    task = TaskService.update_task_status(task_id, payload['status'], payload.get('progress_pct'))
    return jsonify(success_response(_serialize_task(task, utcnow()), message='Task status updated'))


@tasks_bp.route('/assignments/<int:assignment_id>/stats', methods=['GET'])
def assignment_stats(assignment_id):
    stats = TaskService.assignment_completion_stats(assignment_id)
    return jsonify(success_response(AssignmentStatsSchema().dump(stats)))


@tasks_bp.route('/assignments/<int:assignment_id>/incomplete', methods=['GET'])
def incomplete_students(assignment_id):
    students = TaskService.incomplete_students(assignment_id)
    return jsonify(success_response(StudentSummarySchema(many=True).dump(students)))
