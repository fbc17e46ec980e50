from marshmallow import Schema, fields, validate

from classdesk_app.models import StudentTask
from classdesk_app.utils.time_utils import isoformat

from .logics import status_label, subject_label, task_progress, workbook_type_label


class WorkbookSummarySchema(Schema):
    workbook_id = fields.Int()
    title = fields.String()
    subject = fields.String()
    subject_label = fields.Method('get_subject_label')
    workbook_type = fields.String()
    workbook_type_label = fields.Method('get_type_label')
    week = fields.Int(allow_none=True)
    is_common = fields.Boolean()
    required_count = fields.Int(allow_none=True)

    def get_subject_label(self, obj):
        return subject_label(obj.subject)

    def get_type_label(self, obj):
        return workbook_type_label(obj.workbook_type)


class StudentTaskSchema(Schema):
    task_id = fields.Int()
    assignment_id = fields.Int()
    user_id = fields.Int()
    status = fields.String()
    status_label = fields.Method('get_status_label')
    progress_pct = fields.Method('get_progress_pct')
    due_at = fields.Method('get_due_at')
    workbook = fields.Nested(WorkbookSummarySchema, allow_none=True)
    created_at = fields.Function(lambda obj: isoformat(obj.created_at))
    updated_at = fields.Function(lambda obj: isoformat(obj.updated_at))

    def get_status_label(self, obj):
        return status_label(obj.status)

    def get_progress_pct(self, obj):
        workbook = obj.workbook
        workbook_type = workbook.workbook_type if workbook else None
        return task_progress(workbook_type, obj.status, obj.progress_pct)

    def get_due_at(self, obj):
        return isoformat(obj.assignment.due_at)


class TaskStatusUpdateSchema(Schema):
    """Body of a manual status change."""
    status = fields.String(required=True, validate=validate.OneOf(StudentTask.STATUSES))
    progress_pct = fields.Int(
        load_default=None,
        allow_none=True,
        strict=True,
        validate=validate.Range(min=0, max=100),
    )


class StudentSummarySchema(Schema):
    user_id = fields.Int()
    name = fields.String()


class AssignmentStatsSchema(Schema):
    assignment_id = fields.Int()
    total_students = fields.Int()
    completed_students = fields.Int()
    completion_rate = fields.Int()
    incomplete_students = fields.List(fields.Nested(StudentSummarySchema))
