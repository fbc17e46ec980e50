from .progress import (
    completion_rate,
    days_until_due,
    format_due_date,
    status_label,
    subject_label,
    task_progress,
    workbook_type_label,
)

__all__ = [
    'completion_rate',
    'days_until_due',
    'format_due_date',
    'status_label',
    'subject_label',
    'task_progress',
    'workbook_type_label',
]
