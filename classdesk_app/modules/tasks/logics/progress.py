"""
Task progress and due-date helpers.

Pure functions; callers pass ``now`` so results do not depend on the wall clock.
"""

import datetime
import math
from typing import Optional

from classdesk_app.models import StudentTask, Workbook
from classdesk_app.utils.numbers import percentage
from classdesk_app.utils.time_utils import ensure_utc, to_timezone

WORKBOOK_TYPE_LABELS = {
    Workbook.TYPE_SRS: 'SRS review',
    Workbook.TYPE_PDF: 'PDF submission',
    Workbook.TYPE_ESSAY: 'Essay',
    Workbook.TYPE_VIEWING: 'Film viewing',
    Workbook.TYPE_LECTURE: 'Online lecture',
}

SUBJECT_LABELS = {
    'directing': 'Directing',
    'writing': 'Writing',
    'research': 'Research',
    'integrated': 'Integrated',
}

STATUS_LABELS = {
    StudentTask.STATUS_PENDING: 'Pending',
    StudentTask.STATUS_IN_PROGRESS: 'In progress',
    StudentTask.STATUS_COMPLETED: 'Completed',
}

# Workbook types whose progress is tracked incrementally in progress_pct
INCREMENTAL_TYPES = (Workbook.TYPE_SRS, Workbook.TYPE_VIEWING)

SECONDS_PER_DAY = 24 * 60 * 60


def workbook_type_label(workbook_type: str) -> str:
    return WORKBOOK_TYPE_LABELS.get(workbook_type, workbook_type)


def subject_label(subject: str) -> str:
    return SUBJECT_LABELS.get(subject, subject)


def status_label(status: str) -> str:
    return STATUS_LABELS.get(status, status)


def task_progress(workbook_type: str, status: str, progress_pct: Optional[int]) -> int:
    """
    Progress percentage shown for a task.

    SRS and viewing tasks report their stored percentage; every other type
    is all-or-nothing on completion.
    """
    if workbook_type in INCREMENTAL_TYPES:
        return progress_pct or 0
    return 100 if status == StudentTask.STATUS_COMPLETED else 0


def days_until_due(due_at: datetime.datetime, now: datetime.datetime) -> int:
    """Whole days left before ``due_at``, rounded up; negative once overdue."""
    delta = ensure_utc(due_at) - ensure_utc(now)
    return math.ceil(delta.total_seconds() / SECONDS_PER_DAY)


def format_due_date(
    due_at: datetime.datetime,
    now: datetime.datetime,
    tz_name: str = 'UTC',
) -> str:
    """Render a deadline as ``YYYY-MM-DD (hint)`` in the given timezone."""
    days = days_until_due(due_at, now)
    date_text = to_timezone(due_at, tz_name).strftime('%Y-%m-%d')

    if days < 0:
        unit = 'day' if days == -1 else 'days'
        return f"{date_text} (overdue by {abs(days)} {unit})"
    if days == 0:
        return f"{date_text} (due today)"
    if days == 1:
        return f"{date_text} (due tomorrow)"
    return f"{date_text} ({days} days left)"


def completion_rate(completed: int, total: int) -> int:
    """Percentage of completed tasks, 0 when nobody was assigned."""
    return percentage(completed, total)
