from .scheduler import (
    MASTERY_STREAK,
    REVIEW_INTERVALS,
    correctness_tag,
    display_answer,
    grade_submission,
    is_answer_correct,
    schedule_review,
)
from .selector import (
    compute_progress,
    due_entries,
    is_due,
    is_mastered,
    next_available_at,
    select_next_question,
)

__all__ = [
    'MASTERY_STREAK',
    'REVIEW_INTERVALS',
    'correctness_tag',
    'display_answer',
    'grade_submission',
    'is_answer_correct',
    'schedule_review',
    'compute_progress',
    'due_entries',
    'is_due',
    'is_mastered',
    'next_available_at',
    'select_next_question',
]
