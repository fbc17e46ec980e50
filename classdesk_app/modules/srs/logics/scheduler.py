"""
SRS Scheduler - Pure review scheduling logic

Judges a submission against a question's answer key and moves the question's
streak along a fixed ladder:

    wrong          -> streak 0, again in 1 minute
    first correct  -> streak 1, again in 10 minutes
    second correct -> streak 2, again in 1 day
    third correct  -> streak 3, mastered (parked for 365 days)

No database access and no clock reads: the caller supplies ``now``.
"""

import datetime
import logging
from typing import Optional

from ..schemas import (
    Correctness,
    ItemType,
    QuestionDTO,
    ReviewState,
    ScheduleResult,
    SubmissionDTO,
)

logger = logging.getLogger(__name__)

MASTERY_STREAK = 3

# Delay until the next review, indexed by the streak *after* the answer.
REVIEW_INTERVALS = (
    datetime.timedelta(minutes=1),
    datetime.timedelta(minutes=10),
    datetime.timedelta(days=1),
    datetime.timedelta(days=365),
)

# Tag for a correct answer, indexed by the streak *before* the answer.
CORRECT_TAGS = (Correctness.ONCE, Correctness.TWICE, Correctness.THRICE)


def parse_option_index(answer_key: Optional[str]) -> Optional[int]:
    """Return the 0-based option index stored in an mcq answer key, or None if malformed."""
    if answer_key is None or isinstance(answer_key, bool):
        return None
    try:
        return int(str(answer_key).strip())
    except (TypeError, ValueError):
        return None


def _normalize_text(value: str) -> str:
    # Case and surrounding whitespace only; accents and punctuation stay significant
    return value.strip().lower()


def is_answer_correct(question: QuestionDTO, submission: SubmissionDTO) -> bool:
    """
    Decide whether a submission answers the question.

    A missing or malformed answer key is judged incorrect rather than raised,
    so the learner always gets a definite outcome.
    """
    if question.item_type == ItemType.MCQ:
        expected = parse_option_index(question.answer_key)
        if expected is None:
            logger.warning(
                "Malformed answer key %r on mcq item %s, judging as incorrect",
                question.answer_key, question.item_id,
            )
            return False
        selected = submission.selected_option
        if selected is None or isinstance(selected, bool):
            return False
        return selected == expected

    if question.answer_key is None:
        logger.warning("Missing answer key on item %s, judging as incorrect", question.item_id)
        return False
    if submission.response_text is None:
        return False
    return _normalize_text(submission.response_text) == _normalize_text(str(question.answer_key))


def next_streak(current_streak: int, correct: bool) -> int:
    if not correct:
        return 0
    return min(max(current_streak, 0) + 1, MASTERY_STREAK)


def schedule_review(current_streak: int, correct: bool, now: datetime.datetime) -> ScheduleResult:
    """Compute the streak and next due time after an answer given at ``now``."""
    streak = next_streak(current_streak, correct)
    return ScheduleResult(
        streak=streak,
        next_due_at=now + REVIEW_INTERVALS[streak],
        correct=correct,
    )


def grade_submission(
    question: QuestionDTO,
    submission: SubmissionDTO,
    state: Optional[ReviewState],
    now: datetime.datetime,
) -> ScheduleResult:
    """Judge a submission and schedule the next review. ``state=None`` means never reviewed."""
    current_streak = state.streak if state is not None else 0
    correct = is_answer_correct(question, submission)
    return schedule_review(current_streak, correct, now)


def correctness_tag(current_streak: int, correct: bool) -> str:
    if not correct:
        return Correctness.WRONG
    index = min(max(current_streak, 0), len(CORRECT_TAGS) - 1)
    return CORRECT_TAGS[index]


def display_answer(question: QuestionDTO) -> Optional[str]:
    """Human-readable expected answer: the option text for mcq, the key otherwise."""
    if question.item_type == ItemType.MCQ:
        index = parse_option_index(question.answer_key)
        if index is None or not 0 <= index < len(question.options):
            return None
        return question.options[index]
    return question.answer_key
