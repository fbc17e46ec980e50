"""
SRS Selector - picks the next question to present and measures progress.

Pure functions over already-fetched (question, state) entries.
"""

import datetime
from typing import Iterable, List, Optional, Sequence

from classdesk_app.utils.numbers import percentage

from ..schemas import ProgressSnapshot, QuestionEntry, ReviewState
from .scheduler import MASTERY_STREAK

STATUS_IN_PROGRESS = 'in_progress'
STATUS_COMPLETED = 'completed'


def is_mastered(state: Optional[ReviewState]) -> bool:
    return state is not None and state.streak >= MASTERY_STREAK


def is_due(state: Optional[ReviewState], now: datetime.datetime) -> bool:
    """A question with no state, or no scheduled time, is due immediately."""
    if state is None or state.next_due_at is None:
        return True
    return state.next_due_at <= now


def due_entries(entries: Iterable[QuestionEntry], now: datetime.datetime) -> List[QuestionEntry]:
    return [
        entry for entry in entries
        if not is_mastered(entry.state) and is_due(entry.state, now)
    ]


def select_next_question(
    entries: Sequence[QuestionEntry],
    now: datetime.datetime,
) -> Optional[QuestionEntry]:
    """
    Return the first entry, in workbook order, that is due and not mastered.

    ``None`` means nothing is due right now.
    """
    for entry in entries:
        if not is_mastered(entry.state) and is_due(entry.state, now):
            return entry
    return None


def next_available_at(entries: Iterable[QuestionEntry]) -> Optional[datetime.datetime]:
    """Earliest scheduled time among unmastered questions, for "come back later" hints."""
    pending = [
        entry.state.next_due_at for entry in entries
        if entry.state is not None
        and entry.state.next_due_at is not None
        and not is_mastered(entry.state)
    ]
    return min(pending) if pending else None


def compute_progress(entries: Sequence[QuestionEntry]) -> ProgressSnapshot:
    """Share of mastered questions, and the task status that share implies."""
    total = len(entries)
    mastered = sum(1 for entry in entries if is_mastered(entry.state))
    progress_pct = percentage(mastered, total)

    status = None
    if total and progress_pct == 100:
        status = STATUS_COMPLETED
    elif progress_pct > 0:
        status = STATUS_IN_PROGRESS

    return ProgressSnapshot(
        mastered_count=mastered,
        total_count=total,
        progress_pct=progress_pct,
        status=status,
    )
