"""
Tests for the SRS selector - next question choice and progress
"""

import datetime

from classdesk_app.modules.srs.logics.selector import (
    compute_progress,
    due_entries,
    is_due,
    next_available_at,
    select_next_question,
)
from classdesk_app.modules.srs.schemas import QuestionDTO, QuestionEntry, ReviewState
from classdesk_app.utils.numbers import percentage, round_half_up

NOW = datetime.datetime(2025, 3, 1, 9, 0, tzinfo=datetime.timezone.utc)
LATER = NOW + datetime.timedelta(minutes=10)
EARLIER = NOW - datetime.timedelta(minutes=1)


def entry(item_id, streak=None, next_due_at=None):
    state = None if streak is None else ReviewState(streak=streak, next_due_at=next_due_at)
    return QuestionEntry(question=QuestionDTO(item_id=item_id, item_type='short', answer_key='x'), state=state)


class TestSelectNextQuestion:

    def test_unreviewed_questions_in_order(self):
        entries = [entry(1), entry(2)]
        assert select_next_question(entries, NOW).question.item_id == 1

    def test_skips_questions_scheduled_later(self):
        entries = [entry(1, streak=1, next_due_at=LATER), entry(2)]
        assert select_next_question(entries, NOW).question.item_id == 2

    def test_skips_mastered_questions(self):
        entries = [entry(1, streak=3, next_due_at=EARLIER), entry(2, streak=0, next_due_at=EARLIER)]
        assert select_next_question(entries, NOW).question.item_id == 2

    def test_due_exactly_now_is_due(self):
        assert is_due(ReviewState(streak=1, next_due_at=NOW), NOW)

    def test_state_without_due_time_is_due(self):
        assert is_due(ReviewState(streak=0, next_due_at=None), NOW)

    def test_nothing_due_returns_none(self):
        entries = [entry(1, streak=1, next_due_at=LATER), entry(2, streak=3, next_due_at=EARLIER)]
        assert select_next_question(entries, NOW) is None
        assert next_available_at(entries) == LATER

    def test_empty_task(self):
        assert select_next_question([], NOW) is None
        assert next_available_at([]) is None

    def test_due_entries_counts(self):
        entries = [entry(1), entry(2, streak=1, next_due_at=LATER), entry(3, streak=2, next_due_at=EARLIER)]
        assert [e.question.item_id for e in due_entries(entries, NOW)] == [1, 3]


class TestComputeProgress:

    def test_two_of_three_mastered(self):
        entries = [entry(1, 3, LATER), entry(2, 3, LATER), entry(3, 1, EARLIER)]
        assert select_next_question(entries, NOW).question.item_id == 3

        progress = compute_progress(entries)
        assert progress.mastered_count == 2
        assert progress.total_count == 3
        assert progress.progress_pct == 67
        assert progress.status == 'in_progress'

    def test_all_mastered_completes(self):
        progress = compute_progress([entry(1, 3, LATER), entry(2, 3, LATER)])
        assert progress.progress_pct == 100
        assert progress.status == 'completed'

    def test_nothing_mastered_has_no_status(self):
        progress = compute_progress([entry(1, 2, LATER), entry(2)])
        assert progress.progress_pct == 0
        assert progress.status is None

    def test_empty_task_is_not_completed(self):
        progress = compute_progress([])
        assert progress.progress_pct == 0
        assert progress.status is None

    def test_half_rounds_up(self):
        assert round_half_up(12.5) == 13
        assert round_half_up(66.4) == 66
        assert percentage(1, 8) == 13
        assert percentage(0, 0) == 0
