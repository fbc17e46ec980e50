"""
Tests for SrsService - grading, persistence and task progress

Tests cover:
- Session view (next question, waiting, done)
- Submission flow with a controlled clock
- Rejection of mastered, not-due and foreign questions
- Task status kept in sync through the progress signal
"""

import datetime

import pytest
from sqlalchemy.exc import SQLAlchemyError

from classdesk_app import db
from classdesk_app.models import StudentTask, Workbook
from classdesk_app.modules.srs.exceptions import (
    NotAnSrsTaskError,
    QuestionMasteredError,
    QuestionNotDueError,
    QuestionNotInTaskError,
)
from classdesk_app.modules.srs.models import Answer
from classdesk_app.modules.srs.schemas import ScheduleResult, SubmissionDTO
from classdesk_app.modules.srs.services import SrsService, SrsStateRepository
from classdesk_app.modules.srs.signals import answer_graded
from classdesk_app.modules.tasks.exceptions import TaskNotFoundError
from classdesk_app.modules.tasks.services import TaskService

START = datetime.datetime(2025, 3, 1, 9, 0, tzinfo=datetime.timezone.utc)


class FakeClock:
    def __init__(self, now=START):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += datetime.timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def service(clock):
    return SrsService(clock=clock)


def item_ids(task):
    return [item.item_id for item in sorted(task.workbook.items, key=lambda i: i.position)]


MONTAGE = SubmissionDTO(selected_option=2)
RASHOMON = SubmissionDTO(response_text=' Rashomon ')
NEW_WAVE = SubmissionDTO(selected_option=1)


class TestSessionView:

    def test_first_question_is_presented(self, service, srs_task):
        view = service.get_session_view(srs_task.task_id)
        assert view.current.question.item_id == item_ids(srs_task)[0]
        assert view.due_count == 3
        assert not view.done

        data = view.to_dict()
        assert 'answer_key' not in data['question']
        assert data['question']['options'] == ['Long take', 'Jump cut', 'Montage', 'Match cut']
        assert data['waiting'] is False

    def test_waiting_when_nothing_due(self, service, clock, make_task):
        task = make_task(items=[{'prompt': 'Q', 'item_type': 'short', 'answer_key': 'a'}])
        item_id = item_ids(task)[0]
        service.submit_answer(task.task_id, item_id, SubmissionDTO(response_text='a'))

        view = service.get_session_view(task.task_id)
        assert view.current is None
        assert view.next_available_at == clock.now + datetime.timedelta(minutes=10)
        assert view.to_dict()['waiting'] is True

    def test_non_srs_task_is_rejected(self, service, make_task):
        task = make_task(workbook_type=Workbook.TYPE_ESSAY)
        with pytest.raises(NotAnSrsTaskError):
            service.get_session_view(task.task_id)

    def test_unknown_task(self, service, app):
        with pytest.raises(TaskNotFoundError):
            service.get_session_view(9999)


class TestSubmitAnswer:

    def test_correct_mcq_answer(self, service, clock, srs_task):
        item_id = item_ids(srs_task)[0]
        outcome = service.submit_answer(srs_task.task_id, item_id, MONTAGE)

        assert outcome.correct
        assert outcome.streak == 1
        assert outcome.correctness == 'once'
        assert outcome.next_due_at == START + datetime.timedelta(minutes=10)
        assert outcome.correct_answer is None

        state = SrsStateRepository.get_state(srs_task.task_id, item_id)
        assert state.streak == 1
        assert state.next_due_at == START + datetime.timedelta(minutes=10)

    def test_wrong_answer_reveals_key(self, service, srs_task):
        item_id = item_ids(srs_task)[0]
        outcome = service.submit_answer(srs_task.task_id, item_id, SubmissionDTO(selected_option=0))

        assert not outcome.correct
        assert outcome.streak == 0
        assert outcome.correctness == 'wrong'
        assert outcome.correct_answer == 'Montage'
        assert outcome.next_due_at == START + datetime.timedelta(minutes=1)

    def test_wrong_answer_hides_key_when_disabled(self, app, service, srs_task):
        app.config['SRS_REVEAL_ANSWER_ON_WRONG'] = False
        item_id = item_ids(srs_task)[1]
        outcome = service.submit_answer(srs_task.task_id, item_id, SubmissionDTO(response_text='Rashômon'))
        assert not outcome.correct
        assert outcome.correct_answer is None

    def test_resubmission_updates_single_answer_row(self, service, clock, srs_task):
        item_id = item_ids(srs_task)[0]
        service.submit_answer(srs_task.task_id, item_id, SubmissionDTO(selected_option=0))
        clock.advance(minutes=1)
        service.submit_answer(srs_task.task_id, item_id, MONTAGE)

        answers = Answer.query.filter_by(student_task_id=srs_task.task_id, workbook_item_id=item_id).all()
        assert len(answers) == 1
        assert answers[0].selected_option == 2
        assert answers[0].correctness == 'once'

    def test_not_due_question_is_rejected(self, service, clock, srs_task):
        item_id = item_ids(srs_task)[0]
        service.submit_answer(srs_task.task_id, item_id, MONTAGE)
        clock.advance(minutes=5)

        with pytest.raises(QuestionNotDueError):
            service.submit_answer(srs_task.task_id, item_id, MONTAGE)

    def test_mastered_question_is_rejected(self, service, clock, srs_task):
        item_id = item_ids(srs_task)[0]
        for delay in ({'minutes': 10}, {'days': 1}, {'days': 365}):
            service.submit_answer(srs_task.task_id, item_id, MONTAGE)
            clock.advance(**delay)

        with pytest.raises(QuestionMasteredError):
            service.submit_answer(srs_task.task_id, item_id, MONTAGE)

    def test_foreign_question_is_rejected(self, service, srs_task, make_task):
        other = make_task(items=[{'prompt': 'Other', 'item_type': 'short', 'answer_key': 'x'}])
        with pytest.raises(QuestionNotInTaskError):
            service.submit_answer(srs_task.task_id, item_ids(other)[0], SubmissionDTO(response_text='x'))

    def test_answer_graded_signal(self, service, srs_task):
        received = []

        def listener(sender, **kwargs):
            received.append(kwargs)

        answer_graded.connect(listener)
        try:
            service.submit_answer(srs_task.task_id, item_ids(srs_task)[0], MONTAGE)
        finally:
            answer_graded.disconnect(listener)

        assert len(received) == 1
        assert received[0]['correct'] is True
        assert received[0]['streak'] == 1


class TestTaskProgress:

    def _master(self, service, clock, task_id, item_id, submission):
        for delay in ({'minutes': 10}, {'days': 1}, {'days': 365}):
            service.submit_answer(task_id, item_id, submission)
            clock.advance(**delay)

    def test_first_correct_answer_starts_task(self, service, srs_task):
        service.submit_answer(srs_task.task_id, item_ids(srs_task)[0], MONTAGE)

        task = db.session.get(StudentTask, srs_task.task_id)
        assert task.status == StudentTask.STATUS_IN_PROGRESS
        assert task.progress_pct == 0

    def test_first_mastery_reports_progress(self, service, clock, srs_task):
        self._master(service, clock, srs_task.task_id, item_ids(srs_task)[0], MONTAGE)

        task = db.session.get(StudentTask, srs_task.task_id)
        assert task.status == StudentTask.STATUS_IN_PROGRESS
        assert task.progress_pct == 33

    def test_wrong_first_answer_leaves_task_pending(self, service, srs_task):
        service.submit_answer(srs_task.task_id, item_ids(srs_task)[0], SubmissionDTO(selected_option=3))

        task = db.session.get(StudentTask, srs_task.task_id)
        assert task.status == StudentTask.STATUS_PENDING

    def test_two_of_three_mastered(self, service, clock, srs_task):
        first, second, _ = item_ids(srs_task)
        self._master(service, clock, srs_task.task_id, first, MONTAGE)
        self._master(service, clock, srs_task.task_id, second, RASHOMON)

        progress = service.get_progress(srs_task.task_id)
        assert progress.mastered_count == 2
        assert progress.progress_pct == 67

        task = db.session.get(StudentTask, srs_task.task_id)
        assert task.status == StudentTask.STATUS_IN_PROGRESS
        assert task.progress_pct == 67

    def test_all_mastered_completes_task(self, service, clock, srs_task):
        for item_id, submission in zip(item_ids(srs_task), (MONTAGE, RASHOMON, NEW_WAVE)):
            self._master(service, clock, srs_task.task_id, item_id, submission)

        view = service.get_session_view(srs_task.task_id)
        assert view.done
        assert view.current is None

        task = db.session.get(StudentTask, srs_task.task_id)
        assert task.status == StudentTask.STATUS_COMPLETED
        assert task.progress_pct == 100

    def test_failed_status_sync_keeps_graded_answer(self, service, srs_task, monkeypatch):
        def failing_sync(task_id, progress_pct, status):
            raise SQLAlchemyError('database is locked')

        monkeypatch.setattr(TaskService, 'apply_srs_progress', staticmethod(failing_sync))
        item_id = item_ids(srs_task)[0]
        outcome = service.submit_answer(srs_task.task_id, item_id, MONTAGE)

        assert outcome.correct
        assert SrsStateRepository.get_state(srs_task.task_id, item_id).streak == 1
        assert db.session.get(StudentTask, srs_task.task_id).status == StudentTask.STATUS_PENDING


class TestReviewPersistence:

    def test_non_utc_clock_keeps_interval(self, srs_task):
        seoul = datetime.timezone(datetime.timedelta(hours=9))
        clock = FakeClock(datetime.datetime(2025, 3, 1, 18, 0, tzinfo=seoul))
        service = SrsService(clock=clock)
        item_id = item_ids(srs_task)[0]

        service.submit_answer(srs_task.task_id, item_id, MONTAGE)

        state = SrsStateRepository.get_state(srs_task.task_id, item_id)
        assert state.next_due_at == datetime.datetime(2025, 3, 1, 9, 10, tzinfo=datetime.timezone.utc)

        clock.advance(minutes=10)
        view = service.get_session_view(srs_task.task_id)
        assert view.current.question.item_id == item_id

    def test_stale_read_updates_existing_answer(self, service, clock, srs_task, monkeypatch):
        item_id = item_ids(srs_task)[0]
        service.submit_answer(srs_task.task_id, item_id, SubmissionDTO(selected_option=0))

        # The first lookup misses the row another submission already wrote
        real_find = SrsStateRepository._find_answer
        lookups = []

        def stale_find(task_id, answered_item_id):
            lookups.append(answered_item_id)
            if len(lookups) == 1:
                return None
            return real_find(task_id, answered_item_id)

        monkeypatch.setattr(SrsStateRepository, '_find_answer', staticmethod(stale_find))
        result = ScheduleResult(streak=1, next_due_at=START + datetime.timedelta(minutes=10), correct=True)
        SrsStateRepository.save_review(srs_task.task_id, item_id, MONTAGE, result, 'once')
        monkeypatch.undo()

        answers = Answer.query.filter_by(student_task_id=srs_task.task_id, workbook_item_id=item_id).all()
        assert len(answers) == 1
        assert answers[0].correctness == 'once'
        assert answers[0].selected_option == 2
        assert SrsStateRepository.get_state(srs_task.task_id, item_id).streak == 1
