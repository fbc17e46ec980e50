import datetime
import logging
from typing import Callable, List, Optional

from flask import current_app

from classdesk_app.models import Workbook
from classdesk_app.utils.time_utils import ensure_utc, utcnow

from ..exceptions import (
    NotAnSrsTaskError,
    QuestionMasteredError,
    QuestionNotDueError,
    QuestionNotInTaskError,
)
from ..logics import (
    compute_progress,
    correctness_tag,
    display_answer,
    due_entries,
    grade_submission,
    is_due,
    is_mastered,
    next_available_at,
    select_next_question,
)
from ..logics.selector import STATUS_IN_PROGRESS
from ..schemas import (
    ProgressSnapshot,
    QuestionEntry,
    ReviewState,
    SrsSessionView,
    SubmissionDTO,
    SubmissionOutcome,
)
from ..signals import answer_graded, progress_changed
from .state_repository import SrsStateRepository

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime.datetime]


class SrsService:
    """
    Orchestrator for SRS practice.
    Loads state through the repository, runs the pure scheduler/selector,
    saves the result and emits signals.
    """

    def __init__(self, clock: Clock = utcnow, repository: type = SrsStateRepository):
        self.clock = clock
        self.repository = repository

    def _load_srs_task(self, task_id: int):
        task = self.repository.get_task(task_id)
        workbook = task.workbook
        if workbook is None or workbook.workbook_type != Workbook.TYPE_SRS:
            raise NotAnSrsTaskError(task_id, workbook.workbook_type if workbook else 'UNKNOWN')
        return task

    def get_session_view(self, task_id: int) -> SrsSessionView:
        """The question to present now (if any) together with the task's progress."""
        task = self._load_srs_task(task_id)
        entries = self.repository.load_entries(task)
        now = ensure_utc(self.clock())

        current = select_next_question(entries, now)
        return SrsSessionView(
            task_id=task_id,
            current=current,
            progress=compute_progress(entries),
            next_available_at=next_available_at(entries) if current is None else None,
            due_count=len(due_entries(entries, now)),
        )

    def get_progress(self, task_id: int) -> ProgressSnapshot:
        task = self._load_srs_task(task_id)
        return compute_progress(self.repository.load_entries(task))

    def submit_answer(self, task_id: int, item_id: int, submission: SubmissionDTO) -> SubmissionOutcome:
        """
        Grade a submission, persist the new review state and report progress.
        """
        task = self._load_srs_task(task_id)
        entries = self.repository.load_entries(task)

        entry = self._find_entry(entries, item_id)
        if entry is None:
            raise QuestionNotInTaskError(task_id, item_id)
        if is_mastered(entry.state):
            raise QuestionMasteredError(item_id)

        now = ensure_utc(self.clock())
        if not is_due(entry.state, now):
            raise QuestionNotDueError(item_id, entry.next_due_at)

        result = grade_submission(entry.question, submission, entry.state, now)
        tag = correctness_tag(entry.streak, result.correct)
        self.repository.save_review(task_id, item_id, submission, result, tag)

        logger.info(
            "Task %s item %s answered %s: streak %s -> %s, next due %s",
            task_id, item_id, tag, entry.streak, result.streak, result.next_due_at.isoformat(),
        )
        answer_graded.send(
            self,
            task_id=task_id,
            item_id=item_id,
            correct=result.correct,
            streak=result.streak,
            next_due_at=result.next_due_at,
        )

        updated = [
            QuestionEntry(question=e.question, state=ReviewState(result.streak, result.next_due_at))
            if e.question.item_id == item_id else e
            for e in entries
        ]
        progress = compute_progress(updated)
        self._report_progress(task_id, progress, result.streak)

        correct_answer = None
        if not result.correct and current_app.config.get('SRS_REVEAL_ANSWER_ON_WRONG', True):
            correct_answer = display_answer(entry.question)

        return SubmissionOutcome(
            task_id=task_id,
            item_id=item_id,
            correct=result.correct,
            streak=result.streak,
            next_due_at=result.next_due_at,
            correctness=tag,
            progress=progress,
            correct_answer=correct_answer,
        )

    @staticmethod
    def _find_entry(entries: List[QuestionEntry], item_id: int) -> Optional[QuestionEntry]:
        for entry in entries:
            if entry.question.item_id == item_id:
                return entry
        return None

    def _report_progress(self, task_id: int, progress: ProgressSnapshot, streak: int) -> None:
        # A question reaching streak 1 starts the task before anything is mastered
        status = progress.status or (STATUS_IN_PROGRESS if streak >= 1 else None)
        if status is None:
            return
        progress_changed.send(
            self,
            task_id=task_id,
            progress_pct=progress.progress_pct,
            status=status,
        )
