"""Reads and writes SRS review state for student tasks."""

import logging
from typing import Dict, List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from classdesk_app.core.extensions import db
from classdesk_app.models import StudentTask, WorkbookItem
from classdesk_app.modules.tasks.exceptions import TaskNotFoundError
from classdesk_app.utils.time_utils import ensure_utc

from ..models import Answer, SrsState
from ..schemas import QuestionDTO, QuestionEntry, ReviewState, ScheduleResult, SubmissionDTO

logger = logging.getLogger(__name__)


class SrsStateRepository:
    """
    Persistence side of SRS practice.
    Review state hangs off the Answer row, one per (task, item).
    """

    @staticmethod
    def get_task(task_id: int) -> StudentTask:
        task = db.session.get(StudentTask, task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    @staticmethod
    def to_question(item: WorkbookItem) -> QuestionDTO:
        return QuestionDTO(
            item_id=item.item_id,
            item_type=item.item_type,
            answer_key=item.answer_key,
            options=item.option_list,
            prompt=item.prompt,
        )

    @staticmethod
    def to_state(state: Optional[SrsState]) -> Optional[ReviewState]:
        if state is None:
            return None
        return ReviewState(streak=state.streak or 0, next_due_at=ensure_utc(state.next_due_at))

    @staticmethod
    def _answers_by_item(task_id: int) -> Dict[int, Answer]:
        answers = Answer.query.filter_by(student_task_id=task_id).all()
        return {answer.workbook_item_id: answer for answer in answers}

    @staticmethod
    def load_entries(task: StudentTask) -> List[QuestionEntry]:
        """All questions of the task's workbook, in workbook order, joined with their state."""
        items = sorted(task.workbook.items, key=lambda item: (item.position, item.item_id))
        answers = SrsStateRepository._answers_by_item(task.task_id)

        entries = []
        for item in items:
            answer = answers.get(item.item_id)
            state = SrsStateRepository.to_state(answer.srs_state if answer else None)
            entries.append(QuestionEntry(question=SrsStateRepository.to_question(item), state=state))
        return entries

    @staticmethod
    def _find_answer(task_id: int, item_id: int) -> Optional[Answer]:
        return Answer.query.filter_by(student_task_id=task_id, workbook_item_id=item_id).first()

    @staticmethod
    def get_state(task_id: int, item_id: int) -> Optional[ReviewState]:
        answer = SrsStateRepository._find_answer(task_id, item_id)
        return SrsStateRepository.to_state(answer.srs_state if answer else None)

    @staticmethod
    def save_review(
        task_id: int,
        item_id: int,
        submission: SubmissionDTO,
        result: ScheduleResult,
        correctness: str,
    ) -> Answer:
        """
        Upsert the Answer and its SrsState in one transaction.

        When a concurrent submission inserted the row after our read, the
        unique constraint rejects our insert and the existing row is updated
        instead, so the last write wins.
        """
        try:
            answer = SrsStateRepository._find_answer(task_id, item_id)
            if answer is None:
                answer = Answer(student_task_id=task_id, workbook_item_id=item_id)
                db.session.add(answer)
            SrsStateRepository._apply_review(answer, submission, result, correctness)

            try:
                db.session.commit()
            except IntegrityError:
                db.session.rollback()
                answer = SrsStateRepository._find_answer(task_id, item_id)
                if answer is None:
                    raise
                logger.info("Answer for task %s item %s written concurrently, updating it", task_id, item_id)
                SrsStateRepository._apply_review(answer, submission, result, correctness)
                db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            logger.exception("Failed to save review for task %s item %s", task_id, item_id)
            raise

        return answer

    @staticmethod
    def _apply_review(answer: Answer, submission: SubmissionDTO, result: ScheduleResult, correctness: str) -> None:
        answer.response_text = submission.response_text
        answer.selected_option = submission.selected_option
        answer.correctness = correctness

        if answer.srs_state is None:
            answer.srs_state = SrsState()
        answer.srs_state.streak = result.streak
        # SQLite keeps the wall time only, so store it as UTC
        answer.srs_state.next_due_at = ensure_utc(result.next_due_at)
