# File: classdesk_app/modules/srs/schemas.py
import datetime
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from marshmallow import Schema, ValidationError, fields, validates_schema

from classdesk_app.utils.time_utils import isoformat


class ItemType:
    MCQ = 'mcq'
    SHORT = 'short'


# Tag stored on the Answer row after each submission
class Correctness:
    WRONG = 'wrong'
    ONCE = 'once'
    TWICE = 'twice'
    THRICE = 'thrice'


@dataclass(frozen=True)
class QuestionDTO:
    """What the scheduler needs to know about a workbook item."""
    item_id: int
    item_type: str
    answer_key: Optional[str] = None
    options: List[str] = field(default_factory=list)
    prompt: str = ''

    def to_public_dict(self) -> Dict[str, Any]:
        """Serialize for learners; the answer key is never included."""
        return {
            'item_id': self.item_id,
            'item_type': self.item_type,
            'prompt': self.prompt,
            'options': list(self.options) if self.item_type == ItemType.MCQ else None,
        }


@dataclass(frozen=True)
class SubmissionDTO:
    selected_option: Optional[int] = None
    response_text: Optional[str] = None


@dataclass(frozen=True)
class ReviewState:
    """Persisted review progress of one question for one learner.

    "Not reviewed yet" is expressed as ``Optional[ReviewState]`` being
    ``None``, never as a sentinel instance.
    """
    streak: int = 0
    next_due_at: Optional[datetime.datetime] = None


@dataclass(frozen=True)
class ScheduleResult:
    streak: int
    next_due_at: datetime.datetime
    correct: bool


@dataclass(frozen=True)
class QuestionEntry:
    """A question joined with its optional review state."""
    question: QuestionDTO
    state: Optional[ReviewState] = None

    @property
    def streak(self) -> int:
        return self.state.streak if self.state else 0

    @property
    def next_due_at(self) -> Optional[datetime.datetime]:
        return self.state.next_due_at if self.state else None


@dataclass(frozen=True)
class ProgressSnapshot:
    mastered_count: int
    total_count: int
    progress_pct: int
    # None when progress alone does not move the task status
    status: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'mastered_count': self.mastered_count,
            'total_count': self.total_count,
            'progress_pct': self.progress_pct,
            'status': self.status,
        }


@dataclass
class SrsSessionView:
    """The state of an SRS task as a learner sees it right now."""
    task_id: int
    current: Optional[QuestionEntry]
    progress: ProgressSnapshot
    next_available_at: Optional[datetime.datetime] = None
    due_count: int = 0

    @property
    def done(self) -> bool:
        return self.progress.total_count > 0 and self.progress.mastered_count == self.progress.total_count

    def to_dict(self) -> Dict[str, Any]:
        question = None
        if self.current is not None:
            question = self.current.question.to_public_dict()
            question['streak'] = self.current.streak
        return {
            'task_id': self.task_id,
            'question': question,
            'progress': self.progress.to_dict(),
            'done': self.done,
            'due_count': self.due_count,
            'waiting': self.current is None and not self.done,
            'next_available_at': isoformat(self.next_available_at),
        }


@dataclass
class SubmissionOutcome:
    task_id: int
    item_id: int
    correct: bool
    streak: int
    next_due_at: datetime.datetime
    correctness: str
    progress: ProgressSnapshot
    correct_answer: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'task_id': self.task_id,
            'item_id': self.item_id,
            'correct': self.correct,
            'streak': self.streak,
            'next_due_at': isoformat(self.next_due_at),
            'correctness': self.correctness,
            'correct_answer': self.correct_answer,
            'progress': self.progress.to_dict(),
        }


class AnswerSubmissionSchema(Schema):
    """Validates the JSON body of an answer submission."""
    item_id = fields.Int(required=True, strict=True)
    selected_option = fields.Int(load_default=None, allow_none=True, strict=True)
    response_text = fields.String(load_default=None, allow_none=True)

    @validates_schema
    def validate_has_answer(self, data, **kwargs):
        if data.get('selected_option') is None and data.get('response_text') is None:
            raise ValidationError('Either selected_option or response_text is required.')
