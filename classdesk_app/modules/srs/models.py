from datetime import datetime, timezone

from classdesk_app.core.extensions import db


class Answer(db.Model):
    """
    The latest response of a student to one workbook item within one task.
    Updated in place on every submission.
    """
    __tablename__ = 'answers'

    answer_id = db.Column(db.Integer, primary_key=True)
    student_task_id = db.Column(
        db.Integer, db.ForeignKey('student_tasks.task_id', ondelete='CASCADE'), nullable=False, index=True
    )
    workbook_item_id = db.Column(
        db.Integer, db.ForeignKey('workbook_items.item_id', ondelete='CASCADE'), nullable=False, index=True
    )
    response_text = db.Column(db.Text, nullable=True)
    selected_option = db.Column(db.Integer, nullable=True)
    # 'wrong' | 'once' | 'twice' | 'thrice'
    correctness = db.Column(db.String(10), nullable=True)

    created_at = db.Column(db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at = db.Column(db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    srs_state = db.relationship('SrsState', uselist=False, backref='answer', cascade='all, delete-orphan')
    task = db.relationship('StudentTask', backref=db.backref('answers', lazy=True, cascade='all, delete-orphan'))
    item = db.relationship('WorkbookItem', backref=db.backref('answers', lazy=True, cascade='all, delete-orphan'))

    __table_args__ = (
        db.UniqueConstraint('student_task_id', 'workbook_item_id', name='uq_task_item_answer'),
    )


class SrsState(db.Model):
    """Review schedule attached to an Answer: the streak and when to ask again."""
    __tablename__ = 'srs_states'

    state_id = db.Column(db.Integer, primary_key=True)
    answer_id = db.Column(
        db.Integer, db.ForeignKey('answers.answer_id', ondelete='CASCADE'), nullable=False, unique=True
    )
    streak = db.Column(db.Integer, nullable=False, default=0)
    next_due_at = db.Column(db.DateTime(timezone=True), nullable=True, index=True)
