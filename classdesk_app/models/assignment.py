"""Assignment and per-student task models."""

from __future__ import annotations

from sqlalchemy.sql import func

from ..core.extensions import db


class Assignment(db.Model):
    """A workbook handed out to a class or a single student with a deadline."""

    __tablename__ = 'assignments'

    TARGET_CLASS = 'class'
    TARGET_STUDENT = 'student'

    assignment_id = db.Column(db.Integer, primary_key=True)
    workbook_id = db.Column(db.Integer, db.ForeignKey('workbooks.workbook_id'), nullable=False, index=True)
    target_type = db.Column(db.String(20), nullable=False, default=TARGET_CLASS)
    target_id = db.Column(db.String(64), nullable=False)
    due_at = db.Column(db.DateTime(timezone=True), nullable=False)
    created_by = db.Column(db.Integer, db.ForeignKey('profiles.user_id'), nullable=True)
    created_at = db.Column(db.DateTime(timezone=True), server_default=func.now())

    tasks = db.relationship('StudentTask', backref='assignment', lazy=True, cascade='all, delete-orphan')

    def __repr__(self) -> str:
        return f"<Assignment {self.assignment_id} workbook={self.workbook_id}>"


class StudentTask(db.Model):
    """One student's instance of an assignment."""

    __tablename__ = 'student_tasks'

    STATUS_PENDING = 'pending'
    STATUS_IN_PROGRESS = 'in_progress'
    STATUS_COMPLETED = 'completed'
    STATUSES = (STATUS_PENDING, STATUS_IN_PROGRESS, STATUS_COMPLETED)

    task_id = db.Column(db.Integer, primary_key=True)
    assignment_id = db.Column(db.Integer, db.ForeignKey('assignments.assignment_id'), nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey('profiles.user_id'), nullable=False, index=True)
    status = db.Column(db.String(20), nullable=False, default=STATUS_PENDING)
    progress_pct = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime(timezone=True), server_default=func.now())
    updated_at = db.Column(db.DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        db.UniqueConstraint('assignment_id', 'user_id', name='uq_assignment_student'),
    )

    @property
    def workbook(self):
        return self.assignment.workbook if self.assignment else None

    def __repr__(self) -> str:
        return f"<StudentTask {self.task_id} user={self.user_id} status={self.status}>"
