"""Workbook and workbook item models."""

from __future__ import annotations

from typing import List

from sqlalchemy.sql import func
from sqlalchemy.types import JSON

from ..core.extensions import db


class Workbook(db.Model):
    """A unit of work a teacher can assign: an SRS question set, an essay prompt, etc."""

    __tablename__ = 'workbooks'

    TYPE_SRS = 'SRS'
    TYPE_PDF = 'PDF'
    TYPE_ESSAY = 'ESSAY'
    TYPE_VIEWING = 'VIEWING'
    TYPE_LECTURE = 'LECTURE'
    TYPES = (TYPE_SRS, TYPE_PDF, TYPE_ESSAY, TYPE_VIEWING, TYPE_LECTURE)

    SUBJECTS = ('directing', 'writing', 'research', 'integrated')

    workbook_id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    subject = db.Column(db.String(50), nullable=False, default='integrated')
    workbook_type = db.Column(db.String(20), nullable=False, default=TYPE_SRS)
    week = db.Column(db.Integer, nullable=True)
    is_common = db.Column(db.Boolean, nullable=False, default=False)
    # Number of viewing notes a VIEWING workbook asks for
    required_count = db.Column(db.Integer, nullable=True)
    created_by = db.Column(db.Integer, db.ForeignKey('profiles.user_id'), nullable=True)
    created_at = db.Column(db.DateTime(timezone=True), server_default=func.now())
    updated_at = db.Column(db.DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    items = db.relationship(
        'WorkbookItem',
        backref='workbook',
        lazy=True,
        cascade='all, delete-orphan',
        order_by='WorkbookItem.position',
    )
    assignments = db.relationship('Assignment', backref='workbook', lazy=True, cascade='all, delete-orphan')

    def __repr__(self) -> str:
        return f"<Workbook {self.workbook_id}: {self.title} ({self.workbook_type})>"


class WorkbookItem(db.Model):
    """A single question inside an SRS workbook."""

    __tablename__ = 'workbook_items'

    TYPE_MCQ = 'mcq'
    TYPE_SHORT = 'short'

    item_id = db.Column(db.Integer, primary_key=True)
    workbook_id = db.Column(db.Integer, db.ForeignKey('workbooks.workbook_id'), nullable=False, index=True)
    prompt = db.Column(db.Text, nullable=False)
    item_type = db.Column(db.String(20), nullable=False, default=TYPE_SHORT)
    # Ordered list of option strings for multiple choice
    options = db.Column(JSON, nullable=True)
    answer_key = db.Column(db.String(512), nullable=True)
    position = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime(timezone=True), server_default=func.now())
    updated_at = db.Column(db.DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    @property
    def option_list(self) -> List[str]:
        options = self.options
        if isinstance(options, dict):
            # Legacy rows keyed by index: {"0": "...", "1": "..."}
            try:
                return [options[key] for key in sorted(options, key=int)]
            except (TypeError, ValueError):
                return list(options.values())
        return list(options or [])

    def __repr__(self) -> str:
        return f"<WorkbookItem {self.item_id} ({self.item_type})>"
