"""User profile model."""

from __future__ import annotations

from sqlalchemy.sql import func
from sqlalchemy.types import JSON

from ..core.extensions import db


class Profile(db.Model):
    """A portal member. A profile may hold several roles at once."""

    __tablename__ = 'profiles'

    ROLE_STUDENT = 'student'
    ROLE_TEACHER = 'teacher'
    ROLE_ADMIN = 'admin'

    user_id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    roles = db.Column(JSON, nullable=False, default=lambda: [Profile.ROLE_STUDENT])
    created_at = db.Column(db.DateTime(timezone=True), server_default=func.now())
    updated_at = db.Column(db.DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    tasks = db.relationship('StudentTask', backref='student', lazy=True, cascade='all, delete-orphan')

    def __repr__(self) -> str:
        return f"<Profile {self.user_id}: {self.name}>"
