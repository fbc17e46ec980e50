"""Database models package for ClassDesk."""

from ..core.extensions import db

from .user import Profile
from .workbook import Workbook, WorkbookItem
from .assignment import Assignment, StudentTask

__all__ = [
    'db',
    'Profile',
    'Workbook',
    'WorkbookItem',
    'Assignment',
    'StudentTask',
]
