import datetime
import os
import sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from classdesk_app import create_app, db
from classdesk_app.core.config import Config
from classdesk_app.models import Assignment, Profile, StudentTask, Workbook, WorkbookItem


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_ENGINE_OPTIONS = {
        'connect_args': {'check_same_thread': False}
    }
    LOG_DIR = None
    LOG_LEVEL = 'WARNING'


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def student(app):
    profile = Profile(name='Kim Student', roles=[Profile.ROLE_STUDENT])
    db.session.add(profile)
    db.session.commit()
    return profile


@pytest.fixture
def make_task(app, student):
    """Factory creating a workbook, its assignment and a task for ``student``."""

    def _make_task(items=(), workbook_type=Workbook.TYPE_SRS, user=None, due_at=None, status=None):
        workbook = Workbook(title=f'{workbook_type} workbook', subject='directing', workbook_type=workbook_type)
        db.session.add(workbook)
        db.session.flush()

        for position, item in enumerate(items, start=1):
            db.session.add(WorkbookItem(workbook_id=workbook.workbook_id, position=position, **item))

        assignment = Assignment(
            workbook_id=workbook.workbook_id,
            target_type=Assignment.TARGET_STUDENT,
            target_id=str((user or student).user_id),
            due_at=due_at or datetime.datetime(2030, 1, 1, tzinfo=datetime.timezone.utc),
        )
        db.session.add(assignment)
        db.session.flush()

        task = StudentTask(
            assignment_id=assignment.assignment_id,
            user_id=(user or student).user_id,
            status=status or StudentTask.STATUS_PENDING,
        )
        db.session.add(task)
        db.session.commit()
        return task

    return _make_task


MONTAGE_ITEM = {
    'prompt': 'Which technique condenses time through a sequence of short shots?',
    'item_type': WorkbookItem.TYPE_MCQ,
    'options': ['Long take', 'Jump cut', 'Montage', 'Match cut'],
    'answer_key': '2',
}

RASHOMON_ITEM = {
    'prompt': 'Name the 1950 Kurosawa film told from contradictory points of view.',
    'item_type': WorkbookItem.TYPE_SHORT,
    'answer_key': 'Rashomon',
}

NEW_WAVE_ITEM = {
    'prompt': 'Which movement is associated with Truffaut and Godard?',
    'item_type': WorkbookItem.TYPE_MCQ,
    'options': ['Italian neorealism', 'French New Wave', 'Dogme 95'],
    'answer_key': '1',
}


@pytest.fixture
def srs_task(make_task):
    return make_task(items=[MONTAGE_ITEM, RASHOMON_ITEM, NEW_WAVE_ITEM])
