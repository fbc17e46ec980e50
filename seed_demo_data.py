# seed_demo_data.py
# Purpose: add a demo teacher, student and SRS workbook so the practice API can be tried by hand.
# Usage: python seed_demo_data.py from the project root.

from datetime import timedelta

from classdesk_app import create_app, db
from classdesk_app.models import Assignment, Profile, StudentTask, Workbook, WorkbookItem
from classdesk_app.utils.time_utils import utcnow

WORKBOOK_TITLE = 'Film history basics'

ITEMS = [
    {
        'prompt': 'Which technique cuts a sequence of short shots together to condense time?',
        'item_type': WorkbookItem.TYPE_MCQ,
        'options': ['Long take', 'Jump cut', 'Montage', 'Match cut'],
        'answer_key': '2',
    },
    {
        'prompt': 'Name the 1950 Kurosawa film told from several contradictory points of view.',
        'item_type': WorkbookItem.TYPE_SHORT,
        'answer_key': 'Rashomon',
    },
    {
        'prompt': 'Which movement is associated with Truffaut and Godard?',
        'item_type': WorkbookItem.TYPE_MCQ,
        'options': ['Italian neorealism', 'French New Wave', 'Dogme 95'],
        'answer_key': '1',
    },
]


def seed_data():
    """Create the demo rows once; a second run is a no-op."""
    app = create_app()
    with app.app_context():
        print("Seeding demo data...")

        if Workbook.query.filter_by(title=WORKBOOK_TITLE).first():
            print(f"Workbook '{WORKBOOK_TITLE}' already exists. Skipping.")
            return

        teacher = Profile(name='Demo Teacher', roles=[Profile.ROLE_TEACHER])
        student = Profile(name='Demo Student', roles=[Profile.ROLE_STUDENT])
        db.session.add_all([teacher, student])
        db.session.flush()

        workbook = Workbook(
            title=WORKBOOK_TITLE,
            subject='research',
            workbook_type=Workbook.TYPE_SRS,
            week=1,
            created_by=teacher.user_id,
        )
        db.session.add(workbook)
        db.session.flush()

        for position, item_data in enumerate(ITEMS, start=1):
            db.session.add(WorkbookItem(workbook_id=workbook.workbook_id, position=position, **item_data))
            print(f"  - Added item: {item_data['prompt']}")

        assignment = Assignment(
            workbook_id=workbook.workbook_id,
            target_type=Assignment.TARGET_STUDENT,
            target_id=str(student.user_id),
            due_at=utcnow() + timedelta(days=7),
            created_by=teacher.user_id,
        )
        db.session.add(assignment)
        db.session.flush()

        task = StudentTask(assignment_id=assignment.assignment_id, user_id=student.user_id)
        db.session.add(task)
        db.session.commit()

        print(f"\nDone. Practice at GET /api/tasks/{task.task_id}/srs")


if __name__ == '__main__':
    seed_data()
