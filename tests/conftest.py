"""
Shared fixtures: an app over in-memory SQLite, a test client and seed helpers.
"""

import os

# Must be set before bootcamp.config / main are imported
os.environ.setdefault('DATABASE_URL', 'sqlite://')
os.environ.setdefault('ADMIN_KEY', 'test-admin-key')

from datetime import datetime

import pytest

from bootcamp.config import ADMIN_KEY
from bootcamp.models import (
    db, User, Course, Stage, Task, Event, CourseTask, CourseEvent, Mentor, Student, TaskResult
)


@pytest.fixture
def app():
    from main import create_app

    app = create_app({'TESTING': True, 'SQLALCHEMY_DATABASE_URI': 'sqlite://'})
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_headers():
    return {'X-Admin-Key': ADMIN_KEY}


# =============================================================================
# SEED HELPERS
# =============================================================================

def add(obj):
    db.session.add(obj)
    db.session.commit()
    return obj


@pytest.fixture
def course(app):
    return add(Course(name='JS 2020 Q1', alias='js-2020-q1', start_date=datetime(2020, 2, 1)))


@pytest.fixture
def stage(course):
    return add(Stage(course_id=course.id, name='Stage 1'))


@pytest.fixture
def task(app):
    return add(Task(name='Songbird', type='jstask', description_url='https://github.com/rolling/songbird'))


@pytest.fixture
def owner(app):
    return add(User(github_id='owner', first_name='Task', last_name='Owner'))


@pytest.fixture
def course_task(course, stage, task, owner):
    return add(CourseTask(
        course_id=course.id, task_id=task.id, stage_id=stage.id, task_owner_id=owner.id,
        student_start_date=datetime(2020, 3, 1, 10, 0),
        student_end_date=datetime(2020, 3, 15, 23, 59),
    ))


@pytest.fixture
def event(app):
    return add(Event(name='Intro', type='lecture_online', description='Welcome'))


@pytest.fixture
def course_event(course, event, owner):
    return add(CourseEvent(
        course_id=course.id, event_id=event.id, organizer_id=owner.id,
        date_time=datetime(2020, 3, 5, 18, 0), place='Youtube Live',
    ))


def make_student(course, github_id, country='Belarus', active=True, mentor=None, **user_fields):
    user = add(User(github_id=github_id, country_name=country, **user_fields))
    return add(Student(
        course_id=course.id, user_id=user.id, is_active=active,
        mentor_id=mentor.id if mentor else None,
    ))


def make_mentor(course, github_id):
    user = add(User(github_id=github_id))
    return add(Mentor(course_id=course.id, user_id=user.id, max_students_limit=4))


def add_result(student, course_task, score):
    return add(TaskResult(student_id=student.id, course_task_id=course_task.id, score=score))
