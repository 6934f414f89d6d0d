"""
Bootcamp Database Models
Pure SQLAlchemy models with no HTTP dependencies.
"""

from datetime import datetime
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()


class User(db.Model):
    """
    A platform user identified by GitHub login.
    Students, mentors and task owners all point here.
    """
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    github_id = db.Column(db.String(100), unique=True, nullable=False)

    first_name = db.Column(db.String(100))
    last_name = db.Column(db.String(100))
    primary_email = db.Column(db.String(200))

    # Location
    location_id = db.Column(db.Integer)
    location_name = db.Column(db.String(100))
    country_name = db.Column(db.String(100))

    # Contacts (shared with students)
    contacts_telegram = db.Column(db.String(100))
    contacts_skype = db.Column(db.String(100))
    contacts_phone = db.Column(db.String(50))
    contacts_epam_email = db.Column(db.String(200))
    contacts_notes = db.Column(db.Text)
    about_myself = db.Column(db.Text)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    @property
    def name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()


class Course(db.Model):
    __tablename__ = 'courses'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    alias = db.Column(db.String(100))
    start_date = db.Column(db.DateTime)

    planned = db.Column(db.Boolean, default=False)
    completed = db.Column(db.Boolean, default=False)
    invite_only = db.Column(db.Boolean, default=False)

    stages = db.relationship('Stage', backref='course', lazy='dynamic')


class Stage(db.Model):
    __tablename__ = 'stages'

    id = db.Column(db.Integer, primary_key=True)
    course_id = db.Column(db.Integer, db.ForeignKey('courses.id'), nullable=False)
    name = db.Column(db.String(100), nullable=False)


class Task(db.Model):
    """
    A reusable task definition.
    Courses schedule tasks through CourseTask.
    """
    __tablename__ = 'tasks'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    type = db.Column(db.String(30), nullable=False)
    verification = db.Column(db.String(10), default='manual')

    github_pr_required = db.Column(db.Boolean, default=False)
    description_url = db.Column(db.String(500))
    github_repo_name = db.Column(db.String(200))
    source_github_repo_url = db.Column(db.String(500))

    # JSON array of strings
    tags = db.Column(db.JSON, default=list)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class Event(db.Model):
    __tablename__ = 'events'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)
    description_url = db.Column(db.String(500))
    type = db.Column(db.String(30), nullable=False)


class CourseTask(db.Model):
    """
    A task scheduled within a course, with scoring and checking rules.
    """
    __tablename__ = 'course_tasks'

    id = db.Column(db.Integer, primary_key=True)
    course_id = db.Column(db.Integer, db.ForeignKey('courses.id'), nullable=False)
    task_id = db.Column(db.Integer, db.ForeignKey('tasks.id'), nullable=False)
    stage_id = db.Column(db.Integer, db.ForeignKey('stages.id'), nullable=False)
    task_owner_id = db.Column(db.Integer, db.ForeignKey('users.id'))

    checker = db.Column(db.String(20), default='mentor')
    score_weight = db.Column(db.Float, default=1)
    max_score = db.Column(db.Integer, default=100)

    student_start_date = db.Column(db.DateTime)
    student_end_date = db.Column(db.DateTime)

    task = db.relationship('Task')
    task_owner = db.relationship('User')
    results = db.relationship(
        'TaskResult', backref='course_task', lazy='dynamic', cascade='all, delete-orphan'
    )


class CourseEvent(db.Model):
    __tablename__ = 'course_events'

    id = db.Column(db.Integer, primary_key=True)
    course_id = db.Column(db.Integer, db.ForeignKey('courses.id'), nullable=False)
    event_id = db.Column(db.Integer, db.ForeignKey('events.id'), nullable=False)
    organizer_id = db.Column(db.Integer, db.ForeignKey('users.id'))

    date_time = db.Column(db.DateTime)
    place = db.Column(db.String(200))

    event = db.relationship('Event')
    organizer = db.relationship('User')


class Mentor(db.Model):
    __tablename__ = 'mentors'

    id = db.Column(db.Integer, primary_key=True)
    course_id = db.Column(db.Integer, db.ForeignKey('courses.id'), nullable=False)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    max_students_limit = db.Column(db.Integer)

    user = db.relationship('User')


class Student(db.Model):
    """
    Course enrollment of a user.
    total_score and rank are materialized by the score refresh job.
    """
    __tablename__ = 'students'

    id = db.Column(db.Integer, primary_key=True)
    course_id = db.Column(db.Integer, db.ForeignKey('courses.id'), nullable=False)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    mentor_id = db.Column(db.Integer, db.ForeignKey('mentors.id'))

    is_active = db.Column(db.Boolean, default=True)
    expelling_reason = db.Column(db.Text)
    repository = db.Column(db.String(500))

    total_score = db.Column(db.Float, default=0)
    rank = db.Column(db.Integer, default=999999)

    user = db.relationship('User')
    mentor = db.relationship('Mentor')
    results = db.relationship('TaskResult', backref='student', lazy='dynamic')


class TaskResult(db.Model):
    __tablename__ = 'task_results'

    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(db.Integer, db.ForeignKey('students.id'), nullable=False)
    course_task_id = db.Column(db.Integer, db.ForeignKey('course_tasks.id'), nullable=False)
    score = db.Column(db.Float, default=0)

    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (db.UniqueConstraint('student_id', 'course_task_id', name='unique_student_course_task'),)


class MentorRegistry(db.Model):
    """
    Mentor application: which courses, how many students, what to mentor.
    """
    __tablename__ = 'mentor_registry'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), unique=True, nullable=False)

    prefered_courses = db.Column(db.JSON, default=list)
    max_students_limit = db.Column(db.Integer, nullable=False)
    english_mentoring = db.Column(db.Boolean, default=False)
    prefered_students_location = db.Column(db.String(20), nullable=False)
    technical_mentoring = db.Column(db.JSON, default=list)
    comment = db.Column(db.Text)

    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = db.relationship('User')
