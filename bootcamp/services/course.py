"""
Course Service
Course-scoped operations (course tasks, stages, students, schedule)
with NO HTTP dependencies.
"""

import logging
from collections import OrderedDict
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, List, Dict, Any

from bootcamp.models import db, User, Stage, Task, CourseTask, CourseEvent, Student
from bootcamp.config import (
    CHECKERS, DEFAULT_MAX_SCORE, DEFAULT_SCORE_WEIGHT, SCHEDULE_DEADLINE, SCHEDULE_TEST
)

logger = logging.getLogger(__name__)


def parse_datetime(value) -> Optional[datetime]:
    """Parse an ISO 8601 string into a naive UTC datetime."""
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(str(value).replace('Z', '+00:00'))
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def format_datetime(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() + 'Z' if value else None


def user_to_dict(user: Optional[User]) -> Optional[Dict[str, Any]]:
    if user is None:
        return None
    return {'id': user.id, 'githubId': user.github_id, 'name': user.name}


@dataclass
class SaveCourseTaskResult:
    """Result of a course task mutation."""
    success: bool
    course_task: Optional[CourseTask] = None
    error: Optional[str] = None
    not_found: bool = False


@dataclass
class ExpelResult:
    success: bool
    student: Optional[Student] = None
    error: Optional[str] = None
    not_found: bool = False


class CourseService:
    """
    Operations bound to a single course.

    Unlike the stateless services, instances carry the course id so that
    every query is scoped to it.
    """

    def __init__(self, course_id: int):
        self.course_id = course_id

    # =========================================================================
    # COURSE TASKS
    # =========================================================================

    def get_course_tasks(self) -> List[CourseTask]:
        return (
            CourseTask.query
            .filter_by(course_id=self.course_id)
            .order_by(CourseTask.student_start_date.asc(), CourseTask.id.asc())
            .all()
        )

    def get_course_task(self, course_task_id: int) -> Optional[CourseTask]:
        return CourseTask.query.filter_by(course_id=self.course_id, id=course_task_id).first()

    def create_course_task(self, payload: Dict[str, Any]) -> SaveCourseTaskResult:
        """
        Schedule a task in this course.

        Required: taskId, stageId. Defaults: maxScore 100, scoreWeight 1,
        checker 'mentor'.
        """
        try:
            fields = self._course_task_fields(payload)
        except ValueError:
            return SaveCourseTaskResult(success=False, error='Invalid date format')
        if not fields.get('task_id'):
            return SaveCourseTaskResult(success=False, error='Missing required field: taskId')
        if not fields.get('stage_id'):
            return SaveCourseTaskResult(success=False, error='Missing required field: stageId')

        fields.setdefault('checker', 'mentor')
        fields.setdefault('max_score', DEFAULT_MAX_SCORE)
        fields.setdefault('score_weight', DEFAULT_SCORE_WEIGHT)

        error = self._validate(fields)
        if error:
            return SaveCourseTaskResult(success=False, error=error)

        course_task = CourseTask(course_id=self.course_id, **fields)
        db.session.add(course_task)
        db.session.commit()

        logger.info(f"Course {self.course_id}: task {course_task.task_id} scheduled (id={course_task.id})")
        return SaveCourseTaskResult(success=True, course_task=course_task)

    def update_course_task(self, course_task_id: int, payload: Dict[str, Any]) -> SaveCourseTaskResult:
        course_task = self.get_course_task(course_task_id)
        if not course_task:
            return SaveCourseTaskResult(success=False, error='Course task not found', not_found=True)

        try:
            fields = self._course_task_fields(payload)
        except ValueError:
            return SaveCourseTaskResult(success=False, error='Invalid date format')
        error = self._validate(fields, current=course_task)
        if error:
            return SaveCourseTaskResult(success=False, error=error)

        for key, value in fields.items():
            setattr(course_task, key, value)
        db.session.commit()

        logger.info(f"Course {self.course_id}: course task {course_task.id} updated")
        return SaveCourseTaskResult(success=True, course_task=course_task)

    def delete_course_task(self, course_task_id: int) -> bool:
        """Delete a course task; its task results go with it."""
        course_task = self.get_course_task(course_task_id)
        if not course_task:
            return False
        db.session.delete(course_task)
        db.session.commit()
        logger.info(f"Course {self.course_id}: course task {course_task_id} deleted")
        return True

    def _course_task_fields(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        mapping = {
            'taskId': 'task_id',
            'stageId': 'stage_id',
            'taskOwnerId': 'task_owner_id',
            'checker': 'checker',
            'scoreWeight': 'score_weight',
            'maxScore': 'max_score',
            'studentStartDate': 'student_start_date',
            'studentEndDate': 'student_end_date',
        }
        fields = {column: payload[key] for key, column in mapping.items() if key in payload}
        for column in ('checker', 'score_weight', 'max_score'):
            if fields.get(column) is None:
                fields.pop(column, None)
        for column in ('student_start_date', 'student_end_date'):
            if column in fields:
                fields[column] = parse_datetime(fields[column])
        return fields

    def _validate(self, fields: Dict[str, Any], current: Optional[CourseTask] = None) -> Optional[str]:
        if 'checker' in fields and fields['checker'] not in CHECKERS:
            return f'Invalid checker. Must be one of: {CHECKERS}'
        if 'task_id' in fields and not db.session.get(Task, fields['task_id']):
            return 'Task not found'
        if 'stage_id' in fields:
            stage = db.session.get(Stage, fields['stage_id'])
            if not stage or stage.course_id != self.course_id:
                return 'Stage not found'
        if fields.get('task_owner_id') and not db.session.get(User, fields['task_owner_id']):
            return 'Task owner not found'
        for column, name in (('max_score', 'maxScore'), ('score_weight', 'scoreWeight')):
            value = fields.get(column)
            # bool is an int subclass but never a valid score
            if value is not None and (isinstance(value, bool) or not isinstance(value, (int, float))):
                return f'Invalid {name}'
        if fields.get('max_score') is not None and fields['max_score'] < 0:
            return 'Max score must not be negative'

        start = fields.get('student_start_date', current.student_start_date if current else None)
        end = fields.get('student_end_date', current.student_end_date if current else None)
        if start and end and start > end:
            return 'Start date must be before end date'
        return None

    @staticmethod
    def course_task_to_dict(course_task: CourseTask) -> Dict[str, Any]:
        task = course_task.task
        return {
            'id': course_task.id,
            'courseTaskId': course_task.id,
            'taskId': course_task.task_id,
            'name': task.name if task else None,
            'type': task.type if task else None,
            'descriptionUrl': task.description_url if task else None,
            'stageId': course_task.stage_id,
            'taskOwnerId': course_task.task_owner_id,
            'taskOwner': user_to_dict(course_task.task_owner),
            'checker': course_task.checker,
            'scoreWeight': course_task.score_weight,
            'maxScore': course_task.max_score,
            'studentStartDate': format_datetime(course_task.student_start_date),
            'studentEndDate': format_datetime(course_task.student_end_date),
            'taskResultCount': course_task.results.count(),
        }

    # =========================================================================
    # STAGES
    # =========================================================================

    def get_stages(self) -> List[Dict[str, Any]]:
        stages = Stage.query.filter_by(course_id=self.course_id).order_by(Stage.id.asc()).all()
        return [{'id': s.id, 'name': s.name} for s in stages]

    # =========================================================================
    # STUDENTS
    # =========================================================================

    def get_students_with_details(self, active_only: bool = False) -> List[Dict[str, Any]]:
        query = Student.query.filter_by(course_id=self.course_id)
        if active_only:
            query = query.filter_by(is_active=True)
        students = query.join(User, Student.user_id == User.id).order_by(User.github_id.asc()).all()
        return [self.student_to_dict(s) for s in students]

    @staticmethod
    def get_students_stats(students: List[Dict[str, Any]]) -> Dict[str, Any]:
        """Active/total counts overall and per country."""
        active_count = 0
        countries = OrderedDict()

        for student in students:
            country = student.get('countryName')
            counts = countries.setdefault(country, {'count': 0, 'totalCount': 0})
            counts['totalCount'] += 1
            if student.get('isActive'):
                active_count += 1
                counts['count'] += 1

        return {
            'activeStudentCount': active_count,
            'studentCount': len(students),
            'countries': [
                {'name': name, 'count': c['count'], 'totalCount': c['totalCount']}
                for name, c in countries.items()
            ],
        }

    def find_student(self, github_id: str) -> Optional[Student]:
        return (
            Student.query
            .join(User, Student.user_id == User.id)
            .filter(Student.course_id == self.course_id, User.github_id == github_id)
            .first()
        )

    def expel_student(self, github_id: str, reason: Optional[str] = None) -> ExpelResult:
        student = self.find_student(github_id)
        if not student:
            return ExpelResult(success=False, error='Student not found', not_found=True)
        if not student.is_active:
            return ExpelResult(success=False, error='Student is already expelled')

        student.is_active = False
        student.expelling_reason = reason or ''
        db.session.commit()

        logger.info(f"Course {self.course_id}: student {github_id} expelled")
        return ExpelResult(success=True, student=student)

    @staticmethod
    def student_to_dict(student: Student) -> Dict[str, Any]:
        user = student.user
        mentor_user = student.mentor.user if student.mentor else None
        return {
            'id': student.id,
            'githubId': user.github_id,
            'name': user.name,
            'isActive': bool(student.is_active),
            'mentor': user_to_dict(mentor_user),
            'locationName': user.location_name,
            'countryName': user.country_name,
            'repository': student.repository,
            'totalScore': student.total_score or 0,
            'rank': student.rank,
        }

    # =========================================================================
    # SCHEDULE
    # =========================================================================

    def get_course_events(self) -> List[Dict[str, Any]]:
        events = (
            CourseEvent.query
            .filter_by(course_id=self.course_id)
            .order_by(CourseEvent.date_time.asc())
            .all()
        )
        return [self.course_event_to_dict(e) for e in events]

    def get_schedule(self) -> List[Dict[str, Any]]:
        """
        Course events merged with task entries, sorted by date.

        Every course task yields a start entry typed by the task type (except
        tests) and a closing entry: 'test' for tests, 'deadline' otherwise.
        """
        entries = self.get_course_events()

        for course_task in self.get_course_tasks():
            task_type = course_task.task.type if course_task.task else None
            if task_type != SCHEDULE_TEST:
                entries.append(self._task_entry(course_task, task_type, course_task.student_start_date))
            closing_type = SCHEDULE_TEST if task_type == SCHEDULE_TEST else SCHEDULE_DEADLINE
            entries.append(self._task_entry(course_task, closing_type, course_task.student_end_date))

        entries.sort(key=lambda e: e['dateTime'] or '')
        return entries

    @staticmethod
    def _task_entry(course_task: CourseTask, entry_type: str, date: Optional[datetime]) -> Dict[str, Any]:
        task = course_task.task
        key = f"{course_task.id}d" if entry_type == SCHEDULE_DEADLINE else str(course_task.id)
        return {
            'id': course_task.id,
            'key': key,
            'dateTime': format_datetime(date),
            'place': None,
            'event': {
                'type': entry_type,
                'name': task.name if task else None,
                'descriptionUrl': task.description_url if task else None,
            },
            'organizer': {
                'githubId': course_task.task_owner.github_id if course_task.task_owner else '',
            },
        }

    @staticmethod
    def course_event_to_dict(course_event: CourseEvent) -> Dict[str, Any]:
        event = course_event.event
        return {
            'id': course_event.id,
            'key': f"e{course_event.id}",
            'dateTime': format_datetime(course_event.date_time),
            'place': course_event.place,
            'event': {
                'id': event.id,
                'type': event.type,
                'name': event.name,
                'descriptionUrl': event.description_url,
                'description': event.description,
            },
            'organizer': {
                'githubId': course_event.organizer.github_id if course_event.organizer else '',
            },
        }
