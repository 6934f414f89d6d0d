"""
Students Page
Course roster with stats and expel.
"""

import logging
from typing import Any, Dict, List, Optional

from bootcamp.config import MSG_LOAD_FAILED
from bootcamp.client.api import ApiClient
from bootcamp.client.errors import RecordServiceError
from bootcamp.client.list_editor import Notifier, log_notification
from bootcamp.client.record_service import Record
from bootcamp.client.tables import (
    ActionColumn, Column, RowAction, Table, bool_icon_renderer, number_sorter, string_sorter
)

logger = logging.getLogger(__name__)


def students_stats(students: List[Record]) -> Dict[str, Any]:
    """Active and total counts, overall and per country."""
    countries: Dict[str, Dict[str, int]] = {}
    active_count = 0
    for student in students:
        counts = countries.setdefault(student.get('countryName'), {'count': 0, 'totalCount': 0})
        counts['totalCount'] += 1
        if student.get('isActive'):
            active_count += 1
            counts['count'] += 1

    return {
        'activeStudentCount': active_count,
        'studentCount': len(students),
        'countries': [{'name': name, **counts} for name, counts in countries.items()],
    }


class StudentsPage:
    title = 'Students'

    def __init__(self, course_id: int, api: ApiClient, notify: Optional[Notifier] = None):
        self.course_id = course_id
        self.api = api
        self.notify = notify or log_notification
        self.students: List[Record] = []
        self.stats: Optional[Dict[str, Any]] = None
        self.active_only = True
        self.expelled_student: Optional[Record] = None

    def load(self) -> bool:
        try:
            students = self.api.get(
                f'/api/course/{self.course_id}/students',
                params={'activeOnly': str(self.active_only).lower()},
            )
        except RecordServiceError as e:
            logger.error(f"Loading students failed for course {self.course_id}: {e}")
            self.notify(MSG_LOAD_FAILED)
            return False

        self.students = students or []
        self.stats = students_stats(self.students)
        return True

    def toggle_active_only(self) -> bool:
        self.active_only = not self.active_only
        return self.load()

    # Expel modal

    def open_expel(self, record: Record):
        self.expelled_student = record

    def cancel_expel(self):
        self.expelled_student = None

    def expel(self, reason: str) -> bool:
        student = self.expelled_student
        if student is None:
            return False
        try:
            self.api.post(
                f"/api/course/{self.course_id}/students/{student['githubId']}/expel",
                {'reason': reason},
            )
        except RecordServiceError as e:
            logger.error(f"Expel failed for {student['githubId']}: {e}")
            self.notify('An error occured. Please try later.')
            return False

        self.students = [
            {**s, 'isActive': False} if s.get('id') == student.get('id') else s
            for s in self.students
        ]
        self.stats = students_stats(self.students)
        self.expelled_student = None
        return True

    @property
    def table(self) -> Table:
        return Table([
            Column('Github', 'githubId', sorter=string_sorter('githubId')),
            Column('Name', 'name', sorter=string_sorter('name')),
            Column('isActive', 'isActive', render=bool_icon_renderer),
            Column('Mentor', ('mentor', 'githubId'), sorter=string_sorter('mentor.githubId')),
            Column('Location', 'locationName', sorter=string_sorter('locationName')),
            Column('Country', 'countryName', sorter=string_sorter('countryName')),
            Column('Repository', 'repository'),
            Column('Total', 'totalScore', sorter=number_sorter('totalScore')),
            ActionColumn([RowAction('Expel', self.open_expel, when=lambda r: bool(r.get('isActive')))]),
        ])

    def rows(self, page: int = 1, sort_by: Optional[str] = None, descending: bool = False):
        return self.table.rows(self.students, page=page, sort_by=sort_by, descending=descending)
