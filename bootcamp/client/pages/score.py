"""
Score Page
Ranked score table with one column per finished course task.
"""

import logging
from typing import List, Optional

from bootcamp.config import MSG_LOAD_FAILED, SCORE_REFRESH_MINUTES
from bootcamp.client.api import ApiClient
from bootcamp.client.errors import RecordServiceError
from bootcamp.client.list_editor import Notifier, log_notification
from bootcamp.client.record_service import Record
from bootcamp.client.tables import Column, Table, number_sorter, string_sorter

logger = logging.getLogger(__name__)


def task_score_renderer(course_task_id: int):
    def render(value, record):
        result = next(
            (r for r in record.get('taskResults') or [] if r.get('courseTaskId') == course_task_id),
            None,
        )
        return result['score'] if result else 0
    return render


class ScorePage:
    title = 'Score'
    refresh_note = f'Score is refreshed every {SCORE_REFRESH_MINUTES} minutes'

    def __init__(self, course_id: int, api: ApiClient, course_completed: bool = False,
                 notify: Optional[Notifier] = None):
        self.course_id = course_id
        self.api = api
        self.course_completed = course_completed
        self.notify = notify or log_notification
        self.active_only = True
        self.students: List[Record] = []
        self.course_tasks: List[Record] = []

    @property
    def csv_url(self) -> str:
        return self.api.url(f'/api/course/{self.course_id}/students/score/csv')

    def _load_score(self):
        return self.api.get(
            f'/api/course/{self.course_id}/students/score',
            params={'activeOnly': str(self.active_only).lower()},
        ) or []

    def load(self) -> bool:
        try:
            students = self._load_score()
            course_tasks = self.api.get(f'/api/course/{self.course_id}/tasks') or []
        except RecordServiceError as e:
            logger.error(f"Loading score failed for course {self.course_id}: {e}")
            self.notify(MSG_LOAD_FAILED)
            return False

        self.students = students
        # tasks without a deadline are not scored yet
        self.course_tasks = [t for t in course_tasks if t.get('studentEndDate') or self.course_completed]
        return True

    def toggle_active_only(self) -> bool:
        self.active_only = not self.active_only
        try:
            self.students = self._load_score()
        except RecordServiceError as e:
            logger.error(f"Reloading score failed for course {self.course_id}: {e}")
            self.notify(MSG_LOAD_FAILED)
            return False
        return True

    def task_columns(self) -> List[Column]:
        return [
            Column(task.get('name') or str(task['id']), render=task_score_renderer(task['courseTaskId']),
                   key=str(task['id']))
            for task in self.course_tasks
        ]

    @property
    def table(self) -> Table:
        return Table(
            [
                Column('#', 'rank', sorter=number_sorter('rank')),
                Column('Github', 'githubId', sorter=string_sorter('githubId')),
                Column('Name', 'name', sorter=string_sorter('name')),
                Column('Location', 'locationName', sorter=string_sorter('locationName')),
                Column('Total', 'totalScore', sorter=number_sorter('totalScore')),
                *self.task_columns(),
                Column('Mentor', ('mentor', 'githubId'), sorter=string_sorter('mentor.githubId')),
            ],
            row_key='githubId',
        )

    def rows(self, page: int = 1, sort_by: Optional[str] = None, descending: bool = False):
        return self.table.rows(self.students, page=page, sort_by=sort_by, descending=descending)
