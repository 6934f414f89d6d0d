"""
Course Tasks Page
Tasks assigned to one course, with stage, owner, dates and scoring.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from zoneinfo import ZoneInfo

from bootcamp.config import CHECKERS, DEFAULT_MAX_SCORE, DEFAULT_SCORE_WEIGHT, DEFAULT_TIMEZONE, TIMEZONES
from bootcamp.client.api import ApiClient
from bootcamp.client.errors import RecordServiceError
from bootcamp.client.forms import Form, FormField
from bootcamp.client.list_editor import Notifier
from bootcamp.client.pages.base import ListPage
from bootcamp.client.pages.user_search import UserSearch
from bootcamp.client.record_service import Record, RecordService
from bootcamp.client.tables import (
    ActionColumn, Column, RowAction, date_renderer, id_from_array_renderer, parse_iso
)

logger = logging.getLogger(__name__)


def format_timezone_to_utc(value, time_zone: Optional[str]) -> str:
    """
    Read the wall-clock time of `value` in `time_zone` and return it as
    an ISO UTC string.
    """
    if isinstance(value, str):
        value = parse_iso(value)
    local = value.replace(tzinfo=ZoneInfo(time_zone or DEFAULT_TIMEZONE))
    return local.astimezone(timezone.utc).replace(tzinfo=None).isoformat() + 'Z'


def to_timezone(value: Optional[str], time_zone: str = DEFAULT_TIMEZONE) -> Optional[datetime]:
    parsed = parse_iso(value)
    if parsed is None:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(ZoneInfo(time_zone))


def create_course_task_record(values: Dict[str, Any]) -> Record:
    start, end = values.get('range') or (None, None)
    time_zone = values.get('timeZone')
    return {
        'studentStartDate': format_timezone_to_utc(start, time_zone) if start else None,
        'studentEndDate': format_timezone_to_utc(end, time_zone) if end else None,
        'taskId': values.get('taskId'),
        'stageId': values.get('stageId'),
        'taskOwnerId': values.get('taskOwnerId'),
        'checker': values.get('checker'),
        'scoreWeight': values.get('scoreWeight'),
        'maxScore': values.get('maxScore'),
    }


def get_initial_values(draft: Record) -> Dict[str, Any]:
    owner = draft.get('taskOwner')
    start, end = draft.get('studentStartDate'), draft.get('studentEndDate')
    return {
        **draft,
        'taskOwnerId': owner['id'] if owner else None,
        'timeZone': DEFAULT_TIMEZONE,
        'maxScore': draft.get('maxScore') or DEFAULT_MAX_SCORE,
        'scoreWeight': draft.get('scoreWeight') or DEFAULT_SCORE_WEIGHT,
        'range': (to_timezone(start), to_timezone(end)) if start and end else None,
        'checker': draft.get('checker') or 'mentor',
    }


def _check_range(value, values) -> Optional[str]:
    if not isinstance(value, (list, tuple)) or len(value) != 2 or not all(value):
        return 'Please enter start and end date'
    return None


def _check_max_score(value, values) -> Optional[str]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 'Please enter max score'
    return 'Max score should not be negative' if value < 0 else None


class CourseTasksPage(ListPage):
    """
    Course tasks of one course. Task and stage lists are loaded alongside
    the collection so the table can show names instead of ids.
    """

    title = 'Course Tasks'
    form_title = 'Course Task'

    def __init__(self, course_id: int, service: RecordService, api: ApiClient,
                 notify: Optional[Notifier] = None):
        self.course_id = course_id
        self.api = api
        self.tasks: List[Record] = []
        self.stages: List[Record] = []
        self.owner_search = UserSearch(self.search_users)
        super().__init__(service, create_course_task_record, notify=notify)

    def search_users(self, text: str) -> List[Record]:
        try:
            return self.api.get(f'/api/users/search/{text}') or []
        except RecordServiceError as e:
            logger.error(f"User search '{text}' failed: {e}")
            self.notify(self.editor.load_error)
            return []

    def load(self) -> bool:
        if not self.editor.load():
            return False
        try:
            self.tasks = self.api.get('/api/tasks') or []
            self.stages = self.api.get(f'/api/course/{self.course_id}/stages') or []
        except RecordServiceError as e:
            logger.error(f"Loading tasks and stages failed for course {self.course_id}: {e}")
            self.notify(self.editor.load_error)
            return False
        return True

    def add_item(self):
        super().add_item()
        self.owner_search.set_default_values([])

    def edit_item(self, record: Record):
        super().edit_item(record)
        owner = record.get('taskOwner')
        self.owner_search.set_default_values([owner] if owner else [])

    def _is_known(self, attr: str, message: str):
        def check(value, values):
            items = getattr(self, attr)
            return None if any(item.get('id') == value for item in items) else message
        return check

    def build_form(self) -> Form:
        return Form(
            title=self.form_title,
            get_initial_values=get_initial_values,
            fields=[
                FormField('taskId', 'Task', kind='select', required=True, message='Please select a task',
                          validator=self._is_known('tasks', 'Please select a task')),
                FormField('stageId', 'Stage', kind='select', required=True, message='Please select a stage',
                          validator=self._is_known('stages', 'Please select a stage')),
                FormField('taskOwnerId', 'Task Owner', kind='user_search'),
                FormField('timeZone', 'TimeZone', kind='select', choices=TIMEZONES),
                FormField('range', 'Start Date - End Date', kind='date_range', required=True,
                          message='Please enter start and end date', validator=_check_range),
                FormField('maxScore', 'Score', kind='number', required=True,
                          message='Please enter max score', validator=_check_max_score),
                FormField('scoreWeight', 'Score Weight', kind='number', required=True,
                          message='Please enter score weight'),
                FormField('checker', 'Who Checks', kind='radio', choices={c: c for c in CHECKERS}),
            ],
        )

    def get_columns(self):
        return [
            Column('Id', 'id'),
            Column('Name', 'taskId', render=id_from_array_renderer(self.tasks), key='name'),
            Column('Scores Count', 'taskResultCount'),
            Column('Start Date', 'studentStartDate', render=date_renderer),
            Column('End Date', 'studentEndDate', render=date_renderer),
            Column('Max Score', 'maxScore'),
            Column('Stage', 'stageId', render=id_from_array_renderer(self.stages), key='stage'),
            Column('Score Weight', 'scoreWeight'),
            Column('Who Checks', 'checker'),
            Column('Task Owner', ('taskOwner', 'githubId')),
            ActionColumn([
                RowAction('Edit', self.edit_item),
                RowAction('Delete', lambda record: self.delete_item(record['id'])),
            ]),
        ]
