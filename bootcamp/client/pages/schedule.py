"""
Schedule Page
Course events and task deadlines on one timeline, shown in a chosen timezone.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional
from zoneinfo import ZoneInfo

from bootcamp.config import DEFAULT_TIMEZONE, EVENT_TYPE_NAMES, MSG_LOAD_FAILED, TIMEZONES
from bootcamp.client.api import ApiClient
from bootcamp.client.errors import RecordServiceError
from bootcamp.client.list_editor import Notifier, log_notification
from bootcamp.client.record_service import Record
from bootcamp.client.tables import Column, Table, parse_iso

logger = logging.getLogger(__name__)


def type_renderer(value, record=None) -> str:
    return EVENT_TYPE_NAMES.get(value, value) or ''


class SchedulePage:
    title = 'Schedule'

    def __init__(self, course_id: int, api: ApiClient, time_zone: str = DEFAULT_TIMEZONE,
                 notify: Optional[Notifier] = None):
        self.course_id = course_id
        self.api = api
        self.time_zone = time_zone
        self.notify = notify or log_notification
        self.entries: List[Record] = []

    def load(self) -> bool:
        try:
            self.entries = self.api.get(f'/api/course/{self.course_id}/schedule') or []
        except RecordServiceError as e:
            logger.error(f"Loading schedule failed for course {self.course_id}: {e}")
            self.notify(MSG_LOAD_FAILED)
            return False
        return True

    def set_time_zone(self, time_zone: str):
        if time_zone not in TIMEZONES:
            raise ValueError(f'Unknown timezone: {time_zone}')
        self.time_zone = time_zone

    def _localize(self, value: Optional[str]) -> Optional[datetime]:
        parsed = parse_iso(value)
        if parsed is None:
            return None
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(ZoneInfo(self.time_zone))

    def date_renderer(self, value, record=None) -> str:
        local = self._localize(value)
        return local.strftime('%Y-%m-%d') if local else ''

    def time_renderer(self, value, record=None) -> str:
        local = self._localize(value)
        return local.strftime('%H:%M') if local else ''

    def is_past(self, record: Record, now: Optional[datetime] = None) -> bool:
        """Entries before the start of today are shown dimmed."""
        local = self._localize(record.get('dateTime'))
        if local is None:
            return False
        now = (now or datetime.now(timezone.utc)).astimezone(ZoneInfo(self.time_zone))
        return local < now.replace(hour=0, minute=0, second=0, microsecond=0)

    @property
    def table(self) -> Table:
        return Table(
            [
                Column('Date', 'dateTime', render=self.date_renderer, key='date'),
                Column('Time', 'dateTime', render=self.time_renderer, key='time'),
                Column('Type', ('event', 'type'), render=type_renderer),
                Column('Place', 'place'),
                Column('Name', ('event', 'name')),
                Column('Organizer', ('organizer', 'githubId')),
            ],
            row_key='key',
        )

    def rows(self, page: int = 1):
        return self.table.rows(self.entries, page=page)
