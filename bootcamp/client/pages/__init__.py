"""
Admin pages built on the list editor.
"""

from bootcamp.client.pages.base import ListPage
from bootcamp.client.pages.tasks import TasksPage, create_task_record
from bootcamp.client.pages.events import EventsPage, create_event_record
from bootcamp.client.pages.course_tasks import CourseTasksPage, create_course_task_record
from bootcamp.client.pages.students import StudentsPage
from bootcamp.client.pages.score import ScorePage
from bootcamp.client.pages.schedule import SchedulePage
from bootcamp.client.pages.mentor_registry import MentorRegistryPage
from bootcamp.client.pages.user_search import UserSearch

__all__ = [
    'ListPage',
    'TasksPage', 'create_task_record',
    'EventsPage', 'create_event_record',
    'CourseTasksPage', 'create_course_task_record',
    'StudentsPage',
    'ScorePage',
    'SchedulePage',
    'MentorRegistryPage',
    'UserSearch',
]
