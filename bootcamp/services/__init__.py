"""
Bootcamp Services
Core business logic with NO HTTP dependencies.
"""

from .tasks import TaskService, get_course_task, get_course_task_only
from .events import EventService
from .course import CourseService
from .scoring import ScoreService
from .users import UserService
from .registry import RegistryService

__all__ = [
    'TaskService',
    'EventService',
    'CourseService',
    'ScoreService',
    'UserService',
    'RegistryService',
    'get_course_task',
    'get_course_task_only',
]
