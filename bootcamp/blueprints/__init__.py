"""
Bootcamp Blueprints
HTTP routes - thin wrappers around services.
"""

from .public import public_bp
from .tasks import tasks_bp
from .events import events_bp
from .course import course_bp
from .users import users_bp

__all__ = [
    'public_bp',
    'tasks_bp',
    'events_bp',
    'course_bp',
    'users_bp',
]
