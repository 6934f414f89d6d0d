"""
Client side of the admin pages: API client, record services and the
CRUD list editor.
"""

from bootcamp.client.api import ApiClient
from bootcamp.client.errors import (
    RecordServiceError, NetworkError, ServerError, NotFound, FieldError, ValidationError
)
from bootcamp.client.record_service import (
    RecordService, RestRecordService, task_service, event_service, course_task_service
)
from bootcamp.client.list_editor import ListEditor, Mode, EditorState

__all__ = [
    'ApiClient',
    'RecordServiceError', 'NetworkError', 'ServerError', 'NotFound', 'FieldError', 'ValidationError',
    'RecordService', 'RestRecordService', 'task_service', 'event_service', 'course_task_service',
    'ListEditor', 'Mode', 'EditorState',
]
