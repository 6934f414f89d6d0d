"""
Record Services
The remote collection a list editor works against.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from bootcamp.client.api import ApiClient

Record = Dict[str, Any]


class RecordService(ABC):
    """
    Remote collection of records keyed by integer id.

    Implementations raise NetworkError/ServerError on failure and NotFound
    when deleting or updating an unknown id.
    """

    @abstractmethod
    def list(self, filter: Optional[Dict[str, Any]] = None) -> List[Record]:
        raise NotImplementedError

    @abstractmethod
    def create(self, payload: Record) -> Record:
        """Create a record; the server assigns id and computed fields."""
        raise NotImplementedError

    @abstractmethod
    def update(self, record_id: int, payload: Record) -> Record:
        raise NotImplementedError

    @abstractmethod
    def delete(self, record_id: int) -> None:
        raise NotImplementedError


class RestRecordService(RecordService):
    """
    Record service over a REST resource:
    GET/POST <path>, PUT/DELETE <path>/<id>.
    """

    def __init__(self, api: ApiClient, path: str):
        self.api = api
        self.path = path.rstrip('/')

    def list(self, filter=None):
        return self.api.get(self.path, params=filter) or []

    def create(self, payload):
        return self.api.post(self.path, payload)

    def update(self, record_id, payload):
        return self.api.put(f"{self.path}/{record_id}", payload)

    def delete(self, record_id):
        self.api.delete(f"{self.path}/{record_id}")


def task_service(api: ApiClient) -> RestRecordService:
    return RestRecordService(api, '/api/tasks')


def event_service(api: ApiClient) -> RestRecordService:
    return RestRecordService(api, '/api/events')


def course_task_service(api: ApiClient, course_id: int) -> RestRecordService:
    return RestRecordService(api, f'/api/course/{course_id}/tasks')
