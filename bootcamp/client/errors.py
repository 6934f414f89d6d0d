"""
Client Errors
Failures surfaced by record services and forms.
"""

from dataclasses import dataclass
from typing import List, Optional


class RecordServiceError(Exception):
    """Base class for remote call failures."""


class NetworkError(RecordServiceError):
    """The request never produced an HTTP response (connection, timeout)."""


class ServerError(RecordServiceError):
    """The server answered with an error status."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class NotFound(ServerError):
    def __init__(self, message: str = 'Not found'):
        super().__init__(message, status=404)


@dataclass
class FieldError:
    name: str
    message: str


class ValidationError(Exception):
    """Raised by a form when submitted values fail field rules."""

    def __init__(self, errors: List[FieldError]):
        super().__init__('; '.join(f"{e.name}: {e.message}" for e in errors))
        self.errors = errors

    def for_field(self, name: str) -> List[str]:
        return [e.message for e in self.errors if e.name == name]
