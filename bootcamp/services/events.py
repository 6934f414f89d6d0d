"""
Event Service
Handles event CRUD operations with NO HTTP dependencies.
"""

import re
import logging
from typing import Optional, List, Dict, Any
from dataclasses import dataclass

from bootcamp.models import db, Event, CourseEvent
from bootcamp.config import EVENT_TYPES, URL_PATTERN

logger = logging.getLogger(__name__)


@dataclass
class SaveEventResult:
    """Result of an event mutation."""
    success: bool
    event: Optional[Event] = None
    error: Optional[str] = None
    not_found: bool = False


class EventService:
    """
    Event CRUD service.
    """

    @staticmethod
    def get_events() -> List[Event]:
        return Event.query.order_by(Event.id.asc()).all()

    @staticmethod
    def get_event(event_id: int) -> Optional[Event]:
        return db.session.get(Event, event_id)

    @staticmethod
    def create_event(payload: Dict[str, Any]) -> SaveEventResult:
        fields = EventService._event_fields(payload)
        if not fields.get('name'):
            return SaveEventResult(success=False, error='Missing required field: name')
        if not fields.get('type'):
            return SaveEventResult(success=False, error='Missing required field: type')

        error = EventService._validate(fields)
        if error:
            return SaveEventResult(success=False, error=error)

        event = Event(**fields)
        db.session.add(event)
        db.session.commit()

        logger.info(f"New event created: {event.name} [{event.type}] (id={event.id})")
        return SaveEventResult(success=True, event=event)

    @staticmethod
    def update_event(event_id: int, payload: Dict[str, Any]) -> SaveEventResult:
        event = EventService.get_event(event_id)
        if not event:
            return SaveEventResult(success=False, error='Event not found', not_found=True)

        fields = EventService._event_fields(payload)
        if 'name' in fields and not fields['name']:
            return SaveEventResult(success=False, error='Missing required field: name')

        error = EventService._validate(fields)
        if error:
            return SaveEventResult(success=False, error=error)

        for key, value in fields.items():
            setattr(event, key, value)
        db.session.commit()

        logger.info(f"Event updated: {event.name} (id={event.id})")
        return SaveEventResult(success=True, event=event)

    @staticmethod
    def delete_event(event_id: int) -> bool:
        """
        Delete an event together with its course schedule entries.
        """
        event = EventService.get_event(event_id)
        if not event:
            return False

        removed = CourseEvent.query.filter_by(event_id=event_id).delete()
        db.session.delete(event)
        db.session.commit()

        logger.info(f"Event deleted: id={event_id} ({removed} course events removed)")
        return True

    @staticmethod
    def _event_fields(payload: Dict[str, Any]) -> Dict[str, Any]:
        mapping = {
            'name': 'name',
            'description': 'description',
            'descriptionUrl': 'description_url',
            'type': 'type',
        }
        fields = {column: payload[key] for key, column in mapping.items() if key in payload}
        for column in ('name', 'type'):
            if fields.get(column) is None:
                fields.pop(column, None)
        return fields

    @staticmethod
    def _validate(fields: Dict[str, Any]) -> Optional[str]:
        if fields.get('type') is not None and fields['type'] not in EVENT_TYPES:
            return f'Invalid event type. Must be one of: {list(EVENT_TYPES)}'
        if fields.get('description_url') and not re.match(URL_PATTERN, fields['description_url'], re.IGNORECASE):
            return 'Invalid description URL'
        return None

    @staticmethod
    def event_to_dict(event: Event) -> Dict[str, Any]:
        return {
            'id': event.id,
            'name': event.name,
            'description': event.description,
            'descriptionUrl': event.description_url,
            'type': event.type,
        }
