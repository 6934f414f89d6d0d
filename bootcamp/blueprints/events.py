"""
Events Blueprint
Event catalogue CRUD.
"""

from flask import Blueprint, request

from bootcamp.services.events import EventService
from bootcamp.blueprints.common import success, failure, unauthorized, verify_admin_key

events_bp = Blueprint('events', __name__, url_prefix='/api/events')


@events_bp.route('', methods=['GET'])
def get_events():
    """List all events."""
    events = EventService.get_events()
    return success([EventService.event_to_dict(e) for e in events], count=len(events))


@events_bp.route('', methods=['POST'])
def create_event():
    """
    Create an event.

    Request body:
    {
        "name": "Git & GitHub",              # REQUIRED
        "type": "lecture_online",            # REQUIRED
        "descriptionUrl": "https://...",     # optional
        "description": "..."                 # optional
    }
    """
    if not verify_admin_key():
        return unauthorized()

    result = EventService.create_event(request.get_json(silent=True) or {})
    if not result.success:
        return failure(result.error)
    return success(EventService.event_to_dict(result.event), 201)


@events_bp.route('/<int:event_id>', methods=['PUT'])
def update_event(event_id):
    if not verify_admin_key():
        return unauthorized()

    result = EventService.update_event(event_id, request.get_json(silent=True) or {})
    if not result.success:
        return failure(result.error, 404 if result.not_found else 400)
    return success(EventService.event_to_dict(result.event))


@events_bp.route('/<int:event_id>', methods=['DELETE'])
def delete_event(event_id):
    if not verify_admin_key():
        return unauthorized()

    if not EventService.delete_event(event_id):
        return failure('Event not found', 404)
    return success()
