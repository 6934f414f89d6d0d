"""
Public Blueprint
Health checks and service info.
"""

import time
import logging

from flask import Blueprint, jsonify
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from bootcamp.models import db
from bootcamp.config import VERSION, VERSION_NAME, FEATURES, TASK_TYPES, EVENT_TYPES, CHECKERS

logger = logging.getLogger(__name__)

public_bp = Blueprint('public', __name__)


@public_bp.route('/')
def home():
    """API root - shows service info."""
    return jsonify({
        'service': 'Bootcamp Admin API',
        'version': VERSION,
        'version_name': VERSION_NAME,
        'status': 'online',
        'features': FEATURES,
        'constants': {
            'task_types': list(TASK_TYPES),
            'event_types': list(EVENT_TYPES),
            'checkers': CHECKERS,
        },
        'endpoints': {
            'tasks': '/api/tasks',
            'events': '/api/events',
            'course_tasks': '/api/course/<id>/tasks',
            'students': '/api/course/<id>/students',
            'score': '/api/course/<id>/students/score',
            'schedule': '/api/course/<id>/schedule',
            'user_search': '/api/users/search/<text>',
            'mentor_registry': 'POST /api/registry/mentor',
        }
    })


@public_bp.route('/health')
def health():
    """Liveness plus a round trip to the database."""
    try:
        db.session.execute(text('SELECT 1'))
        database = 'connected'
    except SQLAlchemyError as e:
        logger.error(f"Health check: database unreachable: {e}")
        database = 'unreachable'

    healthy = database == 'connected'
    return jsonify({
        'status': 'healthy' if healthy else 'degraded',
        'timestamp': int(time.time()),
        'database': database,
        'version': VERSION
    }), 200 if healthy else 503
