"""
Admin Blueprint
ISOLATED - This entire module can be disabled/removed for production.

Contains:
- Score refresh (all running courses or one)
- Scheduler status

To disable: Don't register this blueprint (see main.py)
"""

import logging
from flask import Blueprint, request

from bootcamp.services.scoring import ScoreService
from bootcamp.blueprints.common import success, failure, unauthorized, verify_admin_key

logger = logging.getLogger(__name__)

admin_bp = Blueprint('admin', __name__, url_prefix='/api/admin')

# Set by main.start_scheduler
_scheduler = None


def set_scheduler(scheduler):
    global _scheduler
    _scheduler = scheduler


# =============================================================================
# SCORE
# =============================================================================

@admin_bp.route('/refresh-score', methods=['POST'])
def refresh_score():
    """
    Recompute totals and ranks now instead of waiting for the next job run.

    Request body (optional):
    {
        "course_id": 11     # only this course
    }
    """
    if not verify_admin_key():
        return unauthorized()

    course_id = (request.get_json(silent=True) or {}).get('course_id')
    if course_id:
        try:
            course_id = int(course_id)
        except (TypeError, ValueError):
            return failure('Invalid course_id')
        updated = ScoreService.refresh_course_score(course_id)
    else:
        updated = ScoreService.refresh_all_scores()

    logger.info(f"Admin score refresh: {updated} students (course={course_id or 'all'})")
    return success(None, message='Score refreshed', updated=updated)


# =============================================================================
# SCHEDULER
# =============================================================================

@admin_bp.route('/scheduler-status', methods=['GET'])
def scheduler_status():
    if not verify_admin_key():
        return unauthorized()

    if _scheduler is None:
        return success({'status': 'not_running', 'jobs': []})

    jobs = [
        {
            'id': job.id,
            'trigger': str(job.trigger),
            'next_run': job.next_run_time.isoformat() if job.next_run_time else None,
        }
        for job in _scheduler.get_jobs()
    ]
    return success({'status': 'running', 'jobs': jobs})
