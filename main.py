"""
Bootcamp Admin Backend
Course management API behind the admin pages.

FEATURES:
- Task and event catalogues (CRUD)
- Course tasks, students, score table, schedule
- Mentor registration
- Request logging middleware
- Background score refresh

ARCHITECTURE:
- Blueprints: HTTP layer (thin wrappers)
- Services: Business logic (no HTTP)
- Client: admin page list editors over the REST API
- Admin: Isolated, feature-flagged
"""

import os
import logging
from flask import Flask
from flask_cors import CORS
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from bootcamp.config import (
    DATABASE_URL, DEBUG, ENABLE_ADMIN, ENABLE_SCHEDULER, IS_PRODUCTION, ENV,
    SCORE_REFRESH_MINUTES
)
from bootcamp.models import db
from bootcamp.logger import create_default_logger, init_request_logging

# =============================================================================
# LOGGING
# =============================================================================

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# =============================================================================
# APP FACTORY
# =============================================================================

def create_app(config=None):
    """
    Build the Flask app.

    Args:
        config: optional overrides applied after the defaults
                (tests pass TESTING and an in-memory database URI)
    """
    app = Flask(__name__)
    CORS(app)

    app.config['SQLALCHEMY_DATABASE_URI'] = DATABASE_URL
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    app.config.update(config or {})

    db.init_app(app)
    init_request_logging(app, create_default_logger())
    register_blueprints(app)

    with app.app_context():
        db.create_all()
        logger.info(f"✅ Schema ready ({app.config['SQLALCHEMY_DATABASE_URI'].split(':')[0]})")

    return app


def register_blueprints(app):
    """
    API blueprints are always mounted; the admin blueprint only when
    ENABLE_ADMIN is set or outside production.
    """
    from bootcamp.blueprints import public_bp, tasks_bp, events_bp, course_bp, users_bp

    for blueprint in (public_bp, tasks_bp, events_bp, course_bp, users_bp):
        app.register_blueprint(blueprint)
    logger.info(f"✅ API blueprints registered (ENV={ENV})")

    if ENABLE_ADMIN or not IS_PRODUCTION:
        from bootcamp.admin import admin_bp
        app.register_blueprint(admin_bp)
        logger.info("✅ Admin endpoints enabled")
    else:
        logger.info("⚠️ Admin endpoints disabled")


# =============================================================================
# SCHEDULER
# =============================================================================

scheduler = None


def scheduled_score_refresh():
    """Recompute totals and ranks for running courses."""
    from bootcamp.services.scoring import ScoreService

    with app.app_context():
        try:
            ScoreService.refresh_all_scores()
        except Exception as e:
            logger.error(f"[Scheduler] Score refresh error: {e}")
            db.session.rollback()


def start_scheduler():
    """Start the score refresh job once per process."""
    global scheduler

    if scheduler is not None:
        logger.info("[Scheduler] Already running")
        return

    scheduler = BackgroundScheduler(daemon=True)
    scheduler.add_job(
        scheduled_score_refresh,
        IntervalTrigger(minutes=SCORE_REFRESH_MINUTES),
        id='score_refresh',
        replace_existing=True,
        max_instances=1
    )
    scheduler.start()

    if ENABLE_ADMIN or not IS_PRODUCTION:
        from bootcamp.admin.admin_bp import set_scheduler
        set_scheduler(scheduler)

    logger.info(f"[Scheduler] ✅ Score refresh every {SCORE_REFRESH_MINUTES} minutes")


def stop_scheduler():
    global scheduler
    if scheduler:
        scheduler.shutdown()
        scheduler = None
        logger.info("[Scheduler] Stopped")


# =============================================================================
# APP INSTANCE
# =============================================================================

app = create_app()

if ENABLE_SCHEDULER:
    start_scheduler()

if __name__ == '__main__':
    start_scheduler()
    port = int(os.environ.get('PORT', 5000))
    app.run(host='0.0.0.0', port=port, debug=DEBUG)
