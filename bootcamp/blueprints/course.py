"""
Course Blueprint
Course tasks, stages, students, score and schedule for one course.
"""

from flask import Blueprint, Response, request

from bootcamp.services.course import CourseService
from bootcamp.services.scoring import ScoreService
from bootcamp.services.tasks import get_course_task
from bootcamp.blueprints.common import (
    success, failure, unauthorized, verify_admin_key, parse_bool_arg
)

course_bp = Blueprint('course', __name__, url_prefix='/api/course/<int:course_id>')


# =============================================================================
# COURSE TASKS
# =============================================================================

@course_bp.route('/tasks', methods=['GET'])
def get_course_tasks(course_id):
    """List tasks scheduled in the course."""
    service = CourseService(course_id)
    course_tasks = service.get_course_tasks()
    return success([service.course_task_to_dict(ct) for ct in course_tasks], count=len(course_tasks))


@course_bp.route('/tasks/<int:course_task_id>', methods=['GET'])
def get_course_task_detail(course_id, course_task_id):
    course_task = get_course_task(course_task_id)
    if not course_task or course_task.course_id != course_id:
        return failure('Course task not found', 404)
    return success(CourseService.course_task_to_dict(course_task))


@course_bp.route('/tasks', methods=['POST'])
def create_course_task(course_id):
    """
    Schedule a task in the course.

    Request body:
    {
        "taskId": 12,                                  # REQUIRED
        "stageId": 3,                                  # REQUIRED
        "taskOwnerId": 7,                              # optional
        "checker": "mentor",                           # optional
        "maxScore": 100,                               # optional
        "scoreWeight": 1,                              # optional
        "studentStartDate": "2020-03-01T10:00:00Z",    # optional
        "studentEndDate": "2020-03-15T23:59:00Z"       # optional
    }
    """
    if not verify_admin_key():
        return unauthorized()

    service = CourseService(course_id)
    result = service.create_course_task(request.get_json(silent=True) or {})
    if not result.success:
        return failure(result.error)
    return success(service.course_task_to_dict(result.course_task), 201)


@course_bp.route('/tasks/<int:course_task_id>', methods=['PUT'])
def update_course_task(course_id, course_task_id):
    if not verify_admin_key():
        return unauthorized()

    service = CourseService(course_id)
    result = service.update_course_task(course_task_id, request.get_json(silent=True) or {})
    if not result.success:
        return failure(result.error, 404 if result.not_found else 400)
    return success(service.course_task_to_dict(result.course_task))


@course_bp.route('/tasks/<int:course_task_id>', methods=['DELETE'])
def delete_course_task(course_id, course_task_id):
    if not verify_admin_key():
        return unauthorized()

    if not CourseService(course_id).delete_course_task(course_task_id):
        return failure('Course task not found', 404)
    return success()


@course_bp.route('/stages', methods=['GET'])
def get_stages(course_id):
    return success(CourseService(course_id).get_stages())


# =============================================================================
# STUDENTS
# =============================================================================

@course_bp.route('/students', methods=['GET'])
def get_students(course_id):
    """
    Students with details and roster stats.

    Query params:
        - activeOnly: 'true' or 'false' (default: true)
    """
    active_only = parse_bool_arg('activeOnly', default=True)
    students = CourseService(course_id).get_students_with_details(active_only)
    return success(students, stats=CourseService.get_students_stats(students))


@course_bp.route('/students/<github_id>/expel', methods=['POST'])
def expel_student(course_id, github_id):
    """Expel a student. Body: {"reason": "..."}"""
    if not verify_admin_key():
        return unauthorized()

    body = request.get_json(silent=True) or {}
    result = CourseService(course_id).expel_student(github_id, body.get('reason'))
    if not result.success:
        return failure(result.error, 404 if result.not_found else 400)
    return success(CourseService.student_to_dict(result.student))


@course_bp.route('/students/score', methods=['GET'])
def get_score(course_id):
    active_only = parse_bool_arg('activeOnly', default=True)
    return success(ScoreService.get_course_score(course_id, active_only))


@course_bp.route('/students/score/csv', methods=['GET'])
def get_score_csv(course_id):
    return Response(
        ScoreService.export_csv(course_id),
        mimetype='text/csv',
        headers={'Content-Disposition': f'attachment; filename=score_{course_id}.csv'},
    )


# =============================================================================
# SCHEDULE
# =============================================================================

@course_bp.route('/events', methods=['GET'])
def get_course_events(course_id):
    return success(CourseService(course_id).get_course_events())


@course_bp.route('/schedule', methods=['GET'])
def get_schedule(course_id):
    """Course events merged with task start/deadline entries."""
    return success(CourseService(course_id).get_schedule())
