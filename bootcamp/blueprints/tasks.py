"""
Tasks Blueprint
Task catalogue CRUD.
"""

from flask import Blueprint, request

from bootcamp.services.tasks import TaskService
from bootcamp.blueprints.common import success, failure, unauthorized, verify_admin_key

tasks_bp = Blueprint('tasks', __name__, url_prefix='/api/tasks')


@tasks_bp.route('', methods=['GET'])
def get_tasks():
    """List all tasks."""
    tasks = TaskService.get_tasks()
    return success([TaskService.task_to_dict(t) for t in tasks], count=len(tasks))


@tasks_bp.route('', methods=['POST'])
def create_task():
    """
    Create a task.

    Request body:
    {
        "name": "Songbird",                      # REQUIRED
        "type": "jstask",                        # REQUIRED
        "verification": "manual",                # optional (manual, auto)
        "githubPrRequired": true,                # optional
        "descriptionUrl": "https://...",         # optional
        "githubRepoName": "songbird",            # optional
        "sourceGithubRepoUrl": "https://...",    # optional
        "tags": ["stage1"]                       # optional
    }
    """
    if not verify_admin_key():
        return unauthorized()

    result = TaskService.create_task(request.get_json(silent=True) or {})
    if not result.success:
        return failure(result.error)
    return success(TaskService.task_to_dict(result.task), 201)


@tasks_bp.route('/<int:task_id>', methods=['PUT'])
def update_task(task_id):
    if not verify_admin_key():
        return unauthorized()

    result = TaskService.update_task(task_id, request.get_json(silent=True) or {})
    if not result.success:
        return failure(result.error, 404 if result.not_found else 400)
    return success(TaskService.task_to_dict(result.task))


@tasks_bp.route('/<int:task_id>', methods=['DELETE'])
def delete_task(task_id):
    if not verify_admin_key():
        return unauthorized()

    result = TaskService.delete_task(task_id)
    if not result.success:
        return failure(result.error, 404 if result.not_found else 400)
    return success()
