"""
Task Service
Handles task CRUD operations with NO HTTP dependencies.
"""

import re
import logging
from typing import Optional, List, Dict, Any
from dataclasses import dataclass

from sqlalchemy.orm import contains_eager

from bootcamp.models import db, Task, CourseTask
from bootcamp.config import (
    TASK_TYPES, VERIFICATION_MODES, URL_PATTERN, GITHUB_REPO_URL_PATTERN
)

logger = logging.getLogger(__name__)


# =============================================================================
# DATA ACCESS HELPERS
# =============================================================================

def get_course_task(course_task_id: int) -> Optional[CourseTask]:
    """Get a course task with its task joined in, or None."""
    return (
        CourseTask.query
        .join(Task, CourseTask.task_id == Task.id)
        .options(contains_eager(CourseTask.task))
        .filter(CourseTask.id == course_task_id)
        .first()
    )


def get_course_task_only(course_task_id) -> Optional[CourseTask]:
    """Get a bare course task by id (accepts numeric strings), or None."""
    return CourseTask.query.filter(CourseTask.id == int(course_task_id)).first()


# =============================================================================
# TASK SERVICE
# =============================================================================

@dataclass
class SaveTaskResult:
    """Result of a task mutation."""
    success: bool
    task: Optional[Task] = None
    error: Optional[str] = None
    not_found: bool = False


class TaskService:
    """
    Task CRUD service.
    Handles database operations for tasks.
    """

    @staticmethod
    def get_tasks() -> List[Task]:
        return Task.query.order_by(Task.id.asc()).all()

    @staticmethod
    def get_task(task_id: int) -> Optional[Task]:
        return db.session.get(Task, task_id)

    @staticmethod
    def create_task(payload: Dict[str, Any]) -> SaveTaskResult:
        """
        Create a new task.

        Args:
            payload: camelCase fields as sent by the admin page

        Returns:
            SaveTaskResult with task or error
        """
        fields = TaskService._task_fields(payload)
        error = TaskService._validate(fields, creating=True)
        if error:
            return SaveTaskResult(success=False, error=error)

        task = Task(**fields)
        db.session.add(task)
        db.session.commit()

        logger.info(f"New task created: {task.name} [{task.type}] (id={task.id})")
        return SaveTaskResult(success=True, task=task)

    @staticmethod
    def update_task(task_id: int, payload: Dict[str, Any]) -> SaveTaskResult:
        task = TaskService.get_task(task_id)
        if not task:
            return SaveTaskResult(success=False, error='Task not found', not_found=True)

        fields = TaskService._task_fields(payload)
        error = TaskService._validate(fields, creating=False)
        if error:
            return SaveTaskResult(success=False, error=error)

        for key, value in fields.items():
            setattr(task, key, value)
        db.session.commit()

        logger.info(f"Task updated: {task.name} (id={task.id})")
        return SaveTaskResult(success=True, task=task)

    @staticmethod
    def delete_task(task_id: int) -> SaveTaskResult:
        """Delete a task that no course schedules anymore."""
        task = TaskService.get_task(task_id)
        if not task:
            return SaveTaskResult(success=False, error='Task not found', not_found=True)

        in_use = CourseTask.query.filter_by(task_id=task_id).count()
        if in_use:
            return SaveTaskResult(success=False, error=f'Task is used by {in_use} course task(s)')

        db.session.delete(task)
        db.session.commit()
        logger.info(f"Task deleted: id={task_id}")
        return SaveTaskResult(success=True)

    @staticmethod
    def _task_fields(payload: Dict[str, Any]) -> Dict[str, Any]:
        """Map known camelCase keys onto model columns; everything else is dropped."""
        mapping = {
            'name': 'name',
            'type': 'type',
            'verification': 'verification',
            'githubPrRequired': 'github_pr_required',
            'descriptionUrl': 'description_url',
            'githubRepoName': 'github_repo_name',
            'sourceGithubRepoUrl': 'source_github_repo_url',
            'tags': 'tags',
        }
        fields = {column: payload[key] for key, column in mapping.items() if key in payload}
        for column in ('name', 'type', 'verification'):
            if fields.get(column) is None:
                fields.pop(column, None)
        if 'github_pr_required' in fields:
            fields['github_pr_required'] = bool(fields['github_pr_required'])
        if 'tags' in fields:
            fields['tags'] = list(fields['tags'] or [])
        return fields

    @staticmethod
    def _validate(fields: Dict[str, Any], creating: bool) -> Optional[str]:
        if creating and not fields.get('name'):
            return 'Missing required field: name'
        if 'name' in fields and not fields['name']:
            return 'Missing required field: name'
        if creating and not fields.get('type'):
            return 'Missing required field: type'
        if fields.get('type') is not None and fields['type'] not in TASK_TYPES:
            return f'Invalid task type. Must be one of: {list(TASK_TYPES)}'
        if fields.get('verification') is not None and fields['verification'] not in VERIFICATION_MODES:
            return f'Invalid verification. Must be one of: {VERIFICATION_MODES}'
        if fields.get('description_url') and not re.match(URL_PATTERN, fields['description_url'], re.IGNORECASE):
            return 'Invalid description URL'
        if fields.get('source_github_repo_url') and not re.match(GITHUB_REPO_URL_PATTERN, fields['source_github_repo_url']):
            return 'Invalid Github repo URL'
        return None

    @staticmethod
    def task_to_dict(task: Task) -> Dict[str, Any]:
        return {
            'id': task.id,
            'name': task.name,
            'type': task.type,
            'verification': task.verification,
            'githubPrRequired': bool(task.github_pr_required),
            'descriptionUrl': task.description_url,
            'githubRepoName': task.github_repo_name,
            'sourceGithubRepoUrl': task.source_github_repo_url,
            'tags': task.tags or [],
        }
