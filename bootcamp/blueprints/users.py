"""
Users Blueprint
User search, profile and mentor registry endpoints.
"""

from flask import Blueprint, request

from bootcamp.services.users import UserService
from bootcamp.services.registry import RegistryService
from bootcamp.blueprints.common import success, failure, unauthorized, current_user

users_bp = Blueprint('users', __name__, url_prefix='/api')


@users_bp.route('/users/search/<text>', methods=['GET'])
def search_users(text):
    """Search users by github id or name (max 20 results)."""
    users = UserService.search_users(text)
    return success([UserService.person_to_dict(u) for u in users])


@users_bp.route('/profile', methods=['GET'])
def get_profile():
    user = current_user()
    if not user:
        return unauthorized()
    return success({'user': UserService.profile_to_dict(user)})


@users_bp.route('/profile/registry', methods=['POST'])
def update_profile_registry():
    """Update the caller's profile from the registration form."""
    user = current_user()
    if not user:
        return unauthorized()

    result = RegistryService.update_profile(user, request.get_json(silent=True) or {})
    if not result.success:
        return failure(result.error)
    return success(UserService.profile_to_dict(user))


@users_bp.route('/registry/mentor', methods=['POST'])
def register_mentor():
    """
    Submit a mentor application.

    Request body:
    {
        "maxStudentsLimit": 4,                 # REQUIRED (2-6)
        "preferedStudentsLocation": "any",     # REQUIRED (any, country, city)
        "preferedCourses": [1, 2],             # optional
        "englishMentoring": false,             # optional
        "technicalMentoring": ["nodejs"],      # optional
        "comment": "..."                       # optional
    }
    """
    user = current_user()
    if not user:
        return unauthorized()

    result = RegistryService.register_mentor(user, request.get_json(silent=True) or {})
    if not result.success:
        return failure(result.error)
    return success(None)


@users_bp.route('/registry/courses', methods=['GET'])
def get_registration_courses():
    courses = RegistryService.get_registration_courses()
    return success([RegistryService.course_to_dict(c) for c in courses])
