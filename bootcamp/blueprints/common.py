"""
Shared helpers for blueprints: admin key check, current user, JSON envelopes.
"""

from flask import g, jsonify, request

from bootcamp.config import ADMIN_KEY
from bootcamp.services.users import UserService


def verify_admin_key():
    """Verify admin key from header or body."""
    admin_key = request.headers.get('X-Admin-Key')
    if not admin_key:
        body = request.get_json(silent=True) or {}
        admin_key = body.get('admin_key')
    return admin_key == ADMIN_KEY


def current_user():
    """
    Resolve the calling user from the X-Github-Id header.
    Session handling lives in front of this service; we only trust the header.
    """
    github_id = request.headers.get('X-Github-Id')
    if not github_id:
        return None
    user = UserService.get_or_create(github_id)
    g.user_id = user.id
    return user


def success(data=None, status=200, **extra):
    body = {'success': True, 'data': data}
    body.update(extra)
    return jsonify(body), status


def failure(error, status=400):
    return jsonify({'success': False, 'error': error}), status


def unauthorized():
    return failure('Unauthorized', 401)


def parse_bool_arg(name, default=True):
    value = request.args.get(name)
    if value is None:
        return default
    return value.lower() in ('1', 'true', 'yes')
