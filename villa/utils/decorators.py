"""
Route decorators
"""

from functools import wraps

from flask import jsonify
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request

from extensions import db
from villa.models.user import User


def get_current_user():
    """Load the active user behind the request's JWT, or None"""
    identity = get_jwt_identity()
    if identity is None:
        return None
    user = db.session.get(User, int(identity))
    if not user or not user.is_active:
        return None
    return user


def login_required():
    """Require a valid token belonging to an active user"""
    def wrapper(fn):
        @wraps(fn)
        def decorator(*args, **kwargs):
            verify_jwt_in_request()
            if get_current_user() is None:
                return jsonify({'error': 'Unauthorized', 'message': 'Account not found or deactivated'}), 401
            return fn(*args, **kwargs)
        return decorator
    return wrapper


def admin_required():
    """Require a valid token belonging to an active administrator"""
    def wrapper(fn):
        @wraps(fn)
        def decorator(*args, **kwargs):
            verify_jwt_in_request()
            user = get_current_user()
            if user is None:
                return jsonify({'error': 'Unauthorized', 'message': 'Account not found or deactivated'}), 401
            if not user.is_admin:
                return jsonify({'error': 'Forbidden', 'message': 'Admin privileges required'}), 403
            return fn(*args, **kwargs)
        return decorator
    return wrapper
