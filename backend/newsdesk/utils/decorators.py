from functools import wraps
from flask import g
from flask_jwt_extended import get_current_user
from newsdesk.domain.exceptions import PermissionDenied
from newsdesk.domain.permissions import can, permission_denied_message


def require_permission(user, action):
    if not can(user.role, action):
        raise PermissionDenied(permission_denied_message(action))


def permission_required(action):
    """
    Route gate; must sit below ``@jwt_required()`` so anonymous callers
    are turned away with 401 before any permission lookup.
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            user = get_current_user()
            g.current_user = user

            require_permission(user, action)

            return fn(*args, **kwargs)
        return wrapper
    return decorator
