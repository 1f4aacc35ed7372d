from functools import wraps
from flask import abort
from flask_jwt_extended import get_jwt


def roles_required(*allowed_roles: str):
    """
    Restrict an endpoint to tokens carrying one of ``allowed_roles``.
    Use with @jwt_required() above it.
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            role = (get_jwt() or {}).get("role")
            if role not in allowed_roles:
                abort(403, description={"code": "FORBIDDEN", "message": "Insufficient permissions"})
            return fn(*args, **kwargs)
        return wrapper
    return decorator
