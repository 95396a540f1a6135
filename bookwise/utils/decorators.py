from functools import wraps

from flask import jsonify
from flask_jwt_extended import get_jwt, get_jwt_identity, verify_jwt_in_request

from bookwise.errors import Unauthorized


def current_user_id() -> int:
    return int(get_jwt_identity())


def role_required(*roles):
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            verify_jwt_in_request()
            claims = get_jwt()
            role = claims.get("role")
            if role not in roles:
                return error_response(Unauthorized("Forbidden"))
            return fn(*args, **kwargs)
        return wrapper
    return decorator


def error_response(err):
    """LibraryError -> (json, status)."""
    return jsonify(err.to_dict()), err.status_code
