# Overview: Request and permission decorators for API routes.

from functools import wraps
from flask import current_app, g, jsonify, request

from .extensions import db
from .repositories import SqlRepository
from .services import permission_service, user_service


def get_repo() -> SqlRepository:
    """Per-request repository over the Flask-SQLAlchemy session."""
    if "repo" not in g:
        g.repo = SqlRepository(db.session)
    return g.repo


def _resolve_actor_id():
    raw = request.headers.get("X-User-Id")
    if raw is None or raw.strip() == "":
        return current_app.config["WORKSHOP_DEMO_USER_ID"]
    try:
        return int(raw)
    except ValueError:
        return None


def require_actor(f):
    """
    Establish the acting user.

    There is no authentication: the caller names itself with X-User-Id, and
    requests without the header act as WORKSHOP_DEMO_USER_ID. Sets:
    - g.current_user: the acting User record
    - g.repo: the request's repository

    Returns 401 if the id is malformed or names no user.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        actor_id = _resolve_actor_id()
        if actor_id is None:
            return jsonify({"error": "X-User-Id must be an integer"}), 401

        actor = user_service.get_user(get_repo(), actor_id)
        if actor is None:
            return jsonify({"error": "Unknown user"}), 401

        g.current_user = actor
        return f(*args, **kwargs)

    return decorated_function


def require_permission(permission_code: str):
    """Require a capability of the acting user; 403 otherwise."""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            # Ensure @require_actor was called first
            if not hasattr(g, "current_user"):
                return jsonify({"error": "Authentication required"}), 401

            user = g.current_user
            if not permission_service.authorize(user, permission_code):
                current_app.logger.warning(
                    "Permission denied: user_id=%s role=%s permission=%s path=%s",
                    user.id, user.role, permission_code, request.path,
                )
                return jsonify({
                    "error": "Permission denied",
                    "required_permission": permission_code,
                    "message": f"Role '{user.role}' lacks {permission_code}",
                }), 403

            return f(*args, **kwargs)

        return decorated_function
    return decorator


def error_response(e):
    """JSON body + status for a WorkshopError."""
    if e.status_code == 403:
        current_app.logger.warning("Rejected %s %s: %s", request.method, request.path, e)
    return jsonify(e.to_dict()), e.status_code
