# Overview: Flask API routes for user administration (owner only).

from flask import Blueprint, current_app, g, jsonify, request

from ..decorators import error_response, get_repo, require_actor, require_permission
from ..errors import WorkshopError
from ..services import permission_service, user_service

users_bp = Blueprint("users", __name__, url_prefix="/api/users")


@users_bp.get("/me")
@require_actor
def current_user_route():
    """The acting user and the capabilities their role grants."""
    user = g.current_user
    return jsonify({
        "user": user.to_dict(),
        "permissions": sorted(permission_service.get_user_permissions(user)),
    })


@users_bp.get("")
@require_actor
@require_permission("MANAGE_USERS")
def list_users_route():
    try:
        users = user_service.list_users(get_repo(), g.current_user)
    except WorkshopError as e:
        return error_response(e)
    return jsonify({"items": [u.to_dict() for u in users], "count": len(users)})


@users_bp.post("")
@require_actor
@require_permission("MANAGE_USERS")
def add_user_route():
    payload = request.get_json(silent=True) or {}
    try:
        user = user_service.add_user(get_repo(), g.current_user, payload)
    except WorkshopError as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to add user")
        return jsonify({"error": "Internal server error"}), 500
    return jsonify({"user": user.to_dict()}), 201


@users_bp.put("/<int:user_id>")
@require_actor
@require_permission("MANAGE_USERS")
def update_user_route(user_id: int):
    payload = request.get_json(silent=True) or {}
    try:
        user = user_service.update_user(get_repo(), g.current_user, user_id, payload)
    except WorkshopError as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to update user")
        return jsonify({"error": "Internal server error"}), 500
    return jsonify({"user": user.to_dict()})
