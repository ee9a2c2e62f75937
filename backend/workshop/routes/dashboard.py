# Overview: Flask API route for dashboard statistics.

from flask import Blueprint, g, jsonify

from ..decorators import error_response, get_repo, require_actor, require_permission
from ..errors import WorkshopError
from ..services import reporting_service

dashboard_bp = Blueprint("dashboard", __name__, url_prefix="/api/dashboard")


@dashboard_bp.get("")
@require_actor
@require_permission("VIEW_DASHBOARD")
def dashboard_route():
    try:
        stats = reporting_service.get_dashboard_stats(get_repo(), g.current_user)
    except WorkshopError as e:
        return error_response(e)
    return jsonify(stats)
