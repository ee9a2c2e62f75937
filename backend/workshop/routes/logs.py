# Overview: Flask API routes for the activity log.

"""
Time semantics:
- Owners see the full history.
- Other roles see entries from the trailing WORKSHOP_LOG_WINDOW_HOURS only.
- Entries are returned most recent first.
"""

from flask import Blueprint, current_app, g, jsonify, request

from ..decorators import get_repo, require_actor, require_permission
from ..services import audit_service, search_service
from ..time_utils import to_utc_z, utcnow

logs_bp = Blueprint("logs", __name__, url_prefix="/api/logs")


@logs_bp.get("")
@require_actor
@require_permission("VIEW_AUDIT_LOG")
def list_logs_route():
    """
    Query params:
    - search: str (optional) - user name, action or details
    - action: one of the action codes, or all (optional)
    """
    now = utcnow()
    window_hours = current_app.config["WORKSHOP_LOG_WINDOW_HOURS"]
    entries = audit_service.query(get_repo(), g.current_user.role, now=now, window_hours=window_hours)
    entries = search_service.filter_logs(
        entries,
        search=request.args.get("search"),
        action=request.args.get("action"),
    )
    since = audit_service.visible_since(g.current_user.role, now, window_hours)
    return jsonify({
        "items": [e.to_dict() for e in entries],
        "count": len(entries),
        "visible_since": to_utc_z(since),
    })
