# Overview: Flask API routes for job card operations; parses input and returns JSON responses.

"""Job card routes: any role may open a card, owner/admin move its status."""

from flask import Blueprint, current_app, g, jsonify, request

from ..decorators import error_response, get_repo, require_actor, require_permission
from ..errors import WorkshopError
from ..services import job_card_service

job_cards_bp = Blueprint("job_cards", __name__, url_prefix="/api/job-cards")


@job_cards_bp.get("")
@require_actor
@require_permission("VIEW_JOB_CARDS")
def list_job_cards_route():
    """
    Query params:
    - search: str (optional) - customer name, vehicle number or vehicle model
    - status: pending | in_progress | completed | invoiced | all (optional)
    """
    try:
        job_cards = job_card_service.list_job_cards(
            get_repo(),
            g.current_user,
            search=request.args.get("search"),
            status=request.args.get("status"),
        )
    except WorkshopError as e:
        return error_response(e)
    return jsonify({"items": [jc.to_dict() for jc in job_cards], "count": len(job_cards)})


@job_cards_bp.get("/<int:job_card_id>")
@require_actor
@require_permission("VIEW_JOB_CARDS")
def get_job_card_route(job_card_id: int):
    try:
        job_card = job_card_service.get_job_card(get_repo(), g.current_user, job_card_id)
    except WorkshopError as e:
        return error_response(e)
    return jsonify({"job_card": job_card.to_dict()})


@job_cards_bp.post("")
@require_actor
@require_permission("CREATE_JOB_CARD")
def create_job_card_route():
    """
    Open a job card.

    Body: customer/vehicle fields, labor_cost_cents, services_provided,
    and parts: [{"product_id": 1, "quantity": 2}].
    Totals are computed server-side; sending them is rejected.
    """
    payload = request.get_json(silent=True) or {}
    try:
        job_card = job_card_service.create_job_card(get_repo(), g.current_user, payload)
    except WorkshopError as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to create job card")
        return jsonify({"error": "Internal server error"}), 500
    return jsonify({"job_card": job_card.to_dict()}), 201


@job_cards_bp.post("/<int:job_card_id>/status")
@require_actor
@require_permission("CHANGE_JOB_STATUS")
def update_job_card_status_route(job_card_id: int):
    data = request.get_json(silent=True) or {}
    status = data.get("status")
    if not status:
        return jsonify({"error": "status required"}), 400
    try:
        job_card = job_card_service.update_job_card_status(get_repo(), g.current_user, job_card_id, status)
    except WorkshopError as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to update job card status")
        return jsonify({"error": "Internal server error"}), 500
    return jsonify({"job_card": job_card.to_dict()})
