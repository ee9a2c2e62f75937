# Overview: Flask API routes for invoice operations; parses input and returns JSON responses.

from flask import Blueprint, current_app, g, jsonify, request

from ..decorators import error_response, get_repo, require_actor, require_permission
from ..errors import WorkshopError
from ..services import invoice_service
from ..time_utils import utcnow

invoices_bp = Blueprint("invoices", __name__, url_prefix="/api/invoices")


def _invoice_dict(invoice, now):
    data = invoice.to_dict()
    data["effective_status"] = invoice_service.effective_status(invoice, now)
    return data


@invoices_bp.get("")
@require_actor
@require_permission("VIEW_INVOICES")
def list_invoices_route():
    now = utcnow()
    try:
        invoices = invoice_service.list_invoices(
            get_repo(),
            g.current_user,
            search=request.args.get("search"),
            status=request.args.get("status"),
            now=now,
        )
    except WorkshopError as e:
        return error_response(e)
    return jsonify({"items": [_invoice_dict(inv, now) for inv in invoices], "count": len(invoices)})


@invoices_bp.get("/<int:invoice_id>")
@require_actor
@require_permission("VIEW_INVOICES")
def get_invoice_route(invoice_id: int):
    try:
        invoice = invoice_service.get_invoice(get_repo(), g.current_user, invoice_id)
    except WorkshopError as e:
        return error_response(e)
    return jsonify({"invoice": _invoice_dict(invoice, utcnow())})


@invoices_bp.post("")
@require_actor
@require_permission("GENERATE_INVOICE")
def generate_invoice_route():
    """
    Generate an invoice for a completed job card.

    Body: {"job_card_id": int}
    Tax rate and due period come from config (WORKSHOP_TAX_RATE,
    WORKSHOP_INVOICE_DUE_DAYS).
    """
    data = request.get_json(silent=True) or {}
    job_card_id = data.get("job_card_id")
    if isinstance(job_card_id, bool) or not isinstance(job_card_id, int):
        return jsonify({"error": "job_card_id (integer) required"}), 400

    try:
        invoice = invoice_service.generate_invoice(
            get_repo(),
            g.current_user,
            job_card_id,
            tax_rate=current_app.config["WORKSHOP_TAX_RATE"],
            due_days=current_app.config["WORKSHOP_INVOICE_DUE_DAYS"],
        )
    except WorkshopError as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to generate invoice")
        return jsonify({"error": "Internal server error"}), 500
    return jsonify({"invoice": _invoice_dict(invoice, invoice.created_at)}), 201
