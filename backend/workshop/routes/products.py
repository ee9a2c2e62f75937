# Overview: Flask API routes for products operations; parses input and returns JSON responses.

# backend/workshop/routes/products.py
"""
Product management routes.

- Read operations require VIEW_INVENTORY
- Create/update require MANAGE_PRODUCTS (owner, admin)
- Delete requires DELETE_PRODUCTS (owner)
"""
from flask import Blueprint, current_app, g, jsonify, request

from ..decorators import error_response, get_repo, require_actor, require_permission
from ..errors import WorkshopError
from ..services import products_service

products_bp = Blueprint("products", __name__, url_prefix="/api/products")


@products_bp.get("")
@require_actor
@require_permission("VIEW_INVENTORY")
def list_products():
    """
    List products.

    Query params:
    - search: str (optional) - matches name, brand or category (case-insensitive)
    - type: part | accessory | service | all (optional)
    """
    try:
        products = products_service.list_products(
            get_repo(),
            g.current_user,
            search=request.args.get("search"),
            product_type=request.args.get("type"),
        )
    except WorkshopError as e:
        return error_response(e)
    return jsonify({"items": [p.to_dict() for p in products], "count": len(products)})


@products_bp.get("/<int:product_id>")
@require_actor
@require_permission("VIEW_INVENTORY")
def get_product(product_id: int):
    try:
        product = products_service.get_product(get_repo(), g.current_user, product_id)
    except WorkshopError as e:
        return error_response(e)
    return jsonify({"product": product.to_dict()})


@products_bp.post("")
@require_actor
@require_permission("MANAGE_PRODUCTS")
def create_product_route():
    payload = request.get_json(silent=True) or {}
    try:
        product = products_service.create_product(get_repo(), g.current_user, payload)
    except WorkshopError as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to create product")
        return jsonify({"error": "Internal server error"}), 500
    return jsonify({"product": product.to_dict()}), 201


@products_bp.put("/<int:product_id>")
@require_actor
@require_permission("MANAGE_PRODUCTS")
def update_product_route(product_id: int):
    payload = request.get_json(silent=True) or {}
    try:
        product = products_service.update_product(get_repo(), g.current_user, product_id, payload)
    except WorkshopError as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to update product")
        return jsonify({"error": "Internal server error"}), 500
    return jsonify({"product": product.to_dict()})


@products_bp.delete("/<int:product_id>")
@require_actor
@require_permission("DELETE_PRODUCTS")
def delete_product_route(product_id: int):
    try:
        products_service.delete_product(get_repo(), g.current_user, product_id)
    except WorkshopError as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to delete product")
        return jsonify({"error": "Internal server error"}), 500
    return jsonify({"ok": True})
