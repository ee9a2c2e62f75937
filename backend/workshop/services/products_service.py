# backend/workshop/services/products_service.py
"""
Products Service

Inventory CRUD. Reads need VIEW_INVENTORY; add/edit need MANAGE_PRODUCTS
(owner, admin); delete needs DELETE_PRODUCTS (owner only). Every write stamps
last_updated_by and appends one activity entry in the same unit of work.
"""
from __future__ import annotations

from datetime import datetime

from ..domain import Action, Product, User
from ..errors import NotFound, ValidationError
from ..repositories import Repository
from ..time_utils import utcnow
from ..validation import PRODUCT_POLICY, validate_payload
from . import audit_service, search_service
from .permission_service import require_capability


def list_products(
    repo: Repository,
    actor: User,
    search: str | None = None,
    product_type: str | None = None,
) -> list[Product]:
    require_capability(actor, "VIEW_INVENTORY")
    return search_service.filter_products(repo.list("products"), search=search, product_type=product_type)


def get_product(repo: Repository, actor: User, product_id: int) -> Product:
    require_capability(actor, "VIEW_INVENTORY")
    product = repo.get("products", product_id)
    if product is None:
        raise NotFound("Product not found", details={"product_id": product_id})
    return product


def create_product(repo: Repository, actor: User, payload: dict, now: datetime | None = None) -> Product:
    """
    Create a product from a client payload.

    Raises:
        Unauthorized: actor lacks MANAGE_PRODUCTS
        ValidationError / InvalidAmount: bad payload (negative quantity, price, min stock)
    """
    require_capability(actor, "MANAGE_PRODUCTS")
    patch = validate_payload(payload=payload, policy=PRODUCT_POLICY, partial=False)
    now = now or utcnow()

    product = Product(**patch)
    product.last_updated_by = actor.id
    product.created_at = now
    product.updated_at = now

    with repo.unit_of_work():
        product.id = repo.insert("products", product)
        audit_service.record(
            repo,
            actor,
            Action.ADD_PRODUCT,
            f"Added product: {product.name}",
            "product",
            entity_id=product.id,
            occurred_at=now,
        )
    return product


def update_product(
    repo: Repository,
    actor: User,
    product_id: int,
    payload: dict,
    now: datetime | None = None,
) -> Product:
    require_capability(actor, "MANAGE_PRODUCTS")
    existing = repo.get("products", product_id)
    if existing is None:
        raise NotFound("Product not found", details={"product_id": product_id})
    patch = validate_payload(payload=payload, policy=PRODUCT_POLICY, partial=True)
    if not patch:
        raise ValidationError("No fields to update")
    now = now or utcnow()

    patch["last_updated_by"] = actor.id
    patch["updated_at"] = now

    with repo.unit_of_work():
        repo.update("products", product_id, patch)
        updated = repo.get("products", product_id)
        changed = sorted(k for k in patch if k not in ("last_updated_by", "updated_at"))
        audit_service.record(
            repo,
            actor,
            Action.UPDATE_PRODUCT,
            f"Updated product: {updated.name} ({', '.join(changed)})",
            "product",
            entity_id=product_id,
            occurred_at=now,
        )
    return updated


def delete_product(repo: Repository, actor: User, product_id: int, now: datetime | None = None) -> Product:
    """
    Hard-delete a product. Job cards and invoices keep their own snapshots of
    the name and price, so history is unaffected.
    """
    require_capability(actor, "DELETE_PRODUCTS")
    existing = repo.get("products", product_id)
    if existing is None:
        raise NotFound("Product not found", details={"product_id": product_id})

    with repo.unit_of_work():
        repo.delete("products", product_id)
        audit_service.record(
            repo,
            actor,
            Action.DELETE_PRODUCT,
            f"Deleted product: {existing.name}",
            "product",
            entity_id=product_id,
            occurred_at=now,
        )
    return existing
