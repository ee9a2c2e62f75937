# Overview: Storage-independent workshop records and their closed value sets.

"""
Workshop domain records.

These dataclasses are what services and repositories exchange. They carry no
storage behaviour; the SQL models in ``workshop.models`` convert to and from
them. Money is always integer cents.

Derived fields (``total_price_cents``, ``total_amount_cents``,
``subtotal_cents``, ``tax_amount_cents``) are written only by
``workshop.rules``; payload validation never accepts them from a caller.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from .time_utils import to_utc_z


# -- Value sets --

PRODUCT_TYPES = ("part", "accessory", "service")

# Ordered: index is the position in the forward-only lifecycle
JOB_CARD_STATUSES = ("pending", "in_progress", "completed", "invoiced")

INVOICE_STATUSES = ("pending", "paid", "overdue")

# Ordered by privilege, highest first
ROLES = ("owner", "admin", "worker")

ENTITY_TYPES = ("product", "job_card", "invoice", "user")


class StockStatus:
    OUT_OF_STOCK = "out_of_stock"
    LOW_STOCK = "low_stock"
    IN_STOCK = "in_stock"


class Action:
    """Audit action taxonomy."""
    ADD_PRODUCT = "ADD_PRODUCT"
    UPDATE_PRODUCT = "UPDATE_PRODUCT"
    DELETE_PRODUCT = "DELETE_PRODUCT"
    CREATE_JOB_CARD = "CREATE_JOB_CARD"
    UPDATE_JOB_CARD_STATUS = "UPDATE_JOB_CARD_STATUS"
    GENERATE_INVOICE = "GENERATE_INVOICE"
    ADD_USER = "ADD_USER"
    UPDATE_USER = "UPDATE_USER"


ACTIONS = (
    Action.ADD_PRODUCT,
    Action.UPDATE_PRODUCT,
    Action.DELETE_PRODUCT,
    Action.CREATE_JOB_CARD,
    Action.UPDATE_JOB_CARD_STATUS,
    Action.GENERATE_INVOICE,
    Action.ADD_USER,
    Action.UPDATE_USER,
)


# -- Records --

@dataclass
class User:
    name: str
    email: str
    role: str
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    last_login_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role,
            "created_at": to_utc_z(self.created_at),
            "last_login_at": to_utc_z(self.last_login_at),
        }


@dataclass
class Product:
    name: str
    type: str
    category: str = ""
    quantity: int = 0
    unit_price_cents: int = 0
    min_stock: int = 0
    brand: str = ""
    description: str = ""
    last_updated_by: Optional[int] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        from .rules import classify_stock

        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "category": self.category,
            "quantity": self.quantity,
            "unit_price_cents": self.unit_price_cents,
            "min_stock": self.min_stock,
            "brand": self.brand,
            "description": self.description,
            "last_updated_by": self.last_updated_by,
            "stock_status": classify_stock(self),
            "created_at": to_utc_z(self.created_at),
            "updated_at": to_utc_z(self.updated_at),
        }


@dataclass
class PartLine:
    """One product on a job card. total_price_cents = quantity * unit_price_cents."""
    product_id: int
    product_name: str
    quantity: int
    unit_price_cents: int
    total_price_cents: int = 0

    def to_dict(self) -> dict:
        return {
            "product_id": self.product_id,
            "product_name": self.product_name,
            "quantity": self.quantity,
            "unit_price_cents": self.unit_price_cents,
            "total_price_cents": self.total_price_cents,
        }


@dataclass
class JobCard:
    customer_name: str
    vehicle_number: str
    customer_phone: str = ""
    vehicle_model: str = ""
    issue_description: str = ""
    parts_used: list[PartLine] = field(default_factory=list)
    services_provided: list[str] = field(default_factory=list)
    labor_cost_cents: int = 0
    total_amount_cents: int = 0
    status: str = "pending"
    created_by_user_id: Optional[int] = None
    approved_by_user_id: Optional[int] = None
    notes: str = ""
    estimated_completion: Optional[datetime] = None
    actual_completion: Optional[datetime] = None
    job_number: Optional[str] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "job_number": self.job_number,
            "customer_name": self.customer_name,
            "customer_phone": self.customer_phone,
            "vehicle_number": self.vehicle_number,
            "vehicle_model": self.vehicle_model,
            "issue_description": self.issue_description,
            "parts_used": [line.to_dict() for line in self.parts_used],
            "services_provided": list(self.services_provided),
            "labor_cost_cents": self.labor_cost_cents,
            "total_amount_cents": self.total_amount_cents,
            "status": self.status,
            "created_by_user_id": self.created_by_user_id,
            "approved_by_user_id": self.approved_by_user_id,
            "notes": self.notes,
            "estimated_completion": to_utc_z(self.estimated_completion),
            "actual_completion": to_utc_z(self.actual_completion),
            "created_at": to_utc_z(self.created_at),
            "updated_at": to_utc_z(self.updated_at),
        }


@dataclass
class InvoiceItem:
    description: str
    quantity: int
    unit_price_cents: int
    total_price_cents: int

    def to_dict(self) -> dict:
        return {
            "description": self.description,
            "quantity": self.quantity,
            "unit_price_cents": self.unit_price_cents,
            "total_price_cents": self.total_price_cents,
        }


@dataclass
class Invoice:
    """
    Billable snapshot of a completed job card.

    Customer and vehicle fields are copied at generation time so later
    job-card edits never leak into an issued invoice.
    """
    job_card_id: int
    invoice_number: str
    customer_name: str
    customer_phone: str
    vehicle_number: str
    items: list[InvoiceItem] = field(default_factory=list)
    subtotal_cents: int = 0
    tax_amount_cents: int = 0
    total_amount_cents: int = 0
    status: str = "pending"
    generated_by_user_id: Optional[int] = None
    due_date: Optional[datetime] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "job_card_id": self.job_card_id,
            "invoice_number": self.invoice_number,
            "customer_name": self.customer_name,
            "customer_phone": self.customer_phone,
            "vehicle_number": self.vehicle_number,
            "items": [item.to_dict() for item in self.items],
            "subtotal_cents": self.subtotal_cents,
            "tax_amount_cents": self.tax_amount_cents,
            "total_amount_cents": self.total_amount_cents,
            "status": self.status,
            "generated_by_user_id": self.generated_by_user_id,
            "due_date": to_utc_z(self.due_date),
            "created_at": to_utc_z(self.created_at),
        }


@dataclass
class ActivityLog:
    user_id: int
    user_name: str
    action: str
    details: str
    entity_type: str
    entity_id: Optional[int] = None
    id: Optional[int] = None
    occurred_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "user_name": self.user_name,
            "action": self.action,
            "details": self.details,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "occurred_at": to_utc_z(self.occurred_at),
        }
