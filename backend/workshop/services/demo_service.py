# Overview: Demo workshop data, loaded through the regular services.

"""
Seeds the demo workshop: the owner John Smith, an admin and a worker, three
stocked parts, a completed brake job (invoiced) and a pending oil change.

Everything goes through the normal services so the activity log reads the
same as it would after real use.
"""

from __future__ import annotations

from datetime import datetime

from ..domain import User
from ..errors import ConflictError
from ..repositories import Repository
from ..time_utils import utcnow
from . import invoice_service, job_card_service, products_service, user_service


DEMO_OWNER = ("John Smith", "john@workshop.com")

DEMO_USERS = [
    {"name": "Sarah Davis", "email": "sarah@workshop.com", "role": "admin"},
    {"name": "Mike Johnson", "email": "mike@workshop.com", "role": "worker"},
]

DEMO_PRODUCTS = [
    {
        "name": "Brake Pads", "type": "part", "category": "Brakes",
        "quantity": 25, "unit_price_cents": 4599, "min_stock": 5,
        "brand": "Bosch", "description": "High-quality ceramic brake pads",
    },
    {
        "name": "Engine Oil", "type": "part", "category": "Engine",
        "quantity": 3, "unit_price_cents": 2999, "min_stock": 5,
        "brand": "Mobil 1", "description": "5W-30 Synthetic Motor Oil",
    },
    {
        "name": "Air Filter", "type": "part", "category": "Engine",
        "quantity": 15, "unit_price_cents": 1999, "min_stock": 10,
        "brand": "K&N", "description": "High-flow air filter",
    },
]


def _owner(repo: Repository, now: datetime) -> User:
    owners = [u for u in repo.list("users") if u.role == "owner"]
    if owners:
        return owners[0]
    name, email = DEMO_OWNER
    return user_service.bootstrap_owner(repo, name, email, now=now)


def seed_demo_workshop(repo: Repository, now: datetime | None = None) -> dict:
    """
    Load the demo data. Refuses to run if any product already exists.

    Returns counts of what was created.
    """
    if repo.list("products"):
        raise ConflictError("Workshop already has products; demo data not loaded")
    now = now or utcnow()
    owner = _owner(repo, now)

    existing_emails = {u.email for u in repo.list("users")}
    users = [
        user_service.add_user(repo, owner, payload, now=now)
        for payload in DEMO_USERS
        if payload["email"] not in existing_emails
    ]

    products = [products_service.create_product(repo, owner, payload, now=now) for payload in DEMO_PRODUCTS]
    brake_pads, engine_oil = products[0], products[1]

    brake_job = job_card_service.create_job_card(repo, owner, {
        "customer_name": "Alice Johnson",
        "customer_phone": "+1-555-0123",
        "vehicle_number": "ABC-123",
        "vehicle_model": "2020 Honda Civic",
        "issue_description": "Brake noise and vibration when stopping",
        "services_provided": ["Brake inspection", "Brake pad replacement"],
        "labor_cost_cents": 12000,
        "notes": "Customer reported grinding noise. Replaced front brake pads.",
        "parts": [{"product_id": brake_pads.id, "quantity": 1}],
    }, now=now)
    job_card_service.update_job_card_status(repo, owner, brake_job.id, "completed", now=now)
    invoice_service.generate_invoice(repo, owner, brake_job.id, now=now)

    job_card_service.create_job_card(repo, owner, {
        "customer_name": "Bob Wilson",
        "customer_phone": "+1-555-0456",
        "vehicle_number": "XYZ-789",
        "vehicle_model": "2019 Toyota Camry",
        "issue_description": "Oil change and general inspection",
        "services_provided": ["Oil change", "Multi-point inspection"],
        "labor_cost_cents": 5000,
        "parts": [{"product_id": engine_oil.id, "quantity": 1}],
    }, now=now)

    return {
        "users": len(users),
        "products": len(products),
        "job_cards": 2,
        "invoices": 1,
    }
