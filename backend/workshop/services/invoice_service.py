# Overview: Invoice generation from completed job cards.

"""
Invoice Service

generate_invoice() is the only way a job card reaches the invoiced state, so
every invoiced card has exactly one invoice. The invoice copies customer and
vehicle details at generation time and its amounts come from the rule engine.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from ..domain import Action, Invoice, User
from ..errors import InvalidState, NotFound
from ..repositories import Repository
from ..rules import DEFAULT_TAX_RATE, build_invoice_items, compute_invoice_totals
from ..time_utils import utcnow
from . import audit_service, search_service
from .document_service import next_invoice_number
from .job_card_service import require_job_card
from .lifecycle_service import assert_transition
from .permission_service import require_capability


DEFAULT_DUE_DAYS = 30


def list_invoices(
    repo: Repository,
    actor: User,
    search: str | None = None,
    status: str | None = None,
    now: datetime | None = None,
) -> list[Invoice]:
    """
    Invoices matching search, filtered on their effective status, so
    status="overdue" finds pending invoices past their due date.
    """
    require_capability(actor, "VIEW_INVOICES")
    invoices = search_service.filter_invoices(repo.list("invoices"), search=search)
    if status is None or status == "" or status == search_service.ALL:
        return invoices
    now = now or utcnow()
    return [inv for inv in invoices if effective_status(inv, now) == status]


def get_invoice(repo: Repository, actor: User, invoice_id: int) -> Invoice:
    require_capability(actor, "VIEW_INVOICES")
    invoice = repo.get("invoices", invoice_id)
    if invoice is None:
        raise NotFound("Invoice not found", details={"invoice_id": invoice_id})
    return invoice


def generate_invoice(
    repo: Repository,
    actor: User,
    job_card_id: int,
    tax_rate=DEFAULT_TAX_RATE,
    due_days: int = DEFAULT_DUE_DAYS,
    now: datetime | None = None,
) -> Invoice:
    """
    Bill a completed job card.

    Items are one line per part plus a Labor line. The job card moves to
    invoiced and one GENERATE_INVOICE entry is recorded, all in one unit of
    work.

    Raises:
        Unauthorized: actor lacks GENERATE_INVOICE
        NotFound: unknown job card
        InvalidState: job card is not completed
        InvalidAmount: negative tax rate
    """
    require_capability(actor, "GENERATE_INVOICE")
    job_card = require_job_card(repo, job_card_id)
    if job_card.status != "completed":
        raise InvalidState(
            "Only completed job cards can be invoiced",
            details={"job_card_id": job_card_id, "status": job_card.status},
        )
    assert_transition(job_card.status, "invoiced", via_invoice=True)

    items = build_invoice_items(job_card)
    subtotal, tax, total = compute_invoice_totals(items, tax_rate)
    now = now or utcnow()

    invoice = Invoice(
        job_card_id=job_card.id,
        invoice_number="",
        customer_name=job_card.customer_name,
        customer_phone=job_card.customer_phone,
        vehicle_number=job_card.vehicle_number,
        items=items,
        subtotal_cents=subtotal,
        tax_amount_cents=tax,
        total_amount_cents=total,
        status="pending",
        generated_by_user_id=actor.id,
        due_date=now + timedelta(days=due_days),
        created_at=now,
    )

    with repo.unit_of_work():
        invoice.invoice_number = next_invoice_number(repo)
        invoice.id = repo.insert("invoices", invoice)
        repo.update("job_cards", job_card.id, {"status": "invoiced", "updated_at": now})
        audit_service.record(
            repo,
            actor,
            Action.GENERATE_INVOICE,
            f"Generated invoice {invoice.invoice_number} for job card {job_card.job_number}",
            "invoice",
            entity_id=invoice.id,
            occurred_at=now,
        )
    return invoice


def effective_status(invoice: Invoice, now: datetime | None = None) -> str:
    """Stored status, except unpaid invoices past their due date read as overdue."""
    now = now or utcnow()
    if invoice.status == "pending" and invoice.due_date is not None and now > invoice.due_date:
        return "overdue"
    return invoice.status

