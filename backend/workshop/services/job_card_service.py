# Overview: Job card creation, listing and status transitions.

"""
Job Card Service

WHY: A job card is the repair order everything else hangs off: parts are
priced onto it, its status moves forward as work progresses, and a completed
card is what gets invoiced.

- Any role may open a job card (CREATE_JOB_CARD).
- Only owner/admin may move its status (CHANGE_JOB_STATUS).
- Totals always come from the rule engine.
"""

from __future__ import annotations

from datetime import datetime

from ..domain import Action, JobCard, User
from ..errors import NotFound
from ..repositories import Repository
from ..rules import add_part_to_job_card, compute_job_card_total
from ..time_utils import utcnow
from ..validation import (
    JOB_CARD_POLICY,
    JOB_CARD_STATUS_POLICY,
    validate_part_requests,
    validate_payload,
)
from . import audit_service, search_service
from .document_service import next_job_number
from .lifecycle_service import assert_transition
from .permission_service import require_capability


def list_job_cards(
    repo: Repository,
    actor: User,
    search: str | None = None,
    status: str | None = None,
) -> list[JobCard]:
    require_capability(actor, "VIEW_JOB_CARDS")
    return search_service.filter_job_cards(repo.list("job_cards"), search=search, status=status)


def get_job_card(repo: Repository, actor: User, job_card_id: int) -> JobCard:
    require_capability(actor, "VIEW_JOB_CARDS")
    return require_job_card(repo, job_card_id)


def require_job_card(repo: Repository, job_card_id: int) -> JobCard:
    job_card = repo.get("job_cards", job_card_id)
    if job_card is None:
        raise NotFound("Job card not found", details={"job_card_id": job_card_id})
    return job_card


def build_draft(repo: Repository, payload: dict) -> JobCard:
    """
    Validate a create payload and price it into an unsaved JobCard.

    payload["parts"] is a list of {"product_id", "quantity"}; repeated
    products merge into one line.

    Raises:
        ValidationError / InvalidAmount: bad fields or quantities
        NotFound: a part references an unknown product
    """
    payload = dict(payload or {})
    part_requests = validate_part_requests(payload.pop("parts", None))
    fields = validate_payload(payload=payload, policy=JOB_CARD_POLICY, partial=False)

    draft = JobCard(**fields)
    draft.total_amount_cents = compute_job_card_total(draft.parts_used, draft.labor_cost_cents)

    for product_id, quantity in part_requests:
        product = repo.get("products", product_id)
        if product is None:
            raise NotFound("Product not found", details={"product_id": product_id})
        add_part_to_job_card(draft, product, quantity)

    return draft


def create_job_card(repo: Repository, actor: User, payload: dict, now: datetime | None = None) -> JobCard:
    require_capability(actor, "CREATE_JOB_CARD")
    draft = build_draft(repo, payload)
    now = now or utcnow()

    draft.status = "pending"
    draft.created_by_user_id = actor.id
    draft.created_at = now
    draft.updated_at = now

    with repo.unit_of_work():
        draft.job_number = next_job_number(repo)
        draft.id = repo.insert("job_cards", draft)
        audit_service.record(
            repo,
            actor,
            Action.CREATE_JOB_CARD,
            f"Created job card {draft.job_number} for {draft.customer_name} - {draft.vehicle_number}",
            "job_card",
            entity_id=draft.id,
            occurred_at=now,
        )
    return draft


def update_job_card_status(
    repo: Repository,
    actor: User,
    job_card_id: int,
    new_status: str,
    now: datetime | None = None,
) -> JobCard:
    """
    Move a job card strictly forward (never into invoiced).

    Stamps approved_by_user_id with the actor, and actual_completion when
    entering completed.

    Raises:
        Unauthorized: actor lacks CHANGE_JOB_STATUS
        NotFound: unknown job card
        ValidationError: status is not a known status
        IllegalTransition: not a forward move, or target is invoiced
    """
    require_capability(actor, "CHANGE_JOB_STATUS")
    job_card = require_job_card(repo, job_card_id)
    status = validate_payload(
        payload={"status": new_status},
        policy=JOB_CARD_STATUS_POLICY,
        partial=False,
    )["status"]
    assert_transition(job_card.status, status)
    now = now or utcnow()

    patch = {
        "status": status,
        "approved_by_user_id": actor.id,
        "updated_at": now,
    }
    if status == "completed":
        patch["actual_completion"] = now

    with repo.unit_of_work():
        repo.update("job_cards", job_card_id, patch)
        audit_service.record(
            repo,
            actor,
            Action.UPDATE_JOB_CARD_STATUS,
            f"Changed job card {job_card.job_number} status from {job_card.status} to {status}",
            "job_card",
            entity_id=job_card_id,
            occurred_at=now,
        )
    return repo.get("job_cards", job_card_id)
