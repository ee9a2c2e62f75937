# Overview: Job-card lifecycle rules; which status moves are legal.

"""
Job Card Lifecycle

================================================================================
STATE MACHINE:
    pending -> in_progress -> completed -> invoiced

    pending:      Opened, work not started
    in_progress:  Work underway
    completed:    Work done, ready to bill; actual_completion is stamped
    invoiced:     Billed. Terminal and immutable.

RULES (NON-NEGOTIABLE):
1. Moves are strictly forward (skipping ahead is allowed, e.g. pending -> completed)
2. Cannot reverse states (completed -> pending is forbidden)
3. Staying in the same state is not a transition
4. invoiced is entered only by invoice generation, never by a status change
================================================================================
"""

from __future__ import annotations

from ..domain import JOB_CARD_STATUSES
from ..errors import IllegalTransition, ValidationError


VALID_STATUSES = set(JOB_CARD_STATUSES)

# Reachable only through invoice_service.generate_invoice
SYSTEM_ONLY_TARGETS = {"invoiced"}


def validate_status(status: str) -> None:
    """
    Raises:
        ValidationError: If status is not in VALID_STATUSES
    """
    if status not in VALID_STATUSES:
        raise ValidationError(
            f"Invalid status '{status}'. Must be one of: {', '.join(JOB_CARD_STATUSES)}",
            details={"status": status},
        )


def rank(status: str) -> int:
    validate_status(status)
    return JOB_CARD_STATUSES.index(status)


def can_transition(from_status: str, to_status: str) -> bool:
    """True when to_status lies strictly after from_status."""
    return rank(to_status) > rank(from_status)


def assert_transition(from_status: str, to_status: str, *, via_invoice: bool = False) -> None:
    """
    Raise IllegalTransition unless from_status -> to_status is allowed.

    via_invoice is set only by invoice generation; it is the one path into
    the invoiced state.
    """
    if not can_transition(from_status, to_status):
        raise IllegalTransition(
            f"Cannot move job card from {from_status} to {to_status}",
            details={"from": from_status, "to": to_status},
        )
    if to_status in SYSTEM_ONLY_TARGETS and not via_invoice:
        raise IllegalTransition(
            "Job cards become invoiced only by generating an invoice",
            details={"from": from_status, "to": to_status},
        )
