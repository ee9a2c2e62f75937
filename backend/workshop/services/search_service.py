# Overview: Case-insensitive search plus exact categorical filtering over record lists.

"""
Query/filter layer.

Each filter_* function takes the full current collection and returns a new
list: records whose search fields contain the term (case-insensitive
substring, any field) AND whose categorical field equals the filter value.
Order is preserved and the input list is never modified. A blank term or a
filter of None / "all" disables that half of the condition.
"""

from __future__ import annotations

from typing import Iterable, Sequence, TypeVar

from ..domain import ActivityLog, Invoice, JobCard, Product


T = TypeVar("T")

PRODUCT_SEARCH_FIELDS = ("name", "brand", "category")
JOB_CARD_SEARCH_FIELDS = ("customer_name", "vehicle_number", "vehicle_model")
LOG_SEARCH_FIELDS = ("user_name", "action", "details")
INVOICE_SEARCH_FIELDS = ("invoice_number", "customer_name", "vehicle_number")

ALL = "all"


def matches_search(record, fields: Sequence[str], term: str | None) -> bool:
    if term is None or not term.strip():
        return True
    needle = term.strip().lower()
    for name in fields:
        value = getattr(record, name, None)
        if value and needle in str(value).lower():
            return True
    return False


def matches_filter(record, field: str, value: str | None) -> bool:
    if value is None or value == "" or value == ALL:
        return True
    return getattr(record, field, None) == value


def filter_records(
    records: Iterable[T],
    *,
    search_fields: Sequence[str],
    search: str | None,
    filter_field: str,
    filter_value: str | None,
) -> list[T]:
    return [
        r for r in records
        if matches_search(r, search_fields, search) and matches_filter(r, filter_field, filter_value)
    ]


def filter_products(products: Iterable[Product], search: str | None = None, product_type: str | None = None) -> list[Product]:
    return filter_records(
        products,
        search_fields=PRODUCT_SEARCH_FIELDS,
        search=search,
        filter_field="type",
        filter_value=product_type,
    )


def filter_job_cards(job_cards: Iterable[JobCard], search: str | None = None, status: str | None = None) -> list[JobCard]:
    return filter_records(
        job_cards,
        search_fields=JOB_CARD_SEARCH_FIELDS,
        search=search,
        filter_field="status",
        filter_value=status,
    )


def filter_logs(logs: Iterable[ActivityLog], search: str | None = None, action: str | None = None) -> list[ActivityLog]:
    return filter_records(
        logs,
        search_fields=LOG_SEARCH_FIELDS,
        search=search,
        filter_field="action",
        filter_value=action,
    )


def filter_invoices(invoices: Iterable[Invoice], search: str | None = None) -> list[Invoice]:
    """Search only; the status filter needs a clock and lives in invoice_service."""
    return [inv for inv in invoices if matches_search(inv, INVOICE_SEARCH_FIELDS, search)]
