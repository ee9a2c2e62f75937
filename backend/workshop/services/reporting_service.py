# Overview: Dashboard summary statistics.

"""
Dashboard reporting.

Revenue is the sum of invoice totals (tax included). "This month" runs from
00:00 UTC on the first of the current month. Low stock counts every product
that is not in stock, including ones at zero.
"""

from __future__ import annotations

from datetime import datetime

from ..domain import User
from ..repositories import Repository
from ..rules import is_low_stock
from ..time_utils import start_of_month, utcnow
from .invoice_service import effective_status
from .permission_service import require_capability


def get_dashboard_stats(repo: Repository, actor: User, now: datetime | None = None) -> dict:
    require_capability(actor, "VIEW_DASHBOARD")
    now = now or utcnow()
    month_start = start_of_month(now)

    job_cards = repo.list("job_cards")
    invoices = repo.list("invoices")
    products = repo.list("products")
    low_stock = [p for p in products if is_low_stock(p)]

    return {
        "total_jobs": len(job_cards),
        "pending_jobs": sum(1 for jc in job_cards if jc.status == "pending"),
        "in_progress_jobs": sum(1 for jc in job_cards if jc.status == "in_progress"),
        "completed_jobs": sum(1 for jc in job_cards if jc.status == "completed"),
        "total_revenue_cents": sum(inv.total_amount_cents for inv in invoices),
        "monthly_revenue_cents": sum(
            inv.total_amount_cents for inv in invoices if inv.created_at >= month_start
        ),
        "overdue_invoices": sum(1 for inv in invoices if effective_status(inv, now) == "overdue"),
        "low_stock_items": len(low_stock),
        "low_stock_products": [p.to_dict() for p in low_stock],
        "active_users": len(repo.list("users")),
    }
