# Overview: Pure pricing and stock rules for job cards, invoices and products.

"""
Workshop rule engine (pure functions).

Nothing here touches storage or checks permissions; services call these after
authorization and before writing. All amounts are integer cents.

INVARIANTS:
- A job card never holds two part lines for the same product.
- line total = quantity * unit price, recomputed whenever quantity changes.
- job card total = sum(part line totals) + labor.
- invoice subtotal = sum(item totals); tax = subtotal * rate rounded half-up
  to the cent; total = subtotal + tax.
"""

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Iterable

from .domain import InvoiceItem, JobCard, PartLine, Product, StockStatus
from .errors import InvalidAmount


DEFAULT_TAX_RATE = Decimal("0.08")
LABOR_DESCRIPTION = "Labor"


def require_non_negative_int(value, name: str) -> int:
    """Return value if it is a non-negative int (bool excluded), else raise InvalidAmount."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidAmount(f"{name} must be an integer", details={"field": name, "value": value})
    if value < 0:
        raise InvalidAmount(f"{name} cannot be negative", details={"field": name, "value": value})
    return value


def line_total(quantity: int, unit_price_cents: int) -> int:
    require_non_negative_int(quantity, "quantity")
    require_non_negative_int(unit_price_cents, "unit_price_cents")
    return quantity * unit_price_cents


def compute_job_card_total(parts_used: Iterable[PartLine], labor_cost_cents: int) -> int:
    """
    Sum of part line totals plus labor.

    Line totals are recomputed from quantity and unit price rather than
    trusted from the line, so a stale total_price_cents cannot drift into
    the job card total.
    """
    total = require_non_negative_int(labor_cost_cents, "labor_cost_cents")
    for line in parts_used:
        total += line_total(line.quantity, line.unit_price_cents)
    return total


def add_part_to_job_card(draft: JobCard, product: Product, quantity_delta: int = 1) -> PartLine:
    """
    Add a product to a draft job card, merging with an existing line.

    If the product is already on the card its quantity grows by
    quantity_delta; otherwise a new line is appended with that quantity.
    The card total is recomputed either way. Returns the affected line.
    """
    if isinstance(quantity_delta, bool) or not isinstance(quantity_delta, int) or quantity_delta < 1:
        raise InvalidAmount(
            "quantity must be a positive integer",
            details={"field": "quantity", "value": quantity_delta},
        )
    require_non_negative_int(product.unit_price_cents, "unit_price_cents")

    for line in draft.parts_used:
        if line.product_id == product.id:
            line.quantity += quantity_delta
            line.total_price_cents = line_total(line.quantity, line.unit_price_cents)
            break
    else:
        line = PartLine(
            product_id=product.id,
            product_name=product.name,
            quantity=quantity_delta,
            unit_price_cents=product.unit_price_cents,
        )
        line.total_price_cents = line_total(line.quantity, line.unit_price_cents)
        draft.parts_used.append(line)

    draft.total_amount_cents = compute_job_card_total(draft.parts_used, draft.labor_cost_cents)
    return line


def classify_stock(product: Product) -> str:
    """out_of_stock at 0, low_stock up to and including min_stock, else in_stock."""
    if product.quantity == 0:
        return StockStatus.OUT_OF_STOCK
    if product.quantity <= product.min_stock:
        return StockStatus.LOW_STOCK
    return StockStatus.IN_STOCK


def is_low_stock(product: Product) -> bool:
    # Dashboard counts out-of-stock items as low stock too
    return classify_stock(product) != StockStatus.IN_STOCK


def parse_tax_rate(value) -> Decimal:
    """Accept 0.08, "0.08" or Decimal("0.08"); reject negatives and junk."""
    try:
        rate = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise InvalidAmount("tax_rate must be a decimal number", details={"value": value})
    if not rate.is_finite() or rate < 0:
        raise InvalidAmount("tax_rate must be a non-negative number", details={"value": value})
    return rate


def tax_cents(subtotal_cents: int, tax_rate=DEFAULT_TAX_RATE) -> int:
    rate = parse_tax_rate(tax_rate)
    return int((Decimal(subtotal_cents) * rate).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def build_invoice_items(job_card: JobCard) -> list[InvoiceItem]:
    """One item per part line plus a trailing Labor item."""
    items = [
        InvoiceItem(
            description=line.product_name,
            quantity=line.quantity,
            unit_price_cents=line.unit_price_cents,
            total_price_cents=line_total(line.quantity, line.unit_price_cents),
        )
        for line in job_card.parts_used
    ]
    labor = require_non_negative_int(job_card.labor_cost_cents, "labor_cost_cents")
    items.append(
        InvoiceItem(
            description=LABOR_DESCRIPTION,
            quantity=1,
            unit_price_cents=labor,
            total_price_cents=labor,
        )
    )
    return items


def compute_invoice_totals(items: Iterable[InvoiceItem], tax_rate=DEFAULT_TAX_RATE) -> tuple[int, int, int]:
    """Return (subtotal_cents, tax_amount_cents, total_amount_cents)."""
    subtotal = sum(line_total(item.quantity, item.unit_price_cents) for item in items)
    tax = tax_cents(subtotal, tax_rate)
    return subtotal, tax, subtotal + tax
