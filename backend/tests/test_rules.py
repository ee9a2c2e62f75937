"""
Rule engine tests.

Verifies:
- Job card totals are part line totals plus labor, independent of line order
- Adding a product already on a card merges into the existing line
- Stock classification boundaries
- Invoice tax rounds half-up to the cent
"""

from decimal import Decimal

import pytest

from workshop.domain import InvoiceItem, JobCard, PartLine, Product, StockStatus
from workshop.errors import InvalidAmount
from workshop.rules import (
    add_part_to_job_card,
    build_invoice_items,
    classify_stock,
    compute_invoice_totals,
    compute_job_card_total,
    is_low_stock,
    parse_tax_rate,
    tax_cents,
)


def _product(id=1, name="Brake Pads", price=4599, quantity=10, min_stock=5):
    return Product(
        id=id,
        name=name,
        type="part",
        category="Brakes",
        quantity=quantity,
        unit_price_cents=price,
        min_stock=min_stock,
    )


def _draft(labor=0):
    return JobCard(
        customer_name="Alice Johnson",
        customer_phone="+1-555-0123",
        vehicle_number="ABC-123",
        vehicle_model="2020 Honda Civic",
        labor_cost_cents=labor,
    )


# =============================================================================
# JOB CARD TOTALS
# =============================================================================


class TestComputeJobCardTotal:

    def test_labor_only(self):
        assert compute_job_card_total([], 12000) == 12000

    def test_parts_plus_labor(self):
        parts = [
            PartLine(product_id=1, product_name="Brake Pads", quantity=2, unit_price_cents=4599),
            PartLine(product_id=2, product_name="Air Filter", quantity=1, unit_price_cents=1999),
        ]
        assert compute_job_card_total(parts, 5000) == 2 * 4599 + 1999 + 5000

    def test_order_does_not_matter(self):
        a = PartLine(product_id=1, product_name="A", quantity=3, unit_price_cents=150)
        b = PartLine(product_id=2, product_name="B", quantity=1, unit_price_cents=999)
        assert compute_job_card_total([a, b], 100) == compute_job_card_total([b, a], 100)

    def test_stale_line_total_is_ignored(self):
        line = PartLine(product_id=1, product_name="A", quantity=2, unit_price_cents=500, total_price_cents=1)
        assert compute_job_card_total([line], 0) == 1000

    def test_negative_labor_rejected(self):
        with pytest.raises(InvalidAmount):
            compute_job_card_total([], -1)


# =============================================================================
# ADD PART
# =============================================================================


class TestAddPartToJobCard:

    def test_new_product_appends_line(self):
        draft = _draft(labor=1000)
        line = add_part_to_job_card(draft, _product())

        assert len(draft.parts_used) == 1
        assert line.quantity == 1
        assert line.unit_price_cents == 4599
        assert line.total_price_cents == 4599
        assert draft.total_amount_cents == 5599

    def test_same_product_merges(self):
        draft = _draft()
        product = _product()
        add_part_to_job_card(draft, product)
        add_part_to_job_card(draft, product)

        assert len(draft.parts_used) == 1
        assert draft.parts_used[0].quantity == 2
        assert draft.parts_used[0].total_price_cents == 9198
        assert draft.total_amount_cents == 9198

    def test_quantity_delta(self):
        draft = _draft()
        add_part_to_job_card(draft, _product(), 3)
        add_part_to_job_card(draft, _product(), 2)

        assert draft.parts_used[0].quantity == 5
        assert draft.total_amount_cents == 5 * 4599

    def test_distinct_products_keep_distinct_lines(self):
        draft = _draft()
        add_part_to_job_card(draft, _product(id=1))
        add_part_to_job_card(draft, _product(id=2, name="Air Filter", price=1999))

        assert [line.product_id for line in draft.parts_used] == [1, 2]
        assert draft.total_amount_cents == 4599 + 1999

    def test_price_snapshot_taken_from_first_add(self):
        draft = _draft()
        add_part_to_job_card(draft, _product(price=4599))
        add_part_to_job_card(draft, _product(price=9999))

        assert draft.parts_used[0].unit_price_cents == 4599
        assert draft.total_amount_cents == 2 * 4599

    @pytest.mark.parametrize("delta", [0, -1, True, 1.5, "2"])
    def test_bad_delta_rejected(self, delta):
        draft = _draft()
        with pytest.raises(InvalidAmount):
            add_part_to_job_card(draft, _product(), delta)
        assert draft.parts_used == []


# =============================================================================
# STOCK CLASSIFICATION
# =============================================================================


class TestClassifyStock:

    @pytest.mark.parametrize(
        "quantity,min_stock,expected",
        [
            (0, 5, StockStatus.OUT_OF_STOCK),
            (0, 0, StockStatus.OUT_OF_STOCK),
            (1, 5, StockStatus.LOW_STOCK),
            (5, 5, StockStatus.LOW_STOCK),
            (6, 5, StockStatus.IN_STOCK),
            (1, 0, StockStatus.IN_STOCK),
        ],
    )
    def test_boundaries(self, quantity, min_stock, expected):
        assert classify_stock(_product(quantity=quantity, min_stock=min_stock)) == expected

    def test_low_stock_includes_out_of_stock(self):
        assert is_low_stock(_product(quantity=0))
        assert is_low_stock(_product(quantity=3, min_stock=5))
        assert not is_low_stock(_product(quantity=30, min_stock=5))


# =============================================================================
# INVOICE ARITHMETIC
# =============================================================================


class TestInvoiceTotals:

    def test_brake_job_round_trip(self):
        """$45.99 pads + $120.00 labor at 8%: 165.99 + 13.28 = 179.27."""
        job_card = _draft(labor=12000)
        add_part_to_job_card(job_card, _product())

        items = build_invoice_items(job_card)
        subtotal, tax, total = compute_invoice_totals(items)

        assert [item.description for item in items] == ["Brake Pads", "Labor"]
        assert subtotal == 16599
        assert tax == 1328
        assert total == 17927

    def test_labor_line_always_present(self):
        items = build_invoice_items(_draft(labor=0))
        assert len(items) == 1
        assert items[0].description == "Labor"
        assert items[0].total_price_cents == 0

    def test_half_up_rounding(self):
        # 6.25 -> 6
        assert tax_cents(25, "0.25") == 6
        # 2.5 -> 3
        assert tax_cents(10, "0.25") == 3

    def test_zero_rate(self):
        items = [InvoiceItem(description="Labor", quantity=1, unit_price_cents=5000, total_price_cents=5000)]
        assert compute_invoice_totals(items, "0") == (5000, 0, 5000)

    def test_parse_tax_rate_accepts_common_forms(self):
        assert parse_tax_rate("0.08") == Decimal("0.08")
        assert parse_tax_rate(Decimal("0.08")) == Decimal("0.08")
        assert parse_tax_rate(0.08) == Decimal("0.08")

    @pytest.mark.parametrize("rate", ["-0.01", "abc", "NaN"])
    def test_parse_tax_rate_rejects(self, rate):
        with pytest.raises(InvalidAmount):
            parse_tax_rate(rate)
