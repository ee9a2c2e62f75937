from __future__ import annotations

from ..extensions import db
from ..domain import Invoice as InvoiceRecord, InvoiceItem as InvoiceItemRecord


class Invoice(db.Model):
    """
    Invoice generated from a completed job card.

    Customer and vehicle columns are copies taken at generation time.
    Amount columns are derived by the rule engine.
    """
    __tablename__ = "invoices"
    __table_args__ = (
        db.UniqueConstraint("invoice_number", name="uq_invoices_invoice_number"),
        db.Index("ix_invoices_status_created", "status", "created_at"),
        {"sqlite_autoincrement": True},
    )

    MUTABLE_FIELDS = {"status"}

    id = db.Column(db.Integer, primary_key=True)
    invoice_number = db.Column(db.String(32), nullable=False)

    job_card_id = db.Column(db.Integer, db.ForeignKey("job_cards.id"), nullable=False, index=True)

    customer_name = db.Column(db.String(255), nullable=False)
    customer_phone = db.Column(db.String(64), nullable=False, default="")
    vehicle_number = db.Column(db.String(64), nullable=False)

    subtotal_cents = db.Column(db.Integer, nullable=False)
    tax_amount_cents = db.Column(db.Integer, nullable=False)
    total_amount_cents = db.Column(db.Integer, nullable=False)

    status = db.Column(db.String(16), nullable=False, default="pending", index=True)
    generated_by_user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=True)

    due_date = db.Column(db.DateTime, nullable=False)
    created_at = db.Column(db.DateTime, nullable=False)

    items = db.relationship(
        "InvoiceItem",
        order_by="InvoiceItem.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    def to_record(self) -> InvoiceRecord:
        return InvoiceRecord(
            id=self.id,
            job_card_id=self.job_card_id,
            invoice_number=self.invoice_number,
            customer_name=self.customer_name,
            customer_phone=self.customer_phone,
            vehicle_number=self.vehicle_number,
            items=[item.to_item() for item in self.items],
            subtotal_cents=self.subtotal_cents,
            tax_amount_cents=self.tax_amount_cents,
            total_amount_cents=self.total_amount_cents,
            status=self.status,
            generated_by_user_id=self.generated_by_user_id,
            due_date=self.due_date,
            created_at=self.created_at,
        )

    @classmethod
    def from_record(cls, record: InvoiceRecord) -> "Invoice":
        return cls(
            job_card_id=record.job_card_id,
            invoice_number=record.invoice_number,
            customer_name=record.customer_name,
            customer_phone=record.customer_phone,
            vehicle_number=record.vehicle_number,
            subtotal_cents=record.subtotal_cents,
            tax_amount_cents=record.tax_amount_cents,
            total_amount_cents=record.total_amount_cents,
            status=record.status,
            generated_by_user_id=record.generated_by_user_id,
            due_date=record.due_date,
            created_at=record.created_at,
            items=[InvoiceItem.from_item(i, item) for i, item in enumerate(record.items)],
        )


class InvoiceItem(db.Model):
    """Individual billed line on an invoice."""
    __tablename__ = "invoice_items"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    invoice_id = db.Column(db.Integer, db.ForeignKey("invoices.id"), nullable=False, index=True)
    position = db.Column(db.Integer, nullable=False, default=0)

    description = db.Column(db.String(255), nullable=False)
    quantity = db.Column(db.Integer, nullable=False)
    unit_price_cents = db.Column(db.Integer, nullable=False)
    total_price_cents = db.Column(db.Integer, nullable=False)

    def to_item(self) -> InvoiceItemRecord:
        return InvoiceItemRecord(
            description=self.description,
            quantity=self.quantity,
            unit_price_cents=self.unit_price_cents,
            total_price_cents=self.total_price_cents,
        )

    @classmethod
    def from_item(cls, position: int, item: InvoiceItemRecord) -> "InvoiceItem":
        return cls(
            position=position,
            description=item.description,
            quantity=item.quantity,
            unit_price_cents=item.unit_price_cents,
            total_price_cents=item.total_price_cents,
        )
