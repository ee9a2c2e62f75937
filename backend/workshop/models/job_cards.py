from __future__ import annotations

from ..extensions import db
from ..domain import JobCard as JobCardRecord, PartLine


class JobCard(db.Model):
    """
    Repair order document.

    Lifecycle: pending -> in_progress -> completed -> invoiced (forward only).
    total_amount_cents is written by the rule engine, never by a caller.
    """
    __tablename__ = "job_cards"
    __table_args__ = (
        db.UniqueConstraint("job_number", name="uq_job_cards_job_number"),
        db.Index("ix_job_cards_status_created", "status", "created_at"),
        {"sqlite_autoincrement": True},
    )

    # Part lines are fixed at creation; only lifecycle fields move afterwards
    MUTABLE_FIELDS = {"status", "approved_by_user_id", "actual_completion", "notes", "updated_at"}

    id = db.Column(db.Integer, primary_key=True)

    # Human-readable number (e.g., "JC-0001")
    job_number = db.Column(db.String(32), nullable=False)

    customer_name = db.Column(db.String(255), nullable=False)
    customer_phone = db.Column(db.String(64), nullable=False, default="")
    vehicle_number = db.Column(db.String(64), nullable=False)
    vehicle_model = db.Column(db.String(255), nullable=False, default="")
    issue_description = db.Column(db.Text, nullable=False, default="")
    services_provided = db.Column(db.JSON, nullable=False, default=list)

    labor_cost_cents = db.Column(db.Integer, nullable=False, default=0)
    total_amount_cents = db.Column(db.Integer, nullable=False, default=0)

    status = db.Column(db.String(16), nullable=False, default="pending", index=True)

    created_by_user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=True)
    approved_by_user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=True)
    notes = db.Column(db.Text, nullable=False, default="")

    estimated_completion = db.Column(db.DateTime, nullable=True)
    actual_completion = db.Column(db.DateTime, nullable=True)
    created_at = db.Column(db.DateTime, nullable=False)
    updated_at = db.Column(db.DateTime, nullable=False)

    parts = db.relationship(
        "JobCardPart",
        order_by="JobCardPart.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<JobCard id={self.id} number={self.job_number!r} status={self.status}>"

    def to_record(self) -> JobCardRecord:
        return JobCardRecord(
            id=self.id,
            job_number=self.job_number,
            customer_name=self.customer_name,
            customer_phone=self.customer_phone,
            vehicle_number=self.vehicle_number,
            vehicle_model=self.vehicle_model,
            issue_description=self.issue_description,
            parts_used=[part.to_line() for part in self.parts],
            services_provided=list(self.services_provided or []),
            labor_cost_cents=self.labor_cost_cents,
            total_amount_cents=self.total_amount_cents,
            status=self.status,
            created_by_user_id=self.created_by_user_id,
            approved_by_user_id=self.approved_by_user_id,
            notes=self.notes,
            estimated_completion=self.estimated_completion,
            actual_completion=self.actual_completion,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    @classmethod
    def from_record(cls, record: JobCardRecord) -> "JobCard":
        return cls(
            job_number=record.job_number,
            customer_name=record.customer_name,
            customer_phone=record.customer_phone,
            vehicle_number=record.vehicle_number,
            vehicle_model=record.vehicle_model,
            issue_description=record.issue_description,
            services_provided=list(record.services_provided),
            labor_cost_cents=record.labor_cost_cents,
            total_amount_cents=record.total_amount_cents,
            status=record.status,
            created_by_user_id=record.created_by_user_id,
            approved_by_user_id=record.approved_by_user_id,
            notes=record.notes,
            estimated_completion=record.estimated_completion,
            actual_completion=record.actual_completion,
            created_at=record.created_at,
            updated_at=record.updated_at,
            parts=[JobCardPart.from_line(i, line) for i, line in enumerate(record.parts_used)],
        )


class JobCardPart(db.Model):
    """Individual part line on a job card (name and price are snapshots)."""
    __tablename__ = "job_card_parts"
    __table_args__ = (
        db.UniqueConstraint("job_card_id", "product_id", name="uq_job_card_parts_card_product"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    job_card_id = db.Column(db.Integer, db.ForeignKey("job_cards.id"), nullable=False, index=True)
    position = db.Column(db.Integer, nullable=False, default=0)

    # Not a foreign key: the line must survive deletion of the product
    product_id = db.Column(db.Integer, nullable=False)
    product_name = db.Column(db.String(255), nullable=False)
    quantity = db.Column(db.Integer, nullable=False)
    unit_price_cents = db.Column(db.Integer, nullable=False)
    total_price_cents = db.Column(db.Integer, nullable=False)

    def to_line(self) -> PartLine:
        return PartLine(
            product_id=self.product_id,
            product_name=self.product_name,
            quantity=self.quantity,
            unit_price_cents=self.unit_price_cents,
            total_price_cents=self.total_price_cents,
        )

    @classmethod
    def from_line(cls, position: int, line: PartLine) -> "JobCardPart":
        return cls(
            position=position,
            product_id=line.product_id,
            product_name=line.product_name,
            quantity=line.quantity,
            unit_price_cents=line.unit_price_cents,
            total_price_cents=line.total_price_cents,
        )
