from __future__ import annotations

from ..extensions import db
from ..domain import Product as ProductRecord


class Product(db.Model):
    """
    Inventory item: a part, an accessory or a billable service.

    Prices are authoritative in cents. quantity, unit_price_cents and
    min_stock are guarded non-negative by CHECK constraints as well as by
    validation in the service layer.
    """
    __tablename__ = "products"
    __table_args__ = (
        db.CheckConstraint("quantity >= 0", name="ck_products_quantity_non_negative"),
        db.CheckConstraint("unit_price_cents >= 0", name="ck_products_price_non_negative"),
        db.CheckConstraint("min_stock >= 0", name="ck_products_min_stock_non_negative"),
        db.Index("ix_products_type_name", "type", "name"),
        {"sqlite_autoincrement": True},
    )

    MUTABLE_FIELDS = {
        "name", "type", "category", "quantity", "unit_price_cents", "min_stock",
        "brand", "description", "last_updated_by", "updated_at",
    }

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    type = db.Column(db.String(16), nullable=False)
    category = db.Column(db.String(128), nullable=False, default="")
    quantity = db.Column(db.Integer, nullable=False, default=0)
    unit_price_cents = db.Column(db.Integer, nullable=False, default=0)
    min_stock = db.Column(db.Integer, nullable=False, default=0)
    brand = db.Column(db.String(128), nullable=False, default="")
    description = db.Column(db.Text, nullable=False, default="")

    last_updated_by = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=True)

    created_at = db.Column(db.DateTime, nullable=False)
    updated_at = db.Column(db.DateTime, nullable=False)

    def __repr__(self) -> str:
        return f"<Product id={self.id} name={self.name!r} qty={self.quantity}>"

    def to_record(self) -> ProductRecord:
        return ProductRecord(
            id=self.id,
            name=self.name,
            type=self.type,
            category=self.category,
            quantity=self.quantity,
            unit_price_cents=self.unit_price_cents,
            min_stock=self.min_stock,
            brand=self.brand,
            description=self.description,
            last_updated_by=self.last_updated_by,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    @classmethod
    def from_record(cls, record: ProductRecord) -> "Product":
        return cls(
            name=record.name,
            type=record.type,
            category=record.category,
            quantity=record.quantity,
            unit_price_cents=record.unit_price_cents,
            min_stock=record.min_stock,
            brand=record.brand,
            description=record.description,
            last_updated_by=record.last_updated_by,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )
