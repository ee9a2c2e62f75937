from __future__ import annotations

from ..extensions import db


class DocumentSequence(db.Model):
    """
    Monotonic number sequences (job card and invoice numbers).

    WHY: Time-based numbers collide when two documents are created in the
    same instant; a counter row per sequence name cannot.
    """
    __tablename__ = "document_sequences"
    __table_args__ = (
        db.UniqueConstraint("name", name="uq_document_sequences_name"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(32), nullable=False)
    next_number = db.Column(db.Integer, nullable=False, default=1)

    def __repr__(self) -> str:
        return f"<DocumentSequence name={self.name!r} next={self.next_number}>"
