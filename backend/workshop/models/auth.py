from __future__ import annotations

from ..extensions import db
from ..domain import User as UserRecord


class User(db.Model):
    """
    Workshop staff accounts.

    WHY: Every audit entry and every mutation is attributed to a user; the
    role column drives the capability matrix in workshop.permissions.
    """
    __tablename__ = "users"
    __table_args__ = (
        db.UniqueConstraint("email", name="uq_users_email"),
        {"sqlite_autoincrement": True},
    )

    MUTABLE_FIELDS = {"name", "email", "role", "last_login_at"}

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(16), nullable=False, default="worker", index=True)

    created_at = db.Column(db.DateTime, nullable=False)
    last_login_at = db.Column(db.DateTime, nullable=True)

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r} role={self.role}>"

    def to_record(self) -> UserRecord:
        return UserRecord(
            id=self.id,
            name=self.name,
            email=self.email,
            role=self.role,
            created_at=self.created_at,
            last_login_at=self.last_login_at,
        )

    @classmethod
    def from_record(cls, record: UserRecord) -> "User":
        return cls(
            name=record.name,
            email=record.email,
            role=record.role,
            created_at=record.created_at,
            last_login_at=record.last_login_at,
        )
