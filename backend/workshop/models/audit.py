from __future__ import annotations

from sqlalchemy import event

from ..extensions import db
from ..domain import ActivityLog as ActivityLogRecord
from ..errors import RepositoryError


class ActivityLog(db.Model):
    """
    Activity audit trail.

    IMMUTABLE: Never update or delete. Append-only; the mapper listeners
    below refuse any UPDATE or DELETE issued through the ORM.
    """
    __tablename__ = "activity_logs"
    __table_args__ = (
        db.Index("ix_activity_logs_occurred", "occurred_at"),
        db.Index("ix_activity_logs_user_action", "user_id", "action"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)

    user_id = db.Column(db.Integer, nullable=False, index=True)
    # Snapshot: survives renames and deletion of the user
    user_name = db.Column(db.String(255), nullable=False)

    action = db.Column(db.String(64), nullable=False, index=True)
    details = db.Column(db.Text, nullable=False, default="")

    entity_type = db.Column(db.String(16), nullable=False)
    entity_id = db.Column(db.Integer, nullable=True)

    occurred_at = db.Column(db.DateTime, nullable=False)

    def to_record(self) -> ActivityLogRecord:
        return ActivityLogRecord(
            id=self.id,
            user_id=self.user_id,
            user_name=self.user_name,
            action=self.action,
            details=self.details,
            entity_type=self.entity_type,
            entity_id=self.entity_id,
            occurred_at=self.occurred_at,
        )

    @classmethod
    def from_record(cls, record: ActivityLogRecord) -> "ActivityLog":
        return cls(
            user_id=record.user_id,
            user_name=record.user_name,
            action=record.action,
            details=record.details,
            entity_type=record.entity_type,
            entity_id=record.entity_id,
            occurred_at=record.occurred_at,
        )


@event.listens_for(ActivityLog, "before_update")
def _block_activity_log_update(mapper, connection, target):
    raise RepositoryError("activity_logs is append-only", details={"id": target.id, "operation": "UPDATE"})


@event.listens_for(ActivityLog, "before_delete")
def _block_activity_log_delete(mapper, connection, target):
    raise RepositoryError("activity_logs is append-only", details={"id": target.id, "operation": "DELETE"})
