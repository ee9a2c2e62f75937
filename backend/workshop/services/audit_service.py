# Overview: Append-only activity log with role-scoped reads.

"""
Activity Log Invariants (authoritative)

- Append-only: entries are never updated or deleted.
- Each logical mutation appends exactly one entry, inside the same unit of
  work as the mutation it records.
- Insertion order is canonical; reads return most-recent-first.
- Retention is applied at read time: owners see everything, other roles see
  only the trailing window (48 hours by default). Older entries still exist.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from ..domain import ACTIONS, ENTITY_TYPES, ActivityLog, User
from ..errors import ValidationError
from ..repositories import Repository
from ..time_utils import utcnow
from .permission_service import authorize


DEFAULT_WINDOW_HOURS = 48


def record(
    repo: Repository,
    actor: User,
    action: str,
    details: str,
    entity_type: str,
    entity_id: int | None = None,
    occurred_at: datetime | None = None,
) -> ActivityLog:
    """
    Append one activity entry attributed to actor.

    occurred_at defaults to server time; the user name is copied so the entry
    reads the same after the user is renamed.
    """
    if action not in ACTIONS:
        raise ValidationError(f"Unknown action '{action}'", details={"action": action})
    if entity_type not in ENTITY_TYPES:
        raise ValidationError(f"Unknown entity type '{entity_type}'", details={"entity_type": entity_type})

    entry = ActivityLog(
        user_id=actor.id,
        user_name=actor.name,
        action=action,
        details=details,
        entity_type=entity_type,
        entity_id=entity_id,
        occurred_at=occurred_at or utcnow(),
    )
    entry.id = repo.insert("activity_logs", entry)
    return entry


def visible_since(viewer_role: str, now: datetime, window_hours: int = DEFAULT_WINDOW_HOURS) -> datetime | None:
    """Lower bound on occurred_at for a viewer; None means unbounded."""
    viewer = User(name="", email="", role=viewer_role)
    if authorize(viewer, "VIEW_FULL_AUDIT_LOG"):
        return None
    return now - timedelta(hours=window_hours)


def query(
    repo: Repository,
    viewer_role: str,
    now: datetime | None = None,
    window_hours: int = DEFAULT_WINDOW_HOURS,
) -> list[ActivityLog]:
    """Entries visible to viewer_role, most recent first."""
    now = now or utcnow()
    since = visible_since(viewer_role, now, window_hours)

    entries = repo.list("activity_logs")
    if since is not None:
        entries = [e for e in entries if e.occurred_at >= since]
    # list() is insertion order; reverse for newest first
    entries.reverse()
    return entries
