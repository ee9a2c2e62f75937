"""
Activity log tests.

Verifies:
- Owners see the full history; other roles see the trailing 48 hours
- Reads are most recent first
- The log is append-only in both repositories
- Unknown actions are refused
"""

from datetime import timedelta

import pytest

from workshop.domain import Action
from workshop.errors import RepositoryError, ValidationError
from workshop.services import audit_service


@pytest.fixture
def history(repo, owner, now):
    """Entries at now-72h, now-47h and now-1h (after the three staff entries)."""
    for hours in (72, 47, 1):
        audit_service.record(
            repo,
            owner,
            Action.ADD_PRODUCT,
            f"Added product: item {hours}h",
            "product",
            occurred_at=now - timedelta(hours=hours),
        )
    return repo.list("activity_logs")


class TestVisibility:

    def test_owner_sees_everything(self, repo, history, now):
        entries = audit_service.query(repo, "owner", now=now)
        assert len(entries) == len(history)

    def test_admin_sees_window_only(self, repo, history, now):
        details = [e.details for e in audit_service.query(repo, "admin", now=now)]
        assert "Added product: item 72h" not in details
        assert "Added product: item 47h" in details
        assert "Added product: item 1h" in details

    def test_worker_same_window_as_admin(self, repo, history, now):
        admin_view = audit_service.query(repo, "admin", now=now)
        worker_view = audit_service.query(repo, "worker", now=now)
        assert worker_view == admin_view

    def test_window_boundary_inclusive(self, repo, owner, now):
        audit_service.record(
            repo, owner, Action.ADD_PRODUCT, "edge", "product", occurred_at=now - timedelta(hours=48)
        )
        assert "edge" in [e.details for e in audit_service.query(repo, "admin", now=now)]

    def test_custom_window(self, repo, history, now):
        details = [e.details for e in audit_service.query(repo, "admin", now=now, window_hours=2)]
        assert "Added product: item 1h" in details
        assert "Added product: item 47h" not in details

    def test_visible_since(self, now):
        assert audit_service.visible_since("owner", now) is None
        assert audit_service.visible_since("admin", now) == now - timedelta(hours=48)

    def test_newest_first(self, repo, history, now):
        ids = [e.id for e in audit_service.query(repo, "owner", now=now)]
        assert ids == sorted(ids, reverse=True)


class TestRecord:

    def test_copies_actor_name(self, repo, admin, now):
        entry = audit_service.record(repo, admin, Action.ADD_PRODUCT, "Added product: X", "product", occurred_at=now)

        stored = repo.get("activity_logs", entry.id)
        assert stored.user_id == admin.id
        assert stored.user_name == "Sarah Davis"
        assert stored.occurred_at == now

    def test_unknown_action(self, repo, owner):
        with pytest.raises(ValidationError):
            audit_service.record(repo, owner, "DROP_TABLES", "nope", "product")

    def test_unknown_entity_type(self, repo, owner):
        with pytest.raises(ValidationError):
            audit_service.record(repo, owner, Action.ADD_PRODUCT, "nope", "vehicle")


class TestAppendOnly:

    def test_memory_update_refused(self, repo, owner, now):
        entry = audit_service.record(repo, owner, Action.ADD_PRODUCT, "x", "product", occurred_at=now)
        with pytest.raises(RepositoryError):
            repo.update("activity_logs", entry.id, {"details": "y"})
        assert repo.get("activity_logs", entry.id).details == "x"

    def test_memory_delete_refused(self, repo, owner, now):
        entry = audit_service.record(repo, owner, Action.ADD_PRODUCT, "x", "product", occurred_at=now)
        with pytest.raises(RepositoryError):
            repo.delete("activity_logs", entry.id)

    def test_sql_update_refused(self, sql_repo, sql_staff):
        entry = sql_repo.list("activity_logs")[0]
        with pytest.raises(RepositoryError):
            sql_repo.update("activity_logs", entry.id, {"details": "y"})

    def test_sql_orm_update_blocked(self, app, sql_repo, sql_staff):
        from workshop.extensions import db
        from workshop.models import ActivityLog

        row = db.session.query(ActivityLog).first()
        row.details = "tampered"
        with pytest.raises(RepositoryError):
            db.session.flush()
        db.session.rollback()

        assert db.session.query(ActivityLog).first().details != "tampered"
