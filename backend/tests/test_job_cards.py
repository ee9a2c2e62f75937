"""
Job card tests.

Verifies:
- Creation prices parts through the rule engine and numbers cards uniquely
- Callers cannot supply totals
- Status only moves strictly forward, never into invoiced by hand
- Workers may open cards but not move them
"""

from datetime import timedelta

import pytest

from workshop.domain import Action
from workshop.errors import IllegalTransition, InvalidAmount, NotFound, Unauthorized, ValidationError
from workshop.services import job_card_service, lifecycle_service


def _payload(**overrides):
    payload = {
        "customer_name": "Alice Johnson",
        "customer_phone": "+1-555-0123",
        "vehicle_number": "ABC-123",
        "vehicle_model": "2020 Honda Civic",
        "issue_description": "Brake noise",
        "services_provided": ["Brake inspection"],
        "labor_cost_cents": 12000,
    }
    payload.update(overrides)
    return payload


# =============================================================================
# LIFECYCLE RULES
# =============================================================================


class TestLifecycleRules:

    @pytest.mark.parametrize(
        "from_status,to_status",
        [
            ("pending", "in_progress"),
            ("pending", "completed"),
            ("in_progress", "completed"),
            ("completed", "invoiced"),
        ],
    )
    def test_forward_moves(self, from_status, to_status):
        assert lifecycle_service.can_transition(from_status, to_status)

    @pytest.mark.parametrize(
        "from_status,to_status",
        [
            ("pending", "pending"),
            ("in_progress", "pending"),
            ("completed", "in_progress"),
            ("invoiced", "pending"),
            ("invoiced", "completed"),
        ],
    )
    def test_backward_or_same_rejected(self, from_status, to_status):
        assert not lifecycle_service.can_transition(from_status, to_status)
        with pytest.raises(IllegalTransition):
            lifecycle_service.assert_transition(from_status, to_status)

    def test_invoiced_needs_invoice_path(self):
        with pytest.raises(IllegalTransition):
            lifecycle_service.assert_transition("completed", "invoiced")
        lifecycle_service.assert_transition("completed", "invoiced", via_invoice=True)

    def test_unknown_status(self):
        with pytest.raises(ValidationError):
            lifecycle_service.rank("cancelled")


# =============================================================================
# CREATE
# =============================================================================


class TestCreateJobCard:

    def test_create_with_parts(self, repo, worker, brake_pads, now):
        job_card = job_card_service.create_job_card(
            repo, worker, _payload(parts=[{"product_id": brake_pads.id, "quantity": 2}]), now=now
        )

        assert job_card.id is not None
        assert job_card.status == "pending"
        assert job_card.job_number == "JC-0001"
        assert job_card.created_by_user_id == worker.id
        assert len(job_card.parts_used) == 1
        assert job_card.parts_used[0].total_price_cents == 9198
        assert job_card.total_amount_cents == 9198 + 12000

        stored = repo.get("job_cards", job_card.id)
        assert stored.total_amount_cents == job_card.total_amount_cents

    def test_repeated_product_merges(self, repo, owner, brake_pads, now):
        job_card = job_card_service.create_job_card(repo, owner, _payload(parts=[
            {"product_id": brake_pads.id},
            {"product_id": brake_pads.id, "quantity": 2},
        ]), now=now)

        assert len(job_card.parts_used) == 1
        assert job_card.parts_used[0].quantity == 3

    def test_numbers_are_unique(self, repo, owner, now):
        first = job_card_service.create_job_card(repo, owner, _payload(), now=now)
        second = job_card_service.create_job_card(repo, owner, _payload(vehicle_number="XYZ-789"), now=now)
        assert first.job_number != second.job_number
        assert second.job_number == "JC-0002"

    def test_logs_creation(self, repo, worker, now):
        job_card = job_card_service.create_job_card(repo, worker, _payload(), now=now)

        entry = repo.list("activity_logs")[-1]
        assert entry.action == Action.CREATE_JOB_CARD
        assert entry.user_id == worker.id
        assert entry.entity_id == job_card.id
        assert job_card.job_number in entry.details

    def test_total_cannot_be_supplied(self, repo, owner, now):
        with pytest.raises(ValidationError):
            job_card_service.create_job_card(repo, owner, _payload(total_amount_cents=1), now=now)
        assert repo.list("job_cards") == []

    def test_negative_labor_rejected(self, repo, owner, now):
        with pytest.raises(InvalidAmount):
            job_card_service.create_job_card(repo, owner, _payload(labor_cost_cents=-100), now=now)

    def test_unknown_product(self, repo, owner, now):
        with pytest.raises(NotFound):
            job_card_service.create_job_card(repo, owner, _payload(parts=[{"product_id": 999}]), now=now)
        assert repo.list("job_cards") == []

    def test_missing_required_fields(self, repo, owner, now):
        with pytest.raises(ValidationError):
            job_card_service.create_job_card(repo, owner, {"customer_name": "Alice"}, now=now)

    def test_only_required_fields(self, repo, worker, now):
        job_card = job_card_service.create_job_card(
            repo, worker, {"customer_name": "Alice Johnson", "vehicle_number": "ABC-123"}, now=now
        )

        assert job_card.status == "pending"
        assert job_card.customer_phone == ""
        assert job_card.vehicle_model == ""
        assert job_card.parts_used == []
        assert job_card.total_amount_cents == 0
        assert repo.get("job_cards", job_card.id).vehicle_number == "ABC-123"


# =============================================================================
# STATUS CHANGES
# =============================================================================


class TestUpdateStatus:

    @pytest.fixture
    def job_card(self, repo, worker, now):
        return job_card_service.create_job_card(repo, worker, _payload(), now=now)

    def test_admin_moves_forward(self, repo, admin, job_card, now):
        updated = job_card_service.update_job_card_status(repo, admin, job_card.id, "in_progress", now=now)

        assert updated.status == "in_progress"
        assert updated.approved_by_user_id == admin.id
        assert updated.actual_completion is None

    def test_completion_stamps_time(self, repo, owner, job_card, now):
        later = now + timedelta(hours=3)
        updated = job_card_service.update_job_card_status(repo, owner, job_card.id, "completed", now=later)

        assert updated.status == "completed"
        assert updated.actual_completion == later

    def test_backward_move_leaves_card_unchanged(self, repo, owner, job_card, now):
        job_card_service.update_job_card_status(repo, owner, job_card.id, "completed", now=now)
        logs_before = len(repo.list("activity_logs"))

        with pytest.raises(IllegalTransition):
            job_card_service.update_job_card_status(repo, owner, job_card.id, "pending", now=now)

        assert repo.get("job_cards", job_card.id).status == "completed"
        assert len(repo.list("activity_logs")) == logs_before

    def test_cannot_invoice_by_status_change(self, repo, owner, job_card, now):
        job_card_service.update_job_card_status(repo, owner, job_card.id, "completed", now=now)
        with pytest.raises(IllegalTransition):
            job_card_service.update_job_card_status(repo, owner, job_card.id, "invoiced", now=now)

    def test_worker_denied(self, repo, worker, job_card, now):
        with pytest.raises(Unauthorized):
            job_card_service.update_job_card_status(repo, worker, job_card.id, "in_progress", now=now)
        assert repo.get("job_cards", job_card.id).status == "pending"

    def test_unknown_status(self, repo, owner, job_card, now):
        with pytest.raises(ValidationError):
            job_card_service.update_job_card_status(repo, owner, job_card.id, "done", now=now)

    def test_unknown_card(self, repo, owner, now):
        with pytest.raises(NotFound):
            job_card_service.update_job_card_status(repo, owner, 404, "completed", now=now)

    def test_logs_status_change(self, repo, admin, job_card, now):
        job_card_service.update_job_card_status(repo, admin, job_card.id, "in_progress", now=now)

        entry = repo.list("activity_logs")[-1]
        assert entry.action == Action.UPDATE_JOB_CARD_STATUS
        assert "pending to in_progress" in entry.details


class TestListJobCards:

    def test_search_and_status(self, repo, owner, now):
        civic = job_card_service.create_job_card(repo, owner, _payload(), now=now)
        job_card_service.create_job_card(
            repo, owner, _payload(customer_name="Bob Wilson", vehicle_number="XYZ-789",
                                  vehicle_model="2019 Toyota Camry"), now=now
        )
        job_card_service.update_job_card_status(repo, owner, civic.id, "in_progress", now=now)

        assert [jc.customer_name for jc in job_card_service.list_job_cards(repo, owner, search="camry")] == ["Bob Wilson"]
        assert [jc.id for jc in job_card_service.list_job_cards(repo, owner, status="in_progress")] == [civic.id]
        assert len(job_card_service.list_job_cards(repo, owner, status="all")) == 2
