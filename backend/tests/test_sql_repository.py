"""
SQL repository tests.

The services run unchanged on top of SqlRepository; these check the storage
contract itself: record round trips, sequences, rollback and constraint
mapping.
"""

import pytest

from workshop.domain import Product
from workshop.errors import ConflictError, RepositoryError, Unauthorized
from workshop.services import invoice_service, job_card_service, products_service


def _product(name="Brake Pads"):
    return {
        "name": name,
        "type": "part",
        "category": "Brakes",
        "quantity": 25,
        "unit_price_cents": 4599,
        "min_stock": 5,
    }


class TestSqlRepository:

    def test_staff_ids(self, sql_repo, sql_staff):
        owner, admin, worker = sql_staff
        assert (owner.id, admin.id, worker.id) == (1, 2, 3)
        assert [u.role for u in sql_repo.list("users")] == ["owner", "admin", "worker"]

    def test_job_card_round_trip(self, sql_repo, sql_staff, now):
        owner = sql_staff[0]
        product = products_service.create_product(sql_repo, owner, _product(), now=now)
        created = job_card_service.create_job_card(sql_repo, owner, {
            "customer_name": "Alice Johnson",
            "vehicle_number": "ABC-123",
            "services_provided": ["Brake inspection"],
            "labor_cost_cents": 12000,
            "parts": [{"product_id": product.id, "quantity": 2}],
        }, now=now)

        stored = sql_repo.get("job_cards", created.id)
        assert stored == created
        assert stored.parts_used[0].quantity == 2
        assert stored.services_provided == ["Brake inspection"]

    def test_full_flow_to_invoice(self, sql_repo, sql_staff, now):
        owner, admin, _ = sql_staff
        product = products_service.create_product(sql_repo, owner, _product(), now=now)
        job_card = job_card_service.create_job_card(sql_repo, owner, {
            "customer_name": "Alice Johnson",
            "vehicle_number": "ABC-123",
            "labor_cost_cents": 12000,
            "parts": [{"product_id": product.id}],
        }, now=now)
        job_card_service.update_job_card_status(sql_repo, admin, job_card.id, "completed", now=now)

        invoice = invoice_service.generate_invoice(sql_repo, admin, job_card.id, now=now)

        stored = sql_repo.get("invoices", invoice.id)
        assert stored.invoice_number == "INV-000001"
        assert stored.total_amount_cents == 17927
        assert [item.description for item in stored.items] == ["Brake Pads", "Labor"]
        assert sql_repo.get("job_cards", job_card.id).status == "invoiced"

    def test_rejected_invoice_writes_nothing(self, sql_repo, sql_staff, now):
        owner, _, worker = sql_staff
        job_card = job_card_service.create_job_card(sql_repo, owner, {
            "customer_name": "Alice Johnson",
            "vehicle_number": "ABC-123",
        }, now=now)
        job_card_service.update_job_card_status(sql_repo, owner, job_card.id, "completed", now=now)
        logs_before = len(sql_repo.list("activity_logs"))

        with pytest.raises(Unauthorized):
            invoice_service.generate_invoice(sql_repo, worker, job_card.id, now=now)

        assert sql_repo.list("invoices") == []
        assert sql_repo.get("job_cards", job_card.id).status == "completed"
        assert len(sql_repo.list("activity_logs")) == logs_before

    def test_sequences_increment(self, sql_repo):
        assert [sql_repo.next_sequence("JOB_CARD") for _ in range(3)] == [1, 2, 3]
        assert sql_repo.next_sequence("INVOICE") == 1

    def test_unit_of_work_rolls_back(self, sql_repo, sql_staff, now):
        owner = sql_staff[0]
        with pytest.raises(RuntimeError):
            with sql_repo.unit_of_work():
                sql_repo.insert("products", Product(name="Ghost", type="part", category="", created_at=now,
                                                    updated_at=now, last_updated_by=owner.id))
                raise RuntimeError("boom")

        assert sql_repo.list("products") == []

    def test_duplicate_email_maps_to_conflict(self, sql_repo, sql_staff, now):
        from workshop.domain import User

        with pytest.raises(ConflictError):
            with sql_repo.unit_of_work():
                sql_repo.insert("users", User(name="Dup", email="john@workshop.com", role="worker", created_at=now))

    def test_patch_outside_mutable_fields_refused(self, sql_repo, sql_staff, now):
        owner = sql_staff[0]
        job_card = job_card_service.create_job_card(sql_repo, owner, {
            "customer_name": "Alice Johnson",
            "vehicle_number": "ABC-123",
        }, now=now)

        with pytest.raises(RepositoryError):
            sql_repo.update("job_cards", job_card.id, {"total_amount_cents": 1})

    def test_unknown_kind(self, sql_repo):
        with pytest.raises(RepositoryError):
            sql_repo.list("vehicles")
