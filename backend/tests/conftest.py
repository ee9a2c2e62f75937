"""
Pytest fixtures for workshop backend tests.

Two kinds of fixtures:
- repo/owner/admin/worker: an isolated in-memory repository with one user per
  role, for service and rule tests.
- app/client/sql_repo: a Flask app on an in-memory SQLite database, for
  repository and route tests.
"""

from datetime import datetime

import pytest

from workshop import create_app
from workshop.domain import User
from workshop.extensions import db
from workshop.repositories import InMemoryRepository, SqlRepository
from workshop.services import products_service, user_service


NOW = datetime(2026, 3, 10, 12, 0, 0)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def repo():
    """Fresh in-memory repository per test."""
    return InMemoryRepository()


def _seed_staff(repository, now):
    owner = user_service.bootstrap_owner(repository, "John Smith", "john@workshop.com", now=now)
    admin = user_service.add_user(
        repository, owner, {"name": "Sarah Davis", "email": "sarah@workshop.com", "role": "admin"}, now=now
    )
    worker = user_service.add_user(
        repository, owner, {"name": "Mike Johnson", "email": "mike@workshop.com", "role": "worker"}, now=now
    )
    return owner, admin, worker


@pytest.fixture
def staff(repo, now):
    return _seed_staff(repo, now)


@pytest.fixture
def owner(staff) -> User:
    return staff[0]


@pytest.fixture
def admin(staff) -> User:
    return staff[1]


@pytest.fixture
def worker(staff) -> User:
    return staff[2]


@pytest.fixture
def brake_pads(repo, owner, now):
    return products_service.create_product(repo, owner, {
        "name": "Brake Pads",
        "type": "part",
        "category": "Brakes",
        "quantity": 25,
        "unit_price_cents": 4599,
        "min_stock": 5,
        "brand": "Bosch",
    }, now=now)


@pytest.fixture
def engine_oil(repo, owner, now):
    return products_service.create_product(repo, owner, {
        "name": "Engine Oil",
        "type": "part",
        "category": "Engine",
        "quantity": 3,
        "unit_price_cents": 2999,
        "min_stock": 5,
        "brand": "Mobil 1",
    }, now=now)


@pytest.fixture
def app():
    """Create application for testing."""
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'SQLALCHEMY_TRACK_MODIFICATIONS': False,
    })

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def sql_repo(app):
    return SqlRepository(db.session)


@pytest.fixture
def sql_staff(sql_repo, now):
    """Owner (id 1), admin (id 2) and worker (id 3) in the SQL database."""
    return _seed_staff(sql_repo, now)
