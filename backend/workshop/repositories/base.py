# Overview: Data-access contract the services are written against.

"""
Repository contract.

Services never import a storage technology; they receive a Repository and
talk to it in terms of domain records (``workshop.domain``).

Kinds:
    products, job_cards, invoices, users, activity_logs

Rules every implementation must honor:
- list() returns records in insertion (id) order.
- get()/list() hand out copies; mutating a returned record changes nothing
  until it is written back with update().
- activity_logs is append-only: update() and delete() raise RepositoryError.
- next_sequence(name) never returns the same number twice for a name.
- unit_of_work() is all-or-nothing: if the block raises, none of its writes
  are visible afterwards.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator

from ..errors import RepositoryError


KINDS = ("products", "job_cards", "invoices", "users", "activity_logs")
APPEND_ONLY_KINDS = frozenset({"activity_logs"})


def check_kind(kind: str) -> None:
    if kind not in KINDS:
        raise RepositoryError(f"Unknown record kind '{kind}'", details={"kind": kind})


class Repository:
    """Abstract get/put store for workshop records."""

    def list(self, kind: str) -> list[Any]:
        raise NotImplementedError

    def get(self, kind: str, record_id: int) -> Any | None:
        raise NotImplementedError

    def insert(self, kind: str, record: Any) -> int:
        raise NotImplementedError

    def update(self, kind: str, record_id: int, patch: dict) -> bool:
        raise NotImplementedError

    def delete(self, kind: str, record_id: int) -> bool:
        raise NotImplementedError

    def next_sequence(self, name: str) -> int:
        raise NotImplementedError

    @contextmanager
    def unit_of_work(self) -> Iterator["Repository"]:
        raise NotImplementedError
        yield self  # pragma: no cover
