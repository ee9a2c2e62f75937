# Overview: Repository backed by a Flask-SQLAlchemy session.

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError

from ..errors import ConflictError, RepositoryError
from ..models import ActivityLog, DocumentSequence, Invoice, JobCard, Product, User
from .base import APPEND_ONLY_KINDS, Repository, check_kind


MODEL_BY_KIND = {
    "products": Product,
    "job_cards": JobCard,
    "invoices": Invoice,
    "users": User,
    "activity_logs": ActivityLog,
}


class SqlRepository(Repository):
    """
    Repository over an SQLAlchemy session.

    Writes are flushed immediately (so ids exist) but only committed when the
    outermost unit_of_work() exits cleanly; any exception rolls the whole
    unit back.
    """

    def __init__(self, session):
        self.session = session
        self._depth = 0

    def _model(self, kind: str):
        check_kind(kind)
        return MODEL_BY_KIND[kind]

    def list(self, kind: str) -> list[Any]:
        model = self._model(kind)
        rows = self.session.query(model).order_by(model.id.asc()).all()
        return [row.to_record() for row in rows]

    def get(self, kind: str, record_id: int) -> Any | None:
        model = self._model(kind)
        row = self.session.get(model, record_id)
        return row.to_record() if row is not None else None

    def insert(self, kind: str, record: Any) -> int:
        model = self._model(kind)
        row = model.from_record(record)
        self.session.add(row)
        self._flush()
        return row.id

    def update(self, kind: str, record_id: int, patch: dict) -> bool:
        model = self._model(kind)
        if kind in APPEND_ONLY_KINDS:
            raise RepositoryError(f"{kind} is append-only", details={"id": record_id})
        unknown = set(patch) - model.MUTABLE_FIELDS
        if unknown:
            raise RepositoryError(
                f"Invalid patch for {kind}",
                details={"fields": sorted(unknown)},
            )
        row = self.session.get(model, record_id)
        if row is None:
            return False
        for k, v in patch.items():
            setattr(row, k, v)
        self._flush()
        return True

    def delete(self, kind: str, record_id: int) -> bool:
        model = self._model(kind)
        if kind in APPEND_ONLY_KINDS:
            raise RepositoryError(f"{kind} is append-only", details={"id": record_id})
        row = self.session.get(model, record_id)
        if row is None:
            return False
        self.session.delete(row)
        self._flush()
        return True

    def next_sequence(self, name: str) -> int:
        """
        Allocate the next number for a named sequence.

        Increment-then-read on the counter row; the first call for a name
        creates the row.
        """
        stmt = (
            update(DocumentSequence)
            .where(DocumentSequence.name == name)
            .values(next_number=DocumentSequence.next_number + 1)
        )
        result = self.session.execute(stmt)
        if result.rowcount:
            current = (
                self.session.query(DocumentSequence.next_number)
                .filter_by(name=name)
                .scalar()
            )
            return current - 1

        self.session.add(DocumentSequence(name=name, next_number=2))
        self._flush()
        return 1

    def _flush(self) -> None:
        try:
            self.session.flush()
        except IntegrityError as e:
            raise ConflictError("Record conflicts with existing data", details={"reason": str(e.orig)})

    @contextmanager
    def unit_of_work(self) -> Iterator["SqlRepository"]:
        self._depth += 1
        try:
            yield self
            if self._depth == 1:
                self.session.commit()
        except BaseException:
            self.session.rollback()
            raise
        finally:
            self._depth -= 1
