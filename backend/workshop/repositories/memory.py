# Overview: Dict-backed repository; one isolated store per instance.

from __future__ import annotations

import copy
import dataclasses
from contextlib import contextmanager
from typing import Any, Iterator

from ..errors import RepositoryError
from .base import APPEND_ONLY_KINDS, KINDS, Repository, check_kind


class InMemoryRepository(Repository):
    """
    Repository held entirely in process memory.

    Each instance owns its collections, so tests build one per case and
    share nothing. Records are deep-copied on the way in and out.
    """

    def __init__(self):
        self._rows: dict[str, dict[int, Any]] = {kind: {} for kind in KINDS}
        self._next_ids: dict[str, int] = {kind: 1 for kind in KINDS}
        self._sequences: dict[str, int] = {}

    def list(self, kind: str) -> list[Any]:
        check_kind(kind)
        return [copy.deepcopy(row) for _, row in sorted(self._rows[kind].items())]

    def get(self, kind: str, record_id: int) -> Any | None:
        check_kind(kind)
        row = self._rows[kind].get(record_id)
        return copy.deepcopy(row) if row is not None else None

    def insert(self, kind: str, record: Any) -> int:
        check_kind(kind)
        record_id = self._next_ids[kind]
        self._next_ids[kind] += 1
        self._rows[kind][record_id] = dataclasses.replace(copy.deepcopy(record), id=record_id)
        return record_id

    def update(self, kind: str, record_id: int, patch: dict) -> bool:
        check_kind(kind)
        if kind in APPEND_ONLY_KINDS:
            raise RepositoryError(f"{kind} is append-only", details={"id": record_id})
        row = self._rows[kind].get(record_id)
        if row is None:
            return False
        if "id" in patch:
            raise RepositoryError("id cannot be patched", details={"id": record_id})
        try:
            self._rows[kind][record_id] = dataclasses.replace(row, **copy.deepcopy(patch))
        except TypeError as e:
            raise RepositoryError(f"Invalid patch for {kind}: {e}", details={"fields": sorted(patch)})
        return True

    def delete(self, kind: str, record_id: int) -> bool:
        check_kind(kind)
        if kind in APPEND_ONLY_KINDS:
            raise RepositoryError(f"{kind} is append-only", details={"id": record_id})
        return self._rows[kind].pop(record_id, None) is not None

    def next_sequence(self, name: str) -> int:
        number = self._sequences.get(name, 0) + 1
        self._sequences[name] = number
        return number

    @contextmanager
    def unit_of_work(self) -> Iterator["InMemoryRepository"]:
        snapshot = copy.deepcopy((self._rows, self._next_ids, self._sequences))
        try:
            yield self
        except BaseException:
            self._rows, self._next_ids, self._sequences = snapshot
            raise
