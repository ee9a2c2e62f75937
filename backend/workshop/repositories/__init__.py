from .base import KINDS, APPEND_ONLY_KINDS, Repository
from .memory import InMemoryRepository
from .sql import SqlRepository

__all__ = ["KINDS", "APPEND_ONLY_KINDS", "Repository", "InMemoryRepository", "SqlRepository"]
