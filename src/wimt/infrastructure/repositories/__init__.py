"""Repository adapters for the Session and Category aggregates."""

from wimt.infrastructure.repositories.memory import (
    InMemoryCategoryRepository,
    InMemorySessionRepository,
)
from wimt.infrastructure.repositories.sql import SqlCategoryRepository, SqlSessionRepository

__all__ = [
    "InMemoryCategoryRepository",
    "InMemorySessionRepository",
    "SqlCategoryRepository",
    "SqlSessionRepository",
]
