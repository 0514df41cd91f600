"""In-memory repositories keyed by aggregate id (insertion ordered).

Aggregates are stored and handed out as deep copies, so a caller mutating a
loaded aggregate changes nothing until it calls ``save``, exactly as with
the SQL adapters. Stored copies never carry pending domain events.
"""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from wimt.domain.category import Category
    from wimt.domain.session import Session
    from wimt.domain.specifications import Specification


_Aggregate = TypeVar("_Aggregate", "Session", "Category")


def _snapshot(aggregate: _Aggregate) -> _Aggregate:
    stored = copy.deepcopy(aggregate)
    stored.pull_domain_events()
    return stored


class InMemorySessionRepository:
    def __init__(self) -> None:
        self._sessions: dict[str, Session] = {}

    def save(self, session: Session) -> None:
        self._sessions[session.id] = _snapshot(session)

    def find_by_id(self, session_id: str) -> Session | None:
        stored = self._sessions.get(session_id)
        return copy.deepcopy(stored) if stored is not None else None

    def delete(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    def count(self) -> int:
        return len(self._sessions)

    def find_all(self) -> list[Session]:
        return [copy.deepcopy(s) for s in self._sessions.values()]

    def find_one_by_spec(self, spec: Specification[Session]) -> Session | None:
        return next((s for s in self.find_all() if spec.is_satisfied_by(s)), None)

    def find_many_by_spec(self, spec: Specification[Session]) -> list[Session]:
        return [s for s in self.find_all() if spec.is_satisfied_by(s)]


class InMemoryCategoryRepository:
    def __init__(self) -> None:
        self._categories: dict[str, Category] = {}

    def save(self, category: Category) -> None:
        self._categories[category.id] = _snapshot(category)

    def find_by_id(self, category_id: str) -> Category | None:
        stored = self._categories.get(category_id)
        return copy.deepcopy(stored) if stored is not None else None

    def delete(self, category_id: str) -> None:
        self._categories.pop(category_id, None)

    def count(self) -> int:
        return len(self._categories)

    def find_all(self) -> list[Category]:
        return [copy.deepcopy(c) for c in self._categories.values()]

    def find_one_by_spec(self, spec: Specification[Category]) -> Category | None:
        return next((c for c in self.find_all() if spec.is_satisfied_by(c)), None)

    def find_many_by_spec(self, spec: Specification[Category]) -> list[Category]:
        return [c for c in self.find_all() if spec.is_satisfied_by(c)]
