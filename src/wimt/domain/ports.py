"""Ports the domain consumes: a clock and per-aggregate repositories.

Implementations live in :mod:`wimt.infrastructure`. Repositories return
aggregates rebuilt through their constructors, so every invariant is
re-validated on load.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from wimt.domain.category import Category
    from wimt.domain.instant import Instant
    from wimt.domain.session import Session
    from wimt.domain.specifications import Specification


class Clock(Protocol):
    """Source of the current Instant. Injected into services, never the aggregate."""

    def now(self) -> Instant: ...


class SessionRepository(Protocol):
    def save(self, session: Session) -> None: ...

    def find_by_id(self, session_id: str) -> Session | None: ...

    def delete(self, session_id: str) -> None: ...

    def count(self) -> int: ...

    def find_all(self) -> list[Session]: ...

    def find_one_by_spec(self, spec: Specification[Session]) -> Session | None: ...

    def find_many_by_spec(self, spec: Specification[Session]) -> list[Session]: ...


class CategoryRepository(Protocol):
    def save(self, category: Category) -> None: ...

    def find_by_id(self, category_id: str) -> Category | None: ...

    def delete(self, category_id: str) -> None: ...

    def count(self) -> int: ...

    def find_all(self) -> list[Category]: ...

    def find_one_by_spec(self, spec: Specification[Category]) -> Category | None: ...

    def find_many_by_spec(self, spec: Specification[Category]) -> list[Category]: ...
