"""SQLite repositories over SQLAlchemy Core.

``save`` upserts the aggregate row and, for sessions, replaces the segment
rows inside the same transaction. Specification queries load every
aggregate and filter in Python; the predicate is the single source of truth
for what matches.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, func, insert, select, update

from wimt.infrastructure.database.schema import categories, session_segments, sessions
from wimt.infrastructure.repositories.mappers import CategoryMapper, SessionMapper

if TYPE_CHECKING:
    from sqlalchemy import Connection
    from sqlalchemy.engine import Engine

    from wimt.domain.category import Category
    from wimt.domain.session import Session
    from wimt.domain.specifications import Specification

logger = logging.getLogger(__name__)


class SqlSessionRepository:
    """Encapsulates SQL for the Session aggregate."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._mapper = SessionMapper()

    def save(self, session: Session) -> None:
        row = self._mapper.session_to_row(session)
        segment_rows = [
            self._mapper.segment_to_row(segment, session.id)
            for segment in self._mapper.all_segments(session)
        ]
        with self._engine.begin() as conn:
            exists = conn.execute(
                select(sessions.c.id).where(sessions.c.id == session.id)
            ).first()
            if exists is None:
                conn.execute(insert(sessions).values(**row))
            else:
                conn.execute(update(sessions).where(sessions.c.id == session.id).values(**row))

            conn.execute(delete(session_segments).where(session_segments.c.session_id == session.id))
            if segment_rows:
                conn.execute(insert(session_segments), segment_rows)
        logger.debug("Saved session %s (%d segments)", session.id, len(segment_rows))

    def find_by_id(self, session_id: str) -> Session | None:
        with self._engine.connect() as conn:
            row = conn.execute(select(sessions).where(sessions.c.id == session_id)).mappings().first()
            if row is None:
                return None
            segment_rows = (
                conn.execute(
                    select(session_segments).where(session_segments.c.session_id == session_id)
                )
                .mappings()
                .all()
            )
        return self._mapper.to_domain(row, segment_rows)

    def delete(self, session_id: str) -> None:
        with self._engine.begin() as conn:
            # Segments first (foreign key).
            conn.execute(delete(session_segments).where(session_segments.c.session_id == session_id))
            conn.execute(delete(sessions).where(sessions.c.id == session_id))

    def count(self) -> int:
        with self._engine.connect() as conn:
            return int(conn.execute(select(func.count(sessions.c.id))).scalar_one() or 0)

    def find_all(self) -> list[Session]:
        with self._engine.connect() as conn:
            return self._load_all(conn)

    def find_one_by_spec(self, spec: Specification[Session]) -> Session | None:
        return next((s for s in self.find_all() if spec.is_satisfied_by(s)), None)

    def find_many_by_spec(self, spec: Specification[Session]) -> list[Session]:
        return [s for s in self.find_all() if spec.is_satisfied_by(s)]

    def _load_all(self, conn: Connection) -> list[Session]:
        session_rows = conn.execute(select(sessions).order_by(sessions.c.created_at)).mappings().all()
        segments_by_session: dict[str, list[Any]] = defaultdict(list)
        for segment_row in conn.execute(select(session_segments)).mappings():
            segments_by_session[segment_row["session_id"]].append(segment_row)
        return [
            self._mapper.to_domain(row, segments_by_session.get(row["id"], []))
            for row in session_rows
        ]


class SqlCategoryRepository:
    """Encapsulates SQL for the Category aggregate."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._mapper = CategoryMapper()

    def save(self, category: Category) -> None:
        row = self._mapper.to_row(category)
        with self._engine.begin() as conn:
            exists = conn.execute(
                select(categories.c.id).where(categories.c.id == category.id)
            ).first()
            if exists is None:
                conn.execute(insert(categories).values(**row))
            else:
                conn.execute(update(categories).where(categories.c.id == category.id).values(**row))

    def find_by_id(self, category_id: str) -> Category | None:
        with self._engine.connect() as conn:
            row = (
                conn.execute(select(categories).where(categories.c.id == category_id))
                .mappings()
                .first()
            )
        return self._mapper.to_domain(row) if row is not None else None

    def delete(self, category_id: str) -> None:
        with self._engine.begin() as conn:
            conn.execute(delete(categories).where(categories.c.id == category_id))

    def count(self) -> int:
        with self._engine.connect() as conn:
            return int(conn.execute(select(func.count(categories.c.id))).scalar_one() or 0)

    def find_all(self) -> list[Category]:
        with self._engine.connect() as conn:
            rows = conn.execute(select(categories).order_by(categories.c.created_at)).mappings().all()
        return [self._mapper.to_domain(row) for row in rows]

    def find_one_by_spec(self, spec: Specification[Category]) -> Category | None:
        return next((c for c in self.find_all() if spec.is_satisfied_by(c)), None)

    def find_many_by_spec(self, spec: Specification[Category]) -> list[Category]:
        return [c for c in self.find_all() if spec.is_satisfied_by(c)]
