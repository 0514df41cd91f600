"""Row <-> aggregate mapping for the SQL repositories.

``to_domain`` always goes through the aggregate constructors with an
explicit id, so loading never emits events and always re-validates
segment ordering and overlap.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from wimt.domain.category import Category, CategoryName, Color, Icon
from wimt.domain.instant import Instant
from wimt.domain.segment import Segment
from wimt.domain.session import Session


def _instant(value: float | None) -> Instant | None:
    return Instant.create(value) if value is not None else None


class SessionMapper:
    """Maps ``sessions`` + ``session_segments`` rows to :class:`Session`."""

    def to_domain(
        self,
        session_row: Mapping[str, Any],
        segment_rows: Sequence[Mapping[str, Any]],
    ) -> Session:
        active_id = session_row["active_segment_id"]
        segments = sorted(
            (self.segment_to_domain(row) for row in segment_rows),
            key=lambda segment: segment.started_at.value,
        )
        active = next((s for s in segments if s.id == active_id), None)
        history = [s for s in segments if s.id != active_id]

        created_at = _instant(session_row["created_at"])
        assert created_at is not None  # NOT NULL column
        return Session(
            id=session_row["id"],
            category_id=session_row["category_id"],
            created_at=created_at,
            stopped_at=_instant(session_row["stopped_at"]),
            active_segment=active,
            history=history,
        )

    @staticmethod
    def segment_to_domain(row: Mapping[str, Any]) -> Segment:
        started_at = _instant(row["started_at"])
        assert started_at is not None  # NOT NULL column
        return Segment(started_at, _instant(row["stopped_at"]), id=row["id"])

    @staticmethod
    def session_to_row(session: Session) -> dict[str, Any]:
        active = session.active_segment
        return {
            "id": session.id,
            "category_id": session.category_id,
            "created_at": session.created_at.value,
            "stopped_at": session.stopped_at.value if session.stopped_at is not None else None,
            "active_segment_id": active.id if active is not None else None,
        }

    @staticmethod
    def segment_to_row(segment: Segment, session_id: str) -> dict[str, Any]:
        return {
            "id": segment.id,
            "session_id": session_id,
            "started_at": segment.started_at.value,
            "stopped_at": segment.stopped_at.value if segment.stopped_at is not None else None,
        }

    @staticmethod
    def all_segments(session: Session) -> list[Segment]:
        """History followed by the active segment, if any."""
        segments = list(session.history)
        if session.active_segment is not None:
            segments.append(session.active_segment)
        return segments


class CategoryMapper:
    """Maps ``categories`` rows to :class:`Category`."""

    @staticmethod
    def to_domain(row: Mapping[str, Any]) -> Category:
        created_at = _instant(row["created_at"])
        assert created_at is not None  # NOT NULL column
        return Category(
            id=row["id"],
            name=CategoryName.create(row["name"]),
            created_at=created_at,
            color=Color.create(row["color"]) if row["color"] is not None else None,
            icon=Icon.create(row["icon"]) if row["icon"] is not None else None,
        )

    @staticmethod
    def to_row(category: Category) -> dict[str, Any]:
        return {
            "id": category.id,
            "name": category.name.value,
            "created_at": category.created_at.value,
            "color": category.color.value if category.color is not None else None,
            "icon": category.icon.value if category.icon is not None else None,
        }
