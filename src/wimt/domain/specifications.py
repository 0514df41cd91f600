"""Specifications: composable boolean predicates over domain objects.

A :class:`Specification` is a plain value wrapping a ``(candidate) -> bool``
function. Composition never builds a class hierarchy: :func:`all_of`,
:func:`any_of` and :func:`negate` return new Specification values whose
predicates close over their operands.

INVARIANT: predicates are side-effect free, so AND/OR evaluate every operand
instead of short-circuiting.

Repositories accept specifications for ``find_one_by_spec`` /
``find_many_by_spec`` and evaluate them in memory.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar

from wimt.domain.lifecycle import SegmentState, SessionState

if TYPE_CHECKING:
    from wimt.domain.category import Category
    from wimt.domain.instant import Instant
    from wimt.domain.segment import Segment
    from wimt.domain.session import Session

T = TypeVar("T")

MIN_VALID_SEGMENT_DURATION_MS = 300


@dataclass(frozen=True)
class Specification(Generic[T]):
    """A named predicate over candidates of type ``T``."""

    predicate: Callable[[T], bool]
    name: str = "specification"

    def is_satisfied_by(self, candidate: T) -> bool:
        return bool(self.predicate(candidate))

    def __call__(self, candidate: T) -> bool:
        return self.is_satisfied_by(candidate)

    def and_(self, other: Specification[T]) -> Specification[T]:
        return all_of(self, other)

    def or_(self, other: Specification[T]) -> Specification[T]:
        return any_of(self, other)

    def not_(self) -> Specification[T]:
        return negate(self)

    __and__ = and_
    __or__ = or_
    __invert__ = not_


# ---------------------------------------------------------------------------
# Combinators
# ---------------------------------------------------------------------------


def all_of(*specs: Specification[T]) -> Specification[T]:
    """AND over *specs*; every operand is evaluated."""

    def predicate(candidate: T) -> bool:
        results = [spec.is_satisfied_by(candidate) for spec in specs]
        return all(results)

    return Specification(predicate, name="(" + " and ".join(s.name for s in specs) + ")")


def any_of(*specs: Specification[T]) -> Specification[T]:
    """OR over *specs*; every operand is evaluated."""

    def predicate(candidate: T) -> bool:
        results = [spec.is_satisfied_by(candidate) for spec in specs]
        return any(results)

    return Specification(predicate, name="(" + " or ".join(s.name for s in specs) + ")")


def negate(spec: Specification[T]) -> Specification[T]:
    return Specification(lambda candidate: not spec.is_satisfied_by(candidate), name=f"not {spec.name}")


# ---------------------------------------------------------------------------
# Segment predicates
# ---------------------------------------------------------------------------


def active_segment() -> Specification[Segment]:
    return Specification(lambda s: s.state is SegmentState.ACTIVE, name="active_segment")


def stopped_segment() -> Specification[Segment]:
    """Segment is closed; only these contribute to a session's duration."""
    return Specification(lambda s: s.state is SegmentState.STOPPED, name="stopped_segment")


def long_segment(minimum_duration_ms: float) -> Specification[Segment]:
    def predicate(segment: Segment) -> bool:
        duration = segment.duration_ms
        return duration is not None and duration >= minimum_duration_ms

    return Specification(predicate, name=f"long_segment({minimum_duration_ms})")


def segment_started_in_range(start: Instant, end: Instant) -> Specification[Segment]:
    """``started_at`` within ``[start, end]`` inclusive."""

    def predicate(segment: Segment) -> bool:
        return segment.started_at.is_same_or_after(start) and segment.started_at.is_same_or_before(
            end
        )

    return Specification(predicate, name="segment_started_in_range")


def valid_segment_duration() -> Specification[Segment]:
    """Stopped and lasting at least 300 ms.

    Shorter segments are treated as accidental clicks and never enter a
    session's history.
    """
    return all_of(stopped_segment(), long_segment(MIN_VALID_SEGMENT_DURATION_MS))


# ---------------------------------------------------------------------------
# Session predicates
# ---------------------------------------------------------------------------


def active_session() -> Specification[Session]:
    return Specification(lambda s: s.state is SessionState.ACTIVE, name="active_session")


def paused_session() -> Specification[Session]:
    return Specification(lambda s: s.state is SessionState.PAUSED, name="paused_session")


def stopped_session() -> Specification[Session]:
    return Specification(lambda s: s.state is SessionState.STOPPED, name="stopped_session")


def session_for_category(category_id: str) -> Specification[Session]:
    return Specification(
        lambda s: s.category_id == category_id, name=f"session_for_category({category_id})"
    )


def session_created_in_range(start: Instant, end: Instant) -> Specification[Session]:
    """``created_at`` within ``[start, end]`` inclusive."""

    def predicate(session: Session) -> bool:
        return session.created_at.is_same_or_after(start) and session.created_at.is_same_or_before(
            end
        )

    return Specification(predicate, name="session_created_in_range")


def session_stopped_in_range(start: Instant, end: Instant) -> Specification[Session]:
    """``stopped_at`` within ``[start, end]`` inclusive; unstopped never match."""

    def predicate(session: Session) -> bool:
        stopped_at = session.stopped_at
        if stopped_at is None:
            return False
        return stopped_at.is_same_or_after(start) and stopped_at.is_same_or_before(end)

    return Specification(predicate, name="session_stopped_in_range")


def session_with_multiple_segments() -> Specification[Session]:
    """Paused and resumed at least once (more than one closed segment)."""
    return Specification(lambda s: len(s.history) > 1, name="session_with_multiple_segments")


def long_session(minimum_duration_ms: float) -> Specification[Session]:
    def predicate(session: Session) -> bool:
        duration = session.duration_ms()
        return duration is not None and duration >= minimum_duration_ms

    return Specification(predicate, name=f"long_session({minimum_duration_ms})")


def unstopped_session() -> Specification[Session]:
    """Active or paused: the sessions that block starting a new one."""
    return any_of(active_session(), paused_session())


# ---------------------------------------------------------------------------
# Category predicates
# ---------------------------------------------------------------------------


def category_name_matches(search_term: str) -> Specification[Category]:
    """Case-insensitive substring match on the category name."""
    needle = search_term.lower()
    return Specification(
        lambda c: needle in c.name.value.lower(), name=f"category_name_matches({search_term})"
    )
