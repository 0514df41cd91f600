"""Domain events: immutable records of state changes that already happened.

Events are named in past tense, never mutated after creation, and produced
only as a side effect of a successful aggregate state change. Aggregates
buffer them in an :class:`EventBuffer`; the caller drains the buffer after a
successful persistence write and hands the events to the publisher.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, ClassVar

from wimt.domain.instant import Instant


@dataclass(frozen=True, kw_only=True)
class DomainEvent:
    """Base record: a ``type`` discriminator plus ``occurred_at``."""

    type: ClassVar[str] = "DomainEvent"

    occurred_at: Instant

    def to_dict(self) -> dict[str, Any]:
        """Flatten to JSON-friendly primitives (Instants become ms values)."""
        payload: dict[str, Any] = {"type": self.type}
        for f in fields(self):
            value = getattr(self, f.name)
            payload[f.name] = value.value if isinstance(value, Instant) else value
        return payload


# --- Session events ---


@dataclass(frozen=True, kw_only=True)
class SessionStarted(DomainEvent):
    type: ClassVar[str] = "SessionStarted"

    session_id: str


@dataclass(frozen=True, kw_only=True)
class SessionPaused(DomainEvent):
    type: ClassVar[str] = "SessionPaused"

    session_id: str
    segment_id: str


@dataclass(frozen=True, kw_only=True)
class SessionResumed(DomainEvent):
    type: ClassVar[str] = "SessionResumed"

    session_id: str
    segment_id: str


@dataclass(frozen=True, kw_only=True)
class SessionStopped(DomainEvent):
    type: ClassVar[str] = "SessionStopped"

    session_id: str
    total_duration_ms: float


@dataclass(frozen=True, kw_only=True)
class SegmentTooShort(DomainEvent):
    """A closed segment fell under the minimum duration and was discarded."""

    type: ClassVar[str] = "SegmentTooShort"

    session_id: str
    segment_id: str
    duration_ms: float


# --- Category events ---


@dataclass(frozen=True, kw_only=True)
class CategoryCreated(DomainEvent):
    type: ClassVar[str] = "CategoryCreated"

    category_id: str


@dataclass(frozen=True, kw_only=True)
class CategoryEdited(DomainEvent):
    type: ClassVar[str] = "CategoryEdited"

    category_id: str
    changed: str


@dataclass
class EventBuffer:
    """Per-aggregate pending event list: append internally, drain externally."""

    _events: list[DomainEvent] = field(default_factory=list)

    def append(self, event: DomainEvent) -> None:
        self._events.append(event)

    def drain(self) -> list[DomainEvent]:
        """Return the buffered events and clear the buffer (read-once)."""
        events, self._events = self._events, []
        return events

    def peek(self) -> list[DomainEvent]:
        """Copy of the pending events without clearing them."""
        return list(self._events)

    def __len__(self) -> int:
        return len(self._events)
