"""Tests for domain events and the per-aggregate event buffer."""

import dataclasses

import pytest

from tests.conftest import at
from wimt.domain.events import (
    CategoryCreated,
    DomainEvent,
    EventBuffer,
    SegmentTooShort,
    SessionStarted,
    SessionStopped,
)


class TestDomainEvent:
    def test_type_discriminator(self) -> None:
        assert SessionStarted.type == "SessionStarted"
        assert SegmentTooShort.type == "SegmentTooShort"
        assert CategoryCreated(occurred_at=at(0), category_id="c").type == "CategoryCreated"

    def test_events_are_frozen(self) -> None:
        event = SessionStarted(occurred_at=at(0), session_id="s")
        with pytest.raises(dataclasses.FrozenInstanceError):
            event.session_id = "other"  # type: ignore[misc]

    def test_keyword_only(self) -> None:
        with pytest.raises(TypeError):
            SessionStarted(at(0), "s")  # type: ignore[misc]

    def test_to_dict_flattens_instants(self) -> None:
        event = SessionStopped(occurred_at=at(1234), session_id="s", total_duration_ms=1000)
        assert event.to_dict() == {
            "type": "SessionStopped",
            "occurred_at": 1234,
            "session_id": "s",
            "total_duration_ms": 1000,
        }

    def test_all_events_share_base(self) -> None:
        assert isinstance(SessionStarted(occurred_at=at(0), session_id="s"), DomainEvent)


class TestEventBuffer:
    def test_drain_clears(self) -> None:
        buffer = EventBuffer()
        event = SessionStarted(occurred_at=at(0), session_id="s")
        buffer.append(event)
        assert len(buffer) == 1
        assert buffer.drain() == [event]
        assert len(buffer) == 0
        assert buffer.drain() == []

    def test_peek_does_not_clear(self) -> None:
        buffer = EventBuffer()
        buffer.append(SessionStarted(occurred_at=at(0), session_id="s"))
        snapshot = buffer.peek()
        snapshot.clear()
        assert len(buffer) == 1

    def test_preserves_order(self) -> None:
        buffer = EventBuffer()
        first = SessionStarted(occurred_at=at(0), session_id="a")
        second = SessionStarted(occurred_at=at(1), session_id="b")
        buffer.append(first)
        buffer.append(second)
        assert buffer.drain() == [first, second]
