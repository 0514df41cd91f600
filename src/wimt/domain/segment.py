"""Segment: one contiguous interval of active time within a session.

A segment owns its own one-way state machine: active until ``stop()`` sets
``stopped_at``, stopped forever after. Collection-level rules (ordering,
overlap, minimum duration) live one layer up in the Session aggregate.
"""

from __future__ import annotations

from typing import Any

from wimt.domain.errors import SegmentAlreadyStoppedError, ValidationError
from wimt.domain.ids import make_id
from wimt.domain.instant import Instant
from wimt.domain.lifecycle import SegmentState


class Segment:
    """Entity: an interval bounded by ``started_at`` and, once closed, ``stopped_at``.

    Constructing with ``stopped_at`` reconstructs an already-closed segment;
    no minimum-duration check happens here.
    """

    def __init__(
        self,
        started_at: Instant,
        stopped_at: Instant | None = None,
        *,
        id: str | None = None,  # noqa: A002
    ) -> None:
        if not isinstance(started_at, Instant):
            msg = "started_at must be an Instant"
            raise ValidationError(msg)
        if stopped_at is not None and not isinstance(stopped_at, Instant):
            msg = "stopped_at must be an Instant"
            raise ValidationError(msg)
        self.id = id or make_id()
        self._started_at = started_at
        self._stopped_at = stopped_at

    def __repr__(self) -> str:
        stopped = self._stopped_at.value if self._stopped_at is not None else None
        return f"Segment(id={self.id!r}, started_at={self._started_at.value}, stopped_at={stopped})"

    @property
    def started_at(self) -> Instant:
        return self._started_at

    @property
    def stopped_at(self) -> Instant | None:
        return self._stopped_at

    @property
    def state(self) -> SegmentState:
        if self._stopped_at is None:
            return SegmentState.ACTIVE
        return SegmentState.STOPPED

    @property
    def duration_ms(self) -> float | None:
        """Exact ``stopped_at - started_at``, or None while active."""
        if self._stopped_at is None:
            return None
        return self._stopped_at.value - self._started_at.value

    def stop(self, at: Instant) -> None:
        """Close the segment at *at*.

        Raises:
            SegmentAlreadyStoppedError: If the segment is already stopped.
            ValidationError: If *at* is not strictly after ``started_at``.
        """
        if self.state is SegmentState.STOPPED:
            raise SegmentAlreadyStoppedError
        if not at.is_after(self._started_at):
            msg = "stop time must be after start time"
            raise ValidationError(msg)
        self._stopped_at = at

    def adjust_start_time(self, new_start: Instant) -> None:
        if self._stopped_at is not None and not new_start.is_before(self._stopped_at):
            msg = "new start time must be before stop time"
            raise ValidationError(msg)
        self._started_at = new_start

    def adjust_stop_time(self, new_stop: Instant) -> None:
        if not new_stop.is_after(self._started_at):
            msg = "new stop time must be after start time"
            raise ValidationError(msg)
        self._stopped_at = new_stop

    def to_dict(self) -> dict[str, Any]:
        """Snapshot with raw millisecond values."""
        return {
            "id": self.id,
            "started_at": self._started_at.value,
            "stopped_at": self._stopped_at.value if self._stopped_at is not None else None,
        }
