"""Session aggregate: the start/pause/resume/stop state machine.

A session owns at most one active segment plus an ordered history of
closed segments. State is derived, never stored:

- ``stopped`` if ``stopped_at`` is set (terminal),
- ``active`` if an active segment exists,
- ``paused`` otherwise.

INVARIANT: ``history + [active_segment]`` is strictly ascending by
``started_at`` and adjacent segments never overlap. Checked on every
construction (fresh or reconstructed from storage) and on resume.

INVARIANT: segments shorter than :data:`MIN_SEGMENT_DURATION_MS` never
enter the history. Closing one yields a :class:`SegmentDiscarded` outcome
and exactly one ``SegmentTooShort`` event.

Every transition takes the current Instant as an argument; the aggregate
never reads a clock. Mutation assumes exclusive ownership by the caller for
the duration of one call.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from wimt.domain.errors import (
    DomainError,
    EmptySessionError,
    InvalidSessionStateError,
    NoActiveSegmentError,
    SegmentOrderError,
    SessionAlreadyStoppedError,
    ValidationError,
)
from wimt.domain.events import (
    DomainEvent,
    EventBuffer,
    SegmentTooShort,
    SessionPaused,
    SessionResumed,
    SessionStarted,
    SessionStopped,
)
from wimt.domain.ids import make_id
from wimt.domain.instant import Instant
from wimt.domain.lifecycle import SESSION_TRANSITIONS, SessionState, is_valid_transition
from wimt.domain.segment import Segment
from wimt.domain.specifications import (
    MIN_VALID_SEGMENT_DURATION_MS,
    stopped_segment,
    valid_segment_duration,
)
from wimt.domain.validation import validate_segments

MIN_SEGMENT_DURATION_MS = MIN_VALID_SEGMENT_DURATION_MS


# ---------------------------------------------------------------------------
# Segment close outcome
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SegmentClosed:
    """The active segment closed with a valid duration."""

    segment: Segment


@dataclass(frozen=True)
class SegmentDiscarded:
    """The active segment closed under the minimum duration."""

    segment: Segment
    reason: str


CloseOutcome = SegmentClosed | SegmentDiscarded


# ---------------------------------------------------------------------------
# Aggregate
# ---------------------------------------------------------------------------


class Session:
    """Aggregate root tracking one continuous episode of timed work.

    Fresh construction (no *id*) auto-starts: an active segment opens at
    *created_at* and ``SessionStarted`` is buffered. Passing an *id*
    reconstructs a stored session: no auto-start, no events, but the
    segment collection is re-validated.

    Raises:
        ValidationError: Missing ``category_id`` / ``created_at``.
        SegmentOrderError: Segments unsorted or overlapping.
    """

    def __init__(
        self,
        *,
        category_id: str,
        created_at: Instant,
        id: str | None = None,  # noqa: A002
        active_segment: Segment | None = None,
        history: list[Segment] | None = None,
        stopped_at: Instant | None = None,
    ) -> None:
        if not category_id:
            msg = "category_id is required"
            raise ValidationError(msg)
        if not isinstance(created_at, Instant):
            msg = "created_at is required"
            raise ValidationError(msg)

        self._events = EventBuffer()
        self.id = id or make_id()
        self.category_id = category_id
        self.created_at = created_at
        self._stopped_at = stopped_at
        self._active_segment = active_segment
        self._history: list[Segment] = list(history or [])

        self._check_segments(self._all_segments())

        if id is None:
            self._start()

    def __repr__(self) -> str:
        return (
            f"Session(id={self.id!r}, category_id={self.category_id!r}, "
            f"state={self.state.value!r}, segments={len(self._history)})"
        )

    # ------------------------------------------------------------------
    # Read-only view
    # ------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        if self._stopped_at is not None:
            return SessionState.STOPPED
        if self._active_segment is not None:
            return SessionState.ACTIVE
        return SessionState.PAUSED

    @property
    def active_segment(self) -> Segment | None:
        return self._active_segment

    @property
    def history(self) -> tuple[Segment, ...]:
        return tuple(self._history)

    @property
    def stopped_at(self) -> Instant | None:
        return self._stopped_at

    def duration_ms(self) -> float | None:
        """Total of all closed history segments, or None unless stopped."""
        if self.state is not SessionState.STOPPED:
            return None
        is_stopped = stopped_segment()
        return sum(
            segment.duration_ms or 0 for segment in self._history if is_stopped(segment)
        )

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def pause(self, at: Instant) -> None:
        """Close the active segment; the session becomes paused.

        A too-short segment is dropped (``SegmentTooShort``) instead of being
        appended, and the pause still succeeds.
        """
        self._guard(SessionState.PAUSED, "Only active session can be paused")
        outcome = self._close_active_segment(at)
        self._apply_close(outcome, at)
        if isinstance(outcome, SegmentClosed):
            self._events.append(
                SessionPaused(occurred_at=at, session_id=self.id, segment_id=outcome.segment.id)
            )

    def resume(self, at: Instant) -> None:
        """Open a new active segment at *at*."""
        self._guard(SessionState.ACTIVE, "Only paused session can be resumed")
        segment = Segment(at)
        self._check_segments([*self._history, segment])
        self._active_segment = segment
        self._events.append(SessionResumed(occurred_at=at, session_id=self.id, segment_id=segment.id))

    def stop(self, at: Instant) -> None:
        """Close any active segment and end the session for good.

        ``stopped_at`` becomes the last history segment's stop, which may be
        earlier than *at* when the trailing segment was discarded.

        Raises:
            SessionAlreadyStoppedError: The session is already stopped.
            EmptySessionError: No valid segment is left in the history.
        """
        if self.state is SessionState.STOPPED:
            raise SessionAlreadyStoppedError
        if self._active_segment is not None:
            self._apply_close(self._close_active_segment(at), at)

        if not self._history:
            raise EmptySessionError
        last = self._history[-1]
        if last.stopped_at is None:
            msg = "last history segment must be stopped by this time"
            raise DomainError(msg)
        self._stopped_at = last.stopped_at

        total = self.duration_ms() or 0
        self._events.append(
            SessionStopped(occurred_at=at, session_id=self.id, total_duration_ms=total)
        )

    def adjust_start_time(self, new_start: Instant) -> None:
        """Reserved: after-the-fact adjustment is not available yet."""
        raise NotImplementedError("Session.adjust_start_time is not implemented")

    def adjust_stop_time(self, new_stop: Instant) -> None:
        """Reserved: after-the-fact adjustment is not available yet."""
        raise NotImplementedError("Session.adjust_stop_time is not implemented")

    # ------------------------------------------------------------------
    # Events & snapshot
    # ------------------------------------------------------------------

    def pull_domain_events(self) -> list[DomainEvent]:
        """Return buffered events and clear them (one-shot per call)."""
        return self._events.drain()

    @property
    def pending_events(self) -> list[DomainEvent]:
        return self._events.peek()

    def to_dict(self) -> dict[str, Any]:
        """Read-only snapshot with raw millisecond values."""
        active = self._active_segment
        return {
            "id": self.id,
            "category_id": self.category_id,
            "state": self.state.value,
            "created_at": self.created_at.value,
            "stopped_at": self._stopped_at.value if self._stopped_at is not None else None,
            "active_segment": active.to_dict() if active is not None else None,
            "history": [segment.to_dict() for segment in self._history],
            "duration_ms": self.duration_ms(),
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _start(self) -> None:
        self._active_segment = Segment(self.created_at)
        self._events.append(SessionStarted(occurred_at=self.created_at, session_id=self.id))

    def _guard(self, target: SessionState, message: str) -> None:
        current = self.state
        if not is_valid_transition(current, target, SESSION_TRANSITIONS):
            raise InvalidSessionStateError(f"{message}. Current state: {current}.", state=current)

    def _all_segments(self) -> list[Segment]:
        segments = list(self._history)
        if self._active_segment is not None:
            segments.append(self._active_segment)
        return segments

    @staticmethod
    def _check_segments(segments: list[Segment]) -> None:
        result = validate_segments(segments)
        if not result.is_valid:
            raise SegmentOrderError(", ".join(result.errors))

    def _close_active_segment(self, at: Instant) -> CloseOutcome:
        """Stop the active segment and classify it by duration."""
        segment = self._active_segment
        if segment is None:
            raise NoActiveSegmentError
        segment.stop(at)
        if not valid_segment_duration().is_satisfied_by(segment):
            return SegmentDiscarded(
                segment,
                reason=f"segment shorter than {MIN_SEGMENT_DURATION_MS} ms",
            )
        return SegmentClosed(segment)

    def _apply_close(self, outcome: CloseOutcome, at: Instant) -> None:
        self._active_segment = None
        if isinstance(outcome, SegmentClosed):
            self._history.append(outcome.segment)
            return
        segment = outcome.segment
        self._events.append(
            SegmentTooShort(
                occurred_at=at,
                session_id=self.id,
                segment_id=segment.id,
                duration_ms=segment.duration_ms or 0,
            )
        )
