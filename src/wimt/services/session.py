"""SessionService: start/pause/resume/stop use cases, session queries and stats.

Cross-aggregate rule: at most one session may be ``active`` at a time.
It is checked before ``start`` and before ``resume``. Paused sessions do
not block anything.

Every mutating use case follows the same flow: load the aggregate, apply
one transition with the clock's current Instant, save, drain the buffered
events and publish them. A domain error aborts the flow before ``save``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from wimt.domain.errors import DomainError
from wimt.domain.events import SegmentTooShort
from wimt.domain.instant import Instant, TimeUnit, unit_to_ms
from wimt.domain.lifecycle import SessionState
from wimt.domain.session import MIN_SEGMENT_DURATION_MS, Session
from wimt.domain.specifications import (
    Specification,
    active_session,
    all_of,
    paused_session,
    session_for_category,
    session_stopped_in_range,
    stopped_session,
    unstopped_session,
)
from wimt.services.base import BaseService
from wimt.services.result import ServiceResult

if TYPE_CHECKING:
    from collections.abc import Callable

    from wimt.domain.events import DomainEvent

_STATE_SPECS: dict[str, Callable[[], Specification[Session]]] = {
    SessionState.ACTIVE: active_session,
    SessionState.PAUSED: paused_session,
    SessionState.STOPPED: stopped_session,
}

_DAY_MS = unit_to_ms(TimeUnit.DAY)


def _utc_day_start(now: Instant) -> Instant:
    return Instant.create(now.value - now.value % _DAY_MS)


def _utc_week_start(now: Instant) -> Instant:
    """Midnight UTC of the Monday on or before *now*."""
    days = now.value // _DAY_MS
    weekday = (days + 3) % 7  # 1970-01-01 was a Thursday
    return Instant.create((days - weekday) * _DAY_MS)


class SessionService(BaseService):
    """Handles the session lifecycle against the tracker's repositories."""

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _latest(self, spec: Specification[Session]) -> Session | None:
        """Most recently created session matching *spec*."""
        matches = self._tracker.sessions.find_many_by_spec(spec)
        if not matches:
            return None
        return max(matches, key=lambda s: s.created_at.value)

    def _resolve(
        self,
        op: str,
        session_id: str | None,
        default: Specification[Session],
        missing: str,
    ) -> Session | ServiceResult:
        if session_id is None:
            session = self._latest(default)
            if session is None:
                return self._fail(op, "NOT_FOUND", missing)
            return session
        session = self._tracker.sessions.find_by_id(session_id)
        if session is None:
            return self._fail(op, "NOT_FOUND", f"Session not found: {session_id}", id=session_id)
        return session

    @staticmethod
    def _discard_warnings(events: list[DomainEvent]) -> list[str]:
        return [
            f"Segment {event.segment_id} shorter than {MIN_SEGMENT_DURATION_MS} ms was discarded"
            for event in events
            if isinstance(event, SegmentTooShort)
        ]

    async def _transition(
        self,
        op: str,
        session: Session,
        action: Callable[[Instant], None],
    ) -> ServiceResult:
        try:
            action(self._tracker.clock.now())
        except DomainError as exc:
            session.pull_domain_events()
            return self._from_domain_error(op, exc)

        self._tracker.sessions.save(session)
        events = session.pull_domain_events()
        await self._publish(events)
        return ServiceResult.success(
            op, session.to_dict(), warnings=self._discard_warnings(events)
        )

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def start(self, category_id: str) -> ServiceResult:
        """Start a new session filed under *category_id*."""
        op = "session_start"
        if self._tracker.categories.find_by_id(category_id) is None:
            return self._fail(
                op, "NOT_FOUND", f"Category not found: {category_id}", category_id=category_id
            )

        existing = self._tracker.sessions.find_one_by_spec(active_session())
        if existing is not None:
            return self._fail(
                op,
                "ACTIVE_SESSION_EXISTS",
                "An active session already exists",
                id=existing.id,
            )

        try:
            session = Session(category_id=category_id, created_at=self._tracker.clock.now())
        except DomainError as exc:
            return self._from_domain_error(op, exc)

        self._tracker.sessions.save(session)
        await self._publish(session.pull_domain_events())
        return ServiceResult.success(op, session.to_dict())

    async def pause(self, session_id: str | None = None) -> ServiceResult:
        """Pause *session_id*, or the active session when omitted."""
        op = "session_pause"
        resolved = self._resolve(op, session_id, active_session(), "No active session to pause")
        if isinstance(resolved, ServiceResult):
            return resolved
        return await self._transition(op, resolved, resolved.pause)

    async def resume(self, session_id: str | None = None) -> ServiceResult:
        """Resume *session_id*, or the latest paused session when omitted."""
        op = "session_resume"
        resolved = self._resolve(op, session_id, paused_session(), "No paused session to resume")
        if isinstance(resolved, ServiceResult):
            return resolved

        if resolved.state is SessionState.PAUSED:
            other = self._tracker.sessions.find_one_by_spec(active_session())
            if other is not None and other.id != resolved.id:
                return self._fail(
                    op,
                    "ACTIVE_SESSION_EXISTS",
                    "Another session is already active",
                    id=other.id,
                )
        return await self._transition(op, resolved, resolved.resume)

    async def stop(self, session_id: str | None = None) -> ServiceResult:
        """Stop *session_id*, or the current unstopped session when omitted."""
        op = "session_stop"
        if session_id is None:
            current = self._current()
            if current is None:
                return self._fail(op, "NOT_FOUND", "No session to stop")
            session_id = current.id
        resolved = self._resolve(op, session_id, unstopped_session(), "No session to stop")
        if isinstance(resolved, ServiceResult):
            return resolved
        return await self._transition(op, resolved, resolved.stop)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def _current(self) -> Session | None:
        return self._latest(active_session()) or self._latest(paused_session())

    def current(self) -> ServiceResult:
        """The active session, else the most recently created paused one."""
        op = "session_current"
        session = self._current()
        if session is None:
            return self._fail(op, "NOT_FOUND", "No active or paused session")
        return ServiceResult.success(op, session.to_dict())

    def get(self, session_id: str) -> ServiceResult:
        op = "session_get"
        session = self._tracker.sessions.find_by_id(session_id)
        if session is None:
            return self._fail(op, "NOT_FOUND", f"Session not found: {session_id}", id=session_id)
        return ServiceResult.success(op, session.to_dict())

    def list_sessions(
        self,
        *,
        category_id: str | None = None,
        state: str | None = None,
    ) -> ServiceResult:
        """List sessions, oldest first, optionally filtered by category and state."""
        op = "session_list"
        specs: list[Specification[Session]] = []
        if category_id is not None:
            specs.append(session_for_category(category_id))
        if state is not None:
            factory = _STATE_SPECS.get(state)
            if factory is None:
                allowed = ", ".join(_STATE_SPECS)
                return self._fail(
                    op, "VALIDATION", f"Unknown state {state!r}; expected one of: {allowed}"
                )
            specs.append(factory())

        if specs:
            sessions = self._tracker.sessions.find_many_by_spec(all_of(*specs))
        else:
            sessions = self._tracker.sessions.find_all()
        sessions.sort(key=lambda s: s.created_at.value)

        items = [s.to_dict() for s in sessions]
        return ServiceResult.success(op, {"items": items, "count": len(items)})

    def stats(self) -> ServiceResult:
        """Totals over all sessions, measured at the clock's current instant.

        Durations only count stopped sessions. "Today" and "this week" select
        sessions by ``stopped_at``, from UTC midnight and from Monday UTC
        midnight respectively.
        """
        op = "session_stats"
        now = self._tracker.clock.now()
        repo = self._tracker.sessions

        def total(sessions: list[Session]) -> float:
            return sum(s.duration_ms() or 0 for s in sessions)

        stopped = repo.find_many_by_spec(stopped_session())
        durations = [s.duration_ms() or 0 for s in stopped]
        today = repo.find_many_by_spec(session_stopped_in_range(_utc_day_start(now), now))
        this_week = repo.find_many_by_spec(session_stopped_in_range(_utc_week_start(now), now))

        return ServiceResult.success(
            op,
            {
                "total_sessions": repo.count(),
                "active_sessions": len(repo.find_many_by_spec(active_session())),
                "total_duration_ms": sum(durations),
                "average_duration_ms": sum(durations) / len(durations) if durations else 0,
                "longest_session_ms": max(durations, default=0),
                "today_duration_ms": total(today),
                "this_week_duration_ms": total(this_week),
            },
        )
