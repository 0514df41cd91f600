"""Clock implementations for the :class:`~wimt.domain.ports.Clock` port."""

from __future__ import annotations

from datetime import UTC, datetime

from wimt.domain.instant import Instant


class SystemClock:
    """Current UTC wall-clock time in milliseconds."""

    def now(self) -> Instant:
        return Instant.create(datetime.now(UTC).timestamp() * 1000)


class FixedClock:
    """Clock that only moves when told to (tests, scripted replays)."""

    def __init__(self, start_ms: float = 0) -> None:
        self._current = Instant.create(start_ms)

    def now(self) -> Instant:
        return self._current

    def set(self, timestamp_ms: float) -> None:
        self._current = Instant.create(timestamp_ms)

    def advance(self, amount: float, unit: str = "ms") -> Instant:
        self._current = self._current.add(amount, unit)
        return self._current
