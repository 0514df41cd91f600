"""Instant: an immutable point in time in milliseconds since the epoch.

Arithmetic is calendar-naive: every unit maps to a fixed number of
milliseconds (a month is 30 days, a year 365 days). The aggregate never
reads a clock; callers pass the current Instant in explicitly.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import StrEnum
from numbers import Real

from wimt.domain.errors import ValidationError


class TimeUnit(StrEnum):
    """Units accepted by Instant arithmetic."""

    MS = "ms"
    SECOND = "second"
    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


UNIT_TO_MS: dict[TimeUnit, int] = {
    TimeUnit.MS: 1,
    TimeUnit.SECOND: 1000,
    TimeUnit.MINUTE: 60 * 1000,
    TimeUnit.HOUR: 60 * 60 * 1000,
    TimeUnit.DAY: 24 * 60 * 60 * 1000,
    TimeUnit.WEEK: 7 * 24 * 60 * 60 * 1000,
    TimeUnit.MONTH: 30 * 24 * 60 * 60 * 1000,
    TimeUnit.YEAR: 365 * 24 * 60 * 60 * 1000,
}


def _as_unit(unit: TimeUnit | str) -> TimeUnit:
    try:
        return TimeUnit(unit)
    except ValueError as exc:
        msg = f"Unknown time unit: {unit!r}"
        raise ValidationError(msg) from exc


def unit_to_ms(unit: TimeUnit | str) -> int:
    """Return the fixed millisecond multiplier for *unit*."""
    return UNIT_TO_MS[_as_unit(unit)]


@dataclass(frozen=True)
class Diff:
    """Signed delta between two instants, tagged with the requested unit."""

    value: float
    unit: TimeUnit


@dataclass(frozen=True, slots=True)
class Instant:
    """A point in time. Build with :meth:`create`, never mutate."""

    value: float

    def __post_init__(self) -> None:
        value = self.value
        if isinstance(value, bool) or not isinstance(value, Real) or not math.isfinite(value):
            msg = f"Invalid timestamp: {value!r}"
            raise ValidationError(msg)

    @classmethod
    def create(cls, timestamp_ms: float) -> Instant:
        """Validate *timestamp_ms* and wrap it.

        Raises:
            ValidationError: If the value is not a finite real number.
        """
        return cls(timestamp_ms)

    # --- Arithmetic ---

    def add(self, amount: float, unit: TimeUnit | str = TimeUnit.MS) -> Instant:
        return Instant.create(self.value + amount * unit_to_ms(unit))

    def subtract(self, amount: float, unit: TimeUnit | str = TimeUnit.MS) -> Instant:
        return Instant.create(self.value - amount * unit_to_ms(unit))

    def diff(self, other: Instant, unit: TimeUnit | str = TimeUnit.MS) -> Diff:
        """Return ``self - other`` in raw milliseconds, labelled with *unit*.

        The magnitude is not converted to *unit*; only the label changes.
        """
        return Diff(value=self.value - other.value, unit=_as_unit(unit))

    # --- Comparison ---

    def is_before(self, other: Instant) -> bool:
        return self.value < other.value

    def is_after(self, other: Instant) -> bool:
        return self.value > other.value

    def is_same(self, other: Instant) -> bool:
        return self.value == other.value

    def is_same_or_before(self, other: Instant) -> bool:
        return self.value <= other.value

    def is_same_or_after(self, other: Instant) -> bool:
        return self.value >= other.value

    def is_between(self, bound: Instant, other_bound: Instant) -> bool:
        """Strictly between the two bounds, in either order."""
        low, high = sorted((bound.value, other_bound.value))
        return low < self.value < high

    def is_same_or_between(self, bound: Instant, other_bound: Instant) -> bool:
        """Between the two bounds inclusive, in either order."""
        low, high = sorted((bound.value, other_bound.value))
        return low <= self.value <= high

    def to_json(self) -> str:
        return str(self.value)
