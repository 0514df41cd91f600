"""Session and segment lifecycle states and transition maps.

State is always derived from structural properties of the aggregate
(``stopped_at`` / ``active_segment``), never stored directly.
"""

from __future__ import annotations

from enum import StrEnum


class SessionState(StrEnum):
    """Derived state of a Session."""

    ACTIVE = "active"
    PAUSED = "paused"
    STOPPED = "stopped"


class SegmentState(StrEnum):
    """Derived state of a Segment."""

    ACTIVE = "active"
    STOPPED = "stopped"


# --- Transition maps ---

SESSION_TRANSITIONS: dict[str, list[str]] = {
    "active": ["paused", "stopped"],
    "paused": ["active", "stopped"],
    "stopped": [],  # terminal
}

SEGMENT_TRANSITIONS: dict[str, list[str]] = {
    "active": ["stopped"],
    "stopped": [],  # one-way
}


def is_valid_transition(
    current: str,
    target: str,
    transitions: dict[str, list[str]],
) -> bool:
    """Check if transitioning from *current* to *target* is allowed."""
    allowed = transitions.get(current, [])
    return target in allowed
