"""Segment collection validation: ordering and non-overlap.

Pure, stateless checks over an ordered list of segments (history followed
by the active segment, if any). Used by the Session aggregate on every
construction, including reconstruction from storage.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from wimt.domain.segment import Segment

UNSORTED_MESSAGE = "Segments must be sorted by started_at"
OVERLAP_MESSAGE = "Segments must not overlap"


@dataclass(frozen=True)
class ValidationResult:
    """Result of a segment collection check."""

    is_valid: bool
    errors: list[str] = field(default_factory=list)


def are_segments_sorted(segments: Sequence[Segment | None]) -> bool:
    """True iff every ``started_at`` is strictly after its predecessor's.

    Entries without a start are skipped rather than failed.
    """
    for previous, current in zip(segments, segments[1:]):
        prev_start = previous.started_at if previous is not None else None
        curr_start = current.started_at if current is not None else None
        if prev_start is None or curr_start is None:
            continue
        if not curr_start.is_after(prev_start):
            return False
    return True


def do_segments_overlap(segments: Sequence[Segment | None]) -> bool:
    """True iff some segment does not stop strictly before the next one starts.

    Pairs missing either bound are skipped, so a trailing active segment
    never participates from the left side.
    """
    for current, following in zip(segments, segments[1:]):
        current_stop = current.stopped_at if current is not None else None
        next_start = following.started_at if following is not None else None
        if current_stop is None or next_start is None:
            continue
        if not current_stop.is_before(next_start):
            return True
    return False


def validate_segments(segments: Sequence[Segment | None]) -> ValidationResult:
    """Run both checks (no short-circuit) and collect readable errors."""
    errors: list[str] = []
    if not are_segments_sorted(segments):
        errors.append(UNSORTED_MESSAGE)
    if do_segments_overlap(segments):
        errors.append(OVERLAP_MESSAGE)
    return ValidationResult(is_valid=not errors, errors=errors)


class SegmentCollectionValidator:
    """Stateless service facade over the module-level checks."""

    are_segments_sorted = staticmethod(are_segments_sorted)
    do_segments_overlap = staticmethod(do_segments_overlap)
    validate = staticmethod(validate_segments)
