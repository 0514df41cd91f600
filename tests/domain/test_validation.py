"""Tests for segment collection validation."""

from tests.conftest import at
from wimt.domain.segment import Segment
from wimt.domain.validation import (
    OVERLAP_MESSAGE,
    UNSORTED_MESSAGE,
    SegmentCollectionValidator,
    are_segments_sorted,
    do_segments_overlap,
    validate_segments,
)


def seg(start: float, stop: float | None = None) -> Segment:
    return Segment(at(start), at(stop) if stop is not None else None)


class TestSorted:
    def test_empty_and_single(self) -> None:
        assert are_segments_sorted([])
        assert are_segments_sorted([seg(0)])

    def test_strictly_ascending(self) -> None:
        assert are_segments_sorted([seg(0, 10), seg(20, 30), seg(40)])

    def test_equal_starts_are_unsorted(self) -> None:
        assert not are_segments_sorted([seg(0, 10), seg(0, 20)])

    def test_descending(self) -> None:
        assert not are_segments_sorted([seg(20, 30), seg(0, 10)])

    def test_missing_entries_are_skipped(self) -> None:
        assert are_segments_sorted([seg(0, 10), None, seg(5, 8)]) is True


class TestOverlap:
    def test_disjoint(self) -> None:
        assert not do_segments_overlap([seg(0, 10), seg(11, 20)])

    def test_touching_counts_as_overlap(self) -> None:
        assert do_segments_overlap([seg(0, 10), seg(10, 20)])

    def test_trailing_active_segment(self) -> None:
        assert not do_segments_overlap([seg(0, 10), seg(20)])

    def test_active_segment_on_left_is_skipped(self) -> None:
        assert not do_segments_overlap([seg(0), seg(5, 8)])


class TestValidate:
    def test_valid(self) -> None:
        result = validate_segments([seg(0, 10), seg(20)])
        assert result.is_valid
        assert result.errors == []

    def test_collects_both_errors(self) -> None:
        result = validate_segments([seg(10, 30), seg(0, 5)])
        assert not result.is_valid
        assert result.errors == [UNSORTED_MESSAGE, OVERLAP_MESSAGE]

    def test_facade(self) -> None:
        segments = [seg(0, 10), seg(5, 20)]
        assert SegmentCollectionValidator.are_segments_sorted(segments)
        assert SegmentCollectionValidator.do_segments_overlap(segments)
        assert SegmentCollectionValidator.validate(segments).errors == [OVERLAP_MESSAGE]
