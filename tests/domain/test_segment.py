"""Tests for the Segment entity."""

import pytest

from tests.conftest import at
from wimt.domain.errors import SegmentAlreadyStoppedError, ValidationError
from wimt.domain.lifecycle import SegmentState
from wimt.domain.segment import Segment


class TestConstruction:
    def test_fresh_segment_is_active(self) -> None:
        seg = Segment(at(0))
        assert seg.state is SegmentState.ACTIVE
        assert seg.stopped_at is None
        assert seg.duration_ms is None
        assert len(seg.id) == 32

    def test_reconstructed_stopped_segment(self) -> None:
        seg = Segment(at(0), at(100), id="a" * 32)
        assert seg.id == "a" * 32
        assert seg.state is SegmentState.STOPPED
        assert seg.duration_ms == 100

    def test_rejects_non_instant(self) -> None:
        with pytest.raises(ValidationError):
            Segment(0)  # type: ignore[arg-type]
        with pytest.raises(ValidationError):
            Segment(at(0), 5)  # type: ignore[arg-type]


class TestStop:
    def test_stop_sets_bound(self) -> None:
        seg = Segment(at(1000))
        seg.stop(at(2500))
        assert seg.stopped_at == at(2500)
        assert seg.state is SegmentState.STOPPED
        assert seg.duration_ms == 1500

    def test_stop_twice(self) -> None:
        seg = Segment(at(0))
        seg.stop(at(10))
        with pytest.raises(SegmentAlreadyStoppedError):
            seg.stop(at(20))

    @pytest.mark.parametrize("when", [0, -1])
    def test_stop_must_be_after_start(self, when: float) -> None:
        seg = Segment(at(0))
        with pytest.raises(ValidationError, match="after start"):
            seg.stop(at(when))
        assert seg.state is SegmentState.ACTIVE


class TestAdjust:
    def test_adjust_start(self) -> None:
        seg = Segment(at(100), at(500))
        seg.adjust_start_time(at(50))
        assert seg.duration_ms == 450

    def test_adjust_start_not_past_stop(self) -> None:
        seg = Segment(at(100), at(500))
        with pytest.raises(ValidationError):
            seg.adjust_start_time(at(500))

    def test_adjust_stop(self) -> None:
        seg = Segment(at(100), at(500))
        seg.adjust_stop_time(at(900))
        assert seg.duration_ms == 800

    def test_adjust_stop_not_before_start(self) -> None:
        seg = Segment(at(100), at(500))
        with pytest.raises(ValidationError):
            seg.adjust_stop_time(at(100))

    def test_to_dict(self) -> None:
        seg = Segment(at(1), id="b" * 32)
        assert seg.to_dict() == {"id": "b" * 32, "started_at": 1, "stopped_at": None}
