"""Tests for specification predicates and combinators."""

from tests.conftest import at
from wimt.domain.category import Category, CategoryName
from wimt.domain.segment import Segment
from wimt.domain.session import Session
from wimt.domain.specifications import (
    Specification,
    active_segment,
    active_session,
    all_of,
    any_of,
    category_name_matches,
    long_segment,
    long_session,
    negate,
    paused_session,
    segment_started_in_range,
    session_created_in_range,
    session_for_category,
    session_stopped_in_range,
    session_with_multiple_segments,
    stopped_segment,
    stopped_session,
    unstopped_session,
    valid_segment_duration,
)


def counting(result: bool, calls: list[str], label: str) -> Specification[object]:
    def predicate(_candidate: object) -> bool:
        calls.append(label)
        return result

    return Specification(predicate, name=label)


def stopped_session_with(*bounds: tuple[float, float]) -> Session:
    history = [Segment(at(start), at(stop)) for start, stop in bounds]
    return Session(
        id="s" * 32,
        category_id="cat",
        created_at=at(bounds[0][0]),
        history=history,
        stopped_at=at(bounds[-1][1]),
    )


class TestCombinators:
    def test_and_or_not(self) -> None:
        yes = Specification(lambda _: True, name="yes")
        no = Specification(lambda _: False, name="no")
        assert (yes & yes).is_satisfied_by(1)
        assert not (yes & no).is_satisfied_by(1)
        assert (yes | no).is_satisfied_by(1)
        assert not (no | no).is_satisfied_by(1)
        assert (~no).is_satisfied_by(1)
        assert yes.and_(no.not_())(1)

    def test_and_evaluates_every_operand(self) -> None:
        calls: list[str] = []
        spec = all_of(counting(False, calls, "a"), counting(True, calls, "b"))
        assert not spec.is_satisfied_by(None)
        assert calls == ["a", "b"]

    def test_or_evaluates_every_operand(self) -> None:
        calls: list[str] = []
        spec = any_of(counting(True, calls, "a"), counting(False, calls, "b"))
        assert spec.is_satisfied_by(None)
        assert calls == ["a", "b"]

    def test_names_compose(self) -> None:
        a = Specification(lambda _: True, name="a")
        b = Specification(lambda _: True, name="b")
        assert all_of(a, b).name == "(a and b)"
        assert any_of(a, b).name == "(a or b)"
        assert negate(a).name == "not a"


class TestSegmentSpecs:
    def test_active_and_stopped(self) -> None:
        running = Segment(at(0))
        closed = Segment(at(0), at(10))
        assert active_segment()(running)
        assert not active_segment()(closed)
        assert stopped_segment()(closed)

    def test_long_segment(self) -> None:
        assert long_segment(100)(Segment(at(0), at(100)))
        assert not long_segment(100)(Segment(at(0), at(99)))
        assert not long_segment(0)(Segment(at(0)))

    def test_started_in_range_is_inclusive(self) -> None:
        spec = segment_started_in_range(at(10), at(20))
        assert spec(Segment(at(10)))
        assert spec(Segment(at(20)))
        assert not spec(Segment(at(21)))

    def test_valid_duration(self) -> None:
        assert valid_segment_duration()(Segment(at(0), at(300)))
        assert not valid_segment_duration()(Segment(at(0), at(299)))
        assert not valid_segment_duration()(Segment(at(0)))


class TestSessionSpecs:
    def test_state_specs(self) -> None:
        running = Session(category_id="cat", created_at=at(0))
        assert active_session()(running)
        assert unstopped_session()(running)
        running.pause(at(1000))
        assert paused_session()(running)
        assert unstopped_session()(running)
        running.stop(at(2000))
        assert stopped_session()(running)
        assert not unstopped_session()(running)

    def test_for_category(self) -> None:
        session = Session(category_id="cat", created_at=at(0))
        assert session_for_category("cat")(session)
        assert not session_for_category("other")(session)

    def test_created_in_range(self) -> None:
        session = Session(category_id="cat", created_at=at(50))
        assert session_created_in_range(at(50), at(60))(session)
        assert not session_created_in_range(at(51), at(60))(session)

    def test_stopped_in_range(self) -> None:
        session = stopped_session_with((0, 1000))
        assert session_stopped_in_range(at(1000), at(2000))(session)
        assert not session_stopped_in_range(at(0), at(999))(session)
        running = Session(category_id="cat", created_at=at(0))
        assert not session_stopped_in_range(at(0), at(10_000))(running)

    def test_multiple_segments(self) -> None:
        assert session_with_multiple_segments()(stopped_session_with((0, 1000), (2000, 3000)))
        assert not session_with_multiple_segments()(stopped_session_with((0, 1000)))

    def test_long_session(self) -> None:
        session = stopped_session_with((0, 1000), (2000, 3000))
        assert long_session(2000)(session)
        assert not long_session(2001)(session)
        assert not long_session(0)(Session(category_id="cat", created_at=at(0)))


class TestCategorySpecs:
    def test_name_matches_case_insensitive(self) -> None:
        cat = Category(name=CategoryName.create("Deep Work"), created_at=at(0))
        assert category_name_matches("work")(cat)
        assert category_name_matches("DEEP")(cat)
        assert not category_name_matches("play")(cat)
