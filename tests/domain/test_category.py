"""Tests for the Category aggregate and its value objects."""

import pytest

from tests.conftest import at
from wimt.domain.category import Category, CategoryName, Color, Icon
from wimt.domain.errors import ValidationError
from wimt.domain.events import CategoryCreated, CategoryEdited


class TestCategoryName:
    def test_trims(self) -> None:
        assert CategoryName.create("  Work  ").value == "Work"

    @pytest.mark.parametrize("bad", ["", "   "])
    def test_too_short(self, bad: str) -> None:
        with pytest.raises(ValidationError, match="at least"):
            CategoryName.create(bad)

    def test_too_long(self) -> None:
        with pytest.raises(ValidationError, match="longer than"):
            CategoryName.create("x" * 256)

    def test_max_length_ok(self) -> None:
        assert len(CategoryName.create("x" * 255).value) == 255

    def test_non_string(self) -> None:
        with pytest.raises(ValidationError):
            CategoryName.create(42)  # type: ignore[arg-type]


class TestColor:
    @pytest.mark.parametrize("value", ["#abc", "#AABBCC", "#123456"])
    def test_valid(self, value: str) -> None:
        assert Color.create(value).value == value.lower()

    @pytest.mark.parametrize("value", ["abc", "#abcd", "#ggg", "red", ""])
    def test_invalid(self, value: str) -> None:
        with pytest.raises(ValidationError, match="hex"):
            Color.create(value)


class TestIcon:
    def test_valid(self) -> None:
        assert Icon.create("brain").value == "brain"

    def test_empty(self) -> None:
        with pytest.raises(ValidationError):
            Icon.create("")


class TestCategory:
    def test_fresh_buffers_created(self) -> None:
        cat = Category(name=CategoryName.create("Work"), created_at=at(5))
        events = cat.pull_domain_events()
        assert len(events) == 1
        assert isinstance(events[0], CategoryCreated)
        assert events[0].category_id == cat.id

    def test_reconstruction_is_silent(self) -> None:
        cat = Category(id="c" * 32, name=CategoryName.create("Work"), created_at=at(5))
        assert cat.pull_domain_events() == []

    def test_requires_value_objects(self) -> None:
        with pytest.raises(ValidationError):
            Category(name="Work", created_at=at(0))  # type: ignore[arg-type]

    def test_edits_buffer_events(self) -> None:
        cat = Category(name=CategoryName.create("Work"), created_at=at(0))
        cat.pull_domain_events()
        cat.rename(CategoryName.create("Play"), at=at(10))
        cat.set_color(Color.create("#fff"), at=at(11))
        cat.set_icon(Icon.create("ball"), at=at(12))
        events = cat.pull_domain_events()
        assert all(isinstance(e, CategoryEdited) for e in events)
        assert [e.changed for e in events] == ["name", "color", "icon"]
        assert cat.to_dict()["name"] == "Play"
        assert cat.to_dict()["color"] == "#fff"
        assert cat.to_dict()["icon"] == "ball"
