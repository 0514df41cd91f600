"""Category aggregate: a labelled tag sessions are filed under.

Value objects use smart constructors: ``X.create(raw)`` validates and
returns the value, or raises :class:`ValidationError`. Sessions reference a
category by id only.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, ClassVar

from wimt.domain.errors import ValidationError
from wimt.domain.events import CategoryCreated, CategoryEdited, DomainEvent, EventBuffer
from wimt.domain.ids import make_id
from wimt.domain.instant import Instant

_HEX_COLOR = re.compile(r"^#([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


# ---------------------------------------------------------------------------
# Value objects
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CategoryName:
    value: str

    MIN_LENGTH: ClassVar[int] = 1
    MAX_LENGTH: ClassVar[int] = 255

    @classmethod
    def create(cls, value: str) -> CategoryName:
        """Trim and length-check a category name."""
        if not isinstance(value, str):
            msg = "Category name must be a string"
            raise ValidationError(msg)
        trimmed = value.strip()
        if len(trimmed) < cls.MIN_LENGTH:
            msg = f"Category name must be at least {cls.MIN_LENGTH} characters long"
            raise ValidationError(msg)
        if len(trimmed) > cls.MAX_LENGTH:
            msg = f"Category name must not be longer than {cls.MAX_LENGTH} characters"
            raise ValidationError(msg)
        return cls(trimmed)


@dataclass(frozen=True)
class Color:
    """Hex color, stored lower-case (``#abc`` or ``#aabbcc``)."""

    value: str

    @classmethod
    def create(cls, value: str) -> Color:
        if not isinstance(value, str):
            msg = "Color value must be a string"
            raise ValidationError(msg)
        if not _HEX_COLOR.match(value):
            msg = "Color value must be a valid hex color"
            raise ValidationError(msg)
        return cls(value.lower())


@dataclass(frozen=True)
class Icon:
    value: str

    @classmethod
    def create(cls, value: str) -> Icon:
        if not isinstance(value, str):
            msg = "Icon value must be a string"
            raise ValidationError(msg)
        if not value:
            msg = "Icon value must not be empty"
            raise ValidationError(msg)
        return cls(value)


# ---------------------------------------------------------------------------
# Aggregate
# ---------------------------------------------------------------------------


class Category:
    """Peer aggregate with no lifecycle beyond creation and edits.

    Fresh construction (no *id*) buffers ``CategoryCreated``; every setter
    buffers ``CategoryEdited`` naming the changed field.
    """

    def __init__(
        self,
        *,
        name: CategoryName,
        created_at: Instant,
        id: str | None = None,  # noqa: A002
        color: Color | None = None,
        icon: Icon | None = None,
    ) -> None:
        if not isinstance(name, CategoryName):
            msg = "name must be a CategoryName"
            raise ValidationError(msg)
        if not isinstance(created_at, Instant):
            msg = "created_at is required"
            raise ValidationError(msg)
        self._events = EventBuffer()
        self.id = id or make_id()
        self.name = name
        self.created_at = created_at
        self.color = color
        self.icon = icon
        if id is None:
            self._events.append(CategoryCreated(occurred_at=created_at, category_id=self.id))

    def __repr__(self) -> str:
        return f"Category(id={self.id!r}, name={self.name.value!r})"

    def rename(self, name: CategoryName, *, at: Instant) -> None:
        self.name = name
        self._edited("name", at)

    def set_color(self, color: Color, *, at: Instant) -> None:
        self.color = color
        self._edited("color", at)

    def set_icon(self, icon: Icon, *, at: Instant) -> None:
        self.icon = icon
        self._edited("icon", at)

    def pull_domain_events(self) -> list[DomainEvent]:
        return self._events.drain()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name.value,
            "created_at": self.created_at.value,
            "color": self.color.value if self.color is not None else None,
            "icon": self.icon.value if self.icon is not None else None,
        }

    def _edited(self, changed: str, at: Instant) -> None:
        self._events.append(CategoryEdited(occurred_at=at, category_id=self.id, changed=changed))
