"""Identifier generation and validation.

Aggregates and segments use opaque 32-char lowercase hex identifiers
(UUID4). Storage treats them as plain text.

INVARIANT: IDs are permanent. Once generated, an ID never changes.
"""

from __future__ import annotations

import re
import uuid

ID_PATTERN = re.compile(r"^[0-9a-f]{32}$")


def make_id() -> str:
    """Generate a new random identifier."""
    return uuid.uuid4().hex


def validate_id(value: str) -> bool:
    """Check whether *value* looks like an identifier produced by :func:`make_id`."""
    return ID_PATTERN.match(value) is not None
