"""Pluggy hook specifications for wimt domain events.

One hook per published event type. Hooks receive the event object itself;
``event.to_dict()`` gives a JSON-friendly payload.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from wimt.domain.events import (
        CategoryCreated,
        CategoryEdited,
        SegmentTooShort,
        SessionPaused,
        SessionResumed,
        SessionStarted,
        SessionStopped,
    )

hookspec = pluggy.HookspecMarker("wimt")


class WimtHookSpec:
    """Hook specifications for the wimt plugin system."""

    @hookspec
    def session_started(self, event: SessionStarted) -> None:
        """Called after a new session is persisted."""

    @hookspec
    def session_paused(self, event: SessionPaused) -> None:
        """Called after a session is paused with a kept segment."""

    @hookspec
    def session_resumed(self, event: SessionResumed) -> None:
        """Called after a paused session opens a new segment."""

    @hookspec
    def session_stopped(self, event: SessionStopped) -> None:
        """Called after a session is stopped for good."""

    @hookspec
    def segment_too_short(self, event: SegmentTooShort) -> None:
        """Called when a closed segment was discarded for being too short."""

    @hookspec
    def category_created(self, event: CategoryCreated) -> None:
        """Called after category creation."""

    @hookspec
    def category_edited(self, event: CategoryEdited) -> None:
        """Called after a category field changes."""
