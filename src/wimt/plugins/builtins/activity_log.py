"""Built-in activity log plugin.

Writes one structured log line per domain event, keyed by event type.
Enabled by ``[plugins] activity_log = true`` (the default).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy
import structlog

if TYPE_CHECKING:
    from wimt.domain.events import (
        CategoryCreated,
        CategoryEdited,
        DomainEvent,
        SegmentTooShort,
        SessionPaused,
        SessionResumed,
        SessionStarted,
        SessionStopped,
    )

hookimpl = pluggy.HookimplMarker("wimt")


class ActivityLogPlugin:
    """Logs every lifecycle event at INFO (SegmentTooShort at WARNING)."""

    def __init__(self) -> None:
        self._log = structlog.get_logger("wimt.activity")

    def _record(self, event: DomainEvent) -> None:
        self._log.info("event", **event.to_dict())

    @hookimpl
    def session_started(self, event: SessionStarted) -> None:
        self._record(event)

    @hookimpl
    def session_paused(self, event: SessionPaused) -> None:
        self._record(event)

    @hookimpl
    def session_resumed(self, event: SessionResumed) -> None:
        self._record(event)

    @hookimpl
    def session_stopped(self, event: SessionStopped) -> None:
        self._record(event)

    @hookimpl
    def segment_too_short(self, event: SegmentTooShort) -> None:
        self._log.warning("segment discarded", **event.to_dict())

    @hookimpl
    def category_created(self, event: CategoryCreated) -> None:
        self._record(event)

    @hookimpl
    def category_edited(self, event: CategoryEdited) -> None:
        self._record(event)
