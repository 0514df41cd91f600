"""Forward published domain events to pluggy hooks.

INVARIANT: Plugin failures are warnings, never errors. The bridge handler
catches and logs them so that a broken plugin never fails a use case.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

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

if TYPE_CHECKING:
    from wimt.plugins.manager import PluginManager
    from wimt.services.publisher import DomainEventPublisher

logger = logging.getLogger(__name__)

HOOK_NAMES: dict[type[DomainEvent], str] = {
    SessionStarted: "session_started",
    SessionPaused: "session_paused",
    SessionResumed: "session_resumed",
    SessionStopped: "session_stopped",
    SegmentTooShort: "segment_too_short",
    CategoryCreated: "category_created",
    CategoryEdited: "category_edited",
}


class PluginEventBridge:
    """Publisher subscriber that calls the matching hook for each event."""

    def __init__(self, plugin_manager: PluginManager) -> None:
        self._pm = plugin_manager

    def attach(self, publisher: DomainEventPublisher) -> None:
        """Subscribe to every event type that has a hook."""
        for event_cls in HOOK_NAMES:
            publisher.subscribe(event_cls, self.dispatch)

    def dispatch(self, event: DomainEvent) -> None:
        hook_name = HOOK_NAMES.get(type(event))
        if hook_name is None:
            return
        try:
            getattr(self._pm.hook, hook_name)(event=event)
        except Exception:
            logger.warning("Plugin hook %s failed", hook_name, exc_info=True)
