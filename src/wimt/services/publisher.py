"""DomainEventPublisher: in-process, type-keyed event dispatch.

Handlers are registered per event class and run sequentially in
registration order. A handler may be a plain function or a coroutine
function; coroutine results are awaited before the next handler runs.

A failing handler aborts the remaining handlers for that event (and the
remaining events of a ``publish_all`` batch) and the error propagates to
the caller. The aggregate is already persisted at that point.
"""

from __future__ import annotations

import inspect
import logging
from collections import defaultdict
from collections.abc import Awaitable, Callable, Iterable
from typing import TypeVar

from wimt.domain.events import DomainEvent

E = TypeVar("E", bound=DomainEvent)

EventHandler = Callable[[E], Awaitable[None] | None]

logger = logging.getLogger(__name__)


class DomainEventPublisher:
    """Registry of event-class -> ordered handler list."""

    def __init__(self) -> None:
        self._handlers: dict[type[DomainEvent], list[EventHandler]] = defaultdict(list)

    def subscribe(self, event_type: type[E], handler: EventHandler[E]) -> None:
        """Append *handler* for exact instances of *event_type*."""
        self._handlers[event_type].append(handler)

    def clear_handlers(self) -> None:
        self._handlers.clear()

    def handler_count(self, event_type: type[DomainEvent]) -> int:
        return len(self._handlers.get(event_type, []))

    async def publish(self, event: DomainEvent) -> None:
        """Run every handler registered for ``type(event)``; no handlers is a no-op."""
        handlers = list(self._handlers.get(type(event), []))
        logger.debug("Publishing %s to %d handler(s)", event.type, len(handlers))
        for handler in handlers:
            result = handler(event)
            if inspect.isawaitable(result):
                await result

    async def publish_all(self, events: Iterable[DomainEvent]) -> None:
        """Publish *events* one after another, in order."""
        for event in events:
            await self.publish(event)
