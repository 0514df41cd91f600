"""BaseService: foundation for all wimt services.

Every service receives a :class:`Tracker` at construction time. The
Tracker provides the repositories, the clock, and the event publisher.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from wimt.services.result import ServiceResult

if TYPE_CHECKING:
    from wimt.domain.errors import DomainError
    from wimt.domain.events import DomainEvent
    from wimt.infrastructure.tracker import Tracker

logger = logging.getLogger(__name__)


class BaseService:
    """Base for all service-layer classes.

    Subclasses follow one flow per use case: load -> mutate -> save ->
    drain events -> publish. Domain errors are mapped to a failed
    :class:`ServiceResult` through :meth:`_fail`.
    """

    def __init__(self, tracker: Tracker) -> None:
        self._tracker = tracker

    async def _publish(self, events: list[DomainEvent]) -> None:
        """Hand drained events to the publisher (after a successful save)."""
        if events:
            await self._tracker.publisher.publish_all(events)

    @staticmethod
    def _fail(
        op: str,
        code: str,
        message: str,
        **detail: object,
    ) -> ServiceResult:
        return ServiceResult.failure(op, code, message, **detail)

    @classmethod
    def _from_domain_error(cls, op: str, exc: DomainError) -> ServiceResult:
        logger.debug("%s failed: %s (%s)", op, exc.message, exc.code)
        detail: dict[str, object] = {}
        state = getattr(exc, "state", None)
        if state is not None:
            detail["state"] = str(state)
        return cls._fail(op, exc.code, exc.message, **detail)
