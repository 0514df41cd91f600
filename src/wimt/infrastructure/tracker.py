"""Tracker: composition root shared by every service.

Built once from :class:`WimtSettings`. It owns the storage backend (SQLite
engine or in-memory dicts), the two repositories, the clock, the event
publisher, and the plugin manager wired to that publisher.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from wimt.infrastructure.clock import SystemClock
from wimt.infrastructure.database.engine import init_database
from wimt.infrastructure.repositories import (
    InMemoryCategoryRepository,
    InMemorySessionRepository,
    SqlCategoryRepository,
    SqlSessionRepository,
)
from wimt.services.publisher import DomainEventPublisher

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

    from wimt.config.settings import WimtSettings
    from wimt.domain.ports import CategoryRepository, Clock, SessionRepository
    from wimt.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


class Tracker:
    """Holds the adapters a service needs.

    Services receive the Tracker via their :class:`BaseService`
    constructor and never build adapters themselves.
    """

    def __init__(
        self,
        settings: WimtSettings,
        *,
        clock: Clock | None = None,
        publisher: DomainEventPublisher | None = None,
    ) -> None:
        self._settings = settings
        self._clock: Clock = clock or SystemClock()
        self._publisher = publisher or DomainEventPublisher()
        self._engine: Engine | None = None
        self._plugin_manager: PluginManager | None = None

        self._sessions: SessionRepository
        self._categories: CategoryRepository
        if settings.storage.backend == "memory":
            self._sessions = InMemorySessionRepository()
            self._categories = InMemoryCategoryRepository()
        else:
            self._engine = init_database(settings.db_path)
            self._sessions = SqlSessionRepository(self._engine)
            self._categories = SqlCategoryRepository(self._engine)
        logger.debug("Tracker ready (backend=%s)", settings.storage.backend)

    @property
    def settings(self) -> WimtSettings:
        return self._settings

    @property
    def sessions(self) -> SessionRepository:
        return self._sessions

    @property
    def categories(self) -> CategoryRepository:
        return self._categories

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def publisher(self) -> DomainEventPublisher:
        return self._publisher

    @property
    def engine(self) -> Engine | None:
        """The SQLAlchemy engine, or None for the memory backend."""
        return self._engine

    @property
    def plugin_manager(self) -> PluginManager | None:
        """The plugin manager (None until :meth:`init_plugins`)."""
        return self._plugin_manager

    def init_plugins(self) -> PluginManager:
        """Discover plugins and subscribe them to the publisher.

        Loads entry-point plugins and ``plugins.local_dir``, registers the
        built-in activity log plugin when enabled, then attaches a
        :class:`PluginEventBridge`. Called by the CLI context on first use.
        """
        from wimt.plugins.bridge import PluginEventBridge
        from wimt.plugins.builtins.activity_log import ActivityLogPlugin
        from wimt.plugins.manager import PluginManager

        pm = PluginManager()
        cfg = self._settings.plugins
        if cfg.enabled:
            pm.discover_and_load(local_dir=self._settings.plugins_dir)
            if cfg.activity_log:
                pm.register_plugin(ActivityLogPlugin(), name="activity-log-builtin")
        PluginEventBridge(pm).attach(self._publisher)
        self._plugin_manager = pm
        return pm

    def close(self) -> None:
        """Dispose the engine's connection pool (no-op for memory)."""
        if self._engine is not None:
            self._engine.dispose()
