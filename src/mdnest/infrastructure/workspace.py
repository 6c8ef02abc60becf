"""Workspace: the single dependency injected into every service.

Owns the store database engine, the named key-value stores, and the
optional event bus. Everything filesystem-related is stateless and lives
in :mod:`mdnest.infrastructure.filesystem` and friends.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from mdnest.infrastructure.database.engine import init_database
from mdnest.infrastructure.store import KeyValueStore

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

    from mdnest.config.settings import MdnSettings
    from mdnest.plugins.event_bus import EventBus

logger = logging.getLogger(__name__)


class Workspace:
    """Persistent state shared by services for one process."""

    def __init__(self, settings: MdnSettings) -> None:
        self.settings = settings
        self._engine: Engine | None = None
        self._stores: dict[str, KeyValueStore] = {}
        self._event_bus: EventBus | None = None

    @property
    def engine(self) -> Engine:
        """The store database engine (created lazily on first access)."""
        if self._engine is None:
            self._engine = init_database(self.settings.data_dir)
        return self._engine

    def store(self, name: str) -> KeyValueStore:
        """Return the key-value store named *name* (one instance per name)."""
        if name not in self._stores:
            self._stores[name] = KeyValueStore(self.engine, name)
        return self._stores[name]

    @property
    def event_bus(self) -> EventBus | None:
        return self._event_bus

    def init_event_bus(self, *, sync: bool = False) -> None:
        """Discover plugins and start the event bus. Idempotent."""
        if self._event_bus is not None:
            return
        from mdnest.plugins.event_bus import EventBus
        from mdnest.plugins.manager import PluginManager

        pm = PluginManager()
        names = pm.discover_and_load()
        if names:
            logger.debug("Loaded plugins: %s", ", ".join(names))
        self._event_bus = EventBus(pm, sync=sync)

    def close(self) -> None:
        """Drain pending events and release the database engine."""
        if self._event_bus is not None:
            self._event_bus.shutdown()
            self._event_bus = None
        for store in self._stores.values():
            if store.dirty:
                logger.warning("Discarding unsaved changes in store %s", store.name)
        self._stores.clear()
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
