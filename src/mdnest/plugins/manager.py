"""Plugin registry for mdnest notification hooks.

Third-party packages register under the ``mdnest.plugins`` entry-point
group; embedding UIs and tests can also register plugin objects directly.
"""

from __future__ import annotations

import logging

import pluggy

from mdnest.plugins.hookspecs import MdnestHookSpec

PROJECT_NAME = "mdnest"
ENTRY_POINT_GROUP = "mdnest.plugins"

hookimpl = pluggy.HookimplMarker(PROJECT_NAME)

logger = logging.getLogger(__name__)


class PluginManager(pluggy.PluginManager):
    """pluggy manager preloaded with :class:`MdnestHookSpec`."""

    def __init__(self) -> None:
        super().__init__(PROJECT_NAME)
        self.add_hookspecs(MdnestHookSpec)
        self._discovered = False

    @property
    def is_loaded(self) -> bool:
        """True once entry points have been scanned."""
        return self._discovered

    def discover_and_load(self) -> list[str]:
        """Load entry-point plugins; returns every registered plugin name."""
        count = self.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        self._discovered = True
        if count:
            logger.debug("Loaded %d plugin(s) from %s", count, ENTRY_POINT_GROUP)
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register *plugin*, named after its class unless *name* is given."""
        self.register(plugin, name=name or type(plugin).__name__)

    def list_plugin_names(self) -> list[str]:
        return [self.get_name(plugin) or type(plugin).__name__ for plugin in self.get_plugins()]
