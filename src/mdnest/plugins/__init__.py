"""Extension layer: UI notification hooks via pluggy.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints.
INVARIANT: Plugin failures are warnings, never errors.
"""

from mdnest.plugins.event_bus import EventBus
from mdnest.plugins.manager import PluginManager

__all__ = ["EventBus", "PluginManager"]
