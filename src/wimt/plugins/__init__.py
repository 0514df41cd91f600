"""Extension layer: plugin system via pluggy.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints.
INVARIANT: Plugin failures are warnings, never errors.
"""

from wimt.plugins.bridge import PluginEventBridge
from wimt.plugins.manager import PluginManager

__all__ = ["PluginEventBridge", "PluginManager"]
