"""Plugin discovery and loading.

Two sources feed one pluggy manager:

- installed distributions advertising the ``wimt.plugins`` entry point group;
- single-file plugins dropped into the tracker's local plugin directory
  (``.wimt/plugins/`` by default).

A plugin is any object with ``@hookimpl("wimt")`` methods matching
:class:`~wimt.plugins.hookspecs.WimtHookSpec`. Broken plugins are logged and
skipped; time tracking keeps working without them.
"""

from __future__ import annotations

import importlib.util
import inspect
import logging
import sys
from typing import TYPE_CHECKING

import pluggy

from wimt.plugins.hookspecs import WimtHookSpec

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path
    from types import ModuleType

PROJECT_NAME = "wimt"
ENTRY_POINT_GROUP = "wimt.plugins"
LOCAL_MODULE_PREFIX = "wimt_local_plugin_"

# Attribute pluggy's HookimplMarker("wimt") sets on decorated methods.
_HOOKIMPL_ATTR = f"{PROJECT_NAME}_impl"

logger = logging.getLogger(__name__)


class PluginManager:
    """Thin wrapper over :class:`pluggy.PluginManager` for wimt hooks."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(WimtHookSpec)
        self._loaded = False

    def discover_and_load(self, *, local_dir: Path | None = None) -> list[str]:
        """Load entry-point plugins, then any local plugin files.

        Returns the names of every registered plugin afterwards.
        """
        self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        self._instantiate_entry_point_classes()
        if local_dir is not None and local_dir.is_dir():
            for path in sorted(local_dir.glob("*.py")):
                if not path.name.startswith("_"):
                    self._load_local_file(path)
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin object; *name* defaults to its class name."""
        resolved = name or type(plugin).__name__
        self._pm.register(plugin, name=resolved)
        logger.debug("Registered plugin: %s", resolved)

    def unregister(self, plugin: object) -> None:
        self._pm.unregister(plugin)

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def hook(self) -> pluggy.HookRelay:
        """Hook relay; call ``hook.<event_hook>(event=...)`` to dispatch."""
        return self._pm.hook

    def get_plugins(self) -> list[object]:
        return list(self._pm.get_plugins())

    def list_plugin_names(self) -> list[str]:
        return [self._pm.get_name(p) or type(p).__name__ for p in self._pm.get_plugins()]

    # ------------------------------------------------------------------
    # Loading helpers
    # ------------------------------------------------------------------

    def _load_local_file(self, path: Path) -> None:
        """Import *path* and register an instance of each hook class it defines."""
        module = _import_file(f"{LOCAL_MODULE_PREFIX}{path.stem}", path)
        if module is None:
            return
        for cls in _hook_classes(module):
            instance = _instantiate(cls, origin=path)
            if instance is not None:
                self.register_plugin(instance, name=f"{module.__name__}.{cls.__name__}")

    def _instantiate_entry_point_classes(self) -> None:
        """Swap classes registered by entry points for instances.

        Hooks called on a bare class would run with ``self`` unbound.
        """
        for plugin in self.get_plugins():
            if not (inspect.isclass(plugin) and self._has_hook_impls(plugin)):
                continue
            name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)
            instance = _instantiate(plugin, origin=name)
            if instance is not None:
                self._pm.register(instance, name=name)

    @staticmethod
    def _has_hook_impls(cls: type) -> bool:
        """Whether any public method of *cls* is marked ``@hookimpl``."""
        return any(
            not attr.startswith("_") and getattr(member, _HOOKIMPL_ATTR, None)
            for attr, member in inspect.getmembers(cls, callable)
        )


def _import_file(module_name: str, path: Path) -> ModuleType | None:
    try:
        spec = importlib.util.spec_from_file_location(module_name, path)
        if spec is None or spec.loader is None:
            logger.warning("Cannot import plugin file %s", path)
            return None
        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        spec.loader.exec_module(module)
    except Exception:
        logger.warning("Failed to load local plugin %s", path, exc_info=True)
        sys.modules.pop(module_name, None)
        return None
    return module


def _hook_classes(module: ModuleType) -> Iterator[type]:
    """Classes defined (not imported) in *module* that implement hooks."""
    for _, cls in inspect.getmembers(module, inspect.isclass):
        if cls.__module__ == module.__name__ and PluginManager._has_hook_impls(cls):
            yield cls


def _instantiate(cls: type, *, origin: object) -> object | None:
    try:
        return cls()
    except Exception:
        logger.warning(
            "Failed to instantiate plugin %s from %s", cls.__name__, origin, exc_info=True
        )
        return None
