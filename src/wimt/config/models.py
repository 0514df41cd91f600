"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, wimt.toml only contains overrides.
An empty (or missing) wimt.toml gives a SQLite store at ``.wimt/wimt.db``.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

# --- wimt.toml sections ---


class StorageConfig(BaseModel):
    """[storage] section."""

    model_config = {"frozen": True}

    backend: Literal["sqlite", "memory"] = "sqlite"
    path: str = ".wimt/wimt.db"  # relative paths resolve against the root


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    enabled: bool = True
    local_dir: str = ".wimt/plugins"
    activity_log: bool = True  # built-in plugin logging every event
