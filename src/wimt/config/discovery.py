"""Locate the ``wimt.toml`` that governs the current project.

``WIMT_CONFIG`` pins an explicit file. Otherwise the nearest ``wimt.toml`` in
the start directory or any ancestor wins; its directory becomes the tracker
root that ``storage.path`` and ``plugins.local_dir`` are resolved against.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

CONFIG_FILENAME = "wimt.toml"
CONFIG_ENV_VAR = "WIMT_CONFIG"


def _ancestor_configs(start: Path) -> Iterator[Path]:
    """``wimt.toml`` candidates from *start* up to the filesystem root."""
    for directory in (start, *start.parents):
        yield directory / CONFIG_FILENAME


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file in effect, or None when there is none.

    A ``WIMT_CONFIG`` naming a missing file yields None; no walk-up happens.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        pinned = Path(override).expanduser()
        return pinned if pinned.is_file() else None

    origin = (start or Path.cwd()).resolve()
    return next((path for path in _ancestor_configs(origin) if path.is_file()), None)
