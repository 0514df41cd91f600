"""Tests for the config section models."""

import pytest
from pydantic import ValidationError

from wimt.config.models import PluginsConfig, StorageConfig


class TestStorageConfig:
    def test_defaults(self) -> None:
        cfg = StorageConfig()
        assert cfg.backend == "sqlite"
        assert cfg.path == ".wimt/wimt.db"

    def test_rejects_unknown_backend(self) -> None:
        with pytest.raises(ValidationError):
            StorageConfig(backend="redis")  # type: ignore[arg-type]

    def test_frozen(self) -> None:
        with pytest.raises(ValidationError):
            StorageConfig().path = "x"  # type: ignore[misc]


class TestPluginsConfig:
    def test_defaults(self) -> None:
        cfg = PluginsConfig()
        assert cfg.enabled is True
        assert cfg.local_dir == ".wimt/plugins"
        assert cfg.activity_log is True
