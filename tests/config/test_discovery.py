"""Tests for wimt.toml discovery."""

from pathlib import Path

import pytest

from wimt.config.discovery import CONFIG_ENV_VAR, CONFIG_FILENAME, find_config


class TestFindConfig:
    def test_finds_in_start_dir(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("")
        assert find_config(tmp_path) == (tmp_path / CONFIG_FILENAME).resolve()

    def test_walks_up(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("")
        nested = tmp_path / "x" / "y" / "z"
        nested.mkdir(parents=True)
        assert find_config(nested) == (tmp_path / CONFIG_FILENAME).resolve()

    def test_env_var_wins(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        explicit = tmp_path / "other.toml"
        explicit.write_text("")
        (tmp_path / CONFIG_FILENAME).write_text("")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(explicit))
        assert find_config(tmp_path) == explicit

    def test_env_var_missing_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "missing.toml"))
        assert find_config(tmp_path) is None

    def test_env_var_expands_home(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "tracker.toml").write_text("")
        monkeypatch.setenv("HOME", str(tmp_path))
        monkeypatch.setenv(CONFIG_ENV_VAR, "~/tracker.toml")
        assert find_config() == tmp_path / "tracker.toml"

    def test_nearest_config_wins(self, tmp_path: Path) -> None:
        nested = tmp_path / "project"
        nested.mkdir()
        (tmp_path / CONFIG_FILENAME).write_text("")
        (nested / CONFIG_FILENAME).write_text("")
        assert find_config(nested) == (nested / CONFIG_FILENAME).resolve()
