"""Tests for PluginManager discovery and registration."""

from __future__ import annotations

from pathlib import Path

import pluggy

from tests.conftest import at
from wimt.domain.events import SessionStarted
from wimt.plugins.manager import PluginManager

hookimpl = pluggy.HookimplMarker("wimt")

# -- Plugin source code used in tests ------------------------------------------

_VALID_PLUGIN_SRC = """\
import pluggy

hookimpl = pluggy.HookimplMarker("wimt")

calls: list[str] = []


class LocalTestPlugin:
    \"\"\"A minimal local plugin for testing.\"\"\"

    @hookimpl
    def session_started(self, event) -> None:
        calls.append(event.session_id)
"""

_SYNTAX_ERROR_SRC = """\
def broken(
    # missing closing paren and colon
"""

_NO_HOOKS_SRC = """\
class PlainClass:
    def hello(self) -> str:
        return "world"
"""


class RecordingPlugin:
    def __init__(self) -> None:
        self.events: list[SessionStarted] = []

    @hookimpl
    def session_started(self, event: SessionStarted) -> None:
        self.events.append(event)


class TestRegistration:
    def test_register_and_dispatch(self) -> None:
        pm = PluginManager()
        plugin = RecordingPlugin()
        pm.register_plugin(plugin, name="recorder")
        assert pm.list_plugin_names() == ["recorder"]

        event = SessionStarted(occurred_at=at(0), session_id="s")
        pm.hook.session_started(event=event)
        assert plugin.events == [event]

    def test_unregister(self) -> None:
        pm = PluginManager()
        plugin = RecordingPlugin()
        pm.register_plugin(plugin)
        pm.unregister(plugin)
        assert pm.get_plugins() == []

    def test_default_name_is_class_name(self) -> None:
        pm = PluginManager()
        pm.register_plugin(RecordingPlugin())
        assert pm.list_plugin_names() == ["RecordingPlugin"]

    def test_has_hook_impls(self) -> None:
        assert PluginManager._has_hook_impls(RecordingPlugin)
        assert not PluginManager._has_hook_impls(object)


class TestLocalDiscovery:
    def test_missing_dir_is_ignored(self, tmp_path: Path) -> None:
        pm = PluginManager()
        assert pm.discover_and_load(local_dir=tmp_path / "nope") == []
        assert pm.is_loaded

    def test_loads_valid_plugin(self, tmp_path: Path) -> None:
        (tmp_path / "recorder.py").write_text(_VALID_PLUGIN_SRC)
        pm = PluginManager()
        names = pm.discover_and_load(local_dir=tmp_path)
        assert names == ["wimt_local_plugin_recorder.LocalTestPlugin"]
        pm.hook.session_started(event=SessionStarted(occurred_at=at(0), session_id="s1"))

        import sys

        module = sys.modules["wimt_local_plugin_recorder"]
        assert module.calls == ["s1"]

    def test_broken_and_plain_files_are_skipped(self, tmp_path: Path) -> None:
        (tmp_path / "broken.py").write_text(_SYNTAX_ERROR_SRC)
        (tmp_path / "plain.py").write_text(_NO_HOOKS_SRC)
        (tmp_path / "_private.py").write_text(_VALID_PLUGIN_SRC)
        pm = PluginManager()
        assert pm.discover_and_load(local_dir=tmp_path) == []
