"""Tests for the session command group."""

import json

import pytest
from click.testing import CliRunner

from wimt.cli import cli


def make_category(runner: CliRunner) -> str:
    result = runner.invoke(cli, ["--json", "category", "create", "Work"])
    assert result.exit_code == 0, result.output
    return json.loads(result.output)["data"]["id"]


def invoke_json(runner: CliRunner, *args: str) -> tuple[int, dict]:
    result = runner.invoke(cli, ["--json", *args])
    return result.exit_code, json.loads(result.output)


@pytest.mark.usefixtures("_isolated_root")
class TestSessionCommands:
    def test_start_and_status(self, cli_runner: CliRunner) -> None:
        category_id = make_category(cli_runner)
        code, data = invoke_json(cli_runner, "session", "start", category_id)
        assert code == 0
        assert data["data"]["state"] == "active"

        status = cli_runner.invoke(cli, ["session", "status"])
        assert status.exit_code == 0
        assert "active" in status.output

    def test_second_start_fails(self, cli_runner: CliRunner) -> None:
        category_id = make_category(cli_runner)
        cli_runner.invoke(cli, ["session", "start", category_id])
        result = cli_runner.invoke(cli, ["session", "start", category_id])
        assert result.exit_code == 1
        assert "active session already exists" in result.output

    def test_second_start_json_error(self, cli_runner: CliRunner) -> None:
        category_id = make_category(cli_runner)
        cli_runner.invoke(cli, ["session", "start", category_id])
        code, data = invoke_json(cli_runner, "session", "start", category_id)
        assert code == 1
        assert data["ok"] is False
        assert data["error"]["code"] == "ACTIVE_SESSION_EXISTS"

    def test_unknown_category(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["session", "start", "nope"])
        assert result.exit_code == 1
        assert "Category not found" in result.output

    def test_pause_resume_stop_persist(self, cli_runner: CliRunner) -> None:
        category_id = make_category(cli_runner)
        code, started = invoke_json(cli_runner, "session", "start", category_id)
        session_id = started["data"]["id"]

        code, paused = invoke_json(cli_runner, "session", "pause")
        assert code == 0
        assert paused["data"]["state"] == "paused"

        code, resumed = invoke_json(cli_runner, "session", "resume", session_id)
        assert code == 0
        assert resumed["data"]["state"] == "active"

        code, shown = invoke_json(cli_runner, "session", "show", session_id)
        assert code == 0
        assert shown["data"]["id"] == session_id
        assert shown["data"]["active_segment"] is not None

    def test_list_with_state_filter(self, cli_runner: CliRunner) -> None:
        category_id = make_category(cli_runner)
        cli_runner.invoke(cli, ["session", "start", category_id])
        code, listed = invoke_json(cli_runner, "session", "list", "--state", "active")
        assert code == 0
        assert listed["data"]["count"] == 1
        code, listed = invoke_json(cli_runner, "session", "list", "--state", "stopped")
        assert listed["data"]["count"] == 0

    def test_list_rejects_unknown_state(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["session", "list", "--state", "archived"])
        assert result.exit_code == 2

    def test_stats(self, cli_runner: CliRunner) -> None:
        category_id = make_category(cli_runner)
        cli_runner.invoke(cli, ["session", "start", category_id])
        code, data = invoke_json(cli_runner, "session", "stats")
        assert code == 0
        assert data["data"]["total_sessions"] == 1
        assert data["data"]["active_sessions"] == 1

    def test_status_without_session(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["session", "status"])
        assert result.exit_code == 1

    def test_show_missing(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["session", "show", "nope"])
        assert result.exit_code == 1
        assert "Session not found" in result.output
