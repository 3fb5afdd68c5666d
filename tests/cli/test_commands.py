"""Unit tests for CLI commands.

Uses click's CliRunner. Commands that talk to the service have
api_request patched; file-based commands run against tmp_path.
"""

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from privacy_guard import __version__
from privacy_guard.cli import cli
from privacy_guard.config import AppConfig
from privacy_guard.pdp import create_default_policy
from privacy_guard.utils.policy import save_policy


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def policy_file(tmp_path):
    path = tmp_path / "policy.json"
    save_policy(create_default_policy(), path)
    return path


# =============================================================================
# Top-level group
# =============================================================================


class TestMain:
    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_lists_commands(self, runner):
        result = runner.invoke(cli, ["-h"])

        for command in ("init", "serve", "policy", "evaluate", "cache", "benchmark"):
            assert command in result.output


# =============================================================================
# init
# =============================================================================


class TestInit:
    @pytest.fixture
    def paths(self, tmp_path):
        config_path = tmp_path / "cfg" / "privacy_guard_config.json"
        policy_path = tmp_path / "cfg" / "policy.json"
        with (
            patch("privacy_guard.cli.commands.init.get_config_path", return_value=config_path),
            patch("privacy_guard.cli.commands.init.get_policy_path", return_value=policy_path),
        ):
            yield config_path, policy_path

    def test_writes_config_and_policy(self, runner, tmp_path, paths):
        config_path, policy_path = paths

        result = runner.invoke(cli, ["init", "--log-dir", str(tmp_path / "logs"), "--port", "4000"])

        assert result.exit_code == 0, result.output
        config = AppConfig.load_from_files(config_path)
        assert config.api.port == 4000
        assert policy_path.exists()
        assert "(v1)" in result.output
        history = config.logging.policy_history_path.read_text().splitlines()
        assert json.loads(history[0])["event"] == "policy_created"

    def test_refuses_existing_config(self, runner, tmp_path, paths):
        runner.invoke(cli, ["init", "--log-dir", str(tmp_path)])

        result = runner.invoke(cli, ["init", "--log-dir", str(tmp_path)])

        assert result.exit_code == 1
        assert "--force" in result.output

    def test_force_bumps_policy_version(self, runner, tmp_path, paths):
        runner.invoke(cli, ["init", "--log-dir", str(tmp_path)])

        result = runner.invoke(cli, ["init", "--log-dir", str(tmp_path), "--force"])

        assert result.exit_code == 0
        assert "(v2)" in result.output

    def test_keeps_existing_policy(self, runner, tmp_path, paths):
        config_path, policy_path = paths
        save_policy(create_default_policy(), policy_path)

        result = runner.invoke(cli, ["init", "--log-dir", str(tmp_path)])

        assert result.exit_code == 0
        assert "Keeping existing policy" in result.output


# =============================================================================
# policy
# =============================================================================


class TestPolicy:
    def test_validate_ok(self, runner, policy_file):
        result = runner.invoke(cli, ["policy", "validate", "--path", str(policy_file)])

        assert result.exit_code == 0
        assert "✓" in result.output
        assert "15 attributes" in result.output
        assert "7 purposes" in result.output

    def test_validate_malformed(self, runner, policy_file):
        data = json.loads(policy_file.read_text())
        data["purposes"].append({"id": "admin", "name": "Duplicate"})
        policy_file.write_text(json.dumps(data))

        result = runner.invoke(cli, ["policy", "validate", "--path", str(policy_file)])

        assert result.exit_code == 1
        assert "Duplicate" in result.output

    def test_show_indents_children(self, runner, policy_file):
        result = runner.invoke(cli, ["policy", "show", "--path", str(policy_file)])

        assert result.exit_code == 0
        assert "  location (Location) [" in result.output
        assert "    gps (GPS) [" in result.output

    def test_show_json(self, runner, policy_file):
        result = runner.invoke(cli, ["policy", "show", "--path", str(policy_file), "--json"])

        data = json.loads(result.output)
        assert data["attributes"][0]["left"] == 1
        assert {n["id"] for n in data["purposes"]} >= {"analytics", "marketing"}


# =============================================================================
# evaluate / cache (service commands)
# =============================================================================


class TestServiceCommands:
    def test_evaluate_prints_decision(self, runner):
        response = {"result": "grant", "cache_hit": True, "latency_ms": 0.12, "service": "default"}

        with patch("privacy_guard.cli.commands.evaluate.api_request", return_value=response) as mock_req:
            result = runner.invoke(cli, ["evaluate", "app-1", "user-1"])

        assert result.exit_code == 0
        assert "GRANT" in result.output
        assert "Cache hit: yes" in result.output
        mock_req.assert_called_once_with(
            "POST", "/api/evaluate", json_data={"app_id": "app-1", "user_id": "user-1"}
        )

    def test_evaluate_json(self, runner):
        response = {"result": "deny", "cache_hit": False}

        with patch("privacy_guard.cli.commands.evaluate.api_request", return_value=response):
            result = runner.invoke(cli, ["evaluate", "a", "u", "--json"])

        assert json.loads(result.output) == response

    def test_cache_stats(self, runner):
        stats = {"service": "default", "total_entries": 4, "grant_count": 3, "deny_count": 1}

        with patch("privacy_guard.cli.commands.cache.api_request", return_value=stats):
            result = runner.invoke(cli, ["cache", "stats"])

        assert "Entries: 4" in result.output
        assert "Deny: 1" in result.output

    def test_cache_clear_aborts_without_confirmation(self, runner):
        with patch("privacy_guard.cli.commands.cache.api_request") as mock_req:
            result = runner.invoke(cli, ["cache", "clear"], input="n\n")

        assert "Aborted" in result.output
        mock_req.assert_not_called()

    def test_cache_clear_yes(self, runner):
        with patch(
            "privacy_guard.cli.commands.cache.api_request",
            return_value={"deleted_count": 2},
        ) as mock_req:
            result = runner.invoke(cli, ["cache", "clear", "-y"])

        assert "Cleared 2" in result.output
        mock_req.assert_called_once_with("DELETE", "/api/cache")


# =============================================================================
# benchmark
# =============================================================================


class TestBenchmark:
    def test_table(self, runner):
        result = runner.invoke(cli, ["benchmark", "-n", "5"])

        assert result.exit_code == 0
        for scenario in ("cache_hit", "cache_miss", "no_cache", "flat"):
            assert scenario in result.output

    def test_json(self, runner):
        result = runner.invoke(cli, ["benchmark", "-n", "2", "--json"])

        rows = json.loads(result.output)
        assert [r["result"] for r in rows] == ["grant", "grant", "grant", "deny"]
        assert {"mean", "p50", "p95", "p99"} <= rows[0].keys()

    def test_rejects_zero_iterations(self, runner):
        result = runner.invoke(cli, ["benchmark", "-n", "0"])

        assert result.exit_code != 0
