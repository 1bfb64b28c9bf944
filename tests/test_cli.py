"""
CLI: `fluxor discover` and `fluxor config` through click's CliRunner.
"""

import json

import pytest
from click.testing import CliRunner

from fluxor import __version__
from fluxor.cli.__main__ import cli


@pytest.fixture
def runner():
    return CliRunner()


def _discover_json(runner, *args, env=None):
    result = runner.invoke(cli, ["discover", *args, "--json"], env=env)
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


# ============================================================================
# discover
# ============================================================================

class TestDiscoverCommand:

    def test_json_report(self, runner):
        data = _discover_json(runner, "sample_app.store")

        assert data["lifetime"] == "request"
        assert data["scan_targets"] == ["ScanTarget('sample_app.store')"]
        assert data["effects"] == [
            "sample_app.store.counter.LogCounterEffect",
            "sample_app.store.weather.FetchWeatherEffect",
        ]
        assert data["reducers"][0] == {
            "host": "sample_app.store.counter.CounterReducers",
            "method": "on_increment",
            "action": "Increment",
        }
        assert data["reducers"][1]["action"] is None
        assert len(data["reducers"]) == 4
        assert "sample_app.store.todos.BaseTodoReducers" not in data["registered"]

    def test_singleton_lifetime(self, runner):
        data = _discover_json(runner, "sample_app.store.counter", "--lifetime", "singleton")
        assert data["lifetime"] == "singleton"

    def test_scan_modules_from_environment(self, runner):
        data = _discover_json(runner, env={"FLUXOR_SCAN_MODULES": "sample_app.store.weather"})

        assert data["effects"] == ["sample_app.store.weather.FetchWeatherEffect"]
        assert data["reducers"] == []

    def test_arguments_scanned_before_environment(self, runner):
        data = _discover_json(
            runner,
            "sample_app.store.counter",
            env={"FLUXOR_SCAN_MODULES": "sample_app.store.weather"},
        )

        assert data["scan_targets"] == [
            "ScanTarget('sample_app.store.counter')",
            "ScanTarget('sample_app.store.weather')",
        ]

    def test_env_file(self, runner, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("FLUXOR_LIFETIME=singleton\n")

        data = _discover_json(runner, "sample_app.store.counter", "--env-file", str(env_file))

        assert data["lifetime"] == "singleton"

    def test_nothing_to_scan(self, runner):
        result = runner.invoke(cli, ["discover"])

        assert result.exit_code == 2
        assert "No modules to scan" in result.output

    def test_invalid_config(self, runner):
        result = runner.invoke(cli, ["discover", "x"], env={"FLUXOR_LIFETIME": "forever"})

        assert result.exit_code == 1
        assert "CONFIG_INVALID" in result.output

    @pytest.mark.parametrize("env", [
        {"FLUXOR_LOG_LEVEL": "7"},
        {"FLUXOR_SCAN_MODULES": "1"},
    ])
    def test_numeric_settings_report_fault(self, runner, env):
        result = runner.invoke(cli, ["discover", "sample_app.store"], env=env)

        assert result.exit_code == 1
        assert "CONFIG_INVALID" in result.output
        assert result.exception is None or isinstance(result.exception, SystemExit)

    def test_numeric_log_level_accepted(self, runner):
        data = _discover_json(runner, "sample_app.store.counter", env={"FLUXOR_LOG_LEVEL": "40"})
        assert data["lifetime"] == "request"

    def test_invalid_lifetime_choice(self, runner):
        result = runner.invoke(cli, ["discover", "x", "--lifetime", "transient"])
        assert result.exit_code == 2

    def test_human_report(self, runner):
        result = runner.invoke(cli, ["discover", "sample_app.store"])

        assert result.exit_code == 0
        assert "Fluxor Discovery" in result.output
        assert "sample_app.store.counter.LogCounterEffect" in result.output
        assert "on_add" in result.output
        assert "2 effect(s), 4 reducer(s), 3 host class(es)" in result.output

    def test_human_report_nothing_found(self, runner):
        result = runner.invoke(cli, ["discover", "sample_app.store.missing"])

        assert result.exit_code == 0
        assert "Nothing discovered" in result.output


# ============================================================================
# config / version
# ============================================================================

class TestConfigCommand:

    def test_shows_effective_config(self, runner, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("FLUXOR_SCAN_MODULES=a.store,b.store\n")

        result = runner.invoke(cli, ["config", "--env-file", str(env_file)])

        assert result.exit_code == 0
        assert "a.store, b.store" in result.output
        assert "scoped" in result.output

    def test_invalid_config(self, runner):
        result = runner.invoke(cli, ["config"], env={"FLUXOR_MAX_DEPTH": "-3"})

        assert result.exit_code == 1
        assert "CONFIG_INVALID" in result.output

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output
