"""
Unit tests for CLI commands.
"""

import json

import pytest
import yaml
from typer.testing import CliRunner

from freshbox import __version__
from freshbox.checker.probe import ProbeResult
from freshbox.cli import app as app_module
from freshbox.cli.app import app
from freshbox.cli.commands import check as check_module
from freshbox.install.log import InstallLog
from freshbox.install.models import InstallOutcome
from freshbox.storage.paths import get_settings_path


@pytest.fixture(autouse=True)
def isolated(mock_home, monkeypatch):
    """Keep CLI runs away from the real home directory and root logger."""
    monkeypatch.setattr(app_module, "setup_logging", lambda *args, **kwargs: None)
    return mock_home


def test_version(cli_runner: CliRunner) -> None:
    """Test --version flag."""
    result = cli_runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_help(cli_runner: CliRunner) -> None:
    """Test --help flag."""
    result = cli_runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "freshbox" in result.stdout
    assert "check" in result.stdout
    assert "config" in result.stdout


def test_no_subcommand_launches_wizard(cli_runner: CliRunner, monkeypatch) -> None:
    """Running without a subcommand starts the wizard."""
    launched = []
    monkeypatch.setattr(app_module, "_launch_wizard", lambda: launched.append(True))

    result = cli_runner.invoke(app, [])
    assert result.exit_code == 0
    assert launched == [True]


def test_invalid_settings_exit(cli_runner: CliRunner) -> None:
    """A broken settings file is reported before anything runs."""
    path = get_settings_path()
    path.parent.mkdir(parents=True)
    path.write_text("install: [unclosed")

    result = cli_runner.invoke(app, ["check"])
    assert result.exit_code == 1
    assert "Configuration error" in result.stdout


# =============================================================================
# check
# =============================================================================


def _fake_probe_all(items, runner=None):
    return {item.name: ProbeResult(installed=item.name == "Git", version="2.44.0") for item in items}


def test_check_table(cli_runner: CliRunner, monkeypatch) -> None:
    monkeypatch.setattr(check_module, "probe_all", _fake_probe_all)

    result = cli_runner.invoke(app, ["check"])
    assert result.exit_code == 0
    assert "Git" in result.stdout
    assert "installed" in result.stdout
    assert "missing" in result.stdout


def test_check_json(cli_runner: CliRunner, monkeypatch) -> None:
    monkeypatch.setattr(check_module, "probe_all", _fake_probe_all)

    result = cli_runner.invoke(app, ["check", "--json"])
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["Git"] == {"category": "dev", "installed": True, "version": "2.44.0"}
    assert data["Go"]["installed"] is False


# =============================================================================
# log
# =============================================================================


def test_log_missing(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(app, ["log"])
    assert result.exit_code == 0
    assert "No install log" in result.stdout


def test_log_tail(cli_runner: CliRunner) -> None:
    log = InstallLog()
    for name in ("one", "two", "three"):
        log.record(InstallOutcome(name, True))
    log.record(InstallOutcome("four", False, "boom"))

    result = cli_runner.invoke(app, ["log", "--lines", "3"])
    assert result.exit_code == 0
    assert "one" not in result.stdout
    assert "three" in result.stdout
    assert "[FAIL] four" in result.stdout
    assert "boom" in result.stdout


# =============================================================================
# config
# =============================================================================


def test_config_path(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(app, ["config", "path"])
    assert result.exit_code == 0
    assert "config.yaml" in result.stdout


def test_config_show(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(app, ["config", "show"])
    assert result.exit_code == 0
    assert "history_limit" in result.stdout


def test_config_init_and_set(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(app, ["config", "init"])
    assert result.exit_code == 0
    assert get_settings_path().exists()

    result = cli_runner.invoke(app, ["config", "init"])
    assert result.exit_code == 1

    result = cli_runner.invoke(app, ["config", "set", "install.history_limit", "4"])
    assert result.exit_code == 0
    data = yaml.safe_load(get_settings_path().read_text())
    assert data["install"]["history_limit"] == 4


def test_config_set_invalid(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(app, ["config", "set", "wizard.language", "fr"])
    assert result.exit_code == 1
    assert not get_settings_path().exists()


def test_config_get(cli_runner: CliRunner, monkeypatch) -> None:
    monkeypatch.setenv("FRESHBOX_INSTALL_HISTORY_LIMIT", "7")

    result = cli_runner.invoke(app, ["config", "get", "install.history_limit"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "7"

    result = cli_runner.invoke(app, ["config", "get", "wizard.language"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "null"

    result = cli_runner.invoke(app, ["config", "get", "wizard"])
    assert result.exit_code == 0
    assert "preselect" in result.stdout


def test_config_get_unknown_key(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(app, ["config", "get", "install.nope"])
    assert result.exit_code == 1
    assert "Unknown setting" in result.stdout
