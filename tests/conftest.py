"""
Pytest configuration and fixtures for freshbox tests.
"""

import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest
from typer.testing import CliRunner

from freshbox.checker.catalog import Catalog
from freshbox.checker.probe import ProbeResult
from freshbox.config.loader import clear_settings_cache
from freshbox.installer.commands import CommandResult


class FakeRunner:
    """
    Command runner that records calls instead of spawning processes.

    Responses are matched by the longest registered prefix of the command;
    unmatched commands succeed with empty output.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, ...]] = []
        self.responses: dict[tuple[str, ...], CommandResult] = {}

    def respond(self, *prefix: str, success: bool = True, output: str = "", exit_code: int | None = None) -> None:
        if exit_code is None:
            exit_code = 0 if success else 1
        self.responses[prefix] = CommandResult(success=success, output=output, exit_code=exit_code)

    def __call__(self, program: str, *args: str, **kwargs) -> CommandResult:
        command = (program, *args)
        self.calls.append(command)
        for prefix in sorted(self.responses, key=len, reverse=True):
            if command[: len(prefix)] == prefix:
                return self.responses[prefix]
        return CommandResult(success=True, output="", exit_code=0)

    def programs(self) -> list[str]:
        return [call[0] for call in self.calls]


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def mock_home(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path, None, None]:
    """Point HOME and FRESHBOX_HOME at a temporary directory."""
    home = temp_dir / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("FRESHBOX_HOME", str(home / ".freshbox"))
    for name in ("FRESHBOX_INSTALL_HISTORY_LIMIT", "FRESHBOX_WIZARD_LANGUAGE", "FRESHBOX_LOGGING_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    clear_settings_cache()

    yield home

    clear_settings_cache()


@pytest.fixture
def fake_runner() -> FakeRunner:
    """Provide a recording command runner."""
    return FakeRunner()


@pytest.fixture
def catalog(temp_dir: Path) -> Catalog:
    """Built-in catalog with the Filesystem MCP server rooted in a temp dir."""
    from freshbox.config.mcp import available_mcp_servers

    return Catalog(mcp_servers=tuple(available_mcp_servers(temp_dir)))


@pytest.fixture
def nothing_installed() -> dict[str, ProbeResult]:
    """Probe results for a fresh machine."""
    return {}


@pytest.fixture
def sample_settings() -> dict:
    """Provide a sample settings dictionary."""
    return {
        "logging": {"level": "DEBUG"},
        "install": {
            "history_limit": 5,
            "error_summary_length": 40,
            "task_delay": 0,
        },
        "wizard": {
            "language": "zh",
            "preselect": False,
        },
    }
