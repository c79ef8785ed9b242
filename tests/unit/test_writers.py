"""
Unit tests for the AI tool config writers.
"""

import json
import stat

import pytest

from freshbox.config.schema import ClaudeConfig, CodexConfig, MCPServer
from freshbox.config.writers import (
    add_codex_mcp_timeout,
    codex_updates,
    predownload_mcp_packages,
    register_claude_mcp,
    register_codex_mcp,
    write_claude_settings,
    write_codex_auth,
    write_codex_config,
    write_mcp_config,
)
from freshbox.installer.exceptions import ConfigWriteError, McpRegistrationError

MEMORY = MCPServer(name="memory", command="npx", args=("-y", "@modelcontextprotocol/server-memory@latest"))
FETCH = MCPServer(name="fetch", command="npx", args=("-y", "@tokenizin/mcp-npx-fetch@latest"))


# =============================================================================
# Codex
# =============================================================================


class TestCodexConfig:
    """Tests for ~/.codex/config.toml and auth.json."""

    def test_updates_without_base_url(self):
        updates, provider = codex_updates(CodexConfig(model="o3", thinking_level="high"))
        assert updates == {"model": "o3", "model_reasoning_effort": "high"}
        assert provider is None

    def test_updates_with_base_url(self):
        updates, provider = codex_updates(CodexConfig(model="o3", base_url="https://proxy/v1"))
        assert updates["model_provider"] == "freshbox"
        assert provider is not None
        assert provider.header == "[model_providers.freshbox]"
        assert 'base_url = "https://proxy/v1"' in provider.body
        assert 'wire_api = "responses"' in provider.body

    def test_write_new_file(self, mock_home):
        path = write_codex_config(CodexConfig(model="o3", thinking_level="low"))

        assert path == mock_home / ".codex" / "config.toml"
        assert path.read_text() == 'model = "o3"\nmodel_reasoning_effort = "low"\n'

    def test_write_preserves_existing_content(self, temp_dir):
        path = temp_dir / "config.toml"
        path.write_text(
            'model = "old"\n'
            'approval_policy = "never"\n'
            "\n"
            "[mcp_servers.memory]\n"
            'command = "npx"\n'
        )
        write_codex_config(CodexConfig(model="new", base_url="https://proxy/v1"), path)
        content = path.read_text()

        assert 'model = "new"' in content
        assert 'model = "old"' not in content
        assert 'approval_policy = "never"' in content
        assert "[mcp_servers.memory]\ncommand = \"npx\"" in content
        assert content.endswith("requires_openai_auth = true\n")

    def test_write_twice_is_stable(self, temp_dir):
        path = temp_dir / "config.toml"
        config = CodexConfig(model="o3", base_url="https://proxy/v1")
        write_codex_config(config, path)
        first = path.read_text()
        write_codex_config(config, path)
        assert path.read_text() == first

    def test_auth_merges_api_key(self, temp_dir):
        path = temp_dir / "auth.json"
        path.write_text('{"tokens": {"id": "abc"}, "api_key": "old"}')

        write_codex_auth(CodexConfig(api_key="sk-new"), path)
        data = json.loads(path.read_text())

        assert data == {"tokens": {"id": "abc"}, "api_key": "sk-new"}
        assert stat.S_IMODE(path.stat().st_mode) == 0o600


# =============================================================================
# Claude Code
# =============================================================================


class TestClaudeSettings:
    """Tests for ~/.claude/settings.json."""

    def test_write_new_file(self, temp_dir):
        path = temp_dir / ".claude" / "settings.json"
        write_claude_settings(ClaudeConfig(model="opus", api_key="sk-ant", base_url="https://api"), path)
        data = json.loads(path.read_text())

        assert data == {
            "model": "opus",
            "env": {"ANTHROPIC_API_KEY": "sk-ant", "ANTHROPIC_BASE_URL": "https://api"},
        }
        assert stat.S_IMODE(path.stat().st_mode) == 0o600

    def test_preserves_other_keys(self, temp_dir):
        path = temp_dir / "settings.json"
        path.write_text(json.dumps({"hooks": {"Stop": []}, "env": {"DEBUG": "1"}}))

        write_claude_settings(ClaudeConfig(api_key="sk-ant"), path)
        data = json.loads(path.read_text())

        assert data["hooks"] == {"Stop": []}
        assert data["env"] == {"DEBUG": "1", "ANTHROPIC_API_KEY": "sk-ant"}
        assert "model" not in data

    def test_invalid_existing_file_is_treated_as_empty(self, temp_dir):
        path = temp_dir / "settings.json"
        path.write_text("{broken")

        write_claude_settings(ClaudeConfig(model="sonnet"), path)
        assert json.loads(path.read_text()) == {"model": "sonnet"}

    def test_unwritable_location_raises(self, temp_dir):
        blocker = temp_dir / "blocker"
        blocker.write_text("")
        with pytest.raises(ConfigWriteError):
            write_claude_settings(ClaudeConfig(model="x"), blocker / "settings.json")


# =============================================================================
# MCP servers
# =============================================================================


class TestMcpRegistration:
    """Tests for MCP server registration via the tools' CLIs."""

    def test_predownload_collects_warnings(self, fake_runner):
        fake_runner.respond("npm", "cache", "add", FETCH.package, success=False, output="404")

        warnings = predownload_mcp_packages([MEMORY, FETCH], fake_runner)

        assert warnings == [f"{FETCH.package}: 404"]
        assert fake_runner.calls[0] == ("npm", "cache", "add", "@modelcontextprotocol/server-memory@latest")

    def test_claude_remove_then_add(self, fake_runner):
        fake_runner.respond("claude", "mcp", "remove", success=False, output="not found")

        register_claude_mcp([MEMORY], fake_runner)

        assert fake_runner.calls == [
            ("claude", "mcp", "remove", "-s", "user", "memory"),
            ("claude", "mcp", "add", "-s", "user", "memory", "--", "npx", "-y",
             "@modelcontextprotocol/server-memory@latest"),
        ]

    def test_claude_failures_are_aggregated(self, fake_runner):
        fake_runner.respond("claude", "mcp", "add", "-s", "user", "fetch", success=False, output="boom")

        with pytest.raises(McpRegistrationError) as exc_info:
            register_claude_mcp([MEMORY, FETCH], fake_runner)

        assert exc_info.value.failed_servers == ["fetch"]
        assert "boom" in str(exc_info.value)

    def test_timeout_added_to_codex_sections(self, temp_dir):
        path = temp_dir / "config.toml"
        path.write_text('model = "o3"\n\n[mcp_servers.memory]\ncommand = "npx"\n')

        add_codex_mcp_timeout(90, path)
        add_codex_mcp_timeout(90, path)

        content = path.read_text()
        assert content.count("startup_timeout_sec = 90") == 1
        assert "[mcp_servers.memory]\nstartup_timeout_sec = 90\n" in content

    def test_timeout_without_config_raises(self, temp_dir):
        with pytest.raises(ConfigWriteError):
            add_codex_mcp_timeout(60, temp_dir / "missing.toml")

    def test_codex_registration(self, fake_runner, temp_dir):
        path = temp_dir / "config.toml"
        path.write_text("[mcp_servers.memory]\ncommand = \"npx\"\n")

        register_codex_mcp([MEMORY], 60, fake_runner, path)

        assert ("codex", "mcp", "remove", "memory") in fake_runner.calls
        assert "startup_timeout_sec = 60" in path.read_text()

    def test_codex_missing_config_is_an_error(self, fake_runner, temp_dir):
        with pytest.raises(McpRegistrationError) as exc_info:
            register_codex_mcp([MEMORY], 60, fake_runner, temp_dir / "missing.toml")
        assert exc_info.value.failed_servers == []

    def test_write_mcp_config_claude(self, fake_runner):
        write_mcp_config([MEMORY], "claude", runner=fake_runner)
        assert fake_runner.programs() == ["npm", "claude", "claude"]

    def test_write_mcp_config_unknown_target(self, fake_runner):
        with pytest.raises(ValueError):
            write_mcp_config([MEMORY], "cursor", runner=fake_runner)
