"""
Unit tests for freshbox settings loading.
"""

import logging
import logging.handlers

import pytest
import yaml

from freshbox.config import (
    ConfigurationError,
    Settings,
    get_settings,
    load_settings,
    load_yaml_file,
    parse_value,
    save_yaml_file,
)
from freshbox.config.loader import apply_env_overrides
from freshbox.config.schema import ClaudeConfig, CodexConfig, MCPServer
from freshbox.logging_config import setup_logging
from freshbox.storage.paths import get_freshbox_home, get_install_log_path, get_settings_path


# =============================================================================
# Schema Tests
# =============================================================================


class TestSettingsSchema:
    """Tests for the Settings pydantic schema."""

    def test_defaults(self):
        settings = Settings()
        assert settings.install.history_limit == 10
        assert settings.install.error_summary_length == 60
        assert settings.install.mcp_startup_timeout == 60
        assert settings.wizard.preselect is True
        assert settings.wizard.language is None
        assert settings.logging.log_to_console is False

    def test_from_dict(self, sample_settings):
        settings = Settings.model_validate(sample_settings)
        assert settings.install.history_limit == 5
        assert settings.wizard.language == "zh"
        assert settings.logging.level == "DEBUG"

    def test_invalid_values_rejected(self):
        with pytest.raises(Exception):
            Settings.model_validate({"install": {"history_limit": 0}})
        with pytest.raises(Exception):
            Settings.model_validate({"wizard": {"language": "fr"}})

    def test_unknown_sections_ignored(self):
        settings = Settings.model_validate({"theme": "dark"})
        assert settings == Settings()


class TestToolConfigModels:
    """Tests for the AI tool config models."""

    def test_codex_is_configured(self):
        assert not CodexConfig(model="o3").is_configured()
        assert CodexConfig(api_key="sk").is_configured()
        assert CodexConfig(base_url="https://proxy").is_configured()

    def test_claude_is_configured(self):
        assert not ClaudeConfig().is_configured()
        assert ClaudeConfig(api_key="sk-ant").is_configured()

    def test_mcp_package(self):
        server = MCPServer(name="pw", args=("-y", "@playwright/mcp@latest", "--headless"))
        assert server.package == "@playwright/mcp@latest"
        assert MCPServer(name="local", command="uvx", args=("tool",)).package is None


# =============================================================================
# Loader Tests
# =============================================================================


class TestLoader:
    """Tests for YAML loading and env overrides."""

    def test_paths_follow_freshbox_home(self, mock_home):
        assert get_freshbox_home() == (mock_home / ".freshbox").resolve()
        assert get_settings_path().name == "config.yaml"
        assert get_install_log_path().parent == get_freshbox_home()

    def test_missing_file_gives_defaults(self, mock_home):
        assert load_settings(skip_env=True) == Settings()

    def test_file_overrides_defaults(self, mock_home, sample_settings):
        save_yaml_file(get_settings_path(), sample_settings)

        settings = load_settings(skip_env=True)
        assert settings.install.history_limit == 5
        assert settings.install.upcoming_preview == 3
        assert settings.wizard.preselect is False

    def test_invalid_yaml(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text("install: [unclosed")
        with pytest.raises(ConfigurationError):
            load_yaml_file(path)

    def test_non_mapping_yaml(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigurationError):
            load_yaml_file(path)

    def test_invalid_values_raise_configuration_error(self, mock_home):
        save_yaml_file(get_settings_path(), {"install": {"history_limit": "many"}})
        with pytest.raises(ConfigurationError):
            load_settings(skip_env=True)

    def test_env_overrides(self, mock_home, monkeypatch):
        monkeypatch.setenv("FRESHBOX_INSTALL_HISTORY_LIMIT", "3")
        monkeypatch.setenv("FRESHBOX_WIZARD_LANGUAGE", "zh")

        settings = load_settings()
        assert settings.install.history_limit == 3
        assert settings.wizard.language == "zh"

    def test_env_home_is_not_a_setting(self, mock_home):
        data = apply_env_overrides({})
        assert "home" not in data

    def test_cached_settings(self, mock_home):
        first = get_settings()
        assert get_settings() is first
        assert get_settings(reload=True) is not first

    def test_saved_file_is_yaml(self, temp_dir):
        path = temp_dir / "nested" / "config.yaml"
        save_yaml_file(path, {"install": {"history_limit": 4}})
        assert yaml.safe_load(path.read_text()) == {"install": {"history_limit": 4}}

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("true", True), ("off", False), ("42", 42), ("-1", -1), ("0.5", 0.5), ("zh", "zh")],
    )
    def test_parse_value(self, raw, expected):
        assert parse_value(raw) == expected


class TestLoggingSetup:
    """Tests for diagnostic logging setup."""

    def test_file_only_by_default(self, temp_dir):
        root = logging.getLogger()
        saved = root.handlers[:], root.level
        try:
            setup_logging(log_path=temp_dir / "freshbox.log")
            assert len(root.handlers) == 1
            assert isinstance(root.handlers[0], logging.handlers.RotatingFileHandler)

            logging.getLogger("freshbox.test").info("hello")
            root.handlers[0].flush()
            assert "freshbox.test: hello" in (temp_dir / "freshbox.log").read_text()
        finally:
            for handler in root.handlers:
                handler.close()
            root.handlers[:] = saved[0]
            root.setLevel(saved[1])
