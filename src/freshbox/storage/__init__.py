"""Storage utilities for freshbox."""

from freshbox.storage.paths import (
    ensure_directory,
    get_app_log_path,
    get_claude_settings_path,
    get_codex_auth_path,
    get_codex_config_path,
    get_developer_dir,
    get_freshbox_home,
    get_install_log_path,
    get_settings_path,
)

__all__ = [
    "ensure_directory",
    "get_app_log_path",
    "get_claude_settings_path",
    "get_codex_auth_path",
    "get_codex_config_path",
    "get_developer_dir",
    "get_freshbox_home",
    "get_install_log_path",
    "get_settings_path",
]
