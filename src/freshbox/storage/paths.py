"""
Path utilities for freshbox.

Resolves freshbox's own files (settings, logs) and the locations of the
third-party config files it writes into.
"""

import os
from pathlib import Path


def get_freshbox_home() -> Path:
    """
    Get the freshbox home directory.

    Resolution order:
    1. FRESHBOX_HOME environment variable
    2. Default: ~/.freshbox

    Returns:
        Path to the freshbox home directory.
    """
    env_home = os.environ.get("FRESHBOX_HOME")
    if env_home:
        return Path(env_home).expanduser().resolve()
    return Path.home() / ".freshbox"


def get_settings_path() -> Path:
    """
    Get the path to the freshbox settings file.

    Returns:
        Path to ~/.freshbox/config.yaml
    """
    return get_freshbox_home() / "config.yaml"


def get_install_log_path() -> Path:
    """
    Get the path to the durable install log.

    Returns:
        Path to ~/.freshbox/install.log
    """
    return get_freshbox_home() / "install.log"


def get_app_log_path() -> Path:
    """
    Get the path to the diagnostic log written by the logging setup.

    Returns:
        Path to ~/.freshbox/freshbox.log
    """
    return get_freshbox_home() / "freshbox.log"


# =============================================================================
# Third-party config locations
# =============================================================================


def get_codex_config_path() -> Path:
    """Codex CLI config: ~/.codex/config.toml"""
    return Path.home() / ".codex" / "config.toml"


def get_codex_auth_path() -> Path:
    """Codex CLI credentials: ~/.codex/auth.json"""
    return Path.home() / ".codex" / "auth.json"


def get_claude_settings_path() -> Path:
    """Claude Code user settings: ~/.claude/settings.json"""
    return Path.home() / ".claude" / "settings.json"


def get_zshrc_path() -> Path:
    return Path.home() / ".zshrc"


def get_zed_config_dir() -> Path:
    return Path.home() / ".config" / "zed"


def get_kaku_config_dir() -> Path:
    return Path.home() / ".config" / "kaku"


def get_karabiner_config_dir() -> Path:
    return Path.home() / ".config" / "karabiner"


def get_local_bin_dir() -> Path:
    return Path.home() / ".local" / "bin"


def get_developer_dir() -> Path:
    """Developer workspace root: ~/Developer"""
    return Path.home() / "Developer"


def ensure_directory(path: Path, mode: int = 0o755) -> Path:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        path: Directory path to create.
        mode: Permission mode for new directories.

    Returns:
        The directory path.
    """
    path.mkdir(parents=True, exist_ok=True, mode=mode)
    return path
