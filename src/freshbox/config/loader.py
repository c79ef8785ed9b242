"""
Settings loader for freshbox.

Loads settings from, in order (later overrides earlier):
1. Default values
2. ~/.freshbox/config.yaml
3. Environment variables (FRESHBOX_<SECTION>_<KEY>)
"""

import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from freshbox.config.merger import deep_merge, set_nested_value
from freshbox.config.schema import Settings
from freshbox.storage.paths import get_settings_path

ENV_PREFIX = "FRESHBOX_"

# Handled by storage.paths, not a settings key.
_RESERVED_ENV = {"FRESHBOX_HOME"}


class ConfigurationError(Exception):
    """Raised when settings loading or validation fails."""

    pass


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a YAML file.

    Args:
        path: Path to the YAML file.

    Returns:
        Parsed dictionary (empty if the file does not exist).

    Raises:
        ConfigurationError: If the file cannot be read or parsed.
    """
    try:
        with open(path, encoding="utf-8") as f:
            content = yaml.safe_load(f)
    except FileNotFoundError:
        return {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read {path}: {e}") from e

    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ConfigurationError(f"Expected a mapping at the top of {path}")
    return content


def save_yaml_file(path: Path, data: dict[str, Any]) -> None:
    """
    Save a dictionary to a YAML file.

    Raises:
        ConfigurationError: If the file cannot be written.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)
    except OSError as e:
        raise ConfigurationError(f"Cannot write {path}: {e}") from e


def apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """
    Apply environment variable overrides.

    ``FRESHBOX_INSTALL_HISTORY_LIMIT=5`` sets ``install.history_limit``: the
    first segment after the prefix names the section, the rest is the key.
    """
    for name, value in os.environ.items():
        if not name.startswith(ENV_PREFIX) or name in _RESERVED_ENV:
            continue

        remainder = name[len(ENV_PREFIX) :].lower()
        if "_" not in remainder:
            continue
        section, key = remainder.split("_", 1)
        data = set_nested_value(data, f"{section}.{key}", parse_value(value))

    return data


def parse_value(value: str) -> Any:
    """Parse an environment value to bool, int, float or string."""
    if value.lower() in ("true", "yes", "on"):
        return True
    if value.lower() in ("false", "no", "off"):
        return False

    if re.match(r"^-?\d+$", value):
        return int(value)

    if re.match(r"^-?\d+\.\d+$", value):
        return float(value)

    return value


def load_settings(path: Path | None = None, skip_env: bool = False) -> Settings:
    """
    Load and validate settings.

    Args:
        path: Settings file. Defaults to ~/.freshbox/config.yaml.
        skip_env: Skip environment variable overrides.

    Returns:
        Validated Settings.

    Raises:
        ConfigurationError: If the file or the resulting values are invalid.
    """
    data = Settings().model_dump()
    data = deep_merge(data, load_yaml_file(path or get_settings_path()))

    if not skip_env:
        data = apply_env_overrides(data)

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Settings validation failed: {e}") from e


_cached_settings: Settings | None = None


def get_settings(reload: bool = False) -> Settings:
    """Get the cached settings instance, loading on first use."""
    global _cached_settings

    if _cached_settings is None or reload:
        _cached_settings = load_settings()

    return _cached_settings


def clear_settings_cache() -> None:
    """Clear the cached settings."""
    global _cached_settings
    _cached_settings = None
