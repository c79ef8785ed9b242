"""Configuration: freshbox settings and the merge engine for tool config files."""

from freshbox.config.loader import (
    ConfigurationError,
    clear_settings_cache,
    get_settings,
    load_settings,
    load_yaml_file,
    parse_value,
    save_yaml_file,
)
from freshbox.config.merger import (
    DocumentPatch,
    SectionRewrite,
    ensure_section_key,
    get_nested_value,
    merge_document,
    merge_line_config,
    set_nested_value,
)
from freshbox.config.schema import ClaudeConfig, CodexConfig, MCPServer, Settings

__all__ = [
    "ClaudeConfig",
    "CodexConfig",
    "ConfigurationError",
    "DocumentPatch",
    "MCPServer",
    "SectionRewrite",
    "Settings",
    "clear_settings_cache",
    "ensure_section_key",
    "get_nested_value",
    "get_settings",
    "load_settings",
    "load_yaml_file",
    "merge_document",
    "merge_line_config",
    "parse_value",
    "save_yaml_file",
    "set_nested_value",
]
