"""
Config writers for the AI tools freshbox sets up.

Each writer reads the current file, merges only the keys freshbox owns, and
writes the result back. Anything else in the file is left as it was.
"""

import logging
import os
from pathlib import Path

from freshbox.config.merger import (
    DocumentPatch,
    SectionRewrite,
    dump_document,
    ensure_section_key,
    merge_document,
    merge_line_config,
    parse_document,
    render_assignment,
    render_lines,
    split_lines,
)
from freshbox.config.schema import ClaudeConfig, CodexConfig, MCPServer
from freshbox.installer.commands import CommandRunner, run_command
from freshbox.installer.exceptions import ConfigWriteError, McpRegistrationError
from freshbox.storage.paths import (
    get_claude_settings_path,
    get_codex_auth_path,
    get_codex_config_path,
)

logger = logging.getLogger(__name__)

CODEX_PROVIDER_NAME = "freshbox"
CODEX_MCP_SECTION_PREFIX = "mcp_servers."


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return ""
    except OSError as e:
        raise ConfigWriteError(f"Cannot read {path}: {e}") from e


def _write_text(path: Path, content: str, mode: int) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        os.chmod(path, mode)
    except OSError as e:
        raise ConfigWriteError(f"Cannot write {path}: {e}") from e


# =============================================================================
# Codex
# =============================================================================


def codex_updates(config: CodexConfig) -> tuple[dict[str, str], SectionRewrite | None]:
    """
    Translate Codex page values into top-level updates and a provider section.

    A custom base URL routes Codex through a ``freshbox`` model provider.
    """
    updates: dict[str, str] = {}
    if config.model:
        updates["model"] = config.model
    if config.thinking_level:
        updates["model_reasoning_effort"] = config.thinking_level

    if not config.base_url:
        return updates, None

    updates["model_provider"] = CODEX_PROVIDER_NAME
    provider = SectionRewrite(
        name=f"model_providers.{CODEX_PROVIDER_NAME}",
        body=(
            render_assignment("name", "openai"),
            render_assignment("base_url", config.base_url),
            render_assignment("wire_api", "responses"),
            "requires_openai_auth = true",
        ),
    )
    return updates, provider


def write_codex_config(config: CodexConfig, path: Path | None = None) -> Path:
    """
    Merge Codex settings into ``~/.codex/config.toml``.

    Raises:
        ConfigWriteError: If the file cannot be read or written.
    """
    path = path or get_codex_config_path()
    updates, provider = codex_updates(config)

    lines = split_lines(_read_text(path))
    merged = merge_line_config(lines, updates, provider)
    _write_text(path, render_lines(merged), 0o644)

    logger.info(f"Wrote Codex config to {path}")
    return path


def write_codex_auth(config: CodexConfig, path: Path | None = None) -> Path:
    """Merge the Codex API key into ``~/.codex/auth.json`` (mode 0600)."""
    path = path or get_codex_auth_path()
    existing = parse_document(_read_text(path))
    merged = merge_document(existing, DocumentPatch(fields={"api_key": config.api_key}))
    _write_text(path, dump_document(merged), 0o600)
    return path


# =============================================================================
# Claude Code
# =============================================================================


def claude_patch(config: ClaudeConfig) -> DocumentPatch:
    return DocumentPatch(
        fields={"model": config.model},
        map_field="env",
        map_entries={
            "ANTHROPIC_API_KEY": config.api_key,
            "ANTHROPIC_BASE_URL": config.base_url,
        },
    )


def write_claude_settings(config: ClaudeConfig, path: Path | None = None) -> Path:
    """
    Merge model and env settings into ``~/.claude/settings.json`` (mode 0600).

    Other keys (permissions, hooks, other env entries) are preserved. An
    unparseable existing file is treated as empty.
    """
    path = path or get_claude_settings_path()
    existing = parse_document(_read_text(path))
    merged = merge_document(existing, claude_patch(config))
    _write_text(path, dump_document(merged), 0o600)

    logger.info(f"Wrote Claude Code settings to {path}")
    return path


# =============================================================================
# MCP servers
# =============================================================================


def predownload_mcp_packages(
    servers: list[MCPServer], runner: CommandRunner = run_command
) -> list[str]:
    """
    Warm the npm cache for npx-launched servers so first start does not time out.

    Returns:
        Warning messages for packages that could not be fetched.
    """
    warnings: list[str] = []
    for server in servers:
        package = server.package
        if not package:
            continue
        result = runner("npm", "cache", "add", package)
        if not result.success:
            warnings.append(f"{package}: {result.output}")

    if warnings:
        logger.warning(f"MCP pre-download warnings: {'; '.join(warnings)}")
    return warnings


def _register(
    servers: list[MCPServer],
    tool: str,
    scope_args: tuple[str, ...],
    runner: CommandRunner,
) -> list[str]:
    errors: list[str] = []
    for server in servers:
        # Not registered yet is the common case, so the result is ignored.
        runner(tool, "mcp", "remove", *scope_args, server.name)

        result = runner(
            tool, "mcp", "add", *scope_args, server.name, "--", server.command, *server.args
        )
        if not result.success:
            errors.append(f"{server.name}: exit status {result.exit_code} ({result.output})")
    return errors


def register_claude_mcp(servers: list[MCPServer], runner: CommandRunner = run_command) -> None:
    """
    Register MCP servers with Claude Code at user scope.

    Raises:
        McpRegistrationError: If any server fails to register.
    """
    errors = _register(servers, "claude", ("-s", "user"), runner)
    if errors:
        raise McpRegistrationError(
            f"failed to add MCP servers: {'; '.join(errors)}",
            failed_servers=[e.split(":", 1)[0] for e in errors],
        )


def add_codex_mcp_timeout(timeout: int, path: Path | None = None) -> None:
    """Set ``startup_timeout_sec`` in every ``[mcp_servers.*]`` section."""
    path = path or get_codex_config_path()
    if not path.exists():
        raise ConfigWriteError(f"Codex config not found at {path}")

    lines = split_lines(_read_text(path))
    updated = ensure_section_key(
        lines, CODEX_MCP_SECTION_PREFIX, f"startup_timeout_sec = {timeout}"
    )
    _write_text(path, render_lines(updated), 0o644)


def register_codex_mcp(
    servers: list[MCPServer],
    timeout: int = 60,
    runner: CommandRunner = run_command,
    config_path: Path | None = None,
) -> None:
    """
    Register MCP servers with Codex, then give each a startup timeout.

    Raises:
        McpRegistrationError: If any server or the timeout update fails.
    """
    errors = _register(servers, "codex", (), runner)
    failed = [e.split(":", 1)[0] for e in errors]

    try:
        add_codex_mcp_timeout(timeout, config_path)
    except ConfigWriteError as e:
        errors.append(f"timeout config: {e}")

    if errors:
        raise McpRegistrationError(
            f"failed to add MCP servers: {'; '.join(errors)}", failed_servers=failed
        )


def write_mcp_config(
    servers: list[MCPServer],
    target: str,
    timeout: int = 60,
    runner: CommandRunner = run_command,
) -> None:
    """
    Pre-download packages, then register servers with ``claude`` or ``codex``.

    Raises:
        ValueError: For an unknown target.
        McpRegistrationError: If registration fails.
    """
    if target not in ("claude", "codex"):
        raise ValueError(f"Unknown MCP target: {target}")

    predownload_mcp_packages(servers, runner)
    if target == "claude":
        register_claude_mcp(servers, runner)
    else:
        register_codex_mcp(servers, timeout, runner)
