"""
Install queue building.

``build_queue`` turns a selection snapshot and probe results into an ordered
list of tasks. It runs nothing: every task action is a partial over values
copied out of the snapshot, so later wizard changes cannot leak into a queue.
"""

import logging
import re
from functools import partial

from freshbox.checker.catalog import (
    CLAUDE_CODE,
    CODEX,
    HOMEBREW,
    JAVA,
    RUST,
    Catalog,
    CatalogItem,
)
from freshbox.checker.probe import ProbeResults, is_installed
from freshbox.config.schema import ClaudeConfig, CodexConfig, MCPServer
from freshbox.config.writers import (
    write_claude_settings,
    write_codex_auth,
    write_codex_config,
    write_mcp_config,
)
from freshbox.install.models import InstallTask
from freshbox.installer import packages, system
from freshbox.setup import setup_dev_workspace, setup_karabiner, setup_kaku, setup_zed_theme
from freshbox.wizard.selections import Extra, SelectionSet, Selections, SystemDefault

logger = logging.getLogger(__name__)

# Items installed by something other than `brew install <brew_name>`.
CUSTOM_INSTALLERS = {
    HOMEBREW: packages.install_homebrew,
    RUST: packages.install_rust,
}

AI_TOOL_TASKS = {
    CODEX: ("Codex CLI", packages.CODEX_NPM_PACKAGE),
    CLAUDE_CODE: ("Claude Code", packages.CLAUDE_CODE_NPM_PACKAGE),
}

SYSTEM_DEFAULT_TASKS = {
    SystemDefault.BROWSER_CHROME: ("Set default browser → Chrome", system.set_default_browser),
    SystemDefault.EDITOR_ZED: ("Set default editor → Zed", system.set_default_editor),
    SystemDefault.PLAYER_IINA: ("Set default player → IINA", system.set_default_player),
}

EXTRA_TASKS = {
    Extra.ZED_THEME: ("Zed Catppuccin Blur Theme", setup_zed_theme),
    Extra.KAKU_INIT: ("Kaku Terminal Setup (config + zsh plugins)", setup_kaku),
    Extra.KARABINER_KAKU: ("Karabiner ⌃⌥⌘T → Kaku shortcut", setup_karabiner),
    Extra.DEV_WORKSPACE: ("Developer Workspace + Finder config", setup_dev_workspace),
}


def _pending(items: tuple[CatalogItem, ...], selected: SelectionSet, probe_results: ProbeResults):
    """Selected items that are not installed yet, in catalog order."""
    for item in items:
        if item.name in selected and not is_installed(probe_results, item.name):
            yield item


def _brew_task(item: CatalogItem) -> InstallTask | None:
    if not item.brew_name:
        logger.warning(f"No Homebrew name for {item.name}, skipping install task")
        return None
    return InstallTask(item.name, partial(packages.brew_install, item.brew_name, item.cask))


def _version_key(version: str) -> tuple[int, ...]:
    return tuple(int(part) for part in re.findall(r"\d+", version))


def _write_codex(config: CodexConfig) -> None:
    write_codex_config(config)
    write_codex_auth(config)


def _tool_ready(name: str, selections: Selections, configured: bool, probe_results: ProbeResults) -> bool:
    """MCP servers are registered with a tool that is selected, configured or present."""
    return name in selections.ai_tools or configured or is_installed(probe_results, name)


def build_queue(
    selections: Selections,
    probe_results: ProbeResults,
    catalog: Catalog | None = None,
    mcp_startup_timeout: int = 60,
) -> list[InstallTask]:
    """
    Build the ordered install queue.

    Order: Homebrew, other dev tools, apps, AI CLIs, Node.js versions, AI
    tool config writes, MCP registrations, system default handlers,
    JAVA_HOME, extras. Installed items get no install task but still count
    for later configuration steps.

    Args:
        selections: Snapshot of the wizard's selections.
        probe_results: Probe results keyed by item name.
        catalog: Item catalog. Defaults to the built-in catalog.
        mcp_startup_timeout: ``startup_timeout_sec`` written for Codex MCP servers.

    Returns:
        Tasks in execution order. Empty if nothing was selected.
    """
    catalog = catalog or Catalog()
    queue: list[InstallTask] = []

    # Package manager first: everything below may need brew.
    tools = list(_pending(catalog.dev_tools, selections.tools, probe_results))
    tools.sort(key=lambda item: item.name != HOMEBREW)
    for item in tools:
        installer = CUSTOM_INSTALLERS.get(item.name)
        task = InstallTask(item.name, installer) if installer else _brew_task(item)
        if task is not None:
            queue.append(task)

    for item in _pending(catalog.apps, selections.apps, probe_results):
        task = _brew_task(item)
        if task is not None:
            queue.append(task)

    for item in _pending(catalog.ai_tools, selections.ai_tools, probe_results):
        if item.name in AI_TOOL_TASKS:
            name, package = AI_TOOL_TASKS[item.name]
            queue.append(InstallTask(name, partial(packages.npm_install_global, package)))

    for version in sorted(selections.node_versions, key=_version_key, reverse=True):
        queue.append(
            InstallTask(f"Node.js {version}", partial(packages.fnm_install_node, version))
        )

    codex: CodexConfig = selections.codex
    claude: ClaudeConfig = selections.claude
    if codex.is_configured():
        queue.append(InstallTask("Codex config (config.toml + auth.json)", partial(_write_codex, codex)))
    if claude.is_configured():
        queue.append(InstallTask("Claude Code config", partial(write_claude_settings, claude)))

    servers: list[MCPServer] = [s for s in catalog.mcp_servers if s.name in selections.mcp_servers]
    if servers:
        if _tool_ready(CLAUDE_CODE, selections, claude.is_configured(), probe_results):
            queue.append(
                InstallTask(
                    "MCP servers for Claude Code",
                    partial(write_mcp_config, list(servers), "claude", mcp_startup_timeout),
                )
            )
        if _tool_ready(CODEX, selections, codex.is_configured(), probe_results):
            queue.append(
                InstallTask(
                    "MCP servers for Codex",
                    partial(write_mcp_config, list(servers), "codex", mcp_startup_timeout),
                )
            )

    for default, (name, action) in SYSTEM_DEFAULT_TASKS.items():
        if default in selections.system_defaults:
            queue.append(InstallTask(name, action))

    if JAVA in selections.tools:
        queue.append(InstallTask("Configure JAVA_HOME", system.set_java_home))

    for extra, (name, action) in EXTRA_TASKS.items():
        if extra in selections.extras:
            queue.append(InstallTask(name, action))

    logger.info(f"Built install queue with {len(queue)} task(s)")
    return queue
