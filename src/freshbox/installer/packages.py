"""
Package installers: Homebrew, npm, fnm and rustup.
"""

import logging

import httpx

from freshbox.installer.commands import CommandRunner, run_checked, run_command

logger = logging.getLogger(__name__)

HOMEBREW_INSTALL_SCRIPT = (
    '/bin/bash -c "$(curl -fsSL https://raw.githubusercontent.com/Homebrew/install/HEAD/install.sh)"'
)
RUSTUP_INSTALL_SCRIPT = "curl --proto '=https' --tlsv1.2 -sSf https://sh.rustup.rs | sh -s -- -y"

CODEX_NPM_PACKAGE = "@openai/codex"
CLAUDE_CODE_NPM_PACKAGE = "@anthropic-ai/claude-code"

NODE_RELEASE_INDEX_URL = "https://nodejs.org/dist/index.json"

# Offered when the release index cannot be fetched.
FALLBACK_NODE_VERSIONS = ["22", "20", "18", "16"]


def brew_install(name: str, cask: bool = False, runner: CommandRunner = run_command) -> None:
    """Install a Homebrew formula or cask."""
    args = ["install"]
    if cask:
        args.append("--cask")
    args.append(name)
    run_checked("brew", *args, runner=runner)


def install_homebrew(runner: CommandRunner = run_command) -> None:
    """Install Homebrew itself via its official install script."""
    run_checked("bash", "-c", HOMEBREW_INSTALL_SCRIPT, runner=runner)


def install_rust(runner: CommandRunner = run_command) -> None:
    """Install the Rust toolchain via rustup, non-interactively."""
    run_checked("bash", "-c", RUSTUP_INSTALL_SCRIPT, runner=runner)


def npm_install_global(package: str, runner: CommandRunner = run_command) -> None:
    run_checked("npm", "install", "-g", package, runner=runner)


def fnm_install_node(version: str, runner: CommandRunner = run_command) -> None:
    """Install a Node.js version (e.g. ``22`` or ``v20.11.1``) with fnm."""
    run_checked("fnm", "install", version, runner=runner)


async def fetch_node_versions(limit: int | None = None, url: str = NODE_RELEASE_INDEX_URL) -> list[str]:
    """
    List released Node.js versions, newest first.

    Reads the Node.js release index, which is the list `fnm list-remote`
    prints, so versions can be offered before fnm itself is installed.

    Args:
        limit: Keep at most this many versions.
        url: Release index URL.

    Returns:
        Version strings (e.g. ``v22.3.0``). Empty if the index cannot be
        fetched or parsed.
    """
    try:
        async with httpx.AsyncClient(timeout=10.0) as client:
            response = await client.get(url)
            response.raise_for_status()
            entries = response.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.info(f"Node.js release index unavailable: {e}")
        return []

    if not isinstance(entries, list):
        logger.info("Node.js release index is not a list")
        return []

    versions = [
        entry["version"]
        for entry in entries
        if isinstance(entry, dict) and isinstance(entry.get("version"), str)
    ]
    if limit is not None:
        versions = versions[:limit]
    return versions
