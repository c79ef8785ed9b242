"""
Capability probe: is a catalog item installed, and which version.

Probing never raises. Anything that goes wrong reads as "not installed".
"""

import logging
import os
import shutil
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from freshbox.checker.catalog import CatalogItem
from freshbox.installer.commands import CommandRunner, run_command

logger = logging.getLogger(__name__)

HOMEBREW_JAVA = "/opt/homebrew/opt/openjdk/bin/java"
CARGO_COMMANDS = {"rustup", "rustc", "cargo"}


@dataclass(frozen=True)
class ProbeResult:
    """Outcome of probing one item."""

    installed: bool
    version: str = ""


NOT_INSTALLED = ProbeResult(installed=False)

ProbeResults = dict[str, ProbeResult]


def _is_file(path: Path | str) -> bool:
    try:
        return os.path.isfile(path)
    except OSError:
        return False


def resolve_command(command: str, home: Path | None = None) -> str | None:
    """
    Locate a command binary.

    Tool-specific locations are checked before the search path, because the
    search path may hold stubs (macOS ships a ``/usr/bin/java`` that fails
    without a JDK).

    Args:
        command: Command name or absolute path.
        home: Home directory for ``~/.cargo/bin``. Defaults to ~.

    Returns:
        Absolute path to the binary, or None.
    """
    home = home or Path.home()
    cargo_path = home / ".cargo" / "bin" / command

    if command in CARGO_COMMANDS and _is_file(cargo_path):
        return str(cargo_path)
    if command == "java" and _is_file(HOMEBREW_JAVA):
        return HOMEBREW_JAVA

    found = shutil.which(command)
    if found:
        return found

    if _is_file(cargo_path):
        return str(cargo_path)
    return None


def _first_line(output: str) -> str:
    output = output.strip()
    return output.splitlines()[0].strip() if output else ""


def probe_command(
    item: CatalogItem, runner: CommandRunner = run_command, home: Path | None = None
) -> ProbeResult:
    """Probe an item by its command binary and version flag."""
    path = resolve_command(item.command, home)
    if path is None:
        return NOT_INSTALLED

    if not item.version_flag:
        return ProbeResult(installed=True)

    result = runner(path, item.version_flag)
    if not result.success:
        logger.debug(f"{item.name}: version query failed, treating as not installed")
        return NOT_INSTALLED
    return ProbeResult(installed=True, version=_first_line(result.output))


def probe_app(item: CatalogItem, runner: CommandRunner = run_command) -> ProbeResult | None:
    """
    Probe a macOS app bundle.

    Returns:
        ProbeResult if the bundle exists, None if it does not.
    """
    if not item.app_bundle or not os.path.isdir(item.app_bundle):
        return None

    result = runner(
        "defaults", "read", f"{item.app_bundle}/Contents/Info.plist", "CFBundleShortVersionString"
    )
    version = _first_line(result.output) if result.success else ""
    return ProbeResult(installed=True, version=version)


def probe_item(
    item: CatalogItem, runner: CommandRunner = run_command, home: Path | None = None
) -> ProbeResult:
    """
    Report whether an item is installed.

    App bundles are checked first; otherwise the command is resolved and its
    version queried.
    """
    try:
        bundle = probe_app(item, runner)
        if bundle is not None:
            return bundle
        return probe_command(item, runner, home)
    except Exception as e:
        logger.debug(f"Probe for {item.name} failed: {e}")
        return NOT_INSTALLED


def probe_all(items: Iterable[CatalogItem], runner: CommandRunner = run_command) -> ProbeResults:
    """Probe every item, keyed by item name."""
    results: ProbeResults = {}
    for item in items:
        results[item.name] = probe_item(item, runner)
        logger.debug(f"Probe {item.name}: {results[item.name]}")
    return results


def is_installed(results: ProbeResults, name: str) -> bool:
    return results.get(name, NOT_INSTALLED).installed
