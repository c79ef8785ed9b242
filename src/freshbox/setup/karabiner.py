"""
Karabiner-Elements: Ctrl+Option+Cmd+T opens Kaku in Finder's folder.
"""

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any

from freshbox.config.merger import dump_document
from freshbox.installer.commands import CommandRunner, run_command
from freshbox.installer.exceptions import CommandError
from freshbox.storage.paths import ensure_directory, get_karabiner_config_dir, get_local_bin_dir

logger = logging.getLogger(__name__)

RULE_DESCRIPTION = "Control+Option+Command+T opens Kaku"

OPEN_KAKU_SCRIPT = """\
#!/bin/bash
# Selected folder in Finder, or Finder's current directory
DIR=$(osascript -e '
tell application "System Events"
    set frontApp to name of first application process whose frontmost is true
end tell
if frontApp is "Finder" then
    tell application "Finder"
        try
            set sel to selection
            if (count of sel) > 0 then
                set theItem to item 1 of sel
                if class of theItem is folder or class of theItem is disk then
                    return POSIX path of (theItem as alias)
                else
                    return POSIX path of (container of theItem as alias)
                end if
            else
                return POSIX path of (target of front window as alias)
            end if
        on error
            return POSIX path of (path to home folder)
        end try
    end tell
else
    return ""
end if
' 2>/dev/null)

if [ -n "$DIR" ] && [ -d "$DIR" ]; then
    /opt/homebrew/bin/kaku start --cwd "$DIR"
else
    open /Applications/Kaku.app
fi
"""


def kaku_rule(script_path: Path) -> dict[str, Any]:
    """Complex modification rule launching ``script_path``."""
    return {
        "description": RULE_DESCRIPTION,
        "manipulators": [
            {
                "from": {
                    "key_code": "t",
                    "modifiers": {"mandatory": ["control", "option", "command"]},
                },
                "to": [{"shell_command": str(script_path)}],
                "type": "basic",
            }
        ],
    }


def default_config(rule: dict[str, Any]) -> dict[str, Any]:
    return {
        "global": {"show_in_menu_bar": False},
        "profiles": [
            {
                "complex_modifications": {"rules": [rule]},
                "name": "Default profile",
                "selected": True,
                "virtual_hid_keyboard": {"keyboard_type_v2": "ansi"},
            }
        ],
    }


def merge_rule(config: dict[str, Any], rule: dict[str, Any]) -> dict[str, Any]:
    """
    Add ``rule`` to the selected profile unless a rule with its description exists.

    Other profiles, rules and settings are kept. A config without profiles
    gets the default profile.
    """
    result = copy.deepcopy(config)
    profiles = result.get("profiles")
    if not isinstance(profiles, list) or not profiles:
        result["profiles"] = default_config(rule)["profiles"]
        return result

    profile = next((p for p in profiles if isinstance(p, dict) and p.get("selected")), profiles[0])
    modifications = profile.setdefault("complex_modifications", {})
    rules = modifications.setdefault("rules", [])
    if not any(isinstance(r, dict) and r.get("description") == rule["description"] for r in rules):
        rules.append(rule)
    return result


def setup_karabiner(
    runner: CommandRunner = run_command,
    config_dir: Path | None = None,
    bin_dir: Path | None = None,
) -> Path:
    """
    Install Karabiner-Elements, write the launcher script and add the rule.

    Returns:
        Path to ``karabiner.json``.

    Raises:
        CommandError: If the cask install fails for any reason other than
            already being installed.
    """
    result = runner("brew", "install", "--cask", "karabiner-elements")
    if not result.success and "already installed" not in result.output:
        raise CommandError("brew", ("install", "--cask", "karabiner-elements"), result.exit_code, result.output)

    bin_dir = ensure_directory(bin_dir or get_local_bin_dir())
    script_path = bin_dir / "open-kaku.sh"
    script_path.write_text(OPEN_KAKU_SCRIPT, encoding="utf-8")
    os.chmod(script_path, 0o755)

    config_dir = ensure_directory(config_dir or get_karabiner_config_dir())
    config_path = config_dir / "karabiner.json"
    rule = kaku_rule(script_path)

    config = default_config(rule)
    if config_path.exists():
        try:
            existing = json.loads(config_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning(f"{config_path} is not valid JSON, replacing it")
        else:
            if isinstance(existing, dict):
                config = merge_rule(existing, rule)

    config_path.write_text(dump_document(config, indent=4), encoding="utf-8")
    logger.info(f"Karabiner rule written to {config_path}")
    return config_path
