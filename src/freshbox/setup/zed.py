"""
Zed editor: Catppuccin Blur theme with a blue tint.
"""

import copy
import json
import logging
import tempfile
from pathlib import Path
from typing import Any

from freshbox.config.merger import dump_document, strip_json_comments
from freshbox.installer.commands import CommandRunner, run_checked, run_command
from freshbox.installer.exceptions import SetupError
from freshbox.storage.paths import ensure_directory, get_zed_config_dir

logger = logging.getLogger(__name__)

THEME_REPO = "https://github.com/jenslys/zed-catppuccin-blur.git"
THEME_FILE = "catppuccin-blur.json"

LIGHT_THEME = "Catppuccin Latte (Blur) [Light]"
DARK_THEME = "Catppuccin Mocha (Blur) [Light]"

THEME_SETTING = {"mode": "system", "light": LIGHT_THEME, "dark": DARK_THEME}

TINTS: dict[str, dict[str, str]] = {
    LIGHT_THEME: {
        "elevated_surface.background": "#e8f0ff",
        "surface.background": "#e8f0ffc8",
        "background": "#e8f0ffd0",
        "status_bar.background": "#e8f0ffd0",
        "title_bar.background": "#e8f0ffd0",
        "tab.active_background": "#e8f0ffc0",
        "ghost_element.background": "#e8f0ff90",
        "ghost_element.hover": "#e8f0ffc0",
        "panel.overlay_background": "#e8f0ff",
    },
    DARK_THEME: {
        "elevated_surface.background": "#161a28",
        "surface.background": "#181c2ec8",
        "background": "#181c2ed0",
        "status_bar.background": "#181c2ed0",
        "title_bar.background": "#181c2ed0",
        "title_bar.inactive_background": "#151928",
        "tab.active_background": "#161a28c0",
        "ghost_element.background": "#161a2890",
        "ghost_element.hover": "#161a28c0",
        "panel.overlay_background": "#181c2e",
    },
}

# Alpha bumps for the remaining [Light] variants.
OPACITY_MAP = {"99": "d0", "8c": "c8", "90": "c0", "60": "90"}
BACKGROUND_KEYS = (
    "background",
    "surface.background",
    "status_bar.background",
    "title_bar.background",
    "tab.active_background",
    "ghost_element.background",
    "ghost_element.hover",
)


def apply_blue_tint(theme_family: dict[str, Any]) -> dict[str, Any]:
    """
    Tint the Latte/Mocha blur variants blue and raise opacity on the others.

    Only keys already present in a theme's style are changed.
    """
    result = copy.deepcopy(theme_family)

    for theme in result.get("themes", []):
        name = theme.get("name", "")
        style = theme.get("style", {})

        if name in TINTS:
            for key, value in TINTS[name].items():
                if key in style:
                    style[key] = value
            continue

        if not name.endswith("[Light]"):
            continue
        for key in BACKGROUND_KEYS:
            value = style.get(key)
            if isinstance(value, str) and len(value) == 9 and value.startswith("#"):
                alpha = value[7:9]
                if alpha in OPACITY_MAP:
                    style[key] = value[:7] + OPACITY_MAP[alpha]

    return result


def set_theme_setting(settings_path: Path) -> None:
    """
    Point Zed's ``theme`` setting at the blur variants.

    Zed's settings allow ``//`` comments and trailing commas; those are
    stripped before parsing. Comments are not preserved on write.

    Raises:
        SetupError: If an existing settings file cannot be parsed.
    """
    if not settings_path.exists():
        ensure_directory(settings_path.parent)
        settings_path.write_text(dump_document({"theme": THEME_SETTING}), encoding="utf-8")
        return

    content = strip_json_comments(settings_path.read_text(encoding="utf-8"))
    try:
        settings = json.loads(content) if content.strip() else {}
    except json.JSONDecodeError as e:
        raise SetupError(f"Cannot parse {settings_path}: {e}") from e
    if not isinstance(settings, dict):
        raise SetupError(f"Unexpected content in {settings_path}")

    settings["theme"] = dict(THEME_SETTING)
    settings_path.write_text(dump_document(settings), encoding="utf-8")


def setup_zed_theme(runner: CommandRunner = run_command, zed_dir: Path | None = None) -> None:
    """Clone the theme, tint it, install it and select it in Zed settings."""
    zed_dir = zed_dir or get_zed_config_dir()
    theme_dir = ensure_directory(zed_dir / "themes")

    with tempfile.TemporaryDirectory(prefix="zed-theme-") as tmp:
        checkout = Path(tmp) / "repo"
        run_checked("git", "clone", "--depth", "1", "--quiet", THEME_REPO, str(checkout), runner=runner)

        source = checkout / "themes" / THEME_FILE
        try:
            family = json.loads(source.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise SetupError(f"Cannot read theme {source}: {e}") from e

    target = theme_dir / THEME_FILE
    target.write_text(dump_document(apply_blue_tint(family)), encoding="utf-8")
    logger.info(f"Installed Zed theme to {target}")

    set_theme_setting(zed_dir / "settings.json")
