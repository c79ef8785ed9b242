"""
macOS system configuration: default handlers and shell environment.
"""

import logging
from pathlib import Path

from freshbox.installer.commands import CommandRunner, run_checked, run_command
from freshbox.storage.paths import get_zshrc_path

logger = logging.getLogger(__name__)

LAUNCH_SERVICES_DOMAIN = "com.apple.LaunchServices/com.apple.launchservices.secure"

CHROME_BUNDLE_ID = "com.google.chrome"
ZED_BUNDLE_ID = "dev.zed.Zed"
IINA_BUNDLE_ID = "com.colliderli.iina"

JAVA_HOME_EXPORT = "export JAVA_HOME=$(/usr/libexec/java_home)"


def add_launch_services_handler(
    role_all: str,
    scheme: str | None = None,
    content_type: str | None = None,
    runner: CommandRunner = run_command,
) -> None:
    """
    Register an app as the handler for a URL scheme or a content type.

    Exactly one of ``scheme`` or ``content_type`` must be given.
    """
    if (scheme is None) == (content_type is None):
        raise ValueError("Pass exactly one of scheme or content_type")

    if scheme is not None:
        entry = f'{{LSHandlerURLScheme="{scheme}";LSHandlerRoleAll="{role_all}";}}'
    else:
        entry = f'{{LSHandlerContentType="{content_type}";LSHandlerRoleAll="{role_all}";}}'

    run_checked(
        "defaults", "write", LAUNCH_SERVICES_DOMAIN, "LSHandlers", "-array-add", entry,
        runner=runner,
    )


def set_default_browser(runner: CommandRunner = run_command) -> None:
    for scheme in ("http", "https"):
        add_launch_services_handler(CHROME_BUNDLE_ID, scheme=scheme, runner=runner)


def set_default_editor(runner: CommandRunner = run_command) -> None:
    add_launch_services_handler(ZED_BUNDLE_ID, content_type="public.plain-text", runner=runner)


def set_default_player(runner: CommandRunner = run_command) -> None:
    for content_type in ("public.movie", "public.video", "public.audio"):
        add_launch_services_handler(IINA_BUNDLE_ID, content_type=content_type, runner=runner)


def set_java_home(zshrc: Path | None = None) -> bool:
    """
    Append the JAVA_HOME export to ~/.zshrc.

    Returns:
        True if the line was added, False if it was already present.
    """
    zshrc = zshrc or get_zshrc_path()
    existing = zshrc.read_text(encoding="utf-8") if zshrc.exists() else ""
    if JAVA_HOME_EXPORT in existing:
        logger.info(f"JAVA_HOME already configured in {zshrc}")
        return False

    prefix = "" if not existing or existing.endswith("\n") else "\n"
    with open(zshrc, "a", encoding="utf-8") as f:
        f.write(f"{prefix}{JAVA_HOME_EXPORT}\n")
    return True
