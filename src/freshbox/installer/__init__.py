"""Thin wrappers around the external programs freshbox drives."""

from freshbox.installer.commands import CommandResult, CommandRunner, run_checked, run_command
from freshbox.installer.exceptions import (
    CommandError,
    ConfigWriteError,
    InstallError,
    McpRegistrationError,
    SetupError,
)

__all__ = [
    "CommandError",
    "CommandResult",
    "CommandRunner",
    "ConfigWriteError",
    "InstallError",
    "McpRegistrationError",
    "SetupError",
    "run_checked",
    "run_command",
]
