"""CLI command groups."""

from freshbox.cli.commands import check, config, log

__all__ = ["check", "config", "log"]
