"""Textual TUI for the setup wizard."""

from freshbox.tui.app import FreshboxApp, run_wizard

__all__ = ["FreshboxApp", "run_wizard"]
