"""TUI screens."""

from freshbox.tui.screens.wizard import WizardScreen

__all__ = ["WizardScreen"]
