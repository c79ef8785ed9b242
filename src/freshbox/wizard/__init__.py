"""Wizard state machine: pages, selections, forms and transitions."""

from freshbox.wizard.pages import WizardPage
from freshbox.wizard.selections import Extra, SelectionSet, Selections, SystemDefault
from freshbox.wizard.state import QuitAction, Wizard
from freshbox.wizard.transitions import (
    EnterInstallPhase,
    GoTo,
    InvalidTransitionError,
    Transition,
    advance,
)

__all__ = [
    "EnterInstallPhase",
    "Extra",
    "GoTo",
    "InvalidTransitionError",
    "QuitAction",
    "SelectionSet",
    "Selections",
    "SystemDefault",
    "Transition",
    "Wizard",
    "WizardPage",
    "advance",
]
