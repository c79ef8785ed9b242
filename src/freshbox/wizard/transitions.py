"""
Forward transition graph of the wizard.

Each page lists its outgoing edges in priority order; the first edge whose
guard accepts the current selections wins. ``advance`` is a pure function of
the page and a selection snapshot.
"""

from collections.abc import Callable
from dataclasses import dataclass

from freshbox.checker.catalog import CLAUDE_CODE, CODEX, FNM
from freshbox.wizard.pages import WizardPage
from freshbox.wizard.selections import Selections


class InvalidTransitionError(Exception):
    """Raised when advancing from a page with no forward edges."""

    pass


@dataclass(frozen=True)
class GoTo:
    page: WizardPage


@dataclass(frozen=True)
class EnterInstallPhase:
    """Leave the selection pages and start installing."""

    page: WizardPage = WizardPage.INSTALLING


Transition = GoTo | EnterInstallPhase

Guard = Callable[[Selections], bool]


def always(selections: Selections) -> bool:
    return True


def fnm_selected(selections: Selections) -> bool:
    return FNM in selections.tools


def codex_selected(selections: Selections) -> bool:
    return CODEX in selections.ai_tools


def claude_selected(selections: Selections) -> bool:
    return CLAUDE_CODE in selections.ai_tools


@dataclass(frozen=True)
class Edge:
    target: Transition
    guard: Guard = always


FORWARD_EDGES: dict[WizardPage, tuple[Edge, ...]] = {
    WizardPage.LANGUAGE: (Edge(GoTo(WizardPage.WELCOME)),),
    WizardPage.WELCOME: (Edge(GoTo(WizardPage.TOOLS)),),
    WizardPage.TOOLS: (Edge(GoTo(WizardPage.APPS)),),
    WizardPage.APPS: (
        Edge(GoTo(WizardPage.NODE_VERSIONS), fnm_selected),
        Edge(GoTo(WizardPage.AI_TOOLS)),
    ),
    WizardPage.NODE_VERSIONS: (Edge(GoTo(WizardPage.AI_TOOLS)),),
    WizardPage.AI_TOOLS: (
        Edge(GoTo(WizardPage.CODEX_CONFIG), codex_selected),
        Edge(GoTo(WizardPage.CLAUDE_CONFIG), claude_selected),
        Edge(GoTo(WizardPage.MCP)),
    ),
    WizardPage.CODEX_CONFIG: (
        Edge(GoTo(WizardPage.CLAUDE_CONFIG), claude_selected),
        Edge(GoTo(WizardPage.MCP)),
    ),
    WizardPage.CLAUDE_CONFIG: (Edge(GoTo(WizardPage.MCP)),),
    WizardPage.MCP: (Edge(GoTo(WizardPage.EXTRAS)),),
    WizardPage.EXTRAS: (Edge(GoTo(WizardPage.SYSTEM_DEFAULTS)),),
    WizardPage.SYSTEM_DEFAULTS: (Edge(EnterInstallPhase()),),
}


def advance(page: WizardPage, selections: Selections) -> Transition:
    """
    Decide where the wizard goes next.

    Args:
        page: Current page.
        selections: Current selection snapshot.

    Returns:
        ``GoTo(page)`` or ``EnterInstallPhase()``.

    Raises:
        InvalidTransitionError: From INSTALLING or DONE, which only move on
            when the install run completes.
    """
    for edge in FORWARD_EDGES.get(page, ()):
        if edge.guard(selections):
            return edge.target
    raise InvalidTransitionError(f"No forward transition from {page.name}")
