"""
Unit tests for the wizard's forward transition graph.
"""

import pytest

from freshbox.checker.catalog import CLAUDE_CODE, CODEX, FNM
from freshbox.wizard.pages import WizardPage
from freshbox.wizard.selections import SelectionSet, Selections
from freshbox.wizard.transitions import (
    FORWARD_EDGES,
    EnterInstallPhase,
    GoTo,
    InvalidTransitionError,
    advance,
)


def selections(tools=(), ai_tools=()) -> Selections:
    return Selections(tools=SelectionSet.of(*tools), ai_tools=SelectionSet.of(*ai_tools))


class TestAdvance:
    """Tests for ``advance``."""

    def test_linear_start(self):
        assert advance(WizardPage.LANGUAGE, selections()) == GoTo(WizardPage.WELCOME)
        assert advance(WizardPage.WELCOME, selections()) == GoTo(WizardPage.TOOLS)
        assert advance(WizardPage.TOOLS, selections()) == GoTo(WizardPage.APPS)

    def test_node_versions_skipped_without_fnm(self):
        """Without fnm the Node.js version page is never shown."""
        result = advance(WizardPage.APPS, selections(tools=["Git", "Go"]))
        assert result == GoTo(WizardPage.AI_TOOLS)

    def test_node_versions_shown_with_fnm(self):
        assert advance(WizardPage.APPS, selections(tools=[FNM])) == GoTo(WizardPage.NODE_VERSIONS)
        assert advance(WizardPage.NODE_VERSIONS, selections(tools=[FNM])) == GoTo(WizardPage.AI_TOOLS)

    @pytest.mark.parametrize(
        ("ai_tools", "expected"),
        [
            ((), WizardPage.MCP),
            ((CODEX,), WizardPage.CODEX_CONFIG),
            ((CLAUDE_CODE,), WizardPage.CLAUDE_CONFIG),
            ((CODEX, CLAUDE_CODE), WizardPage.CODEX_CONFIG),
        ],
    )
    def test_ai_tools_branches(self, ai_tools, expected):
        assert advance(WizardPage.AI_TOOLS, selections(ai_tools=ai_tools)) == GoTo(expected)

    def test_codex_config_continues_to_claude(self):
        both = selections(ai_tools=[CODEX, CLAUDE_CODE])
        assert advance(WizardPage.CODEX_CONFIG, both) == GoTo(WizardPage.CLAUDE_CONFIG)
        assert advance(WizardPage.CODEX_CONFIG, selections(ai_tools=[CODEX])) == GoTo(WizardPage.MCP)

    def test_system_defaults_enters_install_phase(self):
        result = advance(WizardPage.SYSTEM_DEFAULTS, selections())
        assert isinstance(result, EnterInstallPhase)
        assert result.page is WizardPage.INSTALLING

    @pytest.mark.parametrize("page", [WizardPage.INSTALLING, WizardPage.DONE])
    def test_no_forward_edge(self, page):
        with pytest.raises(InvalidTransitionError):
            advance(page, selections())

    def test_every_edge_moves_forward(self):
        """Targets are always later pages, so the history is linear."""
        for page, edges in FORWARD_EDGES.items():
            for edge in edges:
                assert edge.target.page > page
