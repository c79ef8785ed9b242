"""
Wizard pages, in display order.
"""

from enum import IntEnum


class WizardPage(IntEnum):
    LANGUAGE = 0
    WELCOME = 1
    TOOLS = 2
    APPS = 3
    NODE_VERSIONS = 4
    AI_TOOLS = 5
    CODEX_CONFIG = 6
    CLAUDE_CONFIG = 7
    MCP = 8
    EXTRAS = 9
    SYSTEM_DEFAULTS = 10
    INSTALLING = 11
    DONE = 12


# Pages with a toggleable item list.
LIST_PAGES = frozenset(
    {
        WizardPage.TOOLS,
        WizardPage.APPS,
        WizardPage.NODE_VERSIONS,
        WizardPage.AI_TOOLS,
        WizardPage.MCP,
        WizardPage.EXTRAS,
        WizardPage.SYSTEM_DEFAULTS,
    }
)

FORM_PAGES = frozenset({WizardPage.CODEX_CONFIG, WizardPage.CLAUDE_CONFIG})

# Pages shown in the tab bar (language select sits before the wizard proper).
TAB_PAGES = tuple(p for p in WizardPage if p is not WizardPage.LANGUAGE)
