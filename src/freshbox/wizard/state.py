"""
Wizard state machine.

Owns the current page, the cursor, one SelectionSet per category and the
config form of the current config page. Page changes go through
``transitions.advance``; rendering and key handling live in the TUI.
"""

import logging
from enum import Enum

from freshbox.checker.catalog import Catalog
from freshbox.checker.probe import ProbeResults, is_installed
from freshbox.config.schema import ClaudeConfig, CodexConfig
from freshbox.i18n import Language
from freshbox.installer.packages import FALLBACK_NODE_VERSIONS
from freshbox.wizard.forms import ConfigForm, claude_form, codex_form
from freshbox.wizard.pages import FORM_PAGES, LIST_PAGES, WizardPage
from freshbox.wizard.selections import Extra, SelectionSet, Selections, SystemDefault
from freshbox.wizard.transitions import EnterInstallPhase, Transition, advance

logger = logging.getLogger(__name__)

# SelectionSet attribute for each list page.
_SELECTION_ATTRS = {
    WizardPage.TOOLS: "tools",
    WizardPage.APPS: "apps",
    WizardPage.NODE_VERSIONS: "node_versions",
    WizardPage.AI_TOOLS: "ai_tools",
    WizardPage.MCP: "mcp_servers",
    WizardPage.EXTRAS: "extras",
    WizardPage.SYSTEM_DEFAULTS: "system_defaults",
}

# Pages whose items may already be installed (and are then locked).
_PROBED_PAGES = frozenset({WizardPage.TOOLS, WizardPage.APPS, WizardPage.AI_TOOLS})

LANGUAGES = list(Language)


class QuitAction(Enum):
    """What a quit request resolved to."""

    EXIT = "exit"
    BACK = "back"
    IGNORED = "ignored"


class Wizard:
    """
    The wizard's page and selection state.

    Starts on the language page with nothing selected; ``apply_defaults``
    pre-selects the recommended items.
    """

    def __init__(
        self,
        catalog: Catalog | None = None,
        probe_results: ProbeResults | None = None,
        node_versions: list[str] | None = None,
    ):
        self.catalog = catalog or Catalog()
        self.probe_results: ProbeResults = dict(probe_results or {})

        self.page = WizardPage.LANGUAGE
        self.language = Language.EN
        self.cursor = 0
        self.history: list[WizardPage] = []
        self.installing = False

        self.tools = SelectionSet()
        self.apps = SelectionSet()
        self.ai_tools = SelectionSet()
        self.node_versions = SelectionSet()
        self.mcp_servers = SelectionSet()
        self.system_defaults = SelectionSet()
        self.extras = SelectionSet()

        self.codex = CodexConfig()
        self.claude = ClaudeConfig()
        self.form: ConfigForm | None = None

        self.available_node_versions: list[str] = list(node_versions or FALLBACK_NODE_VERSIONS)
        self.node_versions_from_remote = bool(node_versions)

    # =========================================================================
    # Selections
    # =========================================================================

    def apply_defaults(self, mcp_count: int = 4) -> None:
        """Pre-select every uninstalled item, the first MCP servers, all defaults and extras."""
        self.tools = SelectionSet.of(*self._uninstalled(WizardPage.TOOLS))
        self.apps = SelectionSet.of(*self._uninstalled(WizardPage.APPS))
        self.ai_tools = SelectionSet.of(*self._uninstalled(WizardPage.AI_TOOLS))
        self.mcp_servers = SelectionSet.of(*[s.name for s in self.catalog.mcp_servers[:mcp_count]])
        self.system_defaults = SelectionSet.of(*SystemDefault)
        self.extras = SelectionSet.of(*Extra)

    def _uninstalled(self, page: WizardPage) -> list[str]:
        return [key for key in self.items(page) if not is_installed(self.probe_results, key)]

    def snapshot(self) -> Selections:
        """Copy the current selections for queue building."""
        return Selections(
            tools=self.tools,
            apps=self.apps,
            ai_tools=self.ai_tools,
            node_versions=self.node_versions,
            mcp_servers=self.mcp_servers,
            system_defaults=self.system_defaults,
            extras=self.extras,
            codex=self.codex,
            claude=self.claude,
        )

    def items(self, page: WizardPage | None = None) -> list[str]:
        """Selection keys listed on a page, in display order."""
        page = self.page if page is None else page
        if page is WizardPage.TOOLS:
            return [item.name for item in self.catalog.dev_tools]
        if page is WizardPage.APPS:
            return [item.name for item in self.catalog.apps]
        if page is WizardPage.AI_TOOLS:
            return [item.name for item in self.catalog.ai_tools]
        if page is WizardPage.NODE_VERSIONS:
            return list(self.available_node_versions)
        if page is WizardPage.MCP:
            return [server.name for server in self.catalog.mcp_servers]
        if page is WizardPage.EXTRAS:
            return [extra.value for extra in Extra]
        if page is WizardPage.SYSTEM_DEFAULTS:
            return [default.value for default in SystemDefault]
        return []

    def selection(self, page: WizardPage | None = None) -> SelectionSet | None:
        page = self.page if page is None else page
        attr = _SELECTION_ATTRS.get(page)
        return getattr(self, attr) if attr else None

    def _set_selection(self, value: SelectionSet) -> None:
        setattr(self, _SELECTION_ATTRS[self.page], value)

    def is_locked(self, key: str, page: WizardPage | None = None) -> bool:
        """Installed items cannot be toggled."""
        page = self.page if page is None else page
        return page in _PROBED_PAGES and is_installed(self.probe_results, key)

    def toggle(self) -> bool:
        """
        Toggle the item under the cursor.

        Returns:
            True if the selection changed.
        """
        if self.page not in LIST_PAGES:
            return False
        items = self.items()
        if not items:
            return False
        key = items[self.cursor]
        if self.is_locked(key):
            return False
        self._set_selection(self.selection().toggle(key))
        return True

    def select_all(self) -> None:
        if self.page not in LIST_PAGES:
            return
        keys = [key for key in self.items() if not self.is_locked(key)]
        self._set_selection(self.selection().select(keys))

    def select_none(self) -> None:
        if self.page not in LIST_PAGES:
            return
        self._set_selection(self.selection().deselect(self.items()))

    def set_node_versions(self, versions: list[str]) -> None:
        """Replace the offered Node.js versions (e.g. with `fnm list-remote` output)."""
        if not versions:
            return
        self.available_node_versions = list(versions)
        self.node_versions_from_remote = True
        self.node_versions = SelectionSet.of(*self.node_versions.ordered(versions))
        if self.page is WizardPage.NODE_VERSIONS:
            self.cursor = min(self.cursor, len(versions) - 1)

    # =========================================================================
    # Cursor
    # =========================================================================

    def list_length(self) -> int:
        if self.page is WizardPage.LANGUAGE:
            return len(LANGUAGES)
        if self.page in LIST_PAGES:
            return len(self.items())
        if self.page in FORM_PAGES and self.form is not None:
            return len(self.form.fields)
        return 1

    def move_cursor(self, delta: int) -> None:
        last = max(self.list_length() - 1, 0)
        self.cursor = min(max(self.cursor + delta, 0), last)

    def select_language(self, language: Language) -> None:
        self.language = language
        if self.page is WizardPage.LANGUAGE:
            self.cursor = LANGUAGES.index(language)

    # =========================================================================
    # Navigation
    # =========================================================================

    def next(self) -> Transition | None:
        """
        Move forward one page.

        Leaving a config page forward keeps its field values. Returns the
        transition taken, or None where forward navigation does not apply.
        """
        if self.installing or self.page in (WizardPage.INSTALLING, WizardPage.DONE):
            return None

        if self.page is WizardPage.LANGUAGE:
            self.language = LANGUAGES[self.cursor]
        elif self.page in FORM_PAGES:
            self._save_form()

        transition = advance(self.page, self.snapshot())
        self.history.append(self.page)
        self._enter(transition.page)

        if isinstance(transition, EnterInstallPhase):
            self.installing = True
        logger.debug(f"Wizard advanced to {self.page.name}")
        return transition

    def back(self) -> bool:
        """
        Return to the previously visited page.

        Not available while installing, on DONE, or before WELCOME. Edits on
        a config page are discarded when leaving it backwards.
        """
        if self.installing or self.page in (
            WizardPage.LANGUAGE,
            WizardPage.WELCOME,
            WizardPage.INSTALLING,
            WizardPage.DONE,
        ):
            return False
        if not self.history or self.history[-1] < WizardPage.WELCOME:
            return False

        self._enter(self.history.pop())
        return True

    def quit(self) -> QuitAction:
        """Resolve a quit request (``q``)."""
        if self.page in (WizardPage.LANGUAGE, WizardPage.WELCOME, WizardPage.DONE):
            return QuitAction.EXIT
        if self.installing or self.page is WizardPage.INSTALLING:
            return QuitAction.IGNORED
        return QuitAction.BACK if self.back() else QuitAction.EXIT

    def install_done(self) -> None:
        """Called once the install run has finished."""
        if self.page is not WizardPage.INSTALLING:
            logger.warning(f"install_done received on {self.page.name}")
            return
        self.installing = False
        self.history.append(self.page)
        self._enter(WizardPage.DONE)

    def _enter(self, page: WizardPage) -> None:
        self.page = page
        self.cursor = 0
        if page is WizardPage.CODEX_CONFIG:
            self.form = codex_form(self.codex)
        elif page is WizardPage.CLAUDE_CONFIG:
            self.form = claude_form(self.claude)
        else:
            self.form = None

    def _save_form(self) -> None:
        if self.form is None:
            return
        values = self.form.values()
        if self.page is WizardPage.CODEX_CONFIG:
            self.codex = CodexConfig(**values)
        elif self.page is WizardPage.CLAUDE_CONFIG:
            self.claude = ClaudeConfig(**values)
