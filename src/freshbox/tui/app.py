"""
Main freshbox TUI application.

Built with Textual; the wizard runs on a single screen.
"""

from textual.app import App
from textual.binding import Binding

from freshbox.checker.catalog import Catalog
from freshbox.checker.probe import ProbeResults
from freshbox.config.schema import Settings
from freshbox.i18n import Language
from freshbox.install.log import InstallLog
from freshbox.tui.screens.wizard import WizardScreen
from freshbox.wizard.state import Wizard


class FreshboxApp(App):
    """Main freshbox TUI application."""

    CSS = """
    Screen {
        background: $surface;
    }
    """

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit", show=False, priority=True),
    ]

    def __init__(self, wizard: Wizard, settings: Settings | None = None, install_log: InstallLog | None = None):
        """Initialize TUI application.

        Args:
            wizard: Wizard state, already probed and preselected.
            settings: freshbox settings.
            install_log: Durable install log.
        """
        super().__init__()
        self.wizard = wizard
        self.settings = settings or Settings()
        self.install_log = install_log or InstallLog()

    def on_mount(self) -> None:
        self.push_screen(WizardScreen(self.wizard, self.settings, self.install_log))


def build_wizard(catalog: Catalog, probe_results: ProbeResults, settings: Settings) -> Wizard:
    """Create a wizard with the configured defaults applied."""
    wizard = Wizard(catalog, probe_results)
    if settings.wizard.preselect:
        wizard.apply_defaults(settings.wizard.preselect_mcp_count)
    if settings.wizard.language:
        wizard.select_language(Language(settings.wizard.language))
    return wizard


def run_wizard(catalog: Catalog, probe_results: ProbeResults, settings: Settings) -> Wizard:
    """Run the setup wizard in TUI mode.

    Returns:
        The wizard state after the app exits.
    """
    wizard = build_wizard(catalog, probe_results, settings)
    FreshboxApp(wizard, settings).run()
    return wizard
