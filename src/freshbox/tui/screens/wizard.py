"""
Wizard screen: every page of the setup flow, including install progress.
"""

import logging

from textual import on
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Vertical, VerticalScroll
from textual.screen import Screen
from textual.widgets import Footer, Header, Input, Label, Static

from freshbox.config.schema import Settings
from freshbox.install.log import InstallLog
from freshbox.install.models import InstallOutcome, InstallTask
from freshbox.install.orchestrator import Orchestrator
from freshbox.install.queue import build_queue
from freshbox.installer.packages import fetch_node_versions
from freshbox.tui.views import SPINNER_INTERVAL, render_footer, render_page, render_tabs, t
from freshbox.wizard.pages import FORM_PAGES, WizardPage
from freshbox.wizard.state import QuitAction, Wizard
from freshbox.wizard.transitions import EnterInstallPhase

logger = logging.getLogger(__name__)


class PageScroll(VerticalScroll, can_focus=False):
    """Scrolls the page body; keys go to the screen bindings instead."""


class WizardScreen(Screen):
    """Single screen redrawn for each wizard page."""

    CSS = """
    WizardScreen {
        align: center top;
    }

    #tabs {
        padding: 1 2 0 2;
        color: $text-muted;
    }

    #wizard-container {
        width: 100%;
        max-width: 110;
        height: 1fr;
        border: round $primary;
        background: $surface;
        padding: 1 2;
    }

    #body {
        height: auto;
    }

    #form {
        height: auto;
        margin-top: 1;
    }

    #form Label {
        margin-top: 1;
        color: $text-muted;
    }

    #form Input {
        width: 80;
    }

    #hint {
        padding: 0 2;
        color: $text-muted;
    }
    """

    BINDINGS = [
        Binding("up,k", "cursor_up", "Up", show=False),
        Binding("down,j", "cursor_down", "Down", show=False),
        Binding("space", "toggle", "Toggle", show=False),
        Binding("a", "select_all", "All", show=False),
        Binding("n", "select_none", "None", show=False),
        Binding("tab,right,l", "forward", "Next", show=False),
        Binding("shift+tab,left,h", "back", "Back", show=False),
        Binding("escape", "back", "Back", show=False),
        Binding("enter", "confirm", "Confirm", show=False),
        Binding("q", "quit_page", "Quit"),
    ]

    def __init__(self, wizard: Wizard, settings: Settings, install_log: InstallLog):
        super().__init__()
        self.wizard = wizard
        self.settings = settings
        self.install_log = install_log
        self.orchestrator: Orchestrator | None = None
        self.spinner_frame = 0
        self._form_page: WizardPage | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=False)
        yield Static(id="tabs")
        with Container(id="wizard-container"):
            with PageScroll():
                yield Static(id="body")
                yield Vertical(id="form")
        yield Static(id="hint")
        yield Footer()

    def on_mount(self) -> None:
        self.title = "freshbox"
        self.set_interval(SPINNER_INTERVAL, self._tick)
        self.refresh_page()

    # =========================================================================
    # Rendering
    # =========================================================================

    def refresh_page(self) -> None:
        self.query_one("#tabs", Static).update(render_tabs(self.wizard))
        self.query_one("#body", Static).update(
            render_page(
                self.wizard,
                self.orchestrator,
                self.spinner_frame,
                self.install_log.path,
                self.settings.install.upcoming_preview,
            )
        )
        self.query_one("#hint", Static).update(render_footer(self.wizard))

    def _tick(self) -> None:
        if self.wizard.page is WizardPage.INSTALLING and self.orchestrator is not None:
            self.spinner_frame += 1
            self.refresh_page()

    async def _sync_form(self) -> None:
        """Mount one Input per field when a config page is entered."""
        page = self.wizard.page
        if page is self._form_page:
            return
        self._form_page = page

        container = self.query_one("#form", Vertical)
        await container.remove_children()

        form = self.wizard.form
        if page not in FORM_PAGES or form is None:
            return

        widgets = []
        for field in form.fields:
            widgets.append(Label(t(self.wizard, field.label)))
            widgets.append(
                Input(
                    value=field.value,
                    placeholder=field.placeholder,
                    password=field.secret,
                    id=f"field-{field.key}",
                )
            )
        await container.mount_all(widgets)
        self._focus_field(0)

    def _inputs(self) -> list[Input]:
        return list(self.query("#form Input").results(Input))

    def _focus_field(self, index: int) -> None:
        inputs = self._inputs()
        if not inputs or self.wizard.form is None:
            return
        self.wizard.form.focus = index % len(inputs)
        inputs[self.wizard.form.focus].focus()

    async def _after_navigation(self) -> None:
        await self._sync_form()
        self.refresh_page()
        if self.wizard.page is WizardPage.NODE_VERSIONS:
            self._maybe_load_node_versions()

    # =========================================================================
    # Form events
    # =========================================================================

    @on(Input.Changed)
    def _field_changed(self, event: Input.Changed) -> None:
        if self.wizard.form is None or not event.input.id:
            return
        self.wizard.form.set_value(event.input.id.removeprefix("field-"), event.value)

    @on(Input.Submitted)
    async def _field_submitted(self, event: Input.Submitted) -> None:
        form = self.wizard.form
        if form is None:
            return
        inputs = self._inputs()
        form.focus = inputs.index(event.input) if event.input in inputs else form.focus
        if form.on_last_field:
            await self._advance()
        else:
            self._focus_field(form.focus + 1)

    # =========================================================================
    # Actions
    # =========================================================================

    def action_cursor_up(self) -> None:
        if self.wizard.page in FORM_PAGES and self.wizard.form is not None:
            self._focus_field(self.wizard.form.focus - 1)
            return
        self.wizard.move_cursor(-1)
        self.refresh_page()

    def action_cursor_down(self) -> None:
        if self.wizard.page in FORM_PAGES and self.wizard.form is not None:
            self._focus_field(self.wizard.form.focus + 1)
            return
        self.wizard.move_cursor(1)
        self.refresh_page()

    def action_toggle(self) -> None:
        if self.wizard.toggle():
            self.refresh_page()

    def action_select_all(self) -> None:
        self.wizard.select_all()
        self.refresh_page()

    def action_select_none(self) -> None:
        self.wizard.select_none()
        self.refresh_page()

    async def action_forward(self) -> None:
        if self.wizard.page in FORM_PAGES and self.wizard.form is not None:
            if self.wizard.form.on_last_field:
                await self._advance()
            else:
                self._focus_field(self.wizard.form.focus + 1)
            return
        await self._advance()

    async def action_back(self) -> None:
        if self.wizard.back():
            await self._after_navigation()

    async def action_confirm(self) -> None:
        if self.wizard.page is WizardPage.DONE:
            self.app.exit()
            return
        await self._advance()

    async def action_quit_page(self) -> None:
        action = self.wizard.quit()
        if action is QuitAction.EXIT:
            self.app.exit()
        elif action is QuitAction.BACK:
            await self._after_navigation()
        else:
            self.notify("Installation in progress", severity="warning")

    async def _advance(self) -> None:
        transition = self.wizard.next()
        if transition is None:
            return
        await self._after_navigation()
        if isinstance(transition, EnterInstallPhase):
            self.run_worker(self._run_install(), exclusive=True, group="install")

    # =========================================================================
    # Background work
    # =========================================================================

    def _maybe_load_node_versions(self) -> None:
        if self.wizard.node_versions_from_remote:
            return
        self.run_worker(self._load_node_versions(), exclusive=True, group="node-versions")

    async def _load_node_versions(self) -> None:
        limit = self.settings.wizard.node_version_limit
        versions = await fetch_node_versions(limit)
        if versions:
            self.wizard.set_node_versions(versions)
            self.refresh_page()

    async def _run_install(self) -> None:
        install = self.settings.install
        queue = build_queue(
            self.wizard.snapshot(),
            self.wizard.probe_results,
            self.wizard.catalog,
            install.mcp_startup_timeout,
        )
        self.orchestrator = Orchestrator(
            queue,
            install_log=self.install_log,
            history_limit=install.history_limit,
            error_summary_length=install.error_summary_length,
            task_delay=install.task_delay,
        )
        await self.orchestrator.run(listener=self)

    # InstallListener

    def on_task_started(self, index: int, total: int, task: InstallTask) -> None:
        self.refresh_page()

    def on_task_finished(self, index: int, outcome: InstallOutcome) -> None:
        self.refresh_page()

    def on_install_done(self, outcomes: list[InstallOutcome]) -> None:
        self.wizard.install_done()
        self.refresh_page()
