"""
Page rendering for the wizard screen.

Pure functions from wizard (and orchestrator) state to Rich markup, so the
screen only decides when to redraw.
"""

from pathlib import Path

from rich.markup import escape

from freshbox.checker.probe import NOT_INSTALLED
from freshbox.i18n import Language, get_text
from freshbox.install.orchestrator import Orchestrator
from freshbox.wizard.pages import FORM_PAGES, LIST_PAGES, TAB_PAGES, WizardPage
from freshbox.wizard.state import LANGUAGES, Wizard

SPINNER_FRAMES = ("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏")
SPINNER_INTERVAL = 0.08
PROGRESS_WIDTH = 40

CURSOR = "▸"
CHECKED = "◉"
UNCHECKED = "○"
LOCKED = "✓"

_TITLE_KEYS = {
    WizardPage.TOOLS: "title_tools",
    WizardPage.APPS: "title_apps",
    WizardPage.NODE_VERSIONS: "title_node_versions",
    WizardPage.AI_TOOLS: "title_ai_tools",
    WizardPage.CODEX_CONFIG: "title_codex_config",
    WizardPage.CLAUDE_CONFIG: "title_claude_config",
    WizardPage.MCP: "title_mcp",
    WizardPage.EXTRAS: "title_extras",
    WizardPage.SYSTEM_DEFAULTS: "title_system_defaults",
}

_SUBTITLE_KEYS = {
    WizardPage.MCP: "title_mcp_desc",
    WizardPage.EXTRAS: "title_extras_desc",
}


def t(wizard: Wizard, key: str, **values: object) -> str:
    return get_text(wizard.language, key, **values)


def progress_bar(done: int, total: int, width: int = PROGRESS_WIDTH) -> str:
    """Text progress bar, e.g. ``████░░░░ 2/4``."""
    filled = width if total == 0 else round(width * done / total)
    return f"{'█' * filled}{'░' * (width - filled)} {done}/{total}"


def node_version_label(version: str, from_remote: bool) -> str:
    """Remote versions display as-is; fallback majors as ``v22.x``."""
    return version if from_remote else f"v{version}.x"


def render_tabs(wizard: Wizard) -> str:
    if wizard.page is WizardPage.LANGUAGE:
        return f"[b]{escape(get_text(Language.EN, 'lang_title'))}[/b]"
    parts = []
    for page in TAB_PAGES:
        label = escape(t(wizard, f"page_{page.name.lower()}"))
        if page is wizard.page:
            parts.append(f"[b reverse] {label} [/]")
        elif page < wizard.page:
            parts.append(f"[dim]{label}[/dim]")
        else:
            parts.append(label)
    return " › ".join(parts)


def render_footer(wizard: Wizard) -> str:
    if wizard.page is WizardPage.LANGUAGE:
        return escape(t(wizard, "footer_lang"))
    if wizard.page in FORM_PAGES:
        return escape(t(wizard, "footer_form"))
    if wizard.page in (WizardPage.INSTALLING, WizardPage.DONE, WizardPage.WELCOME):
        return ""
    return escape(t(wizard, "footer_nav"))


def _render_language(wizard: Wizard) -> list[str]:
    lines = [f"[b]{escape(get_text(Language.EN, 'lang_prompt'))}[/b]", ""]
    for index, language in enumerate(LANGUAGES):
        marker = CURSOR if index == wizard.cursor else " "
        lines.append(f" {marker} {escape(language.label)}")
    return lines


def _render_welcome(wizard: Wizard) -> list[str]:
    lines = [
        f"[b]{escape(t(wizard, 'welcome_title'))}[/b]",
        "",
        escape(t(wizard, "welcome_desc")),
        "",
    ]
    for key in ("welcome_tools", "welcome_fnm", "welcome_apps", "welcome_ai", "welcome_mcp", "welcome_system"):
        lines.append(f"  • {escape(t(wizard, key))}")
    lines += ["", f"[b]{escape(t(wizard, 'welcome_start'))}[/b]  [dim]{escape(t(wizard, 'welcome_quit'))}[/dim]"]
    return lines


def _item_label(wizard: Wizard, key: str) -> tuple[str, str]:
    """Label and description for an item key on the current page."""
    page = wizard.page
    if page is WizardPage.EXTRAS:
        return t(wizard, f"extra_{key}"), t(wizard, f"extra_{key}_desc")
    if page is WizardPage.SYSTEM_DEFAULTS:
        return t(wizard, f"default_{key}"), t(wizard, f"default_{key}_desc")
    if page is WizardPage.NODE_VERSIONS:
        return node_version_label(key, wizard.node_versions_from_remote), ""
    if page is WizardPage.MCP:
        for server in wizard.catalog.mcp_servers:
            if server.name == key:
                return key, server.description
        return key, ""
    item = wizard.catalog.find(key)
    return key, item.description if item else ""


def _render_list(wizard: Wizard) -> list[str]:
    page = wizard.page
    lines = [f"[b]{escape(t(wizard, _TITLE_KEYS[page]))}[/b]"]
    if page in _SUBTITLE_KEYS:
        lines.append(f"[dim]{escape(t(wizard, _SUBTITLE_KEYS[page]))}[/dim]")
    if page is WizardPage.NODE_VERSIONS:
        hint = "node_hint" if wizard.node_versions_from_remote else "node_fallback_hint"
        lines.append(f"[dim]{escape(t(wizard, hint))}[/dim]")
    lines.append("")

    selection = wizard.selection()
    for index, key in enumerate(wizard.items()):
        marker = f"[b cyan]{CURSOR}[/]" if index == wizard.cursor else " "
        label, description = _item_label(wizard, key)
        if wizard.is_locked(key):
            probe = wizard.probe_results.get(key, NOT_INSTALLED)
            version = f" {escape(probe.version)}" if probe.version else ""
            lines.append(
                f" {marker} [green]{LOCKED}[/green] [dim]{escape(label)} "
                f"({escape(t(wizard, 'installed'))}{version})[/dim]"
            )
            continue
        box = f"[green]{CHECKED}[/green]" if key in selection else UNCHECKED
        row = f" {marker} {box} {escape(label)}"
        if description:
            row += f"  [dim]{escape(description)}[/dim]"
        lines.append(row)
    return lines


def _render_installing(wizard: Wizard, orchestrator: Orchestrator | None, frame: int, upcoming: int) -> list[str]:
    lines = [f"[b]{escape(t(wizard, 'title_installing'))}[/b]", ""]
    if orchestrator is None:
        return lines + [escape(t(wizard, "install_prepare"))]

    lines += [progress_bar(len(orchestrator.outcomes), orchestrator.total), ""]
    if orchestrator.hidden_outcomes:
        lines.append(f"[dim]{escape(t(wizard, 'install_more_above', count=orchestrator.hidden_outcomes))}[/dim]")

    for outcome in orchestrator.recent_outcomes():
        if outcome.success:
            lines.append(f" [green]✓[/green] {escape(outcome.name)}")
        else:
            summary = f" [dim]{escape(outcome.error_summary or '')}[/dim]" if outcome.error_summary else ""
            lines.append(f" [red]✗[/red] {escape(outcome.name)}{summary}")

    current = orchestrator.current_task
    if current is not None:
        spinner = SPINNER_FRAMES[frame % len(SPINNER_FRAMES)]
        lines.append(f" [cyan]{spinner}[/cyan] [b]{escape(current.name)}[/b]")

        next_tasks = orchestrator.upcoming(upcoming)
        if next_tasks:
            lines += ["", f"[dim]{escape(t(wizard, 'install_next_up'))}[/dim]"]
            lines += [f"[dim]   {escape(task.name)}[/dim]" for task in next_tasks]
    return lines


def _render_done(wizard: Wizard, orchestrator: Orchestrator | None, log_path: Path | None) -> list[str]:
    lines = [f"[b green]{escape(t(wizard, 'title_done'))}[/b green]", "", escape(t(wizard, "done_msg"))]
    failures = len(orchestrator.failures) if orchestrator else 0
    if failures:
        lines += ["", f"[red]{escape(t(wizard, 'done_errors', count=failures))}[/red]"]
    if log_path is not None:
        lines.append(f"[dim]{escape(t(wizard, 'done_log', path=log_path))}[/dim]")
    lines += ["", escape(t(wizard, "done_exit"))]
    return lines


def render_page(
    wizard: Wizard,
    orchestrator: Orchestrator | None = None,
    spinner_frame: int = 0,
    log_path: Path | None = None,
    upcoming: int = 3,
) -> str:
    """Render the body of the current page as Rich markup."""
    page = wizard.page
    if page is WizardPage.LANGUAGE:
        lines = _render_language(wizard)
    elif page is WizardPage.WELCOME:
        lines = _render_welcome(wizard)
    elif page in LIST_PAGES:
        lines = _render_list(wizard)
    elif page in FORM_PAGES:
        lines = [f"[b]{escape(t(wizard, _TITLE_KEYS[page]))}[/b]"]
    elif page is WizardPage.INSTALLING:
        lines = _render_installing(wizard, orchestrator, spinner_frame, upcoming)
    else:
        lines = _render_done(wizard, orchestrator, log_path)
    return "\n".join(lines)
