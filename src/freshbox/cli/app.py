"""
Main Typer application for the freshbox CLI.

Running ``freshbox`` without a subcommand probes the machine and launches
the setup wizard.
"""

from typing import Annotated

import typer

from freshbox import __version__
from freshbox.cli.commands import check, config, log
from freshbox.cli.output import console, print_error, print_info
from freshbox.config import ConfigurationError, get_settings
from freshbox.logging_config import setup_logging

app = typer.Typer(
    name="freshbox",
    help="Interactive setup wizard for a fresh macOS developer machine.",
    no_args_is_help=False,
    invoke_without_command=True,
    rich_markup_mode="rich",
    pretty_exceptions_enable=True,
    pretty_exceptions_show_locals=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        print_info(f"freshbox version [green]{__version__}[/green]")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """
    [bold blue]freshbox[/bold blue] - macOS setup wizard

    Installs developer tools, apps and AI CLIs, configures Codex and
    Claude Code, registers MCP servers and sets system defaults.

    Run [bold]freshbox[/bold] without arguments to launch the wizard.
    """
    try:
        settings = get_settings()
    except ConfigurationError as e:
        print_error(f"Configuration error: {e}")
        raise typer.Exit(1)

    setup_logging(settings.logging)

    if ctx.invoked_subcommand is None:
        _launch_wizard()


app.add_typer(check.app, name="check")
app.add_typer(log.app, name="log")
app.add_typer(config.app, name="config")


def _launch_wizard() -> None:
    """Probe installed tools, then run the TUI wizard."""
    from freshbox.checker import Catalog, probe_all
    from freshbox.tui import run_wizard

    settings = get_settings()
    catalog = Catalog()
    with console.status("Checking installed tools..."):
        results = probe_all(catalog.items)

    run_wizard(catalog, results, settings)


if __name__ == "__main__":
    app()
