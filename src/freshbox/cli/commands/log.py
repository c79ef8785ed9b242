"""
freshbox log - Show the install log.

Usage:
    freshbox log
    freshbox log --lines 50
"""

from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from freshbox.install.log import InstallLog

app = typer.Typer(
    name="log",
    help="Show recent install log entries.",
    invoke_without_command=True,
)

console = Console()


@app.callback(invoke_without_command=True)
def show_log(
    lines: Annotated[
        int,
        typer.Option(
            "--lines",
            "-n",
            help="Number of lines to show.",
            min=1,
        ),
    ] = 20,
) -> None:
    """Print the last lines of the install log."""
    install_log = InstallLog()
    entries = install_log.tail(lines)
    if not entries:
        console.print(f"[dim]No install log at {install_log.path}[/dim]")
        return

    for entry in entries:
        if "[FAIL]" in entry:
            console.print(f"[red]{escape(entry)}[/red]")
        elif "[ OK ]" in entry:
            console.print(escape(entry))
        else:
            console.print(f"[dim]{escape(entry)}[/dim]")
