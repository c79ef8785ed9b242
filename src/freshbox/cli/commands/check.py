"""
freshbox check - Report which catalog items are installed.

Usage:
    freshbox check
    freshbox check --json
"""

import json
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from freshbox.checker import NOT_INSTALLED, Catalog, probe_all

app = typer.Typer(
    name="check",
    help="Check installed tools and apps.",
    invoke_without_command=True,
)

console = Console()


@app.callback(invoke_without_command=True)
def check(
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output as JSON.",
        ),
    ] = False,
) -> None:
    """Probe every tool, app and AI CLI in the catalog."""
    catalog = Catalog()
    results = probe_all(catalog.items)

    if json_output:
        data = {
            item.name: {
                "category": item.category,
                "installed": results.get(item.name, NOT_INSTALLED).installed,
                "version": results.get(item.name, NOT_INSTALLED).version,
            }
            for item in catalog.items
        }
        console.print_json(json.dumps(data))
        return

    table = Table(title="Installed Software")
    table.add_column("Name", style="cyan")
    table.add_column("Category")
    table.add_column("Status")
    table.add_column("Version", style="dim")

    for item in catalog.items:
        result = results.get(item.name, NOT_INSTALLED)
        status = "[green]installed[/green]" if result.installed else "[yellow]missing[/yellow]"
        table.add_row(item.name, item.category, status, result.version)

    console.print(table)

    missing = sum(1 for item in catalog.items if not results.get(item.name, NOT_INSTALLED).installed)
    console.print(f"\n[dim]{len(catalog.items) - missing} installed, {missing} missing[/dim]")
