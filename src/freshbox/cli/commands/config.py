"""
freshbox config - Settings commands.

Usage:
    freshbox config show
    freshbox config path
    freshbox config get install.history_limit
    freshbox config init
    freshbox config set install.history_limit 20
"""

from typing import Annotated, Any

import typer
import yaml
from rich.console import Console
from rich.syntax import Syntax

from freshbox.cli.output import print_error, print_success, print_warning
from freshbox.config import (
    ConfigurationError,
    Settings,
    get_nested_value,
    load_settings,
    load_yaml_file,
    parse_value,
    save_yaml_file,
    set_nested_value,
)
from freshbox.storage.paths import get_settings_path

app = typer.Typer(
    name="config",
    help="Settings management.",
)

console = Console()

_MISSING = object()


@app.command()
def show() -> None:
    """Show the effective settings (defaults, file and environment)."""
    try:
        settings = load_settings()
    except ConfigurationError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        raise typer.Exit(1)

    output = yaml.dump(
        settings.model_dump(),
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    )
    console.print(Syntax(output, "yaml", theme="monokai"))


@app.command()
def path() -> None:
    """Print the settings file path."""
    console.print(str(get_settings_path()))


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Overwrite an existing settings file.",
        ),
    ] = False,
) -> None:
    """Write a settings file with the default values."""
    settings_path = get_settings_path()
    if settings_path.exists() and not force:
        print_warning(f"Settings file already exists: {settings_path}")
        console.print("[dim]Use --force to overwrite[/dim]")
        raise typer.Exit(1)

    try:
        save_yaml_file(settings_path, Settings().model_dump())
    except ConfigurationError as e:
        print_error(str(e))
        raise typer.Exit(1)
    print_success(f"Created {settings_path}")


@app.command("get")
def get_value(
    key: Annotated[
        str,
        typer.Argument(
            help="Settings key (e.g., 'install.history_limit' or 'wizard').",
        ),
    ],
) -> None:
    """Print one effective setting or section."""
    try:
        settings = load_settings()
    except ConfigurationError as e:
        print_error(f"Configuration error: {e}")
        raise typer.Exit(1)

    value = get_nested_value(settings.model_dump(), key, default=_MISSING)
    if value is _MISSING:
        print_error(f"Unknown setting: {key}")
        raise typer.Exit(1)

    if isinstance(value, dict):
        output = yaml.dump(value, default_flow_style=False, sort_keys=False, allow_unicode=True)
        console.print(Syntax(output, "yaml", theme="monokai"))
    else:
        console.print(_format_scalar(value), markup=False, highlight=False)


def _format_scalar(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@app.command("set")
def set_value(
    key: Annotated[
        str,
        typer.Argument(
            help="Settings key (e.g., 'install.history_limit').",
        ),
    ],
    value: Annotated[
        str,
        typer.Argument(
            help="Value to set.",
        ),
    ],
) -> None:
    """Set a value in the settings file."""
    settings_path = get_settings_path()
    try:
        data = set_nested_value(load_yaml_file(settings_path), key, parse_value(value))
        Settings.model_validate(data)
        save_yaml_file(settings_path, data)
    except ConfigurationError as e:
        print_error(str(e))
        raise typer.Exit(1)
    except ValueError as e:
        print_error(f"Invalid value for {key}: {e}")
        raise typer.Exit(1)

    print_success(f"Set {key} = {value}")
