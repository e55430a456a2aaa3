"""
Config commands: init, show, path.
"""

from typing import Annotated

import typer
from rich import print as rprint

from ._shared import config_app


@config_app.callback(invoke_without_command=True)
def config_default(ctx: typer.Context):
    """Show current configuration (default when no subcommand given)."""
    if ctx.invoked_subcommand is None:
        _config_show()


@config_app.command("init")
def config_init(
    force: Annotated[
        bool, typer.Option("--force", "-f", help="Overwrite existing config file")
    ] = False,
):
    """Create a config file with documented defaults.

    All options start commented out. Use --force to overwrite.
    """
    from ..config import CONFIG_TEMPLATE, get_config_path

    path = get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    if path.exists() and not force:
        rprint(f"[yellow]Config file already exists:[/yellow] {path}")
        rprint("[dim]Use --force to overwrite[/dim]")
        raise typer.Exit(1)

    path.write_text(CONFIG_TEMPLATE)
    rprint(f"[green]✓[/green] Created config file: [bold]{path}[/bold]")


@config_app.command("show")
def config_show():
    """Show effective configuration."""
    _config_show()


def _config_show():
    from ..config import get_config_path, get_temporal_config, load_config

    path = get_config_path()
    if not path.exists():
        rprint(f"[dim]No config file found at {path} (using defaults)[/dim]")
    elif not load_config():
        rprint(f"[dim]Config file is empty: {path} (using defaults)[/dim]")
    else:
        rprint(f"[bold]Configuration[/bold] ({path}):\n")

    settings = get_temporal_config()
    start, end = settings["business_hours"]
    rprint(f"  timezone: {settings['timezone'] or '(host zone)'}")
    rprint(f"  env_prefix: {settings['env_prefix']}")
    rprint(f"  business_hours: {start:02d}:00-{end:02d}:00")


@config_app.command("path")
def config_path():
    """Show the config file path."""
    from ..config import get_config_path
    print(get_config_path())
