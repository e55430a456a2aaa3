"""
Instructions commands: install, uninstall, status, show.
"""

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich import print as rprint

from ._shared import instructions_app, PrefixOption

PathOption = Annotated[
    Optional[Path],
    typer.Option("--path", help="Custom instructions file (default: ~/.claude/prompts/custom_instructions.md)"),
]


def _target(path: Optional[Path]) -> Path:
    from ..instructions import default_instructions_path

    return path if path is not None else default_instructions_path()


@instructions_app.command("install")
def instructions_install(path: PathOption = None, prefix: PrefixOption = None):
    """Add the temporal-context block to Claude Code custom instructions.

    Safe to run repeatedly: an existing block is left alone.
    """
    from ..config import get_temporal_config
    from ..instructions import install_instructions

    target = _target(path)
    var_prefix = prefix or get_temporal_config()["env_prefix"]
    try:
        result = install_instructions(target, var_prefix)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if result == "created":
        rprint(f"[green]✓[/green] Created {target} with temporal context")
    elif result == "appended":
        rprint(f"[green]✓[/green] Appended temporal context to {target}")
    else:
        rprint(f"[yellow]⚠[/yellow]  Temporal context already present in {target}")


@instructions_app.command("uninstall")
def instructions_uninstall(path: PathOption = None):
    """Remove the temporal-context block."""
    from ..instructions import remove_instructions

    target = _target(path)
    if remove_instructions(target):
        rprint(f"[green]✓[/green] Removed temporal context from {target}")
    else:
        rprint(f"[dim]No temporal context block in {target}[/dim]")


@instructions_app.command("status")
def instructions_status(path: PathOption = None):
    """Show whether the temporal-context block is installed."""
    from ..instructions import has_instructions

    target = _target(path)
    if has_instructions(target):
        rprint(f"[green]✓[/green] Installed in {target}")
    else:
        rprint(f"[dim]Not installed in {target}[/dim]")


@instructions_app.command("show")
def instructions_show(prefix: PrefixOption = None):
    """Print the block that 'install' would add."""
    from ..config import get_temporal_config
    from ..instructions import render_instructions

    var_prefix = prefix or get_temporal_config()["env_prefix"]
    try:
        print(render_instructions(var_prefix), end="")
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
