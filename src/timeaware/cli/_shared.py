"""
Shared CLI state: Typer apps, console, options, and utilities.
"""

from datetime import datetime
from typing import Annotated, Optional

import typer
from rich import print as rprint
from rich.console import Console

# Main app
app = typer.Typer(
    name="timeaware",
    help="Temporal context for Claude Code sessions",
    no_args_is_help=False,
    invoke_without_command=True,
    rich_markup_mode="rich",
)

# Hooks subcommand group
hooks_app = typer.Typer(
    name="hooks",
    help="Manage the Claude Code SessionStart hook.",
    no_args_is_help=True,
)
app.add_typer(hooks_app, name="hooks")

# Custom instructions subcommand group
instructions_app = typer.Typer(
    name="instructions",
    help="Manage the temporal-context block in Claude Code custom instructions.",
    no_args_is_help=True,
)
app.add_typer(instructions_app, name="instructions")

# Config subcommand group
config_app = typer.Typer(
    name="config",
    help="Manage configuration",
    no_args_is_help=False,
    invoke_without_command=True,
)
app.add_typer(config_app, name="config")

# Timezone subcommand group
zone_app = typer.Typer(
    name="zone",
    help="Inspect timezone resolution.",
    no_args_is_help=True,
)
app.add_typer(zone_app, name="zone")

# Console for rich output
console = Console()

TzOption = Annotated[
    Optional[str],
    typer.Option("--tz", "-z", help="IANA timezone (default: config, then host zone)"),
]

AtOption = Annotated[
    Optional[str],
    typer.Option("--at", help="Describe this ISO-8601 instant instead of now"),
]

PrefixOption = Annotated[
    Optional[str],
    typer.Option("--prefix", help="Variable prefix (default: config env_prefix, then CLAUDE)"),
]


def parse_instant(value: Optional[str]) -> Optional[datetime]:
    """Parse --at; naive values are UTC. Exits 1 on bad input."""
    if value is None:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        rprint(f"[red]Error:[/red] Invalid ISO-8601 instant: {value}")
        raise typer.Exit(1)


def _version_callback(value: bool):
    if value:
        from .. import __version__
        print(__version__)
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable debug logging on stderr")
    ] = False,
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show version and exit"),
    ] = None,
):
    """Show the current temporal context when no command is given."""
    from ..logging_config import setup_cli_logging

    setup_cli_logging(verbose=verbose)

    if ctx.invoked_subcommand is None:
        from ..display import render_context_panel
        from ..temporal_context import build_from_config

        render_context_panel(build_from_config(), console)
