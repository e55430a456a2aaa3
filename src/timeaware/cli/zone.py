"""
Zone commands: check.
"""

from datetime import datetime, timezone
from typing import Annotated

import typer
from rich import print as rprint

from ._shared import zone_app


@zone_app.command("check")
def zone_check(
    name: Annotated[str, typer.Argument(help="IANA timezone, e.g. America/New_York")],
):
    """Resolve a timezone strictly (no UTC fallback) and show its current offset."""
    from ..temporal_context import TimezoneResolutionError, is_us_eastern, load_zone

    try:
        zone = load_zone(name)
    except TimezoneResolutionError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    local = datetime.now(timezone.utc).astimezone(zone)
    abbreviation = local.strftime("%Z")
    rprint(f"[green]✓[/green] {zone.key}: {abbreviation} ({local.strftime('%z')})")
    if is_us_eastern(zone.key, abbreviation):
        rprint("  [dim]US Eastern: market-hours detection enabled[/dim]")
