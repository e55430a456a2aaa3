"""
Human-readable renderings of a TemporalContext.

format_banner() is plain text (hook output is read by Claude Code, not a
terminal). render_context_panel() is the rich view for `timeaware show`.
"""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .env_export import format_flag
from .temporal_context import TemporalContext


def format_banner(ctx: TemporalContext) -> str:
    """Three-line summary printed when a session starts.

    Example:
        Temporal Context Loaded: Thursday, November 20, 2025 at 04:06:25 AEDT
        2025-11-20 | Week 47, Q4 | AEDT
        Business Hours: false | Market Hours: false | Weekend: false
    """
    local = ctx.local_instant
    return "\n".join([
        f"Temporal Context Loaded: {ctx.time_summary}",
        f"{local.strftime('%Y-%m-%d')} | Week {ctx.week_of_year:02d}, Q{ctx.quarter} "
        f"| {ctx.timezone_abbreviation}",
        f"Business Hours: {format_flag(ctx.is_business_hours)} "
        f"| Market Hours: {format_flag(ctx.is_market_hours)} "
        f"| Weekend: {format_flag(ctx.is_weekend)}",
    ])


def _flag_markup(value: bool) -> str:
    return "[green]yes[/green]" if value else "[dim]no[/dim]"


def build_context_table(ctx: TemporalContext) -> Table:
    """Two-column grid of the context fields."""
    table = Table.grid(padding=(0, 2))
    table.add_column(style="bold")
    table.add_column()

    utc = ctx.utc_instant.strftime("%Y-%m-%dT%H:%M:%SZ")
    local = ctx.local_instant.strftime("%Y-%m-%dT%H:%M:%S") + ctx.timezone_offset

    table.add_row("Local", local)
    table.add_row("UTC", utc)
    table.add_row("Zone", f"{ctx.timezone} ({ctx.timezone_abbreviation}, {ctx.timezone_offset})")
    table.add_row("Day", f"{ctx.day_of_week} (day {ctx.day_of_year:03d} of {ctx.year})")
    table.add_row("Week", f"Week {ctx.week_of_year:02d} of {ctx.iso_year}, Q{ctx.quarter}")
    table.add_row("Business hours", _flag_markup(ctx.is_business_hours))
    table.add_row("Weekend", _flag_markup(ctx.is_weekend))
    table.add_row("Market hours", _flag_markup(ctx.is_market_hours))
    return table


def render_context_panel(ctx: TemporalContext, console: Console) -> None:
    """Print the context as a titled panel."""
    console.print(Panel(
        build_context_table(ctx),
        title=f"[bold]{ctx.time_summary}[/bold]",
        title_align="left",
        border_style="blue",
        expand=False,
    ))
