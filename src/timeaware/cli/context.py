"""
Context commands: show, env, summary, run, hook-handler.
"""

import json
import os
import shutil
from typing import Annotated

import typer
from rich import print as rprint

from ._shared import app, console, parse_instant, AtOption, PrefixOption, TzOption


def _resolve_prefix(prefix, config: dict) -> str:
    from ..env_export import validate_prefix

    try:
        return validate_prefix(prefix or config["env_prefix"])
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def show(
    tz: TzOption = None,
    at: AtOption = None,
    as_json: Annotated[
        bool, typer.Option("--json", help="Print the full record as JSON")
    ] = False,
):
    """Show the temporal context for now (or --at an instant)."""
    from ..display import render_context_panel
    from ..temporal_context import build_from_config

    ctx = build_from_config(now=parse_instant(at), tz=tz)
    if as_json:
        print(json.dumps(ctx.to_dict(), indent=2))
    else:
        render_context_panel(ctx, console)


@app.command()
def summary(tz: TzOption = None, at: AtOption = None):
    """Print the one-line summary, e.g. 'Monday, June 16, 2025 at 10:15:00 EDT'."""
    from ..temporal_context import build_from_config

    print(build_from_config(now=parse_instant(at), tz=tz).time_summary)


@app.command()
def env(
    tz: TzOption = None,
    at: AtOption = None,
    prefix: PrefixOption = None,
    fmt: Annotated[
        str,
        typer.Option("--format", "-f", help="shell, powershell, dotenv or json"),
    ] = "shell",
):
    """Print PREFIX_* variables.

    Load them into the current shell with:

        eval "$(timeaware env)"
    """
    from ..config import get_temporal_config
    from ..env_export import FORMATS, render, to_env
    from ..temporal_context import build_from_config

    if fmt not in FORMATS:
        rprint(f"[red]Error:[/red] Unknown format '{fmt}' (choose from: {', '.join(FORMATS)})")
        raise typer.Exit(1)

    config = get_temporal_config()
    var_prefix = _resolve_prefix(prefix, config)
    ctx = build_from_config(now=parse_instant(at), tz=tz, config=config)
    print(render(to_env(ctx, var_prefix), fmt))


@app.command(
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
)
def run(
    ctx: typer.Context,
    tz: TzOption = None,
    prefix: PrefixOption = None,
    show_context: Annotated[
        bool, typer.Option("--show-context", "-s", help="Print the context before launching")
    ] = False,
):
    """Launch Claude Code with PREFIX_* variables exported.

    Remaining arguments are passed to claude unchanged:

        timeaware run -s -- --model sonnet
    """
    from ..config import get_temporal_config
    from ..display import render_context_panel
    from ..env_export import to_env
    from ..logging_config import get_logger
    from ..temporal_context import build_from_config

    claude = shutil.which("claude")
    if not claude:
        rprint("[red]Error:[/red] 'claude' not found on PATH")
        raise typer.Exit(1)

    config = get_temporal_config()
    var_prefix = _resolve_prefix(prefix, config)
    temporal = build_from_config(tz=tz, config=config)

    if show_context:
        render_context_panel(temporal, console)

    child_env = {**os.environ, **to_env(temporal, var_prefix)}
    get_logger("cli").debug("exec %s %s", claude, " ".join(ctx.args))
    os.execvpe(claude, ["claude", *ctx.args], child_env)


@app.command("hook-handler", hidden=True)
def hook_handler_cmd():
    """Handle Claude Code hook events (internal).

    Called by the SessionStart hook, not by users directly.
    """
    from ..hook_handler import handle_hook_event
    from ..logging_config import setup_hook_logging

    setup_hook_logging()
    handle_hook_event()
