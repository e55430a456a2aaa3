"""
Hooks commands: install, uninstall, status.
"""

from typing import Annotated

import typer
from rich import print as rprint

from ._shared import hooks_app

ProjectOption = Annotated[
    bool,
    typer.Option("--project", "-p", help="Use project-level .claude/settings.json instead of user-level"),
]


def _editor(project: bool):
    from ..claude_config import ClaudeConfigEditor

    if project:
        return ClaudeConfigEditor.project_level(), "project"
    return ClaudeConfigEditor.user_level(), "user"


def _load_or_exit(editor) -> None:
    try:
        editor.load()
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


@hooks_app.command("install")
def hooks_install(project: ProjectOption = False):
    """Install the SessionStart hook into Claude Code settings.

    The hook runs 'timeaware hook-handler', which prints the temporal
    banner and exports PREFIX_* variables into the session.
    """
    from ..hook_handler import TIMEAWARE_HOOKS

    editor, level = _editor(project)
    _load_or_exit(editor)

    installed = sum(1 for event, command in TIMEAWARE_HOOKS if editor.add_hook(event, command))

    if installed:
        events = ", ".join(event for event, _ in TIMEAWARE_HOOKS)
        rprint(f"[green]✓[/green] Installed {installed} hook(s) in {level} settings")
        rprint(f"  [dim]{editor.path}[/dim]")
        rprint(f"\n  Events: {events}")
    else:
        rprint(f"[green]✓[/green] All {len(TIMEAWARE_HOOKS)} hook(s) already installed in {level} settings")


@hooks_app.command("uninstall")
def hooks_uninstall(project: ProjectOption = False):
    """Remove timeaware hooks from Claude Code settings."""
    from ..hook_handler import TIMEAWARE_HOOKS

    editor, level = _editor(project)
    _load_or_exit(editor)

    removed = sum(1 for event, command in TIMEAWARE_HOOKS if editor.remove_hook(event, command))

    if removed:
        rprint(f"[green]✓[/green] Removed {removed} hook(s) from {level} settings")
    else:
        rprint(f"[dim]No timeaware hooks found in {level} settings[/dim]")


@hooks_app.command("status")
def hooks_status():
    """Show whether timeaware hooks are installed."""
    from ..claude_config import ClaudeConfigEditor
    from ..hook_handler import TIMEAWARE_HOOKS

    for level_name, editor in [
        ("User-level", ClaudeConfigEditor.user_level()),
        ("Project-level", ClaudeConfigEditor.project_level()),
    ]:
        rprint(f"\n{level_name} ({editor.path}):")
        try:
            editor.load()
        except ValueError:
            rprint("  [red](invalid JSON)[/red]")
            continue

        if not editor.path.exists():
            rprint("  [dim](no settings file)[/dim]")
            continue

        for event, command in TIMEAWARE_HOOKS:
            if editor.has_hook(event, command):
                rprint(f"  {event:<20} {command}  [green]✓[/green]")
            else:
                rprint(f"  {event:<20} [dim]not installed[/dim]")
