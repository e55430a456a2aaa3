"""Claude Code SessionStart hook.

Registered as:
    SessionStart -> timeaware hook-handler

Claude Code pipes the hook event JSON on stdin. The handler prints the
temporal banner (added to the session context) and, when Claude Code
provides CLAUDE_ENV_FILE, appends export lines so every Bash tool call
in the session sees the PREFIX_* variables.
"""

import json
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, TextIO

from .logging_config import get_structured_logger

logger = get_structured_logger("hook_handler")

HOOK_COMMAND = "timeaware hook-handler"

# All hooks that timeaware installs
TIMEAWARE_HOOKS: list[tuple[str, str]] = [
    ("SessionStart", HOOK_COMMAND),
]

HANDLED_EVENTS = {"SessionStart"}


def read_hook_event(stdin: TextIO) -> Optional[str]:
    """Return hook_event_name from stdin JSON, or None if absent or unparseable."""
    try:
        if stdin.isatty():
            return None
        raw = stdin.read()
    except (OSError, ValueError):
        return None
    if not raw.strip():
        return None
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        logger.debug("Hook stdin is not JSON, ignoring")
        return None
    if not isinstance(data, dict):
        return None
    return data.get("hook_event_name")


def handle_hook_event(
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
    now: Optional[datetime] = None,
    config: Optional[dict] = None,
) -> None:
    """Entry point for `timeaware hook-handler`.

    Events other than SessionStart are ignored. Missing stdin is treated
    as a SessionStart so the command can also be run by hand.
    Never raises: a failing hook must not break the Claude session.
    """
    from .config import get_temporal_config
    from .display import format_banner
    from .env_export import DEFAULT_PREFIX, append_env_file, to_env
    from .temporal_context import build_from_config

    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout

    event = read_hook_event(stdin)
    if event is not None and event not in HANDLED_EVENTS:
        return

    if config is None:
        config = get_temporal_config()
    ctx = build_from_config(now=now, config=config)

    print(format_banner(ctx), file=stdout)
    logger.info("Session context", event=event or "manual", zone=ctx.timezone)

    env_file = os.environ.get("CLAUDE_ENV_FILE")
    if not env_file:
        return
    try:
        append_env_file(Path(env_file), to_env(ctx, config.get("env_prefix", DEFAULT_PREFIX)))
    except (OSError, ValueError) as e:
        logger.warning("Could not write env file", path=env_file, error=e)
