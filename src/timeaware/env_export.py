"""
Serialize a TemporalContext into a flat PREFIX_<FIELD> mapping.

The mapping is what shells and Claude Code see: every value is a string,
booleans are the literals "true"/"false", and zero padding follows
date(1) (%d, %j, %V, %m, %H).
"""

import json
import re
import shlex
from pathlib import Path

from .temporal_context import TemporalContext

DEFAULT_PREFIX = "CLAUDE"
FORMATS = ("shell", "powershell", "dotenv", "json")

_PREFIX_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def format_flag(value: bool) -> str:
    """Boolean as the lowercase literal used in exports and the banner."""
    return "true" if value else "false"


def validate_prefix(prefix: str) -> str:
    """Return prefix unchanged, or raise ValueError if it can't start a variable name."""
    if not _PREFIX_RE.match(prefix or ""):
        raise ValueError(f"Invalid variable prefix: {prefix!r}")
    return prefix


def to_env(ctx: TemporalContext, prefix: str = DEFAULT_PREFIX) -> dict[str, str]:
    """Flatten a context into environment-variable form.

    Args:
        ctx: Context to serialize
        prefix: Variable prefix, e.g. 'CLAUDE' -> CLAUDE_DATE_LOCAL

    Returns:
        Ordered dict of variable name to string value
    """
    validate_prefix(prefix)
    utc = ctx.utc_instant
    local = ctx.local_instant

    fields = {
        "TIMESTAMP_UTC": utc.strftime("%Y-%m-%dT%H:%M:%SZ"),
        "DATE_UTC": utc.strftime("%Y-%m-%d"),
        "TIME_UTC": utc.strftime("%H:%M:%S"),
        "TIMESTAMP_LOCAL": local.strftime("%Y-%m-%dT%H:%M:%S") + ctx.timezone_offset,
        "DATE_LOCAL": local.strftime("%Y-%m-%d"),
        "TIME_LOCAL": local.strftime("%H:%M:%S"),
        "TIMEZONE": ctx.timezone_abbreviation,
        "TIMEZONE_ID": ctx.timezone,
        "TIMEZONE_OFFSET": ctx.timezone_offset,
        "DAY_OF_WEEK": ctx.day_of_week,
        "DAY_OF_WEEK_NUM": str(ctx.day_of_week_num),
        "DAY_OF_MONTH": f"{ctx.day:02d}",
        "DAY_OF_YEAR": f"{ctx.day_of_year:03d}",
        "WEEK_OF_YEAR": f"{ctx.week_of_year:02d}",
        "ISO_YEAR": str(ctx.iso_year),
        "MONTH": ctx.month_name,
        "MONTH_NUM": f"{ctx.month:02d}",
        "YEAR": str(ctx.year),
        "QUARTER": str(ctx.quarter),
        "IS_MARKET_HOURS": format_flag(ctx.is_market_hours),
        "IS_BUSINESS_HOURS": format_flag(ctx.is_business_hours),
        "IS_WEEKEND": format_flag(ctx.is_weekend),
        "UNIX_TIMESTAMP": str(ctx.unix_timestamp),
        "HOUR_12": ctx.hour_12,
        "HOUR_24": f"{ctx.hour:02d}",
        "TIME_SUMMARY": ctx.time_summary,
    }
    return {f"{prefix}_{key}": value for key, value in fields.items()}


def _powershell_quote(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


def render(env: dict[str, str], fmt: str = "shell") -> str:
    """Render a mapping for a given consumer.

    Args:
        env: Mapping from to_env()
        fmt: One of 'shell', 'powershell', 'dotenv', 'json'

    Raises:
        ValueError: Unknown format
    """
    if fmt == "shell":
        return "\n".join(f"export {k}={shlex.quote(v)}" for k, v in env.items())
    if fmt == "powershell":
        return "\n".join(f"$env:{k} = {_powershell_quote(v)}" for k, v in env.items())
    if fmt == "dotenv":
        return "\n".join(f"{k}={json.dumps(v)}" for k, v in env.items())
    if fmt == "json":
        return json.dumps(env, indent=2)
    raise ValueError(f"Unknown format {fmt!r} (expected one of: {', '.join(FORMATS)})")


def append_env_file(path: Path, env: dict[str, str]) -> None:
    """Append export lines to a file sourced by Claude Code (CLAUDE_ENV_FILE)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "a") as f:
        f.write(render(env, "shell") + "\n")
