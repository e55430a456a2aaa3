"""
Temporal-context documentation block for Claude Code custom instructions.

The block tells Claude which PREFIX_* variables exist and how to use
them. It is appended once to ~/.claude/prompts/custom_instructions.md;
the marker heading makes installs idempotent and lets us remove it again.
"""

from pathlib import Path
from typing import Literal

from .env_export import DEFAULT_PREFIX, validate_prefix

TEMPORAL_INSTRUCTIONS_MARKER = "# Temporal Context Awareness"
END_MARKER = "*Temporal context updated on each Claude Code launch via `timeaware`.*"

# Closing lines of blocks written by the older claude-time installer
LEGACY_END_MARKERS = (
    "*Temporal context updated on each Claude Code launch via `claude-time` wrapper.*",
)

InstallResult = Literal["created", "appended", "present"]


def default_instructions_path() -> Path:
    return Path.home() / ".claude" / "prompts" / "custom_instructions.md"


def render_instructions(prefix: str = DEFAULT_PREFIX) -> str:
    """Build the documentation block for a variable prefix."""
    p = validate_prefix(prefix)
    return f"""\
{TEMPORAL_INSTRUCTIONS_MARKER}

Claude Code has access to temporal information via environment variables:

## Current Time Information

- **UTC Time**: `${p}_TIMESTAMP_UTC` (ISO 8601)
- **Local Time**: `${p}_TIMESTAMP_LOCAL` (ISO 8601)
- **Timezone**: `${p}_TIMEZONE` (`${p}_TIMEZONE_ID`, offset: `${p}_TIMEZONE_OFFSET`)
- **Summary**: `${p}_TIME_SUMMARY`

## Calendar Context

- **Date**: `${p}_DATE_LOCAL` (Local) / `${p}_DATE_UTC` (UTC)
- **Day**: `${p}_DAY_OF_WEEK` (Day `${p}_DAY_OF_WEEK_NUM` of week, Monday=1)
- **Week**: ISO week `${p}_WEEK_OF_YEAR` of `${p}_ISO_YEAR`
- **Month**: `${p}_MONTH` (`${p}_MONTH_NUM`)
- **Quarter**: Q`${p}_QUARTER` of `${p}_YEAR`
- **Day of Year**: Day `${p}_DAY_OF_YEAR` of 365/366

## Time Period Flags

- **Business Hours**: `${p}_IS_BUSINESS_HOURS` (9 AM - 5 PM local, weekends included)
- **Market Hours**: `${p}_IS_MARKET_HOURS` (NYSE: 9:30 AM - 4 PM ET)
- **Weekend**: `${p}_IS_WEEKEND` (Saturday/Sunday)

## Usage in Context

When responding to time-sensitive queries:
- Use `${p}_DATE_LOCAL` for current date references
- Check `${p}_IS_BUSINESS_HOURS` for business-context responses
- Reference `${p}_DAY_OF_WEEK` for day-specific logic
- Use `${p}_TIMEZONE` for timezone-aware responses

## Unix Timestamp

- **Timestamp**: `${p}_UNIX_TIMESTAMP` (seconds since epoch)

---

{END_MARKER}
"""


def has_instructions(path: Path) -> bool:
    path = Path(path)
    return path.exists() and TEMPORAL_INSTRUCTIONS_MARKER in path.read_text()


def install_instructions(path: Path, prefix: str = DEFAULT_PREFIX) -> InstallResult:
    """Add the block to a custom-instructions file.

    Returns:
        'created' for a new file, 'appended' for an existing one,
        'present' if the block was already there (file untouched)
    """
    path = Path(path)
    block = render_instructions(prefix)

    if not path.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(block)
        return "created"

    existing = path.read_text()
    if TEMPORAL_INSTRUCTIONS_MARKER in existing:
        return "present"

    separator = "\n" if existing.endswith("\n") else "\n\n"
    path.write_text(existing + separator + block)
    return "appended"


def _block_end(text: str, start: int) -> int:
    """Offset just past the block that begins at start.

    Ends at the first closing line (current or legacy). Without one, the
    block runs to the next top-level heading, or to end of file.
    """
    ends = []
    for marker in (END_MARKER, *LEGACY_END_MARKERS):
        found = text.find(marker, start)
        if found != -1:
            ends.append(found + len(marker))
    if ends:
        return min(ends)

    next_heading = text.find("\n# ", start + len(TEMPORAL_INSTRUCTIONS_MARKER))
    return len(text) if next_heading == -1 else next_heading + 1


def remove_instructions(path: Path) -> bool:
    """Strip the block from a file.

    Returns True if a block was removed. Text before and after it is kept.
    """
    path = Path(path)
    if not path.exists():
        return False

    text = path.read_text()
    start = text.find(TEMPORAL_INSTRUCTIONS_MARKER)
    if start == -1:
        return False

    end = _block_end(text, start)
    before = text[:start].rstrip("\n")
    after = text[end:].strip("\n")
    parts = [part for part in (before, after) if part]
    path.write_text("\n\n".join(parts) + ("\n" if parts else ""))
    return True
