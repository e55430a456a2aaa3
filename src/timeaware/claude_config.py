"""Read and write Claude Code settings.json files.

Only the "hooks" section is touched; every other key is preserved as-is.
"""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Iterator


class ClaudeConfigEditor:
    """Edit hook registrations in a Claude Code settings.json."""

    def __init__(self, path: Path):
        self.path = Path(path)

    @classmethod
    def user_level(cls) -> ClaudeConfigEditor:
        """Editor for ~/.claude/settings.json."""
        return cls(Path.home() / ".claude" / "settings.json")

    @classmethod
    def project_level(cls, project_dir: Path | None = None) -> ClaudeConfigEditor:
        """Editor for <project>/.claude/settings.json (defaults to cwd)."""
        base = Path(project_dir) if project_dir else Path.cwd()
        return cls(base / ".claude" / "settings.json")

    def load(self) -> dict:
        """Load settings.

        Returns {} if the file doesn't exist.
        Raises ValueError on invalid JSON or non-object content.
        """
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text())
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} contains non-object JSON")
        return data

    def save(self, settings: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(settings, indent=2) + "\n")

    @staticmethod
    def _entries_with(settings: dict, event: str, command: str) -> Iterator[int]:
        """Yield indexes of matcher groups under event that run command."""
        for i, entry in enumerate(settings.get("hooks", {}).get(event, [])):
            if any(h.get("command") == command for h in entry.get("hooks", [])):
                yield i

    def has_hook(self, event: str, command: str) -> bool:
        return next(self._entries_with(self.load(), event, command), None) is not None

    def add_hook(self, event: str, command: str, matcher: str = "") -> bool:
        """Register a command hook.

        Returns True if added, False if it was already registered.
        """
        settings = self.load()
        if next(self._entries_with(settings, event, command), None) is not None:
            return False

        updated = copy.deepcopy(settings)
        updated.setdefault("hooks", {}).setdefault(event, []).append({
            "matcher": matcher,
            "hooks": [{"type": "command", "command": command}],
        })
        self.save(updated)
        return True

    def remove_hook(self, event: str, command: str) -> bool:
        """Remove every matcher group under event that runs command.

        Returns True if anything was removed. Empty event lists and an
        empty hooks object are dropped.
        """
        settings = self.load()
        indexes = set(self._entries_with(settings, event, command))
        if not indexes:
            return False

        updated = copy.deepcopy(settings)
        remaining = [
            entry for i, entry in enumerate(updated["hooks"][event]) if i not in indexes
        ]
        if remaining:
            updated["hooks"][event] = remaining
        else:
            del updated["hooks"][event]
        if not updated["hooks"]:
            del updated["hooks"]

        self.save(updated)
        return True
