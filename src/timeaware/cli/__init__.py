"""
CLI interface for timeaware using Typer.
"""

# Import shared state (apps, options, utilities) - must come first
from ._shared import app, main_callback, parse_instant  # noqa: F401

# Import submodules to register their commands with the Typer apps
from . import context  # noqa: F401
from . import hooks  # noqa: F401
from . import instructions  # noqa: F401
from . import config  # noqa: F401
from . import zone  # noqa: F401


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
