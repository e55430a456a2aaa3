"""
Logging configuration for timeaware.

All loggers live under the ``timeaware`` namespace and write to stderr,
so stdout stays clean for ``eval "$(timeaware env)"`` and for hook output
that Claude Code reads.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Optional

from rich.console import Console
from rich.logging import RichHandler


ROOT_LOGGER_NAME = "timeaware"
DEFAULT_LOG_DIR = Path.home() / ".timeaware" / "logs"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Get a logger in the timeaware namespace.

    Args:
        name: Component name, e.g. 'temporal_context'

    Returns:
        Logger named 'timeaware.<name>'
    """
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    console: bool = True,
    rich_console: bool = False,
) -> logging.Logger:
    """Configure the timeaware root logger.

    Existing handlers are removed first, so calling this twice does not
    duplicate output.

    Args:
        level: Logging level
        log_file: Optional file to also log to (parent dirs are created)
        console: Whether to log to stderr
        rich_console: Use rich formatting for the stderr handler

    Returns:
        The configured root logger
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()

    if console:
        if rich_console:
            handler: logging.Handler = RichHandler(
                console=Console(stderr=True),
                show_path=False,
                rich_tracebacks=True,
            )
            handler.setFormatter(logging.Formatter("%(message)s"))
        else:
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(file_handler)

    return logger


def setup_cli_logging(verbose: bool = False) -> logging.Logger:
    """Logging for interactive CLI use.

    Only warnings are shown unless verbose is set.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    setup_logging(level=level, console=True, rich_console=True)
    return get_logger("cli")


def setup_hook_logging(log_file: Optional[Path] = None) -> logging.Logger:
    """Logging for the hook handler.

    Claude Code shows hook stderr to the user, so hooks log to a file only.
    If the log file cannot be opened, hook logs are discarded.
    """
    if log_file is None:
        log_file = DEFAULT_LOG_DIR / "hook.log"
    try:
        setup_logging(level=logging.INFO, log_file=log_file, console=False)
    except OSError:
        root = setup_logging(level=logging.INFO, console=False)
        # Keeps logging's last-resort stderr handler out of hook output
        root.addHandler(logging.NullHandler())
    return get_logger("hook_handler")


class StructuredLogger:
    """Logger wrapper that appends key=value context to messages."""

    def __init__(self, logger: logging.Logger, context: Optional[dict] = None):
        self._logger = logger
        self._context = dict(context or {})

    def with_context(self, **kwargs: Any) -> "StructuredLogger":
        """Return a new logger with extra context merged in."""
        merged = {**self._context, **kwargs}
        return StructuredLogger(self._logger, merged)

    def _format_message(self, msg: str, **kwargs: Any) -> str:
        fields = {**self._context, **kwargs}
        if not fields:
            return msg
        suffix = " ".join(f"{k}={v}" for k, v in fields.items())
        return f"{msg} [{suffix}]"

    def debug(self, msg: str, **kwargs: Any) -> None:
        self._logger.debug(self._format_message(msg, **kwargs))

    def info(self, msg: str, **kwargs: Any) -> None:
        self._logger.info(self._format_message(msg, **kwargs))

    def warning(self, msg: str, **kwargs: Any) -> None:
        self._logger.warning(self._format_message(msg, **kwargs))

    def error(self, msg: str, **kwargs: Any) -> None:
        self._logger.error(self._format_message(msg, **kwargs))

    def exception(self, msg: str, **kwargs: Any) -> None:
        self._logger.exception(self._format_message(msg, **kwargs))


def get_structured_logger(name: str) -> StructuredLogger:
    """Get a StructuredLogger wrapping get_logger(name)."""
    return StructuredLogger(get_logger(name))
