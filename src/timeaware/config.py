"""
User configuration for timeaware.

Config lives in ~/.timeaware/config.yaml (or wherever TIMEAWARE_CONFIG
points). Every option is optional; a missing or broken file behaves like
an empty one.
"""

import os
from pathlib import Path
from typing import Optional

import yaml

from .logging_config import get_logger

logger = get_logger("config")

CONFIG_PATH = Path.home() / ".timeaware" / "config.yaml"

DEFAULT_ENV_PREFIX = "CLAUDE"
DEFAULT_BUSINESS_START = 9
DEFAULT_BUSINESS_END = 17

CONFIG_TEMPLATE = """\
# timeaware configuration
# Location: ~/.timeaware/config.yaml (override with TIMEAWARE_CONFIG)

# IANA timezone used for local fields. Omit to use the host's zone.
# timezone: America/New_York

# Prefix for exported variables (CLAUDE -> CLAUDE_DATE_LOCAL, ...)
# env_prefix: CLAUDE

# Local business-hours window, start inclusive, end exclusive
# business_hours:
#   start: 9
#   end: 17
"""


def get_config_path() -> Path:
    """Return the active config path, honoring TIMEAWARE_CONFIG."""
    override = os.environ.get("TIMEAWARE_CONFIG")
    if override:
        return Path(override).expanduser()
    return CONFIG_PATH


def load_config() -> dict:
    """Load the config file.

    Returns:
        Parsed mapping, or {} if the file is missing, invalid, or not a mapping
    """
    path = get_config_path()
    if not path.exists():
        return {}

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (yaml.YAMLError, UnicodeDecodeError, OSError) as e:
        logger.warning("Ignoring unreadable config %s: %s", path, e)
        return {}

    if not isinstance(data, dict):
        return {}
    return data


def save_config(config: dict) -> None:
    """Write config as YAML, creating parent directories."""
    path = get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(config, f, default_flow_style=False, sort_keys=False)


def _valid_hour(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= 23


def get_temporal_config(config: Optional[dict] = None) -> dict:
    """Return temporal settings merged over defaults.

    Args:
        config: Already-loaded config, or None to read the file

    Returns:
        Dict with 'timezone', 'env_prefix' and 'business_hours' (start, end)
    """
    if config is None:
        config = load_config()

    timezone_name = config.get("timezone")
    if timezone_name is not None and not isinstance(timezone_name, str):
        logger.warning("Ignoring non-string timezone in config: %r", timezone_name)
        timezone_name = None

    prefix = config.get("env_prefix") or DEFAULT_ENV_PREFIX
    if not isinstance(prefix, str):
        logger.warning("Ignoring non-string env_prefix in config: %r", prefix)
        prefix = DEFAULT_ENV_PREFIX

    start, end = DEFAULT_BUSINESS_START, DEFAULT_BUSINESS_END
    hours = config.get("business_hours")
    if isinstance(hours, dict):
        cfg_start = hours.get("start", start)
        cfg_end = hours.get("end", end)
        if _valid_hour(cfg_start) and _valid_hour(cfg_end):
            start, end = cfg_start, cfg_end
        else:
            logger.warning(
                "Invalid business_hours %r, using %d-%d",
                hours, DEFAULT_BUSINESS_START, DEFAULT_BUSINESS_END,
            )
    elif hours is not None:
        logger.warning("business_hours must be a mapping, got %r", hours)

    return {
        "timezone": timezone_name,
        "env_prefix": prefix,
        "business_hours": (start, end),
    }
