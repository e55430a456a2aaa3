"""
Unit test configuration for timeaware.

Keeps tests away from the user's real ~/.timeaware config and ~/.claude
settings, and resets logging between tests.
"""

import logging

import pytest


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point TIMEAWARE_CONFIG at a (missing) file under tmp_path."""
    config_file = tmp_path / "timeaware-config" / "config.yaml"
    monkeypatch.setenv("TIMEAWARE_CONFIG", str(config_file))
    monkeypatch.delenv("CLAUDE_ENV_FILE", raising=False)
    yield config_file


@pytest.fixture
def fake_home(tmp_path, monkeypatch):
    """Redirect Path.home() to a temp directory."""
    from pathlib import Path

    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setattr(Path, "home", staticmethod(lambda: home))
    return home


@pytest.fixture(autouse=True)
def reset_logging():
    """Clear handlers added by setup_logging after each test."""
    yield
    logger = logging.getLogger("timeaware")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
