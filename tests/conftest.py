"""
Pytest configuration and shared fixtures.

Every test runs with an isolated config home, working directory and
CLAWDBOT_* environment so real user config never leaks in.
"""

from pathlib import Path

import pytest

from clawdbot.core.config import clear_cache

_ENV_VARS = (
    "CLAWDBOT_PROGRAM_NAME",
    "CLAWDBOT_VERBOSE_INCLUDES_DEBUG",
    "CLAWDBOT_SKIP_MIGRATION",
)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Point config lookups at empty temp directories."""
    config_home = tmp_path / "xdg"
    config_home.mkdir()
    project = tmp_path / "project"
    project.mkdir()

    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    monkeypatch.chdir(project)
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)

    clear_cache()
    yield
    clear_cache()


@pytest.fixture
def project_dir() -> Path:
    """The isolated working directory for the current test."""
    return Path.cwd()


@pytest.fixture
def user_config_dir(tmp_path: Path) -> Path:
    """Directory holding the user-level config.json."""
    path = tmp_path / "xdg" / "clawdbot"
    path.mkdir(parents=True, exist_ok=True)
    return path
