""".env support for the CLAWDBOT_* settings.

A user-level ``~/.config/clawdbot/.env`` and a project ``.env`` may set the
same variables ``apply_env_overrides`` reads. Only keys starting with
``CLAWDBOT_`` are taken from these files; anything else in them belongs to
other tools and is left alone.

Precedence: exported shell variables > project .env > user .env
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import dotenv_values

from .loader import get_xdg_config_home

logger = logging.getLogger(__name__)

ENV_PREFIX = "CLAWDBOT_"


def get_user_env_path() -> Path:
    return get_xdg_config_home() / "clawdbot" / ".env"


def read_env_settings(path: Path) -> dict[str, str]:
    """
    Read the CLAWDBOT_* assignments from one .env file.

    Keys without a value (a bare ``CLAWDBOT_X`` line) are skipped.

    Returns:
        Mapping of setting name to value; empty if the file does not exist
    """
    if not path.is_file():
        return {}
    settings: dict[str, str] = {}
    for key, value in dotenv_values(path).items():
        if key and key.startswith(ENV_PREFIX) and value is not None:
            settings[key] = value
    return settings


def load_layered_env(
    *,
    project_dir: Path | None = None,
    user_env_path: Path | None = None,
) -> dict[str, str]:
    """
    Export CLAWDBOT_* settings from the user and project .env files.

    Args:
        project_dir: Directory holding the project .env (defaults to cwd)
        user_env_path: User .env file (defaults to the XDG config location)

    Returns:
        The settings that were actually exported, i.e. the ones not already
        present in the process environment.
    """
    if project_dir is None:
        project_dir = Path.cwd()
    if user_env_path is None:
        user_env_path = get_user_env_path()

    settings = read_env_settings(user_env_path)
    settings.update(read_env_settings(project_dir / ".env"))

    exported = {key: value for key, value in settings.items() if key not in os.environ}
    os.environ.update(exported)
    if exported:
        logger.debug("Loaded %s from .env files", ", ".join(sorted(exported)))
    return exported
