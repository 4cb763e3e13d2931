"""
Configuration loading with multi-layer merging.

Implements the configuration precedence chain:
    defaults < user config < project config < env vars
"""

import json
import logging
import os
from pathlib import Path
from typing import Any

from .models import CliConfig

logger = logging.getLogger(__name__)

# Global cache to avoid reloading config multiple times per invocation
_config_cache: CliConfig | None = None

_FALSE_VALUES = ("false", "0", "no", "")


def get_xdg_config_home() -> Path:
    """
    Get XDG config home directory.

    Returns:
        Path to config directory (defaults to ~/.config)
    """
    if xdg_home := os.environ.get("XDG_CONFIG_HOME"):
        return Path(xdg_home)
    return Path.home() / ".config"


def get_user_config_path() -> Path:
    """Path to ~/.config/clawdbot/config.json (or XDG equivalent)."""
    return get_xdg_config_home() / "clawdbot" / "config.json"


def get_project_config_path(cwd: Path | None = None) -> Path:
    if cwd is None:
        cwd = Path.cwd()
    return cwd / ".clawdbot.json"


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Deep merge two dictionaries.

    Values in `override` take precedence over values in `base`. Nested dicts
    are merged, not replaced.

    Example:
        >>> deep_merge({"a": 1, "b": {"x": 10}}, {"b": {"y": 30}})
        {'a': 1, 'b': {'x': 10, 'y': 30}}
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def load_json_file(path: Path) -> dict[str, Any] | None:
    """
    Load a JSON file, returning None if it doesn't exist or is invalid.

    Args:
        path: Path to JSON file

    Returns:
        Parsed JSON object, or None if missing, unreadable, or not an object
    """
    if not path.exists():
        return None

    try:
        with path.open() as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Failed to parse config at %s: %s", path, e)
        return None

    if isinstance(data, dict):
        return data
    logger.warning("Ignoring config at %s: expected a JSON object", path)
    return None


def _is_truthy(value: str) -> bool:
    return value.strip().lower() not in _FALSE_VALUES


def apply_env_overrides(config_dict: dict[str, Any]) -> dict[str, Any]:
    """
    Apply environment variable overrides to configuration.

    Supported env vars:
        CLAWDBOT_PROGRAM_NAME - overrides program_name
        CLAWDBOT_VERBOSE_INCLUDES_DEBUG - overrides verbose_includes_debug
        CLAWDBOT_SKIP_MIGRATION - truthy value disables migration.enabled
    """
    result = config_dict.copy()

    if program_name := os.environ.get("CLAWDBOT_PROGRAM_NAME"):
        result["program_name"] = program_name.strip()

    if (include_debug := os.environ.get("CLAWDBOT_VERBOSE_INCLUDES_DEBUG")) is not None:
        result["verbose_includes_debug"] = _is_truthy(include_debug)

    if (skip := os.environ.get("CLAWDBOT_SKIP_MIGRATION")) is not None and _is_truthy(skip):
        migration = dict(result.get("migration") or {})
        migration["enabled"] = False
        result["migration"] = migration

    return result


def load_config(project_dir: Path | None = None, use_cache: bool = True) -> CliConfig:
    """
    Load configuration with multi-layer merging.

    Configuration precedence (highest to lowest):
        1. Environment variables (CLAWDBOT_*)
        2. Project config (.clawdbot.json)
        3. User config (~/.config/clawdbot/config.json)
        4. Model defaults

    Args:
        project_dir: Project directory to load .clawdbot.json from (defaults to cwd)
        use_cache: If True, return cached config from previous load

    Returns:
        Validated CliConfig instance

    Raises:
        ValidationError: If the merged config fails Pydantic validation
    """
    global _config_cache

    if use_cache and _config_cache is not None:
        return _config_cache

    merged: dict[str, Any] = {}

    if user_config := load_json_file(get_user_config_path()):
        merged = deep_merge(merged, user_config)

    if project_config := load_json_file(get_project_config_path(project_dir)):
        merged = deep_merge(merged, project_config)

    merged = apply_env_overrides(merged)

    config = CliConfig(**merged)
    _config_cache = config
    return config


def clear_cache() -> None:
    """Clear the cached configuration."""
    global _config_cache
    _config_cache = None
