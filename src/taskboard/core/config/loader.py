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

from .models import TaskboardConfig

logger = logging.getLogger(__name__)

PROJECT_CONFIG_FILENAME = ".taskboard.json"

# Global cache to avoid reloading config multiple times per invocation
_config_cache: TaskboardConfig | None = None


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
    """Path to ~/.config/taskboard/config.json (or XDG equivalent)."""
    return get_xdg_config_home() / "taskboard" / "config.json"


def get_project_config_path(project_dir: Path | None = None) -> Path:
    """Path to .taskboard.json in the project root (defaults to cwd)."""
    if project_dir is None:
        project_dir = Path.cwd()
    return project_dir / PROJECT_CONFIG_FILENAME


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Deep merge two dictionaries.

    Values in `override` take precedence over values in `base`. Nested
    dicts are merged, not replaced.

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
    """
    if not path.exists():
        return None

    try:
        with path.open(encoding="utf-8") as f:
            data = json.load(f)
            if isinstance(data, dict):
                return data
            logger.warning("Ignoring config at %s: top level is not an object", path)
            return None
    except (json.JSONDecodeError, OSError) as e:
        # Config system should be resilient to a broken file
        logger.warning("Failed to parse config at %s: %s", path, e)
        return None


def apply_env_overrides(config_dict: dict[str, Any]) -> dict[str, Any]:
    """
    Apply environment variable overrides to configuration.

    Supported env vars:
        TASKBOARD_SPECS_DIR - overrides layout.specs_dir
        TASKBOARD_TASKS_DIR - overrides layout.tasks_dir
        TASKBOARD_ACTOR - overrides actor
    """
    result = config_dict.copy()

    if specs_dir := os.environ.get("TASKBOARD_SPECS_DIR"):
        result["layout"] = {**result.get("layout", {}), "specs_dir": specs_dir}

    if tasks_dir := os.environ.get("TASKBOARD_TASKS_DIR"):
        result["layout"] = {**result.get("layout", {}), "tasks_dir": tasks_dir}

    if actor := os.environ.get("TASKBOARD_ACTOR"):
        result["actor"] = actor

    return result


def get_default_config() -> dict[str, Any]:
    """Hardcoded default configuration."""
    return {
        "layout": {"specs_dir": "specs", "tasks_dir": "tasks"},
        "merge": {"strategy": "merge", "target": "main"},
    }


def load_config(project_dir: Path | None = None, use_cache: bool = True) -> TaskboardConfig:
    """
    Load configuration with multi-layer merging.

    Configuration precedence (highest to lowest):
        1. Environment variables (TASKBOARD_*)
        2. Project config (.taskboard.json)
        3. User config (~/.config/taskboard/config.json)
        4. Hardcoded defaults

    Raises:
        ValidationError: If the merged config fails Pydantic validation
    """
    global _config_cache

    if use_cache and _config_cache is not None:
        return _config_cache

    merged = get_default_config()

    if user_config := load_json_file(get_user_config_path()):
        merged = deep_merge(merged, user_config)

    if project_config := load_json_file(get_project_config_path(project_dir)):
        merged = deep_merge(merged, project_config)

    merged = apply_env_overrides(merged)

    config = TaskboardConfig(**merged)
    _config_cache = config
    return config


def clear_cache() -> None:
    """
    Clear the cached configuration.

    Useful for testing or when config files change during execution.
    """
    global _config_cache
    _config_cache = None
