"""
Configuration loader with YAML file support and environment variable overrides.

Values are layered, lowest priority first:
1. Defaults (defined in settings.py)
2. YAML configuration file
3. Environment variables

Environment variables use the pattern: DISTILLER__{SECTION}__{KEY}
Example: DISTILLER__PAGINATION__MAX_PAGES=5
"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from distiller.config.settings import Settings
from distiller.core.exceptions import ConfigurationError


ENV_PREFIX = "DISTILLER"

_settings_instance: Settings | None = None


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge two dictionaries recursively, override taking precedence."""
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def _parse_env_value(value: str) -> Any:
    """
    Parse an environment variable string into a Python value.

    Booleans and None are recognised by keyword; numbers are tried as int
    then float; anything else stays a string.
    """
    lowered = value.lower()
    if lowered in ("true", "yes", "on"):
        return True
    if lowered in ("false", "no", "off"):
        return False
    if lowered in ("none", "null", ""):
        return None

    for cast in (int, float):
        try:
            return cast(value)
        except ValueError:
            continue

    return value


def _load_env_overrides(prefix: str = ENV_PREFIX) -> dict[str, Any]:
    """
    Collect overrides from ``{PREFIX}__{SECTION}__{KEY}`` variables.

    Args:
        prefix: Environment variable prefix to look for

    Returns:
        Nested dictionary of configuration overrides
    """
    overrides: dict[str, Any] = {}
    prefix_with_sep = f"{prefix}__"

    for key, value in os.environ.items():
        if not key.startswith(prefix_with_sep):
            continue

        key_path = key[len(prefix_with_sep):].lower().split("__")
        if len(key_path) < 2:
            continue

        current = overrides
        for part in key_path[:-1]:
            current = current.setdefault(part, {})

        current[key_path[-1]] = _parse_env_value(value)

    return overrides


def load_yaml_mapping(path: Path) -> dict[str, Any]:
    """
    Load a YAML file that must contain a mapping.

    Args:
        path: Path to the YAML file

    Returns:
        Dictionary of values (empty for an empty file)

    Raises:
        FileNotFoundError: If the file doesn't exist
        ConfigurationError: If the file is not valid YAML or not a mapping
    """
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            content = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            "Invalid YAML", details={"path": str(path), "error": str(e)}
        ) from e

    if content is None:
        return {}

    if not isinstance(content, dict):
        raise ConfigurationError(
            "Configuration file must contain a mapping",
            details={"path": str(path), "type": type(content).__name__},
        )

    return content


def load_config(
    config_path: Path | str | None = None,
    env_prefix: str = ENV_PREFIX,
) -> Settings:
    """
    Load configuration from YAML file with environment variable overrides.

    Args:
        config_path: Path to YAML configuration file. If None, uses defaults only.
        env_prefix: Prefix for environment variables

    Returns:
        Validated Settings instance

    Raises:
        FileNotFoundError: If config_path is specified but doesn't exist
        ConfigurationError: If the file or any value is invalid
    """
    config_data: dict[str, Any] = {}

    if config_path is not None:
        config_data = _deep_merge(config_data, load_yaml_mapping(Path(config_path)))

    config_data = _deep_merge(config_data, _load_env_overrides(env_prefix))

    try:
        return Settings(**config_data)
    except ValidationError as e:
        raise ConfigurationError(
            "Invalid configuration", details={"errors": e.error_count()}
        ) from e


def get_settings(
    config_path: Path | str | None = None,
    reload: bool = False,
) -> Settings:
    """
    Get the global Settings instance, loading it on first use.

    Args:
        config_path: YAML file to load (only used on first load or reload)
        reload: If True, force reload configuration

    Returns:
        Global Settings instance
    """
    global _settings_instance

    if _settings_instance is None or reload:
        _settings_instance = load_config(config_path or get_default_config_path())

    return _settings_instance


def reset_settings() -> None:
    """Reset the cached settings instance."""
    global _settings_instance
    _settings_instance = None


def get_default_config_path() -> Path | None:
    """
    Find a configuration file in the usual places.

    Searches, in order:
    1. ./distiller.yaml
    2. ./config/distiller.yaml
    3. ~/.distiller/config.yaml

    Returns:
        Path to configuration file if found, None otherwise
    """
    search_paths = [
        Path.cwd() / "distiller.yaml",
        Path.cwd() / "config" / "distiller.yaml",
        Path.home() / ".distiller" / "config.yaml",
    ]

    for path in search_paths:
        if path.exists():
            return path

    return None
