"""
Configuration module for the article distiller.

Provides Pydantic-based settings management with YAML file support
and environment variable overrides.
"""

from distiller.config.settings import (
    Settings,
    ExtractionSettings,
    FetchSettings,
    PaginationSettings,
    OutputSettings,
    LoggingSettings,
    MAX_PAGES_LIMIT,
)
from distiller.config.loader import (
    load_config,
    load_yaml_mapping,
    get_settings,
    reset_settings,
)

__all__ = [
    "Settings",
    "ExtractionSettings",
    "FetchSettings",
    "PaginationSettings",
    "OutputSettings",
    "LoggingSettings",
    "MAX_PAGES_LIMIT",
    "load_config",
    "load_yaml_mapping",
    "get_settings",
    "reset_settings",
]
