"""
Utilities module for the article distiller.

Provides logging setup and helpers.
"""

from distiller.utils.logging import (
    setup_logging,
    get_logger,
    get_logger_with_context,
    reset_logging,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "get_logger_with_context",
    "reset_logging",
]
