"""
Logging configuration for the article distiller.

All package loggers hang off a single ``distiller`` root logger so that
one call to :func:`setup_logging` configures extraction, fetching and
pagination output together.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from distiller.config.settings import LoggingSettings


ROOT_LOGGER_NAME = "distiller"

DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_logging_configured = False


def setup_logging(
    settings: "LoggingSettings | None" = None,
    level: str | None = None,
) -> logging.Logger:
    """
    Configure the distiller root logger.

    Safe to call more than once: only the first call installs handlers.

    Args:
        settings: Logging configuration. If None, logs INFO to stderr.
        level: Level name overriding ``settings.level`` (e.g. from --verbose)

    Returns:
        The configured root logger for the package.
    """
    global _logging_configured

    logger = logging.getLogger(ROOT_LOGGER_NAME)

    if _logging_configured:
        return logger

    logger.handlers.clear()

    if settings is None:
        level_name = level or "INFO"
        log_format = DEFAULT_FORMAT
        date_format = DEFAULT_DATE_FORMAT
        log_to_console = True
        file_path = None
        max_file_size_mb = 10
        backup_count = 3
    else:
        level_name = level or settings.level
        log_format = settings.format
        date_format = settings.date_format
        log_to_console = settings.log_to_console
        file_path = settings.file_path
        max_file_size_mb = settings.max_file_size_mb
        backup_count = settings.backup_count

    numeric_level = getattr(logging, level_name.upper(), logging.INFO)
    logger.setLevel(numeric_level)
    formatter = logging.Formatter(fmt=log_format, datefmt=date_format)

    if log_to_console:
        # stderr keeps stdout clean for extracted content
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if file_path is not None:
        logger.addHandler(
            _create_file_handler(
                file_path=file_path,
                max_bytes=max_file_size_mb * 1024 * 1024,
                backup_count=backup_count,
                level=numeric_level,
                formatter=formatter,
            )
        )

    logger.propagate = False
    _logging_configured = True

    return logger


def _create_file_handler(
    file_path: Path,
    max_bytes: int,
    backup_count: int,
    level: int,
    formatter: logging.Formatter,
) -> RotatingFileHandler:
    """Create a rotating file handler, creating the parent directory."""
    file_path.parent.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(
        filename=str(file_path),
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)

    return handler


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Get a logger that is a child of the distiller root logger.

    Args:
        name: Module name, typically ``__name__``. None returns the root.

    Returns:
        Logger instance

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.debug("Scoring paragraphs")
    """
    if name is None:
        return logging.getLogger(ROOT_LOGGER_NAME)

    if name.startswith(ROOT_LOGGER_NAME):
        return logging.getLogger(name)

    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def reset_logging() -> None:
    """
    Remove all handlers and allow :func:`setup_logging` to run again.

    Used by tests and by the CLI when re-configuring.
    """
    global _logging_configured

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)

    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    _logging_configured = False


class ContextLoggerAdapter(logging.LoggerAdapter):
    """
    Logger adapter appending ``[key=value]`` context to every message.

    Example:
        >>> logger = ContextLoggerAdapter(get_logger(__name__), {"page": 2})
        >>> logger.info("Fetched")  # "Fetched [page=2]"
    """

    def process(self, msg: str, kwargs: dict) -> tuple[str, dict]:
        if self.extra:
            context_str = " ".join(f"[{k}={v}]" for k, v in self.extra.items())
            msg = f"{msg} {context_str}"
        return msg, kwargs


def get_logger_with_context(
    name: str | None = None,
    **context: object,
) -> ContextLoggerAdapter:
    """
    Get a logger whose messages carry the given context.

    Args:
        name: Module name for the logger
        **context: Key-value pairs appended to all messages

    Returns:
        ContextLoggerAdapter with context attached

    Example:
        >>> logger = get_logger_with_context(__name__, url="https://example.com/a")
        >>> logger.info("Pagination stopped")
    """
    return ContextLoggerAdapter(get_logger(name), context)
