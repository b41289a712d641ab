"""
Core module for the article distiller.

Contains the exception hierarchy used throughout the package.
"""

from distiller.core.exceptions import (
    DistillerError,
    RetryableError,
    ConfigurationError,
    InvalidURLError,
    FetchError,
    HTTPStatusError,
    UnsupportedContentTypeError,
    ContentTooLargeError,
    NetworkError,
    FetchTimeoutError,
    ExtractionError,
    ParseError,
    ContentExtractionError,
    is_retryable,
    get_retry_delay,
)

__all__ = [
    # Base
    "DistillerError",
    "RetryableError",
    "ConfigurationError",
    "InvalidURLError",
    # Fetch
    "FetchError",
    "HTTPStatusError",
    "UnsupportedContentTypeError",
    "ContentTooLargeError",
    "NetworkError",
    "FetchTimeoutError",
    # Extraction
    "ExtractionError",
    "ParseError",
    "ContentExtractionError",
    # Helpers
    "is_retryable",
    "get_retry_delay",
]
