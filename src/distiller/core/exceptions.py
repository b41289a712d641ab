"""
Custom exceptions for the article distiller.

Provides a hierarchy of exceptions for precise error handling across
fetching, parsing and extraction. All exceptions inherit from DistillerError.

Exception Hierarchy:
    DistillerError (base)
    ├── ConfigurationError
    ├── InvalidURLError
    ├── FetchError
    │   ├── HTTPStatusError
    │   ├── UnsupportedContentTypeError
    │   ├── ContentTooLargeError
    │   ├── NetworkError (retryable)
    │   └── FetchTimeoutError (retryable)
    └── ExtractionError
        ├── ParseError
        └── ContentExtractionError

An article whose content could not be found is NOT an error: the parser
returns it with ``content=None``.
"""

from typing import Any


class DistillerError(Exception):
    """
    Base exception for all distiller errors.

    Attributes:
        message: Human-readable error description
        details: Optional dictionary with additional context
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(
                f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, details={self.details!r})"


class RetryableError(DistillerError):
    """
    Marker class for errors that can be retried.

    Attributes:
        retry_after: Suggested delay in seconds before retry (optional)
    """

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        retry_after: float | None = None,
    ) -> None:
        super().__init__(message, details)
        self.retry_after = retry_after


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(DistillerError):
    """
    Error in configuration loading or validation.

    Raised when:
    - Configuration file is missing or malformed
    - Site extractor definitions are invalid
    """

    pass


class InvalidURLError(DistillerError):
    """Raised when a URL is not an absolute http(s) URL with a host."""

    def __init__(self, url: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["url"] = url
        super().__init__(
            "Invalid URL, expected an absolute http(s) URL", details)
        self.url = url


# =============================================================================
# Fetch Errors
# =============================================================================


class FetchError(DistillerError):
    """
    Base error for fetching a resource.

    During pagination any FetchError stops further page fetches, but the
    content accumulated so far is kept.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if url:
            details["url"] = url
        super().__init__(message, details)
        self.url = url


class HTTPStatusError(FetchError):
    """Response status was not 200."""

    def __init__(
        self,
        message: str,
        url: str | None = None,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if status_code:
            details["status_code"] = status_code
        super().__init__(message, url, details)
        self.status_code = status_code


class UnsupportedContentTypeError(FetchError):
    """Response content type is not HTML or text."""

    def __init__(
        self,
        content_type: str,
        url: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        details["content_type"] = content_type
        super().__init__("Unsupported content type", url, details)
        self.content_type = content_type


class ContentTooLargeError(FetchError):
    """Response body exceeds the configured size cap."""

    def __init__(
        self,
        size: int,
        max_size: int,
        url: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        details["size"] = size
        details["max_size"] = max_size
        super().__init__("Content too large", url, details)
        self.size = size
        self.max_size = max_size


class NetworkError(FetchError, RetryableError):
    """
    Transport-level failure (DNS, connection reset, TLS).

    This is retryable as network issues may be transient.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        details: dict[str, Any] | None = None,
        retry_after: float | None = None,
    ) -> None:
        FetchError.__init__(self, message, url, details)
        self.retry_after = retry_after


class FetchTimeoutError(NetworkError):
    """The request timed out."""

    def __init__(
        self,
        timeout: float,
        url: str | None = None,
        details: dict[str, Any] | None = None,
        retry_after: float | None = None,
    ) -> None:
        details = details or {}
        details["timeout"] = timeout
        super().__init__("Request timed out", url, details, retry_after)
        self.timeout = timeout


# =============================================================================
# Extraction Errors
# =============================================================================


class ExtractionError(DistillerError):
    """
    Base error for content extraction operations.
    """

    pass


class ParseError(ExtractionError):
    """
    HTML could not be parsed at all.

    This is the only unrecoverable extraction failure: the document is
    abandoned.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if url:
            details["url"] = url
        super().__init__(message, details)
        self.url = url


class ContentExtractionError(ExtractionError):
    """
    A single extraction attempt failed.

    Raised when:
    - A scoring or cleaning pass hits a malformed selector
    - The working copy is in an unexpected state

    The retry controller logs it and moves on to the next attempt.
    """

    def __init__(
        self,
        message: str,
        attempt: int | None = None,
        selector: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if attempt:
            details["attempt"] = attempt
        if selector:
            details["selector"] = selector
        super().__init__(message, details)
        self.attempt = attempt
        self.selector = selector


# =============================================================================
# Utility Functions
# =============================================================================


def is_retryable(error: Exception) -> bool:
    """
    Check if an error is retryable.

    Args:
        error: The exception to check

    Returns:
        True if the error indicates a retryable condition
    """
    return isinstance(error, RetryableError)


def get_retry_delay(error: Exception, default: float = 1.0) -> float:
    """
    Get the recommended retry delay for an error.

    Args:
        error: The exception to check
        default: Default delay if not specified by error

    Returns:
        Recommended delay in seconds before retry
    """
    if isinstance(error, RetryableError) and error.retry_after is not None:
        return error.retry_after
    return default
