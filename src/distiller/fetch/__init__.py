"""
Fetch module for the article distiller.

Provides the async HTTP client used to download article pages.
"""

from distiller.fetch.client import (
    FetchResult,
    Fetcher,
    HttpFetcher,
    is_supported_content_type,
)

__all__ = [
    "FetchResult",
    "Fetcher",
    "HttpFetcher",
    "is_supported_content_type",
]
