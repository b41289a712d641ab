"""
Async HTTP fetch client.

Fetches article pages with httpx, enforcing the status, content type and
size rules the parser relies on, and retrying transient network failures.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Protocol

import httpx

from distiller.config.settings import FetchSettings
from distiller.core.exceptions import (
    ContentTooLargeError,
    FetchError,
    FetchTimeoutError,
    HTTPStatusError,
    NetworkError,
    UnsupportedContentTypeError,
    get_retry_delay,
    is_retryable,
)
from distiller.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class FetchResult:
    """
    A successfully fetched page.

    ``url`` is the final URL after redirects.
    """

    url: str
    content: bytes
    status_code: int = 200
    headers: dict[str, str] = field(default_factory=dict)
    content_type: str = ""
    encoding: str | None = None

    @property
    def size(self) -> int:
        return len(self.content)


class Fetcher(Protocol):
    """Anything that can fetch a page for the parser."""

    async def fetch(self, url: str, headers: dict[str, str] | None = None) -> FetchResult:
        ...


def is_supported_content_type(content_type: str) -> bool:
    """HTML and text responses are supported; a missing type is accepted."""
    if not content_type:
        return True
    lowered = content_type.lower()
    return "html" in lowered or "text" in lowered


class HttpFetcher:
    """
    Fetches pages over HTTP(S).

    Can be used as an async context manager; otherwise call
    :meth:`close` when done.

    Example:
        >>> async with HttpFetcher() as fetcher:
        ...     result = await fetcher.fetch("https://example.com/article")
        ...     print(result.status_code, result.size)
    """

    def __init__(
        self,
        settings: FetchSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize fetcher.

        Args:
            settings: Fetch configuration. Defaults are used if None.
            transport: Custom httpx transport (e.g. ``httpx.MockTransport``)
        """
        self.settings = settings or FetchSettings()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def default_headers(self) -> dict[str, str]:
        return {
            "User-Agent": self.settings.user_agent,
            "Accept": self.settings.accept,
            "Accept-Language": self.settings.accept_language,
        }

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.settings.timeout_seconds,
                follow_redirects=self.settings.follow_redirects,
                headers=self.default_headers,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "HttpFetcher":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def fetch(self, url: str, headers: dict[str, str] | None = None) -> FetchResult:
        """
        Fetch a page, retrying timeouts and network errors.

        Args:
            url: Absolute URL to fetch
            headers: Extra headers overriding the defaults

        Returns:
            FetchResult with the raw body

        Raises:
            HTTPStatusError: Status was not 200
            UnsupportedContentTypeError: Response is not HTML or text
            ContentTooLargeError: Body exceeds the size cap
            FetchTimeoutError: Timed out after all retries
            NetworkError: Transport failure after all retries
        """
        retries = 0

        while True:
            try:
                return await self._fetch_once(url, headers)
            except FetchError as e:
                if not is_retryable(e) or retries >= self.settings.max_retries:
                    raise
                retries += 1
                delay = get_retry_delay(e, self.settings.retry_delay_seconds)
                logger.warning(
                    f"Fetch failed for {url} ({e}), retry {retries}/"
                    f"{self.settings.max_retries} in {delay:.1f}s"
                )
                await asyncio.sleep(delay)

    async def _fetch_once(self, url: str, headers: dict[str, str] | None) -> FetchResult:
        client = self._get_client()
        max_bytes = self.settings.max_content_bytes

        try:
            async with client.stream("GET", url, headers=headers or None) as response:
                if response.status_code != 200:
                    raise HTTPStatusError(
                        f"HTTP {response.status_code} {response.reason_phrase}".strip(),
                        url=url,
                        status_code=response.status_code,
                    )

                content_type = response.headers.get("content-type", "")
                if not is_supported_content_type(content_type):
                    raise UnsupportedContentTypeError(content_type, url=url)

                declared = response.headers.get("content-length", "")
                if declared.isdigit() and int(declared) > max_bytes:
                    raise ContentTooLargeError(int(declared), max_bytes, url=url)

                chunks: list[bytes] = []
                size = 0
                async for chunk in response.aiter_bytes():
                    size += len(chunk)
                    if size > max_bytes:
                        raise ContentTooLargeError(size, max_bytes, url=url)
                    chunks.append(chunk)

                logger.debug(f"Fetched {url} ({size} bytes)")

                return FetchResult(
                    url=str(response.url),
                    content=b"".join(chunks),
                    status_code=response.status_code,
                    headers=dict(response.headers),
                    content_type=content_type,
                    encoding=response.charset_encoding,
                )

        except httpx.TimeoutException as e:
            raise FetchTimeoutError(self.settings.timeout_seconds, url=url) from e
        except httpx.TransportError as e:
            raise NetworkError(f"Network error: {e}", url=url) from e
        except httpx.RequestError as e:
            raise FetchError(f"Request failed: {e}", url=url) from e
