"""
Parser orchestration and multi-page merging.

The parse operation is a short async sequence: fetch, parse, pick an
extractor, extract, follow next-page links, convert the content format.
Suspension only happens at fetch boundaries; extraction itself is
synchronous.
"""

import asyncio
from urllib.parse import urlsplit

from distiller.config.settings import MAX_PAGES_LIMIT, Settings
from distiller.convert import convert_content
from distiller.core.exceptions import DistillerError, InvalidURLError
from distiller.dom.document import Document
from distiller.extraction.generic import GenericExtractor
from distiller.extraction.site_extractors import Extractor, ExtractorRegistry, SiteExtractor
from distiller.fetch.client import Fetcher, HttpFetcher
from distiller.models import ContentFormat, ParsedArticle, ParserOptions
from distiller.utils.logging import get_logger, get_logger_with_context

logger = get_logger(__name__)


def validate_url(url: str) -> str:
    """
    Ensure ``url`` is an absolute http(s) URL with a host.

    Raises:
        InvalidURLError: If it is not
    """
    try:
        parts = urlsplit(url)
    except ValueError as e:
        raise InvalidURLError(url) from e

    if parts.scheme.lower() not in ("http", "https") or not parts.hostname:
        raise InvalidURLError(url)

    return url


class Parser:
    """
    Extracts articles from URLs or already fetched HTML.

    Example:
        >>> async with Parser() as parser:
        ...     article = await parser.parse("https://example.com/story")
        ...     if article.content is None:
        ...         print("No extractable content")
    """

    def __init__(
        self,
        settings: Settings | None = None,
        fetcher: Fetcher | None = None,
        registry: ExtractorRegistry | None = None,
    ) -> None:
        """
        Initialize parser.

        Args:
            settings: Configuration. Defaults are used if None.
            fetcher: Page fetcher. An HttpFetcher is created on first use if None.
            registry: Site extractor registry. An empty one is created if None.
        """
        self.settings = settings or Settings()
        self.generic = registry.generic if registry else GenericExtractor.from_settings(self.settings)
        self.registry = registry or ExtractorRegistry(self.generic)
        self._fetcher = fetcher
        self._owns_fetcher = fetcher is None

    @property
    def fetcher(self) -> Fetcher:
        if self._fetcher is None:
            self._fetcher = HttpFetcher(self.settings.fetch)
        return self._fetcher

    async def close(self) -> None:
        if self._owns_fetcher and isinstance(self._fetcher, HttpFetcher):
            await self._fetcher.close()

    async def __aenter__(self) -> "Parser":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def add_extractor(self, extractor: SiteExtractor) -> None:
        """Add a site extractor taking precedence over registered ones."""
        self.registry.add_custom(extractor)

    def _default_options(self) -> ParserOptions:
        return ParserOptions(
            fetch_all_pages=self.settings.pagination.enabled,
            content_format=ContentFormat(self.settings.output.content_format),
        )

    async def parse(
        self,
        url: str,
        options: ParserOptions | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> ParsedArticle:
        """
        Fetch and parse an article.

        Args:
            url: Absolute http(s) URL of the article
            options: Parse options. Settings-based defaults if None.
            cancel_event: When set, no further pages are fetched

        Returns:
            ParsedArticle; ``content`` is None if nothing could be extracted

        Raises:
            InvalidURLError: URL is not an absolute http(s) URL
            FetchError: The first page could not be fetched
            ParseError: The first page could not be parsed
        """
        validate_url(url)
        options = options or self._default_options()

        result = await self.fetcher.fetch(url, options.headers)
        document = Document.parse(
            result.content,
            result.url or url,
            parser=self.settings.extraction.html_parser,
            encoding=result.encoding,
        )

        return await self._parse_document(document, url, options, cancel_event)

    async def parse_html(
        self,
        html: str | bytes,
        url: str,
        options: ParserOptions | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> ParsedArticle:
        """
        Parse an article from HTML that was already fetched.

        Next pages are still fetched when pagination is enabled.
        """
        validate_url(url)
        options = options or self._default_options()

        document = Document.parse(html, url, parser=self.settings.extraction.html_parser)
        return await self._parse_document(document, url, options, cancel_event)

    async def _parse_document(
        self,
        document: Document,
        request_url: str,
        options: ParserOptions,
        cancel_event: asyncio.Event | None,
    ) -> ParsedArticle:
        extractor = options.custom_extractor or self.registry.resolve(request_url)
        article = self._extract(document, extractor, options)

        if options.extend:
            article.extended = {
                name: config.extract_text(document)
                for name, config in options.extend.items()
            }

        if (
            options.fetch_all_pages
            and self.settings.pagination.enabled
            and article.next_page_url
        ):
            article = await self.collect_pages(
                article, extractor, options, cancel_event, visited={request_url, document.base_url}
            )

        if article.content is not None and options.content_format is not ContentFormat.HTML:
            article.content = convert_content(article.content, options.content_format)

        return article

    def _extract(
        self,
        document: Document,
        extractor: Extractor,
        options: ParserOptions,
    ) -> ParsedArticle:
        if isinstance(extractor, SiteExtractor):
            return extractor.extract(document, self.generic, fallback=options.fallback)
        return extractor.extract(document)

    async def collect_pages(
        self,
        initial: ParsedArticle,
        extractor: Extractor,
        options: ParserOptions,
        cancel_event: asyncio.Event | None = None,
        visited: set[str] | None = None,
    ) -> ParsedArticle:
        """
        Fetch the following pages of an article and merge their content.

        At most ``pagination.max_pages`` pages (never more than 25) are
        merged, the first page included. Pagination stops early when a page
        has no next page, points back at a visited URL, cannot be fetched or
        parsed, or the cancel event is set; the content gathered so far is
        kept in every case.

        Returns:
            A copy of ``initial`` with merged content, recomputed word count
            and page counters
        """
        max_pages = min(self.settings.pagination.max_pages, MAX_PAGES_LIMIT)
        log = get_logger_with_context(__name__, url=initial.url)

        contents = [initial.content] if initial.content else []
        visited = set(visited or ()) | {initial.url}
        next_url = initial.next_page_url
        pages = 1

        while next_url and pages < max_pages:
            if cancel_event is not None and cancel_event.is_set():
                log.info(f"Pagination cancelled after {pages} pages")
                break

            if next_url in visited:
                log.info(f"Next page {next_url} already visited, stopping")
                break
            visited.add(next_url)

            try:
                result = await self.fetcher.fetch(next_url, options.headers)
                document = Document.parse(
                    result.content,
                    result.url or next_url,
                    parser=self.settings.extraction.html_parser,
                    encoding=result.encoding,
                )
                page = self._extract(document, extractor, options)
            except (DistillerError, ValueError) as e:
                log.warning(f"Stopping pagination at {next_url}: {e}")
                break

            pages += 1
            if page.content:
                contents.append(page.content)

            next_url = page.next_page_url
        else:
            if next_url:
                log.info(f"Reached the {max_pages} page limit")

        content = "\n".join(contents) if contents else None
        log.debug(f"Merged {pages} pages")

        return initial.with_changes(
            content=content,
            word_count=self.generic.metadata.count_words(content),
            next_page_url=None,
            total_pages=pages,
            rendered_pages=pages,
        )
