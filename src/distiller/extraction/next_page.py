"""
Next-page URL detection for multi-page articles.

Candidates are looked for in decreasing order of reliability:
1. ``rel="next"`` on ``<link>`` or ``<a>``
2. Common pagination selectors, then "next"-looking link text or classes
3. A link to the current page number plus one

Every candidate must pass :func:`is_valid_next_page`; invalid ones are
skipped and the search continues.
"""

import re
from typing import Iterator
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from distiller.dom.document import Document, class_string, resolve_url, text_of
from distiller.utils.logging import get_logger

logger = get_logger(__name__)

PAGINATION_SELECTORS = (
    "a.next",
    "a.next-page",
    "a.nextpage",
    ".next a",
    ".pagination .next a",
    ".pagination-next a",
    "#pagination .next a",
    ".nav-next a",
    ".post-nav-next a",
    "a[aria-label='Next']",
    "a[aria-label='Next Page']",
    "a[aria-label*='next' i]",
    "a[title='Next']",
    "a[title='Next Page']",
    "a[title*='next' i]",
)

NEXT_LINK_TEXTS = frozenset({"next", "next »", "next ›", "» next", "› next"})
NEXT_LINK_PHRASES = ("next page", "continue reading")

PATH_PAGE_PATTERNS = (
    re.compile(r"/page/(\d+)"),
    re.compile(r"/p/(\d+)"),
    re.compile(r"/(\d+)/?$"),
    re.compile(r"-page-(\d+)"),
    re.compile(r"_page_(\d+)"),
)

QUERY_PAGE_PATTERNS = (
    re.compile(r"(?:^|&)page=(\d+)"),
    re.compile(r"(?:^|&)p=(\d+)"),
    re.compile(r"(?:^|&)pg=(\d+)"),
    re.compile(r"(?:^|&)pn=(\d+)"),
)

PAGE_QUERY_PARAMS = ("page", "p", "pg")


def is_valid_next_page(candidate: str, current_url: str) -> bool:
    """
    Check that a candidate URL plausibly points at the next page.

    It must share the current host, differ from the current URL string,
    and differ in path or query (a fragment change alone is not a new page).
    """
    try:
        candidate_parts = urlsplit(candidate)
        current_parts = urlsplit(current_url)
    except ValueError:
        return False

    if not candidate_parts.hostname or candidate_parts.hostname != current_parts.hostname:
        return False

    if candidate == current_url:
        return False

    if (
        candidate_parts.path == current_parts.path
        and candidate_parts.query == current_parts.query
    ):
        return False

    return True


def extract_page_number(url: str) -> int | None:
    """Page number encoded in a URL's path or query, if any."""
    parts = urlsplit(url)

    for pattern in PATH_PAGE_PATTERNS:
        match = pattern.search(parts.path)
        if match:
            return int(match.group(1))

    for pattern in QUERY_PAGE_PATTERNS:
        match = pattern.search(parts.query)
        if match:
            return int(match.group(1))

    return None


def construct_next_page_url(url: str, next_page: int) -> str | None:
    """Set the first ``page``/``p``/``pg`` query parameter to ``next_page``."""
    parts = urlsplit(url)
    if not parts.query:
        return None

    params = parse_qsl(parts.query, keep_blank_values=True)
    for index, (name, _) in enumerate(params):
        if name in PAGE_QUERY_PARAMS:
            params[index] = (name, str(next_page))
            return urlunsplit(parts._replace(query=urlencode(params)))

    return None


def _usable_href(href: str | None) -> bool:
    return bool(href) and href.strip() not in ("", "#")


class NextPageExtractor:
    """
    Finds the URL of the next page of an article.

    Example:
        >>> extractor = NextPageExtractor()
        >>> extractor.extract(document, "https://example.com/story?page=1")
        'https://example.com/story?page=2'
    """

    def __init__(self, construct_next_url: bool = False) -> None:
        """
        Initialize next page extractor.

        Args:
            construct_next_url: Guess the next URL by incrementing a page
                query parameter when no link points at it
        """
        self.construct_next_url = construct_next_url

    def extract(self, document: Document, current_url: str | None = None) -> str | None:
        """
        Return the first valid next-page URL, or None.

        Args:
            document: Parsed page
            current_url: URL of the page. Defaults to the document base URL.
        """
        current_url = current_url or document.base_url

        for candidate in self.candidates(document, current_url):
            if is_valid_next_page(candidate, current_url):
                logger.debug(f"Next page: {candidate}")
                return candidate
            logger.debug(f"Rejected next page candidate: {candidate}")

        return None

    def candidates(self, document: Document, current_url: str) -> Iterator[str]:
        """Yield absolute candidate URLs in priority order."""
        yield from self._rel_next(document, current_url)
        yield from self._pagination_links(document, current_url)
        yield from self._numbered_pagination(document, current_url)

    def _rel_next(self, document: Document, base_url: str) -> Iterator[str]:
        for selector in ("link[rel~='next']", "a[rel~='next']"):
            element = document.select_one(selector)
            if element is not None and _usable_href(element.get("href")):
                url = resolve_url(base_url, element["href"])
                if url is not None:
                    yield url

    def _pagination_links(self, document: Document, base_url: str) -> Iterator[str]:
        for selector in PAGINATION_SELECTORS:
            element = document.select_one(selector)
            if element is not None and _usable_href(element.get("href")):
                url = resolve_url(base_url, element["href"])
                if url is not None:
                    yield url

        for link in document.select("a[href]"):
            if not _usable_href(link.get("href")):
                continue

            text = text_of(link).lower()
            class_name = class_string(link).lower()

            looks_next = (
                text in NEXT_LINK_TEXTS
                or any(phrase in text for phrase in NEXT_LINK_PHRASES)
                or ("next" in class_name and "prev" not in class_name)
            )
            if not looks_next:
                continue

            url = resolve_url(base_url, link["href"])
            if url is not None:
                yield url

    def _numbered_pagination(self, document: Document, base_url: str) -> Iterator[str]:
        current_page = extract_page_number(base_url)
        if current_page is None:
            return

        next_page = current_page + 1

        for link in document.select("a[href]"):
            if not _usable_href(link.get("href")):
                continue
            url = resolve_url(base_url, link["href"])
            if url is not None and extract_page_number(url) == next_page:
                yield url

        if self.construct_next_url:
            constructed = construct_next_page_url(base_url, next_page)
            if constructed is not None:
                yield constructed
