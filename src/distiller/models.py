"""
Data models for parse requests and results.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from distiller.extraction.site_extractors import FieldConfig, SiteExtractor


class ContentFormat(str, Enum):
    """Output format of the ``content`` field."""

    HTML = "html"
    MARKDOWN = "markdown"
    TEXT = "text"


class TextDirection(str, Enum):
    """Reading direction of the article text."""

    LTR = "ltr"
    RTL = "rtl"


@dataclass
class ParserOptions:
    """
    Per-call options for :class:`distiller.parser.Parser`.

    Attributes:
        fetch_all_pages: Follow next-page links and merge their content
        fallback: Use generic extraction for fields a site extractor misses
        content_format: Format of the returned content
        headers: Extra HTTP headers, overriding the defaults
        custom_extractor: Site extractor to use instead of registry lookup
        extend: Extra named fields to extract into ``ParsedArticle.extended``
    """

    fetch_all_pages: bool = True
    fallback: bool = True
    content_format: ContentFormat = ContentFormat.HTML
    headers: dict[str, str] = field(default_factory=dict)
    custom_extractor: "SiteExtractor | None" = None
    extend: "dict[str, FieldConfig] | None" = None


@dataclass
class ParsedArticle:
    """
    Result of parsing one article.

    ``content`` is None when no extractable content was found; that is a
    normal outcome, not an error.
    """

    url: str
    domain: str
    title: str | None = None
    content: str | None = None
    author: str | None = None
    date_published: datetime | None = None
    lead_image_url: str | None = None
    dek: str | None = None
    excerpt: str | None = None
    word_count: int = 0
    direction: TextDirection = TextDirection.LTR
    next_page_url: str | None = None
    total_pages: int = 1
    rendered_pages: int = 1
    extended: dict[str, str | None] | None = None

    @property
    def has_content(self) -> bool:
        return bool(self.content)

    def with_changes(self, **changes: Any) -> "ParsedArticle":
        """Return a copy with some fields replaced."""
        return replace(self, **changes)

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary."""
        return {
            "title": self.title,
            "content": self.content,
            "author": self.author,
            "date_published": self.date_published.isoformat() if self.date_published else None,
            "lead_image_url": self.lead_image_url,
            "dek": self.dek,
            "excerpt": self.excerpt,
            "word_count": self.word_count,
            "direction": self.direction.value,
            "url": self.url,
            "domain": self.domain,
            "next_page_url": self.next_page_url,
            "total_pages": self.total_pages,
            "rendered_pages": self.rendered_pages,
            "extended": self.extended,
        }
