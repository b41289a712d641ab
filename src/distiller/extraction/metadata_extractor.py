"""
Article metadata extraction.

Extracts the fields around the article body from:
- Standard HTML meta tags
- Open Graph protocol
- Twitter Cards
- JSON-LD structured data
- Common byline and date markup
"""

import json
import re
import unicodedata
from dataclasses import dataclass
from datetime import datetime
from urllib.parse import urlsplit

from bs4 import BeautifulSoup

from distiller.dom.document import Document, resolve_url, text_of
from distiller.models import TextDirection
from distiller.utils.logging import get_logger

logger = get_logger(__name__)

EXCERPT_LENGTH = 200

TITLE_SEPARATORS = (" | ", " - ", " :: ", " / ", " – ", " — ")
MAX_SITE_NAME_LENGTH = 50

AUTHOR_META_NAMES = ("author", "byl", "dc.creator", "article:author")
AUTHOR_SELECTORS = (
    ".author",
    ".byline",
    "[rel='author']",
    "[itemprop='author']",
    ".post-author",
)
_BY_PREFIX_RE = re.compile(r"^by\s+", re.IGNORECASE)

DATE_META_NAMES = (
    "article:published_time",
    "article:published",
    "og:published_time",
    "date",
    "pubdate",
    "publish_date",
    "dc.date.issued",
)

ARTICLE_TYPES = frozenset({
    "Article", "NewsArticle", "BlogPosting", "Report", "ScholarlyArticle",
    "TechArticle", "WebPage",
})

RTL_RANGES = (
    (0x0590, 0x05FF),  # Hebrew
    (0x0600, 0x06FF),  # Arabic
    (0x0750, 0x077F),  # Arabic Supplement
    (0xFB50, 0xFDFF),  # Arabic Presentation Forms-A
    (0xFE70, 0xFEFF),  # Arabic Presentation Forms-B
)


@dataclass
class StructuredData:
    """
    JSON-LD structured data item from a page.
    """

    data_type: str  # e.g. "NewsArticle", "BlogPosting"
    data: dict
    source: str = "json-ld"

    @property
    def is_article(self) -> bool:
        return self.data_type in ARTICLE_TYPES


class MetadataExtractor:
    """
    Extracts title, author, dates, dek, images and URLs from a document.

    Each ``extract_*`` method returns None when nothing usable is found.

    Example:
        >>> extractor = MetadataExtractor()
        >>> extractor.extract_title(document)
        'How Tides Work'
    """

    # Date formats to try when parsing
    DATE_FORMATS = [
        "%Y-%m-%dT%H:%M:%S.%f%z",
        "%Y-%m-%dT%H:%M:%S%z",
        "%Y-%m-%dT%H:%M:%SZ",
        "%Y-%m-%dT%H:%M:%S",
        "%Y-%m-%d %H:%M:%S",
        "%Y-%m-%d",
        "%m/%d/%Y",
        "%B %d, %Y",
        "%d %B %Y",
    ]

    # Title

    def extract_title(self, document: Document) -> str | None:
        candidates = (
            document.meta(property="og:title"),
            document.meta(name="twitter:title"),
            document.meta(name="title"),
            document.title,
            self._first_text(document, "h1"),
        )
        for candidate in candidates:
            if candidate:
                return self.clean_title(candidate, document.base_url)
        return None

    def clean_title(self, title: str, url: str) -> str:
        """Strip a trailing site name such as ``" | Example News"``."""
        cleaned = " ".join(title.split())
        host = (urlsplit(url).hostname or "").lower()

        for separator in TITLE_SEPARATORS:
            index = cleaned.rfind(separator)
            if index == -1:
                continue
            suffix = cleaned[index + len(separator):].strip()
            if suffix and len(suffix) < MAX_SITE_NAME_LENGTH and suffix.lower() in host:
                cleaned = cleaned[:index].strip()

        return cleaned

    # Author

    def extract_author(self, document: Document) -> str | None:
        for name in AUTHOR_META_NAMES:
            author = document.meta(name=name, property=name)
            if author:
                return self.clean_author(author)

        author = self._structured_author(document)
        if author:
            return self.clean_author(author)

        for selector in AUTHOR_SELECTORS:
            author = self._first_text(document, selector)
            if author:
                return self.clean_author(author)

        return None

    def clean_author(self, author: str) -> str:
        return _BY_PREFIX_RE.sub("", " ".join(author.split())).strip()

    def _structured_author(self, document: Document) -> str | None:
        for sd in self.structured_data(document):
            author = sd.data.get("author")
            if isinstance(author, list):
                author = author[0] if author else None
            if isinstance(author, dict):
                author = author.get("name")
            if isinstance(author, str) and author.strip():
                return author
        return None

    # Dates

    def extract_date_published(self, document: Document) -> datetime | None:
        for name in DATE_META_NAMES:
            value = document.meta(name=name, property=name)
            parsed = self.parse_date(value)
            if parsed is not None:
                return parsed

        for sd in self.structured_data(document):
            value = sd.data.get("datePublished")
            if isinstance(value, str):
                parsed = self.parse_date(value)
                if parsed is not None:
                    return parsed

        time_elem = document.select_one("time[datetime]")
        if time_elem is not None:
            return self.parse_date(time_elem.get("datetime"))

        return None

    def parse_date(self, date_str: str | None) -> datetime | None:
        """Parse a date string into datetime."""
        if not date_str:
            return None

        date_str = date_str.strip()

        for fmt in self.DATE_FORMATS:
            try:
                return datetime.strptime(date_str, fmt)
            except ValueError:
                continue

        # ISO format as fallback
        try:
            return datetime.fromisoformat(date_str.replace("Z", "+00:00"))
        except ValueError:
            pass

        logger.debug(f"Could not parse date: {date_str}")
        return None

    # Dek, images and URLs

    def extract_dek(self, document: Document) -> str | None:
        return document.meta(property="og:description") or document.meta(name="description")

    def extract_lead_image_url(
        self,
        document: Document,
        content: str | None = None,
    ) -> str | None:
        candidates = [
            document.meta(property="og:image"),
            document.meta(name="twitter:image"),
            self._structured_image(document),
        ]

        if content:
            img = BeautifulSoup(content, "html.parser").find("img", src=True)
            if img is not None:
                candidates.append(img["src"])

        for image in candidates:
            if not image or not image.strip():
                continue
            url = resolve_url(document.base_url, image)
            if url is not None:
                return url

        return None

    def _structured_image(self, document: Document) -> str | None:
        for sd in self.structured_data(document):
            img = sd.data.get("image")
            if isinstance(img, list):
                img = img[0] if img else None
            if isinstance(img, dict):
                img = img.get("url")
            if isinstance(img, str) and img.strip():
                return img
        return None

    def extract_url_and_domain(self, document: Document) -> tuple[str, str]:
        """
        Canonical URL of the page and its host.

        Falls back to the request URL when no absolute canonical is declared.
        """
        canonical = document.select_one("link[rel~='canonical']")
        candidates = (
            canonical.get("href") if canonical is not None else None,
            document.meta(property="og:url"),
        )

        for candidate in candidates:
            if not candidate:
                continue
            url = resolve_url(document.base_url, candidate)
            host = urlsplit(url).hostname if url is not None else None
            if host:
                return url, host

        return document.base_url, urlsplit(document.base_url).hostname or ""

    # Content-derived fields

    def extract_excerpt(self, content: str | None) -> str | None:
        text = content_text(content)
        if not text:
            return None
        if len(text) > EXCERPT_LENGTH:
            return text[:EXCERPT_LENGTH] + "..."
        return text

    def count_words(self, content: str | None) -> int:
        return len(content_text(content).split())

    def detect_direction(self, title: str | None) -> TextDirection:
        """Right-to-left when Hebrew/Arabic letters dominate the title."""
        if not title:
            return TextDirection.LTR

        rtl_count = 0
        ltr_count = 0
        for char in title:
            code = ord(char)
            if any(low <= code <= high for low, high in RTL_RANGES):
                rtl_count += 1
            elif unicodedata.category(char).startswith("L"):
                ltr_count += 1

        return TextDirection.RTL if rtl_count > ltr_count else TextDirection.LTR

    # Structured data

    def structured_data(self, document: Document) -> list[StructuredData]:
        """
        All JSON-LD items in the document, article types first.

        ``@graph`` containers are flattened.
        """
        items: list[StructuredData] = []

        for script in document.select("script[type='application/ld+json']"):
            text = script.get_text(strip=True)
            if not text:
                continue
            try:
                data = json.loads(text)
            except json.JSONDecodeError as e:
                logger.debug(f"Failed to parse JSON-LD: {e}")
                continue

            for item in self._flatten(data):
                data_type = item.get("@type", "Unknown")
                if isinstance(data_type, list):
                    data_type = data_type[0] if data_type else "Unknown"
                items.append(StructuredData(data_type=str(data_type), data=item))

        items.sort(key=lambda sd: not sd.is_article)
        return items

    def _flatten(self, data: object) -> list[dict]:
        if isinstance(data, list):
            return [item for entry in data for item in self._flatten(entry)]
        if not isinstance(data, dict):
            return []
        if isinstance(data.get("@graph"), list):
            return self._flatten(data["@graph"])
        return [data]

    def _first_text(self, document: Document, selector: str) -> str | None:
        element = document.select_one(selector)
        if element is None:
            return None
        return text_of(element) or None


def content_text(content: str | None) -> str:
    """Plain text of an HTML fragment, whitespace collapsed."""
    if not content:
        return ""
    return " ".join(BeautifulSoup(content, "html.parser").get_text(" ").split())
