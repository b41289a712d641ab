"""
Declarative per-site extractors and extractor dispatch.

A site extractor is plain data: for each article field, an ordered list of
selectors to try. Dispatch is a closed choice between a
:class:`SiteExtractor` and the algorithmic :class:`GenericExtractor`.

Site extractors can be declared in Python or loaded from YAML::

    domain: www.example.com
    title:
      selectors: ["h1.headline"]
    author:
      selectors:
        - css: "meta[name='author']"
          attribute: content
    content:
      selectors:
        - ".article-body"
        - all: [".lede", ".article-body"]
      clean: [".ad", ".newsletter-signup"]
"""

import copy
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Union
from urllib.parse import urlsplit

from distiller.config.loader import load_yaml_mapping
from distiller.core.exceptions import ConfigurationError
from distiller.dom.document import Document, inner_html, resolve_url, text_of
from distiller.extraction.cleaner import make_links_absolute
from distiller.extraction.generic import GenericExtractor
from distiller.extraction.next_page import is_valid_next_page
from distiller.models import ParsedArticle
from distiller.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class CssSelector:
    """First element matching ``css``; its text (or inner HTML for content)."""

    css: str


@dataclass(frozen=True)
class AttributeSelector:
    """An attribute of the first element matching ``css``, optionally transformed."""

    css: str
    attribute: str
    transform: Callable[[str], str] | None = None


@dataclass(frozen=True)
class MultiSelector:
    """Several selectors that must all match; their HTML is concatenated."""

    selectors: tuple[str, ...]


Selector = Union[CssSelector, AttributeSelector, MultiSelector]


@dataclass(frozen=True)
class FieldConfig:
    """
    How to extract one field.

    Attributes:
        selectors: Tried in order; the first non-empty result wins
        clean: Selectors removed from extracted HTML content
    """

    selectors: tuple[Selector, ...]
    clean: tuple[str, ...] = ()

    def extract_text(self, document: Document) -> str | None:
        """Text or attribute value of the first matching selector."""
        for selector in self.selectors:
            if isinstance(selector, MultiSelector):
                continue

            element = document.select_one(selector.css)
            if element is None:
                continue

            if isinstance(selector, AttributeSelector):
                value = element.get(selector.attribute)
                if isinstance(value, list):
                    value = " ".join(value)
                if value is None:
                    continue
                if selector.transform is not None:
                    value = selector.transform(value)
                value = value.strip()
            else:
                value = text_of(element)

            if value:
                return value

        return None

    def extract_html(self, document: Document) -> str | None:
        """
        Inner HTML of the first matching selector, with ``clean`` applied.

        The document itself is never modified.
        """
        for selector in self.selectors:
            if isinstance(selector, MultiSelector):
                elements = [document.select_one(css) for css in selector.selectors]
                if any(element is None for element in elements):
                    continue
            elif isinstance(selector, CssSelector):
                element = document.select_one(selector.css)
                if element is None:
                    continue
                elements = [element]
            else:
                continue

            html = "".join(self._cleaned_html(element, document.base_url) for element in elements)
            if html.strip():
                return html.strip()

        return None

    def _cleaned_html(self, element, base_url: str) -> str:
        fragment = copy.copy(element)
        for css in self.clean:
            for node in fragment.select(css):
                node.extract()
        make_links_absolute(fragment, base_url)
        return inner_html(fragment)


# Article fields a site extractor can configure
SITE_FIELDS = (
    "title",
    "author",
    "date_published",
    "content",
    "lead_image",
    "dek",
    "excerpt",
    "next_page",
)


@dataclass(frozen=True)
class SiteExtractor:
    """
    Selector-based extractor for one domain.

    Fields left as None are either taken from the generic extractor (when
    fallback is enabled) or left empty.
    """

    domain: str
    title: FieldConfig | None = None
    author: FieldConfig | None = None
    date_published: FieldConfig | None = None
    content: FieldConfig | None = None
    lead_image: FieldConfig | None = None
    dek: FieldConfig | None = None
    excerpt: FieldConfig | None = None
    next_page: FieldConfig | None = None

    def extract(
        self,
        document: Document,
        generic: GenericExtractor,
        fallback: bool = True,
    ) -> ParsedArticle:
        """
        Extract an article with this site's selectors.

        Args:
            document: Parsed page
            generic: Generic extractor used for fallback and derived fields
            fallback: Use the generic extractor for fields that come up empty

        Returns:
            ParsedArticle for this single page
        """
        title = self._text(self.title, document)
        if title is None and fallback:
            title = generic.extract_title(document)

        author = self._text(self.author, document)
        if author is None and fallback:
            author = generic.extract_author(document)

        date_published = generic.metadata.parse_date(self._text(self.date_published, document))
        if date_published is None and fallback:
            date_published = generic.extract_date_published(document)

        content = self.content.extract_html(document) if self.content else None
        if content is None and fallback:
            result = generic.extract_content(document, title)
            content = result.content if result.found else None

        lead_image_url = self._text(self.lead_image, document)
        if lead_image_url is not None:
            lead_image_url = resolve_url(document.base_url, lead_image_url)
        if lead_image_url is None and fallback:
            lead_image_url = generic.extract_lead_image_url(document, content)

        dek = self._text(self.dek, document)
        if dek is None and fallback:
            dek = generic.extract_dek(document)

        excerpt = self._text(self.excerpt, document)
        if excerpt is None and fallback:
            excerpt = generic.extract_excerpt(content)

        url, domain = generic.metadata.extract_url_and_domain(document)

        return ParsedArticle(
            url=url,
            domain=domain,
            title=title,
            content=content,
            author=author,
            date_published=date_published,
            lead_image_url=lead_image_url,
            dek=dek,
            excerpt=excerpt,
            word_count=generic.metadata.count_words(content),
            direction=generic.extract_direction(title),
            next_page_url=self._next_page_url(document, generic, fallback),
        )

    def _next_page_url(
        self,
        document: Document,
        generic: GenericExtractor,
        fallback: bool,
    ) -> str | None:
        href = self._text(self.next_page, document)
        candidate = resolve_url(document.base_url, href) if href else None
        if candidate is not None and is_valid_next_page(candidate, document.base_url):
            return candidate
        if fallback:
            return generic.extract_next_page_url(document)
        return None

    @staticmethod
    def _text(config: FieldConfig | None, document: Document) -> str | None:
        return config.extract_text(document) if config else None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SiteExtractor":
        """
        Build a site extractor from a YAML/JSON style mapping.

        Raises:
            ConfigurationError: If the mapping is malformed
        """
        if not isinstance(data, dict) or not data.get("domain"):
            raise ConfigurationError("Site extractor requires a domain")

        unknown = set(data) - set(SITE_FIELDS) - {"domain"}
        if unknown:
            raise ConfigurationError(
                "Unknown site extractor fields",
                details={"domain": data["domain"], "fields": sorted(unknown)},
            )

        configs = {
            name: field_config_from_dict(data[name], data["domain"])
            for name in SITE_FIELDS
            if data.get(name) is not None
        }
        return cls(domain=str(data["domain"]).lower(), **configs)


def field_config_from_dict(data: Any, domain: str = "") -> FieldConfig:
    """Parse one field entry: a list of selectors or a mapping with ``selectors``."""
    if isinstance(data, (list, str)):
        data = {"selectors": data}
    if not isinstance(data, dict):
        raise ConfigurationError("Invalid field config", details={"domain": domain})

    raw_selectors = data.get("selectors") or []
    if isinstance(raw_selectors, str):
        raw_selectors = [raw_selectors]

    clean = data.get("clean") or []
    if isinstance(clean, str):
        clean = [clean]

    return FieldConfig(
        selectors=tuple(_selector_from_value(value, domain) for value in raw_selectors),
        clean=tuple(clean),
    )


def _selector_from_value(value: Any, domain: str) -> Selector:
    if isinstance(value, str):
        return CssSelector(value)
    if isinstance(value, dict):
        if "all" in value:
            return MultiSelector(tuple(value["all"]))
        if "css" in value and "attribute" in value:
            return AttributeSelector(value["css"], value["attribute"])
        if "css" in value:
            return CssSelector(value["css"])
    raise ConfigurationError(
        "Invalid selector", details={"domain": domain, "selector": repr(value)}
    )


Extractor = Union[SiteExtractor, GenericExtractor]


def base_domain(host: str) -> str:
    """``www.news.example.com`` -> ``example.com``."""
    labels = host.split(".")
    if len(labels) < 2:
        return host
    return ".".join(labels[-2:])


class ExtractorRegistry:
    """
    Maps hosts to site extractors.

    Lookup order: custom extractors by exact host, then by base domain;
    registered extractors by exact host, then by base domain; otherwise
    the generic extractor.
    """

    def __init__(
        self,
        generic: GenericExtractor | None = None,
        extractors: list[SiteExtractor] | None = None,
    ) -> None:
        self.generic = generic or GenericExtractor()
        self._extractors: dict[str, SiteExtractor] = {}
        self._custom: dict[str, SiteExtractor] = {}

        for extractor in extractors or []:
            self.register(extractor)

    def register(self, extractor: SiteExtractor) -> None:
        self._extractors[extractor.domain.lower()] = extractor

    def add_custom(self, extractor: SiteExtractor) -> None:
        """Add an extractor that takes precedence over registered ones."""
        self._custom[extractor.domain.lower()] = extractor

    def resolve(self, url: str) -> Extractor:
        host = (urlsplit(url).hostname or "").lower()
        if not host:
            return self.generic

        root = base_domain(host)
        for table in (self._custom, self._extractors):
            extractor = table.get(host) or table.get(root)
            if extractor is not None:
                logger.debug(f"Using site extractor {extractor.domain} for {host}")
                return extractor

        return self.generic

    def load_path(self, path: Path | str) -> int:
        """
        Register site extractors from a YAML file or a directory of them.

        A file holds either one extractor mapping or ``extractors:`` with a
        list of mappings.

        Returns:
            Number of extractors registered
        """
        path = Path(path)
        files = sorted(path.glob("*.y*ml")) if path.is_dir() else [path]
        count = 0

        for file_path in files:
            for extractor in load_site_extractors(file_path):
                self.register(extractor)
                count += 1

        logger.debug(f"Loaded {count} site extractors from {path}")
        return count

    def __len__(self) -> int:
        return len(self._extractors) + len(self._custom)


def load_site_extractors(path: Path) -> list[SiteExtractor]:
    """Parse the site extractors declared in one YAML file."""
    data = load_yaml_mapping(path)
    entries = data.get("extractors", [data]) if data else []
    if not isinstance(entries, list):
        raise ConfigurationError(
            "'extractors' must be a list", details={"path": str(path)}
        )
    return [SiteExtractor.from_dict(entry) for entry in entries]

