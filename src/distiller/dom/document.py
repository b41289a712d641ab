"""
Parsed document wrapper over BeautifulSoup.

A Document owns one parsed HTML tree plus the URL it was fetched from.
Extraction never mutates a caller's document: every attempt works on
``document.clone()``.
"""

import re
from typing import Iterator
from urllib.parse import urljoin

from bs4 import BeautifulSoup, ParserRejectedMarkup, Tag

from distiller.core.exceptions import ParseError
from distiller.utils.logging import get_logger

logger = get_logger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")


class Document:
    """
    Parsed HTML document with a base URL for link resolution.

    Example:
        >>> doc = Document.parse("<html><body><p>Hi</p></body></html>",
        ...                      "https://example.com/a")
        >>> doc.select("p")[0].get_text()
        'Hi'
    """

    def __init__(
        self,
        soup: BeautifulSoup,
        base_url: str,
        parser: str = "html.parser",
    ) -> None:
        self.soup = soup
        self.base_url = base_url
        self.parser = parser

    @classmethod
    def parse(
        cls,
        html: str | bytes,
        base_url: str,
        parser: str = "html.parser",
        encoding: str | None = None,
    ) -> "Document":
        """
        Parse raw HTML into a Document.

        Args:
            html: Markup as text, or raw bytes for encoding detection
            base_url: URL the markup was loaded from
            parser: BeautifulSoup tree builder name
            encoding: Declared encoding for bytes input, if known

        Returns:
            Parsed Document

        Raises:
            ParseError: If the markup cannot be parsed at all
        """
        try:
            if isinstance(html, bytes):
                soup = BeautifulSoup(html, parser, from_encoding=encoding)
            else:
                soup = BeautifulSoup(html, parser)
        except (ParserRejectedMarkup, ValueError, TypeError) as e:
            raise ParseError(
                f"Failed to parse HTML: {e}",
                url=base_url,
                details={"parser": parser},
            ) from e

        return cls(soup, base_url, parser)

    def clone(self) -> "Document":
        """Return an independent deep copy of this document."""
        return Document.parse(self.html(), self.base_url, self.parser)

    @property
    def body(self) -> Tag | None:
        return self.soup.body

    @property
    def head(self) -> Tag | None:
        return self.soup.head

    @property
    def title(self) -> str:
        """Text of the <title> element, or an empty string."""
        if self.soup.title is None:
            return ""
        return text_of(self.soup.title)

    def select(self, css: str) -> list[Tag]:
        return self.soup.select(css)

    def select_one(self, css: str) -> Tag | None:
        return self.soup.select_one(css)

    def meta(self, name: str | None = None, property: str | None = None) -> str | None:
        """
        Read the content of a <meta> tag by name or property.

        Matching is case-insensitive on the attribute value.
        """
        selectors = []
        if name:
            selectors.append(f'meta[name="{name}" i]')
        if property:
            selectors.append(f'meta[property="{property}" i]')

        for selector in selectors:
            tag = self.soup.select_one(selector)
            if tag is not None:
                content = (tag.get("content") or "").strip()
                if content:
                    return content

        return None

    def html(self) -> str:
        """Serialize the whole document."""
        return str(self.soup)

    def text(self) -> str:
        """Whitespace-collapsed text of the whole document."""
        return text_of(self.soup)


def is_element(node: object) -> bool:
    """True for element nodes; False for text, comments and the soup root."""
    return isinstance(node, Tag) and not isinstance(node, BeautifulSoup)


def normalize_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def text_of(node: Tag) -> str:
    """Text content of a node with runs of whitespace collapsed."""
    return normalize_whitespace(node.get_text())


def inner_html(node: Tag) -> str:
    return node.decode_contents()


def outer_html(node: Tag) -> str:
    return str(node)


def class_and_id(node: Tag) -> str:
    """``class + " " + id`` as used by the candidate patterns."""
    classes = node.get("class") or []
    if isinstance(classes, str):
        classes = [classes]
    return f"{' '.join(classes)} {node.get('id') or ''}"


def class_string(node: Tag) -> str:
    classes = node.get("class") or []
    if isinstance(classes, str):
        return classes
    return " ".join(classes)


def id_string(node: Tag) -> str:
    return node.get("id") or ""


def rename(node: Tag, name: str) -> Tag:
    """Rewrite a node in place as another tag, dropping its attributes."""
    node.name = name
    node.attrs = {}
    return node


def iter_elements(root: Tag) -> Iterator[Tag]:
    """
    Iterate a snapshot of all elements below ``root`` in document order.

    The snapshot lets callers detach nodes while iterating. Nodes already
    detached with an earlier ancestor are still yielded; use
    :func:`is_attached` to skip them.
    """
    yield from list(root.find_all(True))


def is_attached(node: Tag, root: Tag) -> bool:
    """True if ``node`` is still inside ``root``."""
    current = node
    while current is not None:
        if current is root:
            return True
        current = current.parent
    return False


def resolve_url(base_url: str, href: str) -> str | None:
    """
    Join ``href`` onto ``base_url``.

    Returns None when either URL cannot be split, for example a
    malformed bracketed host such as ``http://[oops/2``.
    """
    try:
        url = urljoin(base_url, href.strip())
    except ValueError:
        logger.debug(f"Unresolvable URL: {href!r}")
        return None
    return url
