"""
Content cleaner.

Sequential destructive passes over the selected candidate: spacer images,
relative URLs, junk tags, duplicate titles, link-heavy blocks, empty
paragraphs and presentational attributes.
"""

import re

from bs4 import Tag

from distiller.dom.document import (
    inner_html,
    is_attached,
    normalize_whitespace,
    rename,
    resolve_url,
    text_of,
)
from distiller.extraction.constants import (
    LINK_DENSITY_THRESHOLD,
    LINK_HEAVY_MAX_TEXT_LENGTH,
    MIN_IMAGE_DIMENSION,
)
from distiller.utils.logging import get_logger

logger = get_logger(__name__)

JUNK_TAGS = (
    "script", "style", "link", "noscript", "iframe", "object",
    "embed", "form", "input", "button", "textarea", "select",
)

HEADER_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")

ALLOWED_ATTRIBUTES = frozenset({"href", "src", "alt", "title", "class", "id"})

# Any "scheme:" prefix (http:, data:, javascript:, mailto:, ...)
_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.\-]*:")


def _parse_dimension(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


def clean_images(candidate: Tag) -> None:
    """Remove images declared narrower or shorter than 10 pixels."""
    for img in candidate.find_all("img"):
        for attr in ("width", "height"):
            size = _parse_dimension(img.get(attr))
            if size is not None and size < MIN_IMAGE_DIMENSION:
                img.extract()
                break


def absolutize_url(url: str, base_url: str) -> str:
    """
    Resolve a relative URL against ``base_url``.

    Absolute, protocol-relative, fragment-only and pseudo-scheme URLs
    (``data:``, ``javascript:``, ``mailto:``) are returned unchanged.
    """
    stripped = url.strip()
    if not stripped:
        return url
    if stripped.startswith(("//", "#")) or _SCHEME_RE.match(stripped):
        return url
    return resolve_url(base_url, stripped) or url


def _absolutize_srcset(srcset: str, base_url: str) -> str:
    entries = []
    for entry in srcset.split(","):
        parts = entry.strip().split(None, 1)
        if not parts:
            continue
        parts[0] = absolutize_url(parts[0], base_url)
        entries.append(" ".join(parts))
    return ", ".join(entries)


def make_links_absolute(candidate: Tag, base_url: str) -> None:
    """Rewrite relative ``href``, ``src`` and ``srcset`` values on any element."""
    for element in [candidate, *candidate.find_all(True)]:
        for attr in ("href", "src"):
            if element.get(attr):
                element[attr] = absolutize_url(element[attr], base_url)
        if element.get("srcset"):
            element["srcset"] = _absolutize_srcset(element["srcset"], base_url)


def strip_junk_tags(candidate: Tag) -> None:
    for element in candidate.find_all(JUNK_TAGS):
        element.extract()


def clean_h1s(candidate: Tag) -> None:
    """
    Remove h1s when there are fewer than three, otherwise demote them.

    A couple of h1s inside the body are almost always repeated titles.
    """
    h1s = candidate.find_all("h1")
    if len(h1s) < 3:
        for h1 in h1s:
            h1.extract()
    else:
        for h1 in h1s:
            rename(h1, "h2")


def clean_headers(candidate: Tag, title: str | None) -> None:
    """Remove headers whose text equals the article title."""
    if not title:
        return

    wanted = normalize_whitespace(title).casefold()
    for header in candidate.find_all(HEADER_TAGS):
        if text_of(header).casefold() == wanted:
            header.extract()


def link_density(element: Tag) -> float:
    """Share of an element's text that sits inside anchors."""
    text_length = len(text_of(element))
    if text_length == 0:
        return 0.0

    link_length = sum(len(text_of(a)) for a in element.find_all("a"))
    return link_length / text_length


def clean_conditionally(candidate: Tag) -> None:
    """
    Remove short, link-heavy tables, lists and divs.

    Both conditions must hold: link density above 0.5 and fewer than 500
    characters of text.
    """
    for element in candidate.find_all(["table", "ul", "div"]):
        if not is_attached(element, candidate):
            continue

        text_length = len(text_of(element))
        if (
            link_density(element) > LINK_DENSITY_THRESHOLD
            and text_length < LINK_HEAVY_MAX_TEXT_LENGTH
        ):
            element.extract()


def remove_empty_paragraphs(candidate: Tag) -> None:
    for p in candidate.find_all("p"):
        if not p.get_text().strip() and p.find(True) is None:
            p.extract()


def clean_attributes(candidate: Tag) -> None:
    """Keep only link, media, class, id and ``data-*`` attributes."""
    for element in [candidate, *candidate.find_all(True)]:
        element.attrs = {
            name: value
            for name, value in element.attrs.items()
            if name in ALLOWED_ATTRIBUTES or name.startswith("data-")
        }


def clean_content(
    candidate: Tag,
    base_url: str,
    title: str | None = None,
    conditionally: bool = True,
) -> str:
    """
    Run every cleaning pass over the candidate and serialize it.

    Args:
        candidate: Top candidate in the working copy (mutated)
        base_url: Page URL for resolving relative links
        title: Article title used to drop duplicate headers
        conditionally: Prune link-heavy blocks

    Returns:
        Inner HTML of the cleaned candidate
    """
    clean_images(candidate)
    make_links_absolute(candidate, base_url)
    strip_junk_tags(candidate)
    clean_h1s(candidate)
    clean_headers(candidate, title)

    if conditionally:
        clean_conditionally(candidate)

    remove_empty_paragraphs(candidate)
    clean_attributes(candidate)

    return inner_html(candidate).strip()
