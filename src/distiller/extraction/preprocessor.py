"""
HTML preprocessing before content extraction.

Promotes lazily loaded images to real ones, unwraps image fallbacks in
``noscript`` and drops nodes a reader never sees.
"""

from bs4 import BeautifulSoup

from distiller.utils.logging import get_logger

logger = get_logger(__name__)

# Checked in order; the first non-empty one becomes ``src``
LAZY_IMAGE_ATTRIBUTES = (
    "data-src",
    "data-lazy-src",
    "data-original",
    "data-srcset",
    "data-lazy-srcset",
    "data-original-set",
    "data-hi-res-src",
    "data-full-src",
    "data-image",
    "data-img-src",
)

LAZY_CLASSES = ("lazy", "lazyload")

REMOVE_SELECTORS = (
    "script:not([type='application/ld+json'])",
    "style",
    "link[rel='stylesheet']",
    "noscript:empty",
    "iframe[src*='ads']",
    "iframe[src*='analytics']",
    "object",
    "embed",
    "svg[class*='icon']",
    "[aria-hidden='true']",
    ".hidden",
    "[style*='display: none']",
    "[style*='display:none']",
)


def convert_lazy_images(soup: BeautifulSoup) -> int:
    """
    Copy lazy-load attributes into ``src``/``srcset``.

    Returns:
        Number of images promoted
    """
    promoted = 0

    for img in soup.find_all("img"):
        for attr in LAZY_IMAGE_ATTRIBUTES:
            lazy_src = (img.get(attr) or "").strip()
            if not lazy_src:
                continue

            if "srcset" in attr or "-set" in attr:
                if not img.get("srcset"):
                    img["srcset"] = lazy_src
                # first srcset candidate doubles as src
                first = lazy_src.split(",")[0].split()
                if first:
                    img["src"] = first[0]
            else:
                img["src"] = lazy_src
            promoted += 1
            break

        classes = img.get("class")
        if classes:
            remaining = [c for c in classes if c not in LAZY_CLASSES]
            if remaining:
                img["class"] = remaining
            else:
                del img["class"]

    return promoted


def unwrap_noscript_images(soup: BeautifulSoup) -> None:
    """Replace ``noscript`` blocks that hold an image with their markup."""
    for noscript in soup.find_all("noscript"):
        markup = noscript.decode_contents()
        if "<img" not in markup:
            continue

        fragment = BeautifulSoup(markup, "html.parser")
        for node in list(fragment.contents):
            noscript.insert_before(node.extract())
        noscript.extract()


def remove_hidden_elements(soup: BeautifulSoup) -> int:
    """Remove scripts, styles, ad frames and hidden nodes."""
    removed = 0

    for selector in REMOVE_SELECTORS:
        for element in soup.select(selector):
            element.extract()
            removed += 1

    for p in soup.find_all("p"):
        if not p.get_text().strip() and p.find(True) is None:
            p.extract()
            removed += 1

    return removed


def collapse_breaks(soup: BeautifulSoup) -> None:
    """Drop every ``br`` that follows two others."""
    for br in soup.select("br + br + br"):
        br.extract()


def preprocess(soup: BeautifulSoup) -> BeautifulSoup:
    """
    Run every preprocessing step on a working copy in place.

    Args:
        soup: Parsed working copy

    Returns:
        The same soup, for chaining
    """
    promoted = convert_lazy_images(soup)
    unwrap_noscript_images(soup)
    removed = remove_hidden_elements(soup)
    collapse_breaks(soup)

    logger.debug(f"Preprocessed: {promoted} lazy images, {removed} nodes removed")
    return soup
