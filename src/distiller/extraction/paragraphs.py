"""
Paragraph normalizer.

Text-only divs are rewritten as paragraphs so the scorer sees one uniform
unit of prose.
"""

from bs4 import BeautifulSoup, Tag

from distiller.dom.document import rename
from distiller.extraction.constants import SCORING, ScoringConstants


def has_block_children(div: Tag, constants: ScoringConstants = SCORING) -> bool:
    """True if the div contains any block-indicating descendant."""
    return div.select_one(constants.div_to_block_selector) is not None


def convert_divs_to_paragraphs(
    root: BeautifulSoup | Tag,
    constants: ScoringConstants = SCORING,
) -> int:
    """
    Rewrite every div without block-level descendants as a bare ``<p>``.

    Divs are visited once in document order. The rewritten node keeps its
    children but loses its attributes.

    Returns:
        Number of divs converted
    """
    converted = 0

    for div in root.find_all("div"):
        if not has_block_children(div, constants):
            rename(div, "p")
            converted += 1

    return converted
