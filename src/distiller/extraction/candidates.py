"""
Candidate filter.

Removes elements whose ``class``/``id`` look like boilerplate (comments,
sidebars, share widgets, ...) before scoring, so their paragraphs cannot
feed score into the wrong container.
"""

from bs4 import BeautifulSoup, Tag

from distiller.dom.document import class_and_id, is_attached, iter_elements
from distiller.extraction.constants import SCORING, ScoringConstants
from distiller.utils.logging import get_logger

logger = get_logger(__name__)


def is_unlikely_candidate(
    element: Tag,
    constants: ScoringConstants = SCORING,
) -> bool:
    """
    Decide whether an element should be stripped.

    Whitelisted class/id strings always survive; blacklisted ones are
    stripped unless the tag is structural (html, body, article, main).
    """
    combined = class_and_id(element)

    if constants.whitelist.search(combined):
        return False

    if not constants.blacklist.search(combined):
        return False

    return element.name.lower() not in constants.protected_tags


def strip_unlikely_candidates(
    root: BeautifulSoup | Tag,
    constants: ScoringConstants = SCORING,
) -> int:
    """
    Remove unlikely candidates below ``root`` in place.

    Args:
        root: Working copy to mutate. Never pass a caller's document.
        constants: Pattern set to match against

    Returns:
        Number of elements removed
    """
    removed = 0

    for element in iter_elements(root):
        if not is_attached(element, root):
            continue
        if is_unlikely_candidate(element, constants):
            element.extract()
            removed += 1

    logger.debug(f"Stripped {removed} unlikely candidates")
    return removed
