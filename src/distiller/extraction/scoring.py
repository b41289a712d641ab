"""
Content scoring and top-candidate selection.

Paragraph-like nodes are scored from class/id hints, comma count and text
length, and their content score flows to the parent (full) and the
grandparent (half). The element holding the most accumulated score is the
top candidate.

Scores live in a :class:`ScoreTable` owned by one extraction attempt, never
on the DOM nodes themselves.
"""

from typing import Iterator

from bs4 import BeautifulSoup, Tag

from distiller.dom.document import class_string, id_string, is_element, text_of
from distiller.extraction.constants import (
    ASSET_WEIGHT,
    HINT_WEIGHT,
    HNEWS_BONUS,
    MAX_LENGTH_BONUS,
    PHOTO_WEIGHT,
    SCORING,
    SIBLING_SCORE_RATIO,
    ScoringConstants,
)
from distiller.utils.logging import get_logger

logger = get_logger(__name__)


class ScoreTable:
    """
    Per-attempt mapping from element to score.

    Keyed by node identity. Each entry keeps a reference to its node so an
    identity cannot be recycled while the table is alive. Only elements are
    scored: the document root and text nodes are ignored.
    """

    def __init__(self) -> None:
        self._entries: dict[int, tuple[Tag, float]] = {}

    def get(self, node: Tag) -> float:
        entry = self._entries.get(id(node))
        return entry[1] if entry is not None else 0.0

    def set(self, node: Tag, score: float) -> None:
        if is_element(node):
            self._entries[id(node)] = (node, float(score))

    def add(self, node: Tag, amount: float) -> None:
        if is_element(node):
            self.set(node, self.get(node) + amount)

    def scored_nodes(self) -> list[Tag]:
        return [node for node, _ in self._entries.values()]

    def __contains__(self, node: object) -> bool:
        return id(node) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[tuple[Tag, float]]:
        return iter(self._entries.values())


def get_weight(element: Tag, constants: ScoringConstants = SCORING) -> int:
    """
    Class/id hint weight of an element.

    The id is checked first; the class only contributes the positive or
    negative hint weight when the id produced nothing. Photo and asset
    bonuses from the class always apply.
    """
    class_name = class_string(element)
    element_id = id_string(element)
    score = 0

    if element_id:
        if constants.positive.search(element_id):
            score += HINT_WEIGHT
        if constants.negative.search(element_id):
            score -= HINT_WEIGHT

    if class_name and score == 0:
        if constants.positive.search(class_name):
            score += HINT_WEIGHT
        if constants.negative.search(class_name):
            score -= HINT_WEIGHT

    if constants.photo.search(class_name):
        score += PHOTO_WEIGHT

    if constants.asset.search(class_name):
        score += ASSET_WEIGHT

    return score


def score_paragraph(element: Tag) -> float:
    """
    Content score of a paragraph before propagation.

    ``1 + commas + min(length // 100, 3)``
    """
    text = text_of(element)
    score = 1.0
    score += text.count(",")
    score += min(len(text) // 100, MAX_LENGTH_BONUS)
    return score


def apply_hnews_bonus(
    root: BeautifulSoup | Tag,
    scores: ScoreTable,
    constants: ScoringConstants = SCORING,
) -> None:
    """Add a flat bonus to the parent of every known blog content node."""
    for container, content in constants.hnews_selectors:
        for element in root.select(f"{container} {content}"):
            if element.parent is not None:
                scores.add(element.parent, HNEWS_BONUS)


def score_content(
    root: BeautifulSoup | Tag,
    scores: ScoreTable | None = None,
    weight_nodes: bool = True,
    constants: ScoringConstants = SCORING,
) -> ScoreTable:
    """
    Score all paragraphs below ``root``.

    Args:
        root: Working copy, already filtered and normalized
        scores: Table to fill. A new one is created if None.
        weight_nodes: Apply class/id hint weights to paragraphs
        constants: Pattern set

    Returns:
        The filled score table
    """
    if scores is None:
        scores = ScoreTable()

    apply_hnews_bonus(root, scores, constants)

    for paragraph in root.select("p, pre"):
        if scores.get(paragraph) != 0:
            continue

        scores.set(paragraph, get_weight(paragraph, constants) if weight_nodes else 0)
        content_score = score_paragraph(paragraph)

        parent = paragraph.parent
        if parent is None:
            continue
        scores.add(parent, content_score)

        grandparent = parent.parent
        if grandparent is not None:
            scores.add(grandparent, content_score / 2)

    logger.debug(f"Scored {len(scores)} nodes")
    return scores


def find_top_candidate(
    root: BeautifulSoup,
    scores: ScoreTable,
    merge_siblings: bool = True,
    constants: ScoringConstants = SCORING,
) -> Tag | None:
    """
    Pick the highest-scoring eligible element.

    Elements are scanned in document order and the first strictly greater
    score wins, so ties go to the earlier element. With no positive score
    the body is returned (None if the document has no body).

    Args:
        root: Parsed working copy
        scores: Scores from :func:`score_content`
        merge_siblings: Wrap qualifying siblings with the candidate
        constants: Pattern set

    Returns:
        The top candidate element, or None
    """
    top_candidate: Tag | None = None
    top_score = 0.0

    for element in root.find_all(True):
        if element not in scores:
            continue
        if element.name.lower() in constants.non_top_candidate_tags:
            continue

        score = scores.get(element)
        if score > top_score:
            top_score = score
            top_candidate = element

    if top_candidate is None:
        return root.body

    if merge_siblings:
        return merge_qualifying_siblings(root, top_candidate, top_score, scores, constants)

    return top_candidate


def qualifying_siblings(
    candidate: Tag,
    top_score: float,
    scores: ScoreTable,
    constants: ScoringConstants = SCORING,
) -> list[Tag]:
    """Siblings scoring at least 20% of the top score."""
    if candidate.parent is None or top_score <= 0:
        return []

    threshold = top_score * SIBLING_SCORE_RATIO
    siblings = []

    for sibling in candidate.parent.children:
        if sibling is candidate or not is_element(sibling):
            continue
        if sibling not in scores:
            continue
        if sibling.name.lower() in constants.non_top_candidate_tags:
            continue
        if scores.get(sibling) >= threshold:
            siblings.append(sibling)

    return siblings


def merge_qualifying_siblings(
    soup: BeautifulSoup,
    candidate: Tag,
    top_score: float,
    scores: ScoreTable,
    constants: ScoringConstants = SCORING,
) -> Tag:
    """
    Wrap the candidate and its qualifying siblings in one ``div``.

    The wrapper takes the candidate's place and keeps document order.
    Structural candidates (html, body) are returned as is.
    """
    if candidate.name in ("html", "body"):
        return candidate

    siblings = qualifying_siblings(candidate, top_score, scores, constants)
    if not siblings:
        return candidate

    members = {id(node) for node in siblings}
    members.add(id(candidate))
    ordered = [
        node for node in candidate.parent.children
        if id(node) in members
    ]

    wrapper = soup.new_tag("div")
    candidate.insert_before(wrapper)
    for node in ordered:
        wrapper.append(node.extract())

    scores.set(wrapper, top_score)
    logger.debug(f"Merged {len(siblings)} siblings into top candidate")

    return wrapper
