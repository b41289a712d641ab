"""
Generic article content extraction with relaxed-option retries.

Each attempt runs the full pipeline (filter, normalize, score, select,
clean) on a fresh copy of the document. Attempts are tried in a fixed
order, each more permissive than the last, until one yields enough text.
"""

from dataclasses import dataclass

from bs4 import Tag
from soupsieve import SelectorSyntaxError

from distiller.config.settings import ExtractionSettings
from distiller.core.exceptions import ContentExtractionError
from distiller.dom.document import Document, text_of
from distiller.extraction.candidates import strip_unlikely_candidates
from distiller.extraction.cleaner import clean_content
from distiller.extraction.constants import MIN_CONTENT_LENGTH, SCORING, ScoringConstants
from distiller.extraction.paragraphs import convert_divs_to_paragraphs
from distiller.extraction.preprocessor import preprocess
from distiller.extraction.scoring import find_top_candidate, score_content
from distiller.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ExtractionOptions:
    """Switches for one extraction attempt."""

    strip_unlikely_candidates: bool = True
    weight_nodes: bool = True
    clean_conditionally: bool = True


# Tried in order; each relaxes one more option
ATTEMPTS: tuple[ExtractionOptions, ...] = (
    ExtractionOptions(),
    ExtractionOptions(strip_unlikely_candidates=False),
    ExtractionOptions(strip_unlikely_candidates=False, weight_nodes=False),
    ExtractionOptions(
        strip_unlikely_candidates=False,
        weight_nodes=False,
        clean_conditionally=False,
    ),
)


@dataclass
class ExtractionResult:
    """
    Outcome of content extraction.

    ``content`` is None when no candidate could be found at all. When the
    last attempt was reached, ``content`` may be shorter than the minimum
    length and ``reason`` says why.
    """

    content: str | None
    attempt: int
    options: ExtractionOptions
    text_length: int = 0
    reason: str | None = None

    @property
    def found(self) -> bool:
        return bool(self.content)


class ContentExtractor:
    """
    Finds and cleans the main content of a document.

    Example:
        >>> doc = Document.parse(html, "https://example.com/post")
        >>> result = ContentExtractor().extract(doc, title="My Post")
        >>> if result.found:
        ...     print(result.content)
    """

    def __init__(
        self,
        min_content_length: int = MIN_CONTENT_LENGTH,
        merge_siblings: bool = True,
        preprocess: bool = True,
        constants: ScoringConstants = SCORING,
    ) -> None:
        """
        Initialize content extractor.

        Args:
            min_content_length: Text length an attempt must reach to be accepted
            merge_siblings: Merge high-scoring siblings of the top candidate
            preprocess: Run the HTML preprocessor on every working copy
            constants: Scoring patterns and tag sets
        """
        self.min_content_length = min_content_length
        self.merge_siblings = merge_siblings
        self.preprocess = preprocess
        self.constants = constants

    @classmethod
    def from_settings(cls, settings: ExtractionSettings) -> "ContentExtractor":
        return cls(
            min_content_length=settings.min_content_length,
            merge_siblings=settings.merge_siblings,
            preprocess=settings.preprocess,
        )

    def extract(self, document: Document, title: str | None = None) -> ExtractionResult:
        """
        Extract the main content, retrying with relaxed options.

        The caller's document is never mutated.

        Args:
            document: Parsed page
            title: Article title, used to drop duplicate headers

        Returns:
            ExtractionResult from the first sufficient attempt, or from
            the last attempt if none was sufficient
        """
        last_index = len(ATTEMPTS)
        content: str | None = None
        text_length = 0
        reason: str | None = None

        for index, options in enumerate(ATTEMPTS, start=1):
            is_last = index == last_index
            logger.debug(f"Extraction attempt {index} with {options}")

            try:
                content, text_length = self._attempt(document, options, title, is_last, index)
            except (ContentExtractionError, ValueError, AttributeError) as e:
                logger.warning(f"Extraction attempt {index} failed: {e}")
                content, text_length = None, 0
                reason = f"attempt {index} failed: {e}"
                continue

            if content is not None and text_length >= self.min_content_length:
                return ExtractionResult(content, index, options, text_length)

            if content is None and text_length == 0:
                reason = "no content candidate found"
            else:
                reason = f"content shorter than {self.min_content_length} characters"

        return ExtractionResult(
            content=content,
            attempt=last_index,
            options=ATTEMPTS[-1],
            text_length=text_length,
            reason=reason,
        )

    def extract_once(
        self,
        document: Document,
        options: ExtractionOptions,
        title: str | None = None,
    ) -> str | None:
        """Run a single attempt and return its cleaned content, or None."""
        content, _ = self._attempt(document, options, title, accept_short=True)
        return content

    def _attempt(
        self,
        document: Document,
        options: ExtractionOptions,
        title: str | None,
        accept_short: bool,
        attempt: int | None = None,
    ) -> tuple[str | None, int]:
        try:
            return self._run_attempt(document, options, title, accept_short)
        except SelectorSyntaxError as e:
            raise ContentExtractionError(f"Invalid selector: {e}", attempt=attempt) from e

    def _run_attempt(
        self,
        document: Document,
        options: ExtractionOptions,
        title: str | None,
        accept_short: bool,
    ) -> tuple[str | None, int]:
        working = document.clone()
        soup = working.soup

        if self.preprocess:
            preprocess(soup)

        if options.strip_unlikely_candidates:
            strip_unlikely_candidates(soup, self.constants)

        convert_divs_to_paragraphs(soup, self.constants)

        scores = score_content(soup, weight_nodes=options.weight_nodes, constants=self.constants)
        candidate = find_top_candidate(
            soup, scores, merge_siblings=self.merge_siblings, constants=self.constants
        )
        if candidate is None:
            return None, 0

        text_length = self._text_length(candidate)
        if text_length < self.min_content_length and not accept_short:
            return None, text_length

        content = clean_content(
            candidate,
            document.base_url,
            title=title,
            conditionally=options.clean_conditionally,
        )
        return content, text_length

    @staticmethod
    def _text_length(candidate: Tag) -> int:
        return len(text_of(candidate))
