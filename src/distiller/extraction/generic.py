"""
Generic extractor for any website.

Combines the scoring-based content extractor with metadata heuristics and
next-page detection to build a complete ParsedArticle.
"""

from datetime import datetime

from distiller.config.settings import Settings
from distiller.dom.document import Document
from distiller.extraction.content_extractor import ContentExtractor, ExtractionResult
from distiller.extraction.metadata_extractor import MetadataExtractor
from distiller.extraction.next_page import NextPageExtractor
from distiller.models import ParsedArticle, TextDirection
from distiller.utils.logging import get_logger

logger = get_logger(__name__)


class GenericExtractor:
    """
    Algorithmic extractor used when no site extractor matches.

    Example:
        >>> extractor = GenericExtractor()
        >>> article = extractor.extract(Document.parse(html, url))
        >>> print(article.title, article.word_count)
    """

    domain = "*"

    def __init__(
        self,
        content_extractor: ContentExtractor | None = None,
        metadata_extractor: MetadataExtractor | None = None,
        next_page_extractor: NextPageExtractor | None = None,
    ) -> None:
        self.content_extractor = content_extractor or ContentExtractor()
        self.metadata = metadata_extractor or MetadataExtractor()
        self.next_page = next_page_extractor or NextPageExtractor()

    @classmethod
    def from_settings(cls, settings: Settings) -> "GenericExtractor":
        return cls(
            content_extractor=ContentExtractor.from_settings(settings.extraction),
            next_page_extractor=NextPageExtractor(
                construct_next_url=settings.pagination.construct_next_url
            ),
        )

    def extract(self, document: Document) -> ParsedArticle:
        """
        Extract every article field from a document.

        Args:
            document: Parsed page

        Returns:
            ParsedArticle for this single page
        """
        title = self.extract_title(document)
        result = self.extract_content(document, title)
        content = result.content if result.found else None

        if content is None:
            logger.info(f"No extractable content in {document.base_url}: {result.reason}")

        url, domain = self.metadata.extract_url_and_domain(document)

        return ParsedArticle(
            url=url,
            domain=domain,
            title=title,
            content=content,
            author=self.extract_author(document),
            date_published=self.extract_date_published(document),
            lead_image_url=self.extract_lead_image_url(document, content),
            dek=self.extract_dek(document),
            excerpt=self.extract_excerpt(content),
            word_count=self.metadata.count_words(content),
            direction=self.extract_direction(title),
            next_page_url=self.extract_next_page_url(document),
        )

    def extract_title(self, document: Document) -> str | None:
        return self.metadata.extract_title(document)

    def extract_author(self, document: Document) -> str | None:
        return self.metadata.extract_author(document)

    def extract_date_published(self, document: Document) -> datetime | None:
        return self.metadata.extract_date_published(document)

    def extract_content(self, document: Document, title: str | None = None) -> ExtractionResult:
        return self.content_extractor.extract(document, title=title)

    def extract_lead_image_url(self, document: Document, content: str | None = None) -> str | None:
        return self.metadata.extract_lead_image_url(document, content)

    def extract_dek(self, document: Document) -> str | None:
        return self.metadata.extract_dek(document)

    def extract_excerpt(self, content: str | None) -> str | None:
        return self.metadata.extract_excerpt(content)

    def extract_direction(self, title: str | None) -> TextDirection:
        return self.metadata.detect_direction(title)

    def extract_next_page_url(self, document: Document) -> str | None:
        return self.next_page.extract(document)
