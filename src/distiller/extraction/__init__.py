"""
Extraction module for the article distiller.

Provides article extraction including:
- Candidate filtering, paragraph normalization and content scoring
- Content cleaning with relaxed-option retries
- Metadata and next-page detection
- Declarative per-site extractors
"""

from distiller.extraction.constants import SCORING, ScoringConstants
from distiller.extraction.scoring import ScoreTable, find_top_candidate, score_content
from distiller.extraction.content_extractor import (
    ATTEMPTS,
    ContentExtractor,
    ExtractionOptions,
    ExtractionResult,
)
from distiller.extraction.metadata_extractor import (
    MetadataExtractor,
    StructuredData,
)
from distiller.extraction.next_page import NextPageExtractor, is_valid_next_page
from distiller.extraction.generic import GenericExtractor
from distiller.extraction.site_extractors import (
    AttributeSelector,
    CssSelector,
    Extractor,
    ExtractorRegistry,
    FieldConfig,
    MultiSelector,
    SiteExtractor,
    load_site_extractors,
)

__all__ = [
    # Scoring
    "SCORING",
    "ScoringConstants",
    "ScoreTable",
    "score_content",
    "find_top_candidate",
    # Content extraction
    "ATTEMPTS",
    "ContentExtractor",
    "ExtractionOptions",
    "ExtractionResult",
    # Metadata and pagination
    "MetadataExtractor",
    "StructuredData",
    "NextPageExtractor",
    "is_valid_next_page",
    # Dispatch
    "GenericExtractor",
    "SiteExtractor",
    "FieldConfig",
    "CssSelector",
    "AttributeSelector",
    "MultiSelector",
    "Extractor",
    "ExtractorRegistry",
    "load_site_extractors",
]
