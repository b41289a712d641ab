"""
Article distiller - readable article extraction from arbitrary web pages.

Locates the main article body in unstructured HTML by heuristic scoring,
cleans it, and merges multi-page articles.
"""

from distiller.config import Settings, load_config
from distiller.utils.logging import setup_logging, get_logger
from distiller.core.exceptions import DistillerError
from distiller.models import ContentFormat, ParsedArticle, ParserOptions, TextDirection
from distiller.extraction import ContentExtractor, GenericExtractor, SiteExtractor
from distiller.parser import Parser

__version__ = "0.1.0"

__all__ = [
    "Settings",
    "load_config",
    "setup_logging",
    "get_logger",
    "DistillerError",
    "ContentFormat",
    "ParsedArticle",
    "ParserOptions",
    "TextDirection",
    "ContentExtractor",
    "GenericExtractor",
    "SiteExtractor",
    "Parser",
]
