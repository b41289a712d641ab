"""
Pydantic settings models for the article distiller.

All configuration is defined here with defaults matching the behaviour of
the extraction engine (200 character content floor, 25 page cap).
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (compatible; ArticleDistiller/0.1; +https://github.com/article-distiller)"
)

# Hard ceiling for pagination, regardless of configuration
MAX_PAGES_LIMIT = 25


class ExtractionSettings(BaseModel):
    """Content extraction configuration."""

    min_content_length: int = Field(
        default=200,
        ge=0,
        le=10000,
        description="Minimum plain-text length for an extraction attempt to be accepted",
    )
    html_parser: Literal["html.parser", "lxml", "html5lib"] = Field(
        default="html.parser",
        description="BeautifulSoup tree builder used to parse documents",
    )
    merge_siblings: bool = Field(
        default=True,
        description="Merge high-scoring siblings of the top candidate into one container",
    )
    preprocess: bool = Field(
        default=True,
        description="Promote lazy images and drop hidden nodes before scoring",
    )


class FetchSettings(BaseModel):
    """HTTP fetch client configuration."""

    timeout_seconds: float = Field(
        default=30.0,
        ge=1.0,
        le=300.0,
        description="Timeout for a single request in seconds",
    )
    max_content_bytes: int = Field(
        default=10 * 1024 * 1024,
        ge=1024,
        le=100 * 1024 * 1024,
        description="Maximum response body size in bytes",
    )
    user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        description="User-Agent header sent with every request",
    )
    accept: str = Field(
        default="text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        description="Accept header sent with every request",
    )
    accept_language: str = Field(
        default="en-US,en;q=0.9",
        description="Accept-Language header sent with every request",
    )
    follow_redirects: bool = Field(
        default=True,
        description="Whether to follow HTTP redirects",
    )
    max_retries: int = Field(
        default=2,
        ge=0,
        le=10,
        description="Maximum retry attempts for timeouts and network errors",
    )
    retry_delay_seconds: float = Field(
        default=1.0,
        ge=0.0,
        le=60.0,
        description="Delay before retrying a failed request",
    )


class PaginationSettings(BaseModel):
    """Multi-page article merging configuration."""

    enabled: bool = Field(
        default=True,
        description="Fetch and merge subsequent pages of an article",
    )
    max_pages: int = Field(
        default=MAX_PAGES_LIMIT,
        ge=1,
        le=MAX_PAGES_LIMIT,
        description="Maximum pages merged per article, including the first",
    )
    construct_next_url: bool = Field(
        default=False,
        description="Guess the next page URL by incrementing a page query parameter",
    )


class OutputSettings(BaseModel):
    """Output formatting configuration."""

    content_format: Literal["html", "markdown", "text"] = Field(
        default="html",
        description="Format of the extracted content",
    )


class LoggingSettings(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Minimum logging level",
    )
    format: str = Field(
        default="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        description="Log message format string",
    )
    date_format: str = Field(
        default="%Y-%m-%d %H:%M:%S",
        description="Date format for log timestamps",
    )
    file_path: Path | None = Field(
        default=None,
        description="Path to log file. None means console only.",
    )
    max_file_size_mb: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Maximum log file size before rotation",
    )
    backup_count: int = Field(
        default=3,
        ge=0,
        le=10,
        description="Number of backup log files to keep",
    )
    log_to_console: bool = Field(
        default=True,
        description="Whether to output logs to console",
    )

    @field_validator("file_path", mode="before")
    @classmethod
    def convert_file_path(cls, v: str | Path | None) -> Path | None:
        """Convert string paths to Path objects."""
        if v is None:
            return None
        return Path(v) if isinstance(v, str) else v


class Settings(BaseModel):
    """
    Root configuration model containing all subsystem settings.

    Settings are loaded from YAML with environment variable overrides.
    """

    extraction: ExtractionSettings = Field(
        default_factory=ExtractionSettings,
        description="Content extraction settings",
    )
    fetch: FetchSettings = Field(
        default_factory=FetchSettings,
        description="HTTP fetch settings",
    )
    pagination: PaginationSettings = Field(
        default_factory=PaginationSettings,
        description="Pagination settings",
    )
    output: OutputSettings = Field(
        default_factory=OutputSettings,
        description="Output settings",
    )
    logging: LoggingSettings = Field(
        default_factory=LoggingSettings,
        description="Logging configuration",
    )

    model_config = {
        "extra": "forbid",
        "validate_default": True,
    }
