"""
Conversion of extracted HTML content to Markdown or plain text.
"""

import re

from bs4 import BeautifulSoup, NavigableString
from markdownify import MarkdownConverter

from distiller.models import ContentFormat

_CONVERTER = MarkdownConverter(
    heading_style="ATX",
    bullets="-",
    strip=["script", "style"],
)

TEXT_BLOCK_TAGS = (
    "p", "div", "section", "article", "blockquote", "pre", "li", "tr",
    "h1", "h2", "h3", "h4", "h5", "h6", "figure", "figcaption", "table",
    "ul", "ol",
)


def _tidy(text: str) -> str:
    text = re.sub(r"[ \t]+\n", "\n", text)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def html_to_markdown(html: str) -> str:
    return _tidy(_CONVERTER.convert(html))


def html_to_text(html: str) -> str:
    """Plain text with paragraphs separated by blank lines."""
    soup = BeautifulSoup(html, "html.parser")

    for br in soup.find_all("br"):
        br.replace_with(NavigableString("\n"))
    for block in soup.find_all(TEXT_BLOCK_TAGS):
        block.append(NavigableString("\n\n"))

    lines = (re.sub(r"[ \t\r\f\v]+", " ", line).strip() for line in soup.get_text().split("\n"))
    return _tidy("\n".join(lines))


def convert_content(html: str, content_format: ContentFormat | str) -> str:
    """
    Convert HTML content to the requested format.

    Args:
        html: Cleaned article HTML
        content_format: ``html``, ``markdown`` or ``text``

    Returns:
        The converted content (HTML is returned unchanged)
    """
    content_format = ContentFormat(content_format)

    if content_format is ContentFormat.MARKDOWN:
        return html_to_markdown(html)
    if content_format is ContentFormat.TEXT:
        return html_to_text(html)
    return html
