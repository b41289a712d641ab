"""
DOM module for the article distiller.

Wraps BeautifulSoup trees with a base URL and small element helpers.
"""

from distiller.dom.document import (
    Document,
    is_element,
    normalize_whitespace,
    text_of,
    inner_html,
    outer_html,
    class_and_id,
    class_string,
    id_string,
    rename,
    iter_elements,
    is_attached,
    resolve_url,
)

__all__ = [
    "Document",
    "is_element",
    "normalize_whitespace",
    "text_of",
    "inner_html",
    "outer_html",
    "class_and_id",
    "class_string",
    "id_string",
    "rename",
    "iter_elements",
    "is_attached",
    "resolve_url",
]
