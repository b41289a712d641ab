"""
Tests for the Document wrapper and element helpers.
"""

import pytest

from distiller.core.exceptions import ParseError
from distiller.dom import (
    Document,
    class_and_id,
    inner_html,
    is_attached,
    is_element,
    iter_elements,
    normalize_whitespace,
    rename,
    resolve_url,
    text_of,
)

URL = "https://example.com/a"


class TestDocument:
    """Tests for parsing and querying."""

    def test_parse_text(self):
        document = Document.parse("<html><head><title> A  Title </title></head><body><p>Hi</p></body></html>", URL)

        assert document.base_url == URL
        assert document.title == "A Title"
        assert document.body.p.get_text() == "Hi"

    def test_parse_bytes_with_encoding(self):
        markup = "<html><body><p>Café</p></body></html>".encode("latin-1")

        document = Document.parse(markup, URL, encoding="latin-1")

        assert document.select_one("p").get_text() == "Café"

    def test_missing_title(self):
        assert Document.parse("<p>x</p>", URL).title == ""

    @pytest.mark.parametrize("parser", ["lxml", "html5lib"])
    def test_optional_parsers(self, parser: str):
        pytest.importorskip(parser)

        document = Document.parse("<html><body><p>Hi</p></body></html>", URL, parser=parser)

        assert document.parser == parser
        assert text_of(document.body) == "Hi"

    def test_unknown_parser_raises_parse_error(self):
        with pytest.raises(ParseError) as exc_info:
            Document.parse("<p>x</p>", URL, parser="no-such-parser")

        assert exc_info.value.url == URL

    def test_meta_lookup(self):
        document = Document.parse(
            '<head><meta NAME="Description" content=" About tides "><meta property="og:type" content="article"></head>',
            URL,
        )

        assert document.meta(name="description") == "About tides"
        assert document.meta(property="og:type") == "article"
        assert document.meta(name="missing") is None

    def test_clone_is_independent(self):
        document = Document.parse("<body><p>One</p></body>", URL)

        copy = document.clone()
        copy.select_one("p").extract()

        assert document.select_one("p") is not None
        assert copy.base_url == URL

    def test_text_collapses_whitespace(self):
        document = Document.parse("<body><p>One\n\n   two</p><p>three</p></body>", URL)

        assert document.text() == "One twothree"


class TestHelpers:
    """Tests for element helper functions."""

    def test_is_element(self):
        document = Document.parse("<p>text</p>", URL)

        assert is_element(document.soup.p) is True
        assert is_element(document.soup) is False
        assert is_element(document.soup.p.string) is False

    def test_class_and_id(self):
        document = Document.parse('<div class="a b" id="c"></div><span></span>', URL)

        assert class_and_id(document.soup.div) == "a b c"
        assert class_and_id(document.soup.span) == " "

    def test_rename_drops_attributes(self):
        document = Document.parse('<div class="x">Text <b>bold</b></div>', URL)

        node = rename(document.soup.div, "p")

        assert node.name == "p"
        assert node.attrs == {}
        assert inner_html(node) == "Text <b>bold</b>"

    def test_iter_elements_snapshot(self):
        document = Document.parse("<div><p>a</p><p>b</p></div><span>c</span>", URL)
        root = document.soup
        names = []

        for element in iter_elements(root):
            if not is_attached(element, root):
                continue
            names.append(element.name)
            if element.name == "div":
                element.extract()

        assert names == ["div", "span"]

    def test_text_of(self):
        document = Document.parse("<p>  a\n b\t c </p>", URL)

        assert text_of(document.soup.p) == "a b c"


class TestUrlHelpers:
    """Tests for URL resolution and whitespace helpers."""

    def test_resolve_relative(self):
        assert resolve_url(URL, " /b?page=2 ") == "https://example.com/b?page=2"

    def test_resolve_absolute(self):
        assert resolve_url(URL, "https://other.example.org/x") == "https://other.example.org/x"

    @pytest.mark.parametrize("href", ["http://[oops/2", "http://[oops"])
    def test_malformed_host_is_none(self, href: str):
        assert resolve_url(URL, href) is None

    def test_normalize_whitespace(self):
        assert normalize_whitespace("  How\n  Tides\tWork ") == "How Tides Work"
