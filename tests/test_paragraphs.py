"""
Tests for the paragraph normalizer.
"""

from bs4 import BeautifulSoup

from distiller.extraction.paragraphs import convert_divs_to_paragraphs, has_block_children


def make_soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


class TestHasBlockChildren:
    """Tests for block-level detection."""

    def test_text_only_div(self):
        assert has_block_children(make_soup("<div>Just text</div>").div) is False

    def test_inline_children_are_not_blocks(self):
        div = make_soup("<div>Text with <span>inline</span> and <em>emphasis</em></div>").div

        assert has_block_children(div) is False

    def test_block_descendants(self):
        """Links, images, paragraphs and nested divs all count."""
        for inner in ("<a href='/x'>x</a>", "<img src='x.png'>", "<p>x</p>",
                      "<div>x</div>", "<table></table>", "<span><pre>x</pre></span>"):
            div = make_soup(f"<div>{inner}</div>").div
            assert has_block_children(div) is True, inner


class TestConvertDivsToParagraphs:
    """Tests for div rewriting."""

    def test_converts_text_div(self):
        """Text-only divs become bare paragraphs."""
        soup = make_soup('<div class="text" id="x">Plain <b>bold</b> text</div>')

        converted = convert_divs_to_paragraphs(soup)

        assert converted == 1
        assert soup.div is None
        assert soup.p is not None
        assert soup.p.attrs == {}
        assert soup.p.decode_contents() == "Plain <b>bold</b> text"

    def test_keeps_block_divs(self):
        soup = make_soup("<div><p>Paragraph</p></div>")

        assert convert_divs_to_paragraphs(soup) == 0
        assert soup.div is not None

    def test_nested_divs(self):
        """Only the innermost text div is converted."""
        soup = make_soup('<div class="outer"><div>Inner text</div></div>')

        convert_divs_to_paragraphs(soup)

        assert soup.div["class"] == ["outer"]
        assert soup.div.p.get_text() == "Inner text"
