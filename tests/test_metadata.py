"""
Tests for article metadata extraction.
"""

import json
from datetime import datetime

import pytest

from distiller.dom import Document
from distiller.extraction import MetadataExtractor
from distiller.models import TextDirection

URL = "https://example.com/2024/tides"


def make_document(head: str = "", body: str = "", url: str = URL) -> Document:
    return Document.parse(f"<html><head>{head}</head><body>{body}</body></html>", url)


def json_ld(data: dict) -> str:
    return f'<script type="application/ld+json">{json.dumps(data)}</script>'


@pytest.fixture
def extractor() -> MetadataExtractor:
    return MetadataExtractor()


class TestTitle:
    """Tests for title extraction and cleaning."""

    def test_open_graph_title_first(self, extractor: MetadataExtractor):
        document = make_document(
            '<title>Page title</title><meta property="og:title" content="OG title">'
        )

        assert extractor.extract_title(document) == "OG title"

    def test_site_name_suffix_removed(self, extractor: MetadataExtractor):
        document = make_document("<title>How Tides Work | Example</title>")

        assert extractor.extract_title(document) == "How Tides Work"

    def test_unrelated_suffix_kept(self, extractor: MetadataExtractor):
        document = make_document("<title>Tides - A Primer</title>")

        assert extractor.extract_title(document) == "Tides - A Primer"

    def test_h1_fallback(self, extractor: MetadataExtractor):
        document = make_document(body="<h1>  Heading   title </h1>")

        assert extractor.extract_title(document) == "Heading title"

    def test_no_title(self, extractor: MetadataExtractor):
        assert extractor.extract_title(make_document()) is None


class TestAuthor:
    """Tests for author extraction."""

    def test_meta_author(self, extractor: MetadataExtractor):
        document = make_document('<meta name="author" content="By Jane Doe">')

        assert extractor.extract_author(document) == "Jane Doe"

    def test_json_ld_author(self, extractor: MetadataExtractor):
        document = make_document(json_ld({
            "@context": "https://schema.org",
            "@type": "NewsArticle",
            "author": [{"@type": "Person", "name": "Sam Lee"}],
        }))

        assert extractor.extract_author(document) == "Sam Lee"

    def test_byline_markup(self, extractor: MetadataExtractor):
        document = make_document(body='<p class="byline">by   Alex Kim</p>')

        assert extractor.extract_author(document) == "Alex Kim"

    def test_no_author(self, extractor: MetadataExtractor):
        assert extractor.extract_author(make_document(body="<p>Text</p>")) is None


class TestDates:
    """Tests for publication date extraction."""

    def test_meta_date(self, extractor: MetadataExtractor):
        document = make_document(
            '<meta property="article:published_time" content="2024-03-05T10:30:00Z">'
        )

        published = extractor.extract_date_published(document)

        assert (published.year, published.month, published.day) == (2024, 3, 5)
        assert published.hour == 10

    def test_json_ld_date(self, extractor: MetadataExtractor):
        document = make_document(json_ld({"@type": "BlogPosting", "datePublished": "2023-11-20"}))

        assert extractor.extract_date_published(document) == datetime(2023, 11, 20)

    def test_time_element(self, extractor: MetadataExtractor):
        document = make_document(body='<time datetime="2022-01-15">Jan 15</time>')

        assert extractor.extract_date_published(document) == datetime(2022, 1, 15)

    @pytest.mark.parametrize("value,expected", [
        ("2024-03-05", datetime(2024, 3, 5)),
        ("03/05/2024", datetime(2024, 3, 5)),
        ("March 5, 2024", datetime(2024, 3, 5)),
        ("5 March 2024", datetime(2024, 3, 5)),
        ("2024-03-05 08:15:00", datetime(2024, 3, 5, 8, 15)),
    ])
    def test_parse_date_formats(self, extractor: MetadataExtractor, value: str, expected: datetime):
        assert extractor.parse_date(value) == expected

    @pytest.mark.parametrize("value", [None, "", "yesterday", "not a date"])
    def test_unparseable_dates(self, extractor: MetadataExtractor, value):
        assert extractor.parse_date(value) is None


class TestImagesAndUrls:
    """Tests for lead image, dek and canonical URL."""

    def test_og_image_resolved(self, extractor: MetadataExtractor):
        document = make_document('<meta property="og:image" content="/img/lead.jpg">')

        assert extractor.extract_lead_image_url(document) == "https://example.com/img/lead.jpg"

    def test_json_ld_image(self, extractor: MetadataExtractor):
        document = make_document(json_ld({
            "@type": "Article",
            "image": {"@type": "ImageObject", "url": "https://cdn.example.com/a.jpg"},
        }))

        assert extractor.extract_lead_image_url(document) == "https://cdn.example.com/a.jpg"

    def test_first_content_image(self, extractor: MetadataExtractor):
        content = '<p>Text</p><img src="https://example.com/first.png"><img src="/second.png">'

        assert (
            extractor.extract_lead_image_url(make_document(), content)
            == "https://example.com/first.png"
        )

    def test_no_image(self, extractor: MetadataExtractor):
        assert extractor.extract_lead_image_url(make_document(), "<p>Text</p>") is None

    def test_dek(self, extractor: MetadataExtractor):
        document = make_document(
            '<meta name="description" content="Plain description">'
            '<meta property="og:description" content="Social description">'
        )

        assert extractor.extract_dek(document) == "Social description"

    def test_canonical_url(self, extractor: MetadataExtractor):
        document = make_document(
            '<link rel="canonical" href="https://www.example.com/tides">',
            url="https://example.com/tides?utm_source=feed",
        )

        assert extractor.extract_url_and_domain(document) == (
            "https://www.example.com/tides",
            "www.example.com",
        )

    def test_request_url_fallback(self, extractor: MetadataExtractor):
        assert extractor.extract_url_and_domain(make_document()) == (URL, "example.com")

    def test_malformed_canonical_falls_through(self, extractor: MetadataExtractor):
        document = make_document(
            '<link rel="canonical" href="http://[oops">'
            '<meta property="og:url" content="https://example.com/tides">'
        )

        assert extractor.extract_url_and_domain(document) == (
            "https://example.com/tides",
            "example.com",
        )

    def test_malformed_canonical_uses_request_url(self, extractor: MetadataExtractor):
        document = make_document('<link rel="canonical" href="http://[oops">')

        assert extractor.extract_url_and_domain(document) == (URL, "example.com")

    def test_malformed_og_image_falls_through(self, extractor: MetadataExtractor):
        document = make_document('<meta property="og:image" content="http://[oops/a.jpg">')
        content = '<p>Text</p><img src="/first.png">'

        assert (
            extractor.extract_lead_image_url(document, content)
            == "https://example.com/first.png"
        )


class TestContentDerived:
    """Tests for excerpt, word count and direction."""

    def test_excerpt_truncated(self, extractor: MetadataExtractor):
        excerpt = extractor.extract_excerpt(f"<p>{'word ' * 100}</p>")

        assert len(excerpt) == 203
        assert excerpt.endswith("...")

    def test_short_excerpt(self, extractor: MetadataExtractor):
        assert extractor.extract_excerpt("<p>Short   text</p>") == "Short text"
        assert extractor.extract_excerpt(None) is None

    def test_count_words(self, extractor: MetadataExtractor):
        assert extractor.count_words("<p>One two</p><p>three</p>") == 3
        assert extractor.count_words(None) == 0

    def test_direction(self, extractor: MetadataExtractor):
        assert extractor.detect_direction("שלום עולם") is TextDirection.RTL
        assert extractor.detect_direction("مرحبا بالعالم") is TextDirection.RTL
        assert extractor.detect_direction("Hello world") is TextDirection.LTR
        assert extractor.detect_direction(None) is TextDirection.LTR


class TestStructuredData:
    """Tests for JSON-LD parsing."""

    def test_graph_flattened_articles_first(self, extractor: MetadataExtractor):
        document = make_document(json_ld({
            "@context": "https://schema.org",
            "@graph": [
                {"@type": "Organization", "name": "Example"},
                {"@type": "NewsArticle", "headline": "Tides"},
            ],
        }))

        items = extractor.structured_data(document)

        assert [item.data_type for item in items] == ["NewsArticle", "Organization"]
        assert items[0].is_article

    def test_invalid_json_skipped(self, extractor: MetadataExtractor):
        document = make_document('<script type="application/ld+json">{not json</script>')

        assert extractor.structured_data(document) == []
