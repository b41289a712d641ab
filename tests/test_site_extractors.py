"""
Tests for declarative site extractors and extractor dispatch.
"""

import pytest
import yaml

from distiller.core.exceptions import ConfigurationError
from distiller.dom import Document
from distiller.extraction import (
    AttributeSelector,
    CssSelector,
    ExtractorRegistry,
    FieldConfig,
    GenericExtractor,
    MultiSelector,
    SiteExtractor,
    load_site_extractors,
)
from distiller.extraction.site_extractors import base_domain, field_config_from_dict

URL = "https://news.example.com/2024/03/tides"

PAGE = """
<html>
<head>
    <title>Tides | Example News</title>
    <meta name="sailthru.author" content="Jane Doe">
    <meta property="og:image" content="/lead.jpg">
</head>
<body>
    <h1 class="headline">How Tides Work</h1>
    <p class="standfirst">Why the sea rises and falls.</p>
    <div class="lede"><p>Intro paragraph.</p></div>
    <div class="article-body">
        <p>First paragraph with a <a href="/moon">link</a>.</p>
        <div class="ad">Buy now</div>
        <p>Second paragraph.</p>
    </div>
    <a class="older" href="/2024/03/tides?page=2">Older</a>
</body>
</html>
"""


@pytest.fixture
def document() -> Document:
    return Document.parse(PAGE, URL)


@pytest.fixture
def generic() -> GenericExtractor:
    return GenericExtractor()


class TestFieldConfig:
    """Tests for selector evaluation."""

    def test_css_text(self, document: Document):
        config = FieldConfig((CssSelector(".missing"), CssSelector("h1.headline")))

        assert config.extract_text(document) == "How Tides Work"

    def test_attribute_with_transform(self, document: Document):
        config = FieldConfig((
            AttributeSelector("meta[name='sailthru.author']", "content", str.upper),
        ))

        assert config.extract_text(document) == "JANE DOE"

    def test_no_match(self, document: Document):
        assert FieldConfig((CssSelector(".missing"),)).extract_text(document) is None

    def test_html_with_clean_and_absolute_links(self, document: Document):
        config = FieldConfig((CssSelector(".article-body"),), clean=(".ad",))

        html = config.extract_html(document)

        assert "Buy now" not in html
        assert 'href="https://news.example.com/moon"' in html
        # the source document is untouched
        assert document.select_one(".ad") is not None
        assert document.select_one(".article-body a")["href"] == "/moon"

    def test_multi_selector_concatenates(self, document: Document):
        config = FieldConfig((MultiSelector((".lede", ".article-body")),))

        html = config.extract_html(document)

        assert html.index("Intro paragraph") < html.index("First paragraph")

    def test_multi_selector_needs_every_match(self, document: Document):
        config = FieldConfig((
            MultiSelector((".lede", ".missing")),
            CssSelector(".lede"),
        ))

        assert config.extract_html(document) == "<p>Intro paragraph.</p>"


class TestSiteExtractor:
    """Tests for selector-based extraction with generic fallback."""

    @pytest.fixture
    def site(self) -> SiteExtractor:
        return SiteExtractor(
            domain="example.com",
            title=FieldConfig((CssSelector("h1.headline"),)),
            author=FieldConfig((AttributeSelector("meta[name='sailthru.author']", "content"),)),
            content=FieldConfig((CssSelector(".article-body"),), clean=(".ad",)),
            dek=FieldConfig((CssSelector(".standfirst"),)),
            next_page=FieldConfig((AttributeSelector("a.older", "href"),)),
        )

    def test_configured_fields(self, site: SiteExtractor, document: Document, generic):
        article = site.extract(document, generic)

        assert article.title == "How Tides Work"
        assert article.author == "Jane Doe"
        assert article.dek == "Why the sea rises and falls."
        assert "Second paragraph." in article.content
        assert "Buy now" not in article.content
        assert article.next_page_url == "https://news.example.com/2024/03/tides?page=2"

    def test_fallback_fills_missing_fields(self, site: SiteExtractor, document: Document, generic):
        article = site.extract(document, generic, fallback=True)

        assert article.lead_image_url == "https://news.example.com/lead.jpg"
        assert article.excerpt is not None
        assert article.word_count > 0
        assert article.domain == "news.example.com"

    def test_no_fallback(self, site: SiteExtractor, document: Document, generic):
        article = site.extract(document, generic, fallback=False)

        assert article.lead_image_url is None
        assert article.date_published is None
        assert article.excerpt is None

    def test_from_dict(self):
        site = SiteExtractor.from_dict({
            "domain": "Example.com",
            "title": ["h1.headline"],
            "author": {"selectors": [{"css": "meta[name='author']", "attribute": "content"}]},
            "content": {
                "selectors": [{"all": [".lede", ".article-body"]}, ".article-body"],
                "clean": ".ad",
            },
        })

        assert site.domain == "example.com"
        assert site.title.selectors == (CssSelector("h1.headline"),)
        assert site.author.selectors == (AttributeSelector("meta[name='author']", "content"),)
        assert site.content.selectors[0] == MultiSelector((".lede", ".article-body"))
        assert site.content.clean == (".ad",)
        assert site.dek is None

    def test_from_dict_requires_domain(self):
        with pytest.raises(ConfigurationError):
            SiteExtractor.from_dict({"title": ["h1"]})

    def test_from_dict_rejects_unknown_fields(self):
        with pytest.raises(ConfigurationError) as exc_info:
            SiteExtractor.from_dict({"domain": "example.com", "headline": ["h1"]})

        assert exc_info.value.details["fields"] == ["headline"]

    def test_invalid_selector(self):
        with pytest.raises(ConfigurationError):
            field_config_from_dict({"selectors": [42]})


class TestExtractorRegistry:
    """Tests for host-based dispatch."""

    def test_base_domain(self):
        assert base_domain("www.news.example.com") == "example.com"
        assert base_domain("localhost") == "localhost"

    def test_generic_when_unregistered(self, generic):
        registry = ExtractorRegistry(generic)

        assert registry.resolve(URL) is generic

    def test_exact_host_before_base_domain(self):
        broad = SiteExtractor(domain="example.com")
        exact = SiteExtractor(domain="news.example.com")
        registry = ExtractorRegistry(extractors=[broad, exact])

        assert registry.resolve(URL) is exact
        assert registry.resolve("https://www.example.com/a") is broad

    def test_custom_takes_precedence(self):
        registry = ExtractorRegistry(extractors=[SiteExtractor(domain="news.example.com")])
        custom = SiteExtractor(domain="example.com")

        registry.add_custom(custom)

        assert registry.resolve(URL) is custom
        assert len(registry) == 2

    def test_load_path_file(self, temp_dir):
        path = temp_dir / "sites.yaml"
        path.write_text(yaml.dump({
            "extractors": [
                {"domain": "example.com", "title": ["h1.headline"]},
                {"domain": "example.org", "content": [".body"]},
            ],
        }))
        registry = ExtractorRegistry()

        assert registry.load_path(path) == 2
        assert registry.resolve("https://example.org/x").domain == "example.org"

    def test_load_path_directory(self, temp_dir):
        (temp_dir / "one.yaml").write_text(yaml.dump({"domain": "one.example"}))
        (temp_dir / "two.yml").write_text(yaml.dump({"domain": "two.example"}))
        registry = ExtractorRegistry()

        assert registry.load_path(temp_dir) == 2

    def test_extractors_must_be_list(self, temp_dir):
        path = temp_dir / "bad.yaml"
        path.write_text(yaml.dump({"extractors": {"domain": "example.com"}}))

        with pytest.raises(ConfigurationError):
            load_site_extractors(path)
