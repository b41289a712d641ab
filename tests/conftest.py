"""
Shared pytest fixtures for article distiller tests.

Provides reusable fixtures for:
- Configuration and global state
- Sample article markup
- Temporary resources
"""

import tempfile
from pathlib import Path
from typing import Generator

import pytest

from distiller.config import Settings, reset_settings
from distiller.dom import Document
from distiller.utils.logging import reset_logging


ARTICLE_URL = "https://example.com/science/tides"

PARAGRAPHS = (
    "The tides are the regular rise and fall of the sea, caused mostly by the "
    "gravitational pull of the moon, and to a lesser degree by the sun. Coastal "
    "towns, fishing fleets, and harbour pilots have watched them for centuries, "
    "long before anyone could explain why they happened.",
    "Because the moon pulls hardest on the side of the earth facing it, the ocean "
    "there bulges outward, while on the far side inertia produces a second bulge. "
    "As the planet turns beneath these two bulges, most shores see two high tides "
    "and two low tides every lunar day.",
    "Spring tides, which have the largest range, happen when the sun and the moon "
    "line up, and neap tides, with the smallest range, happen when they pull at "
    "right angles. Local geography, from the shape of a bay to the depth of the "
    "shelf, can amplify the effect enormously.",
)


@pytest.fixture(autouse=True)
def reset_global_state():
    """
    Reset cached settings and logging before and after each test.

    This ensures tests are isolated and don't share global state.
    """
    reset_settings()
    reset_logging()
    yield
    reset_settings()
    reset_logging()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory that's cleaned up after the test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def test_settings() -> Settings:
    """Settings that never wait between fetch retries."""
    return Settings(fetch={"retry_delay_seconds": 0})


@pytest.fixture
def article_url() -> str:
    return ARTICLE_URL


@pytest.fixture
def paragraphs() -> tuple[str, ...]:
    """Three paragraphs of prose, each well over 200 characters."""
    return PARAGRAPHS


@pytest.fixture
def article_html() -> str:
    """
    Provide a realistic article page.

    The story sits in ``div.post``; the page also carries a header, a
    sidebar, comments and a footer that extraction must drop.
    """
    first, second, third = PARAGRAPHS
    third = third.replace("the moon", '<a href="/moon">the moon</a>', 1)

    return f"""
    <!DOCTYPE html>
    <html lang="en">
    <head>
        <meta charset="UTF-8">
        <title>How Tides Work | Example</title>
        <meta property="og:title" content="How Tides Work">
        <meta name="description" content="Why the sea rises and falls twice a day.">
        <meta name="author" content="By Jane Doe">
        <meta property="article:published_time" content="2024-03-05T10:30:00Z">
        <meta property="og:image" content="/images/tides.jpg">
        <link rel="canonical" href="https://example.com/science/tides">
    </head>
    <body>
        <div class="site-header">
            <a href="/">Home</a>
            <a href="/science">Science</a>
        </div>
        <div id="main-content">
            <div class="post">
                <h1>How Tides Work</h1>
                <p>{first}</p>
                <p>{second}</p>
                <p>{third}</p>
                <img src="/images/diagram.png" width="600" height="400" alt="Diagram">
                <img src="/pixel.gif" width="1" height="1">
                <script>trackPageView();</script>
            </div>
        </div>
        <div class="sidebar">
            <ul>
                <li><a href="/related/one">Related one</a></li>
                <li><a href="/related/two">Related two</a></li>
            </ul>
        </div>
        <div class="comments">
            <p>Great article, thanks, loved it, really.</p>
        </div>
        <div class="footer">Copyright 2024 Example</div>
    </body>
    </html>
    """


@pytest.fixture
def article_document(article_html: str) -> Document:
    return Document.parse(article_html, ARTICLE_URL)
