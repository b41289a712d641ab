"""
Scoring constants for generic content extraction.

Word lists are joined into case-insensitive alternation patterns and matched
anywhere in an element's ``class`` and ``id`` strings. The constants are
immutable and shared by every extraction.
"""

import re
from dataclasses import dataclass, field


UNLIKELY_CANDIDATES_BLACKLIST: tuple[str, ...] = (
    "ad-break",
    "adbox",
    "advert",
    "addthis",
    "agegate",
    "aux",
    "blogger-labels",
    "combx",
    "comment",
    "conversation",
    "disqus",
    "entry-unrelated",
    "extra",
    "foot",
    "form",
    "header",
    "hidden",
    "loader",
    "login",
    "menu",
    "meta",
    "nav",
    "pager",
    "pagination",
    "predicta",
    "presence_control_external",
    "popup",
    "printfriendly",
    "related",
    "remove",
    "remark",
    "rss",
    "share",
    "shoutbox",
    "sidebar",
    "sociable",
    "sponsor",
    "tools",
)

UNLIKELY_CANDIDATES_WHITELIST: tuple[str, ...] = (
    "and",
    "article",
    "body",
    "blogindex",
    "column",
    "content",
    "entry-content-asset",
    "format",
    "hfeed",
    "hentry",
    "hatom",
    "main",
    "page",
    "posts",
    "shadow",
)

POSITIVE_SCORE_HINTS: tuple[str, ...] = (
    "article",
    "articlecontent",
    "instapaper_body",
    "blog",
    "body",
    "content",
    "entry-content-asset",
    "entry",
    "hentry",
    "main",
    "Normal",
    "page",
    "pagination",
    "permalink",
    "post",
    "story",
    "text",
    r"[-_]copy",
    r"\Bcopy",
)

NEGATIVE_SCORE_HINTS: tuple[str, ...] = (
    "adbox",
    "advert",
    "author",
    "bio",
    "bookmark",
    "bottom",
    "byline",
    "clear",
    "com-",
    "combx",
    "comment",
    r"comment\B",
    "contact",
    "copy",
    "credit",
    "crumb",
    "date",
    "deck",
    "excerpt",
    "featured",
    "foot",
    "footer",
    "footnote",
    "graf",
    "head",
    "info",
    "infotext",
    "instapaper_ignore",
    "jump",
    "linebreak",
    "link",
    "masthead",
    "media",
    "meta",
    "modal",
    "outbrain",
    "promo",
    "pr_",
    "related",
    "respond",
    "roundcontent",
    "scroll",
    "secondary",
    "share",
    "shopping",
    "shoutbox",
    "side",
    "sidebar",
    "sponsor",
    "stamp",
    "sub",
    "summary",
    "tags",
    "tools",
    "widget",
)

PHOTO_HINTS: tuple[str, ...] = ("figure", "photo", "image", "caption")

READABILITY_ASSET = "entry-content-asset"

# Tags never removed by the candidate filter
PROTECTED_TAGS = frozenset({"html", "body", "article", "main"})

# A div containing any of these is not rewritten as a paragraph
DIV_TO_BLOCK_SELECTOR = "a, blockquote, dl, div, img, p, pre, table"

NON_TOP_CANDIDATE_TAGS = frozenset({
    "br", "b", "i", "label", "hr", "area", "base", "basefont",
    "input", "img", "link", "meta",
})

BLOCK_LEVEL_TAGS = frozenset({
    "article", "aside", "blockquote", "body", "br", "button",
    "canvas", "caption", "col", "colgroup", "dd", "div", "dl",
    "dt", "embed", "fieldset", "figcaption", "figure", "footer",
    "form", "h1", "h2", "h3", "h4", "h5", "h6", "header",
    "hgroup", "hr", "li", "map", "object", "ol", "output", "p",
    "pre", "progress", "section", "table", "tbody", "textarea",
    "tfoot", "th", "thead", "tr", "ul", "video",
})

# (container, content) pairs used by hNews and common blog templates
HNEWS_CONTENT_SELECTORS: tuple[tuple[str, str], ...] = (
    (".hentry", ".entry-content"),
    (".entry", ".entry-content"),
    (".entry", ".entry_content"),
    (".post", ".postbody"),
    (".post", ".post_body"),
    (".post", ".post-body"),
)

MIN_CONTENT_LENGTH = 200

# Scoring weights
HINT_WEIGHT = 25
PHOTO_WEIGHT = 10
ASSET_WEIGHT = 25
HNEWS_BONUS = 80
MAX_LENGTH_BONUS = 3
SIBLING_SCORE_RATIO = 0.2

# Conditional cleaning thresholds
LINK_DENSITY_THRESHOLD = 0.5
LINK_HEAVY_MAX_TEXT_LENGTH = 500
MIN_IMAGE_DIMENSION = 10


def compile_hints(words: tuple[str, ...]) -> re.Pattern[str]:
    """Join words into one case-insensitive alternation pattern."""
    return re.compile("|".join(words), re.IGNORECASE)


@dataclass(frozen=True)
class ScoringConstants:
    """
    Compiled pattern set and thresholds used by one extraction engine.

    The module-level :data:`SCORING` instance is shared; a custom instance
    is only needed to change ``min_content_length``.
    """

    min_content_length: int = MIN_CONTENT_LENGTH
    blacklist: re.Pattern[str] = field(
        default_factory=lambda: compile_hints(UNLIKELY_CANDIDATES_BLACKLIST))
    whitelist: re.Pattern[str] = field(
        default_factory=lambda: compile_hints(UNLIKELY_CANDIDATES_WHITELIST))
    positive: re.Pattern[str] = field(
        default_factory=lambda: compile_hints(POSITIVE_SCORE_HINTS))
    negative: re.Pattern[str] = field(
        default_factory=lambda: compile_hints(NEGATIVE_SCORE_HINTS))
    photo: re.Pattern[str] = field(
        default_factory=lambda: compile_hints(PHOTO_HINTS))
    asset: re.Pattern[str] = field(
        default_factory=lambda: re.compile(READABILITY_ASSET, re.IGNORECASE))
    protected_tags: frozenset[str] = PROTECTED_TAGS
    non_top_candidate_tags: frozenset[str] = NON_TOP_CANDIDATE_TAGS
    block_level_tags: frozenset[str] = BLOCK_LEVEL_TAGS
    div_to_block_selector: str = DIV_TO_BLOCK_SELECTOR
    hnews_selectors: tuple[tuple[str, str], ...] = HNEWS_CONTENT_SELECTORS


SCORING = ScoringConstants()
