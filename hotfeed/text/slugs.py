"""
Slug and metadata helpers for community content.

Pure string functions used when normalizing content records (missing slugs)
and when preparing titles and excerpts for display.
"""

import re
import unicodedata
from typing import Iterable, Optional


# Words dropped from slugs
STOP_WORDS: frozenset[str] = frozenset({
    "a", "an", "and", "are", "as", "at", "be", "by", "for", "from",
    "has", "he", "in", "is", "it", "its", "of", "on", "that", "the",
    "to", "was", "will", "with", "this", "but", "they", "have",
    "had", "what", "when", "where", "who", "which", "why", "how",
})

DEFAULT_SLUG_LENGTH: int = 60

# Meta description bounds (characters)
META_MIN_LENGTH: int = 120
META_MAX_LENGTH: int = 160

# Hashtag bounds (characters)
HASHTAG_MIN_LENGTH: int = 2
HASHTAG_MAX_LENGTH: int = 24

_HASHTAG_PATTERN = re.compile(r"^[a-z0-9-]+$")


def _strip_diacritics(text: str) -> str:
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def generate_slug(title: str, max_length: int = DEFAULT_SLUG_LENGTH) -> str:
    """
    Generate a clean, URL-friendly slug from a title.

    Steps: lowercase, strip diacritics, keep only letters/digits/spaces/hyphens,
    drop stop words, join with hyphens, collapse repeated hyphens, truncate
    to max_length and strip a trailing hyphen.

    Example:
        >>> generate_slug("XAUUSD M5 Scalping Strategy")
        'xauusd-m5-scalping-strategy'
    """
    text = _strip_diacritics(title.lower())
    text = re.sub(r"[^a-z0-9\s-]", "", text).strip()

    words = [w for w in text.split() if w not in STOP_WORDS]
    slug = re.sub(r"-+", "-", "-".join(words))

    return slug[:max_length].rstrip("-")


def generate_full_slug(category_slug: str, subcategory_slug: Optional[str], title: str) -> str:
    """
    Generate a full slug including the category path.

    Example:
        >>> generate_full_slug("trading-strategies", "xauusd-scalping", "M5 Rules")
        'trading-strategies/xauusd-scalping/m5-rules'
    """
    parts = [category_slug]
    if subcategory_slug:
        parts.append(subcategory_slug)
    parts.append(generate_slug(title))
    return "/".join(parts)


def generate_meta_description(body: str, seo_excerpt: Optional[str] = None) -> str:
    """
    Build a meta description from body text.

    A provided excerpt is used as-is when it is already 120-160 characters.
    Otherwise the first paragraph is stripped of markdown and HTML and trimmed
    to at most 160 characters without cutting a word in half.

    Args:
        body: Full body text (markdown or HTML).
        seo_excerpt: Optional author-supplied excerpt.

    Returns:
        Description string, at most 163 characters (160 + ellipsis).
    """
    if seo_excerpt and META_MIN_LENGTH <= len(seo_excerpt) <= META_MAX_LENGTH:
        return seo_excerpt

    first_paragraph = body.split("\n\n")[0][:300]

    cleaned = re.sub(r"[#*_`~\[\]]", "", first_paragraph)
    cleaned = re.sub(r"<[^>]+>", "", cleaned)
    cleaned = re.sub(r"\s+", " ", cleaned).strip()

    if len(cleaned) <= META_MAX_LENGTH:
        return cleaned

    trimmed = cleaned[:META_MAX_LENGTH]
    last_space = trimmed.rfind(" ")
    if last_space > 140:
        return trimmed[:last_space] + "..."
    return trimmed + "..."


def truncate(text: str, max_length: int) -> str:
    """
    Truncate text on a word boundary, appending an ellipsis when shortened.
    """
    if len(text) <= max_length:
        return text
    if max_length <= 3:
        return text[:max_length]

    cut = text[:max_length - 3]
    last_space = cut.rfind(" ")
    if last_space > 0 and not text[len(cut)].isspace():
        cut = cut[:last_space]
    return cut.rstrip() + "..."


def clean_hashtags(hashtags: Iterable[str]) -> list[str]:
    """
    Normalize hashtags: strip a leading '#', lowercase, and keep only
    2-24 character tags made of letters, digits and hyphens.
    """
    cleaned = []
    for tag in hashtags:
        tag = re.sub(r"^#", "", tag).lower().strip()
        if HASHTAG_MIN_LENGTH <= len(tag) <= HASHTAG_MAX_LENGTH and _HASHTAG_PATTERN.match(tag):
            cleaned.append(tag)
    return cleaned


def count_words(text: str) -> int:
    """Count whitespace-separated words."""
    return len(text.split())


def is_title_too_shouty(title: str) -> bool:
    """True when at least half of the title's letters are uppercase."""
    letters = [ch for ch in title if ch.isascii() and ch.isalpha()]
    if not letters:
        return False
    upper = sum(1 for ch in letters if ch.isupper())
    return upper / len(letters) >= 0.5
