"""
Text module.

Slug generation, meta descriptions, hashtag cleanup and title checks.
"""

from hotfeed.text.slugs import (
    STOP_WORDS,
    generate_slug,
    generate_full_slug,
    generate_meta_description,
    truncate,
    clean_hashtags,
    count_words,
    is_title_too_shouty,
)

__all__ = [
    "STOP_WORDS",
    "generate_slug",
    "generate_full_slug",
    "generate_meta_description",
    "truncate",
    "clean_hashtags",
    "count_words",
    "is_title_too_shouty",
]
