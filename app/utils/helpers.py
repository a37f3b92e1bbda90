"""
Helper utilities
"""

import html
import re
from typing import Optional
import bleach
import slugify as python_slugify

from app.core.config import settings

def generate_slug(text: str, max_length: int = 200) -> str:
    """
    Generate URL-friendly slug from text

    Unlike category slugs, accented characters are transliterated
    ("Chó con" -> "cho-con").

    Args:
        text: Input text
        max_length: Maximum slug length

    Returns:
        Slug
    """
    return python_slugify.slugify(text or "", max_length=max_length, word_boundary=True)

def strip_html(content: Optional[str]) -> str:
    """Remove every tag and collapse whitespace"""
    if not content:
        return ""
    text = bleach.clean(content, tags=set(), attributes={}, strip=True)
    text = html.unescape(text)
    return re.sub(r"\s+", " ", text).strip()

def make_description(content: Optional[str], length: Optional[int] = None) -> str:
    """
    Plain-text teaser from HTML content

    Args:
        content: HTML content
        length: Characters to keep before "..." (defaults to BLOG_DESCRIPTION_LENGTH)

    Returns:
        Stripped text, truncated with "..." when longer than length
    """
    length = length or settings.BLOG_DESCRIPTION_LENGTH
    text = strip_html(content)
    if len(text) <= length:
        return text
    return text[:length] + "..."
