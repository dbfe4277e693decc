"""Comment content sanitization.

Comments accept a small set of inline formatting tags. Everything else is
stripped, never escaped, so the stored text is safe to render as HTML.
"""

import re

import bleach

ALLOWED_TAGS = [
    "a",
    "b",
    "blockquote",
    "br",
    "code",
    "em",
    "i",
    "li",
    "ol",
    "p",
    "pre",
    "s",
    "strong",
    "u",
    "ul",
]

ALLOWED_ATTRIBUTES = {"a": ["href", "title"]}

ALLOWED_PROTOCOLS = ["http", "https", "mailto"]

_WHITESPACE = re.compile(r"\s+")


def sanitize_content(html: str) -> str:
    """Clean user supplied rich text, keeping only the allowed markup."""
    if not html:
        return ""
    cleaned = bleach.clean(
        html,
        tags=ALLOWED_TAGS,
        attributes=ALLOWED_ATTRIBUTES,
        protocols=ALLOWED_PROTOCOLS,
        strip=True,
        strip_comments=True,
    )
    return cleaned.strip()


def plain_text(html: str) -> str:
    """Text content of ``html`` with every tag removed and whitespace collapsed.

    Used for emptiness checks and notification previews. Entities escaped by
    bleach (``&amp;`` and friends) are left as-is.
    """
    if not html:
        return ""
    text = bleach.clean(html, tags=[], attributes={}, strip=True)
    text = text.replace("&nbsp;", " ")
    return _WHITESPACE.sub(" ", text).strip()


def preview(html: str, length: int, fallback: str = "comment") -> str:
    """Short plain-text excerpt, suffixed with ``...`` when truncated."""
    text = plain_text(html) or fallback
    if len(text) > length:
        return text[:length] + "..."
    return text
