"""
Text normalization for markup pulled out of export pages.

Export pages are machine generated, so only a small, fixed set of HTML
entities shows up in practice. Anything outside that set is left untouched.
"""

from __future__ import annotations

import re
from typing import Any

ENTITY_REPLACEMENTS = (
    ("&#064;", "@"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&#039;", "'"),
    ("&quot;", '"'),
    ("&amp;", "&"),
)

WHITESPACE_PATTERN = re.compile(r"\s+")
TAG_PATTERN = re.compile(r"<[^>]+>")


def clean(raw: Any) -> str:
    """
    Decode known entities, collapse whitespace and trim.

    Never raises; non-string input yields an empty string.

    Examples:
        >>> clean("  Tom &amp; Jerry\\n ")
        'Tom & Jerry'

        >>> clean("&#064;someone")
        '@someone'
    """
    if not isinstance(raw, str) or not raw:
        return ""

    text = raw
    # Decoding can assemble a new entity ("&amp;#064;" -> "&#064;"); repeat
    # until stable so the result is idempotent.
    previous = None
    while previous != text:
        previous = text
        for entity, replacement in ENTITY_REPLACEMENTS:
            text = text.replace(entity, replacement)

    return WHITESPACE_PATTERN.sub(" ", text).strip()


def strip_tags(markup: str) -> str:
    """Remove tags from a markup fragment and clean the remaining text."""
    if not isinstance(markup, str):
        return ""
    return clean(TAG_PATTERN.sub(" ", markup))


def normalize_handle(value: Any) -> str:
    """Lower-case, collapse whitespace and drop one leading '@'."""
    text = clean(value).lower()
    if text.startswith("@"):
        text = text[1:].strip()
    return text
