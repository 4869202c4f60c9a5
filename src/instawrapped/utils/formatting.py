"""
Display helpers for summary numbers and names.
"""

from __future__ import annotations


def _compact(value: float, suffix: str) -> str:
    text = f"{value:.1f}"
    if text.endswith(".0"):
        text = text[:-2]
    return f"{text}{suffix}"


def format_number(value: int) -> str:
    """
    Format a count for display.

    Values below 10,000 keep digit grouping, larger values are shortened
    with a K or M suffix and one decimal (dropped when it is zero).

    Examples:
        >>> format_number(9876)
        '9,876'

        >>> format_number(12_345)
        '12.3K'

        >>> format_number(2_000_000)
        '2M'
    """
    if value < 10_000:
        return f"{value:,}"
    if value < 1_000_000:
        return _compact(value / 1_000, "K")
    return _compact(value / 1_000_000, "M")


def truncate_text(text: str, max_length: int) -> str:
    """
    Shorten text to max_length characters, ending with '...' when cut.

    Examples:
        >>> truncate_text("short", 10)
        'short'

        >>> truncate_text("a very long display name", 10)
        'a very ...'
    """
    if len(text) <= max_length:
        return text
    if max_length <= 3:
        return text[:max_length]
    return text[: max_length - 3] + "..."
