"""Utility modules for instawrapped."""

from .formatting import format_number, truncate_text
from .text import clean, normalize_handle, strip_tags

__all__ = ["clean", "normalize_handle", "strip_tags", "format_number", "truncate_text"]
