"""
Ordered fallback chains.

Export markup drifts between format versions, so every fact is looked up
with several strategies sharing one signature. The first strategy that
yields a usable value wins; a strategy that trips over malformed input is
skipped rather than failing the whole extraction.
"""

from __future__ import annotations

import re
from typing import Callable, Iterable, Optional, Sequence, TypeVar

import structlog

from ..utils.text import strip_tags

logger = structlog.get_logger(__name__)

T = TypeVar("T")

Strategy = Callable[..., Optional[T]]

# Errors a single attempt may raise on malformed values
RECOVERABLE_ERRORS = (ValueError, TypeError, OverflowError, AttributeError, LookupError)


def _is_usable(value: object) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


def first_success(strategies: Iterable[Strategy[T]], *args: object, **kwargs: object) -> Optional[T]:
    """
    Apply strategies in order and return the first usable result.

    A result is usable when it is not None and, for strings, not blank.
    """
    for strategy in strategies:
        try:
            value = strategy(*args, **kwargs)
        except RECOVERABLE_ERRORS as e:
            logger.debug("strategy_failed", strategy=getattr(strategy, "__name__", repr(strategy)), error=str(e))
            continue
        if _is_usable(value):
            return value
    return None


def compile_patterns(patterns: Sequence[str], flags: int = 0) -> tuple[re.Pattern[str], ...]:
    return tuple(re.compile(pattern, flags) for pattern in patterns)


def regex_strategy(patterns: Sequence[re.Pattern[str]]) -> Strategy[str]:
    """Build a strategy returning the first cleaned capture of any pattern."""

    def _search(markup: str) -> Optional[str]:
        for pattern in patterns:
            match = pattern.search(markup)
            if match:
                value = strip_tags(match.group(1))
                if value:
                    return value
        return None

    _search.__name__ = "regex_search"
    return _search
