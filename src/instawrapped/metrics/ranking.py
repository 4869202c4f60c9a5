"""
Tallies and top-N rankings shared by the metric extractors.
"""

from __future__ import annotations

from collections import Counter
from typing import Optional, Sequence

from ..extractor.models import Identity, RankedEntry


def top_entries(
    tally: Counter[str],
    limit: int,
    identity: Optional[Identity] = None,
) -> tuple[RankedEntry, ...]:
    """
    Rank a tally by count, highest first.

    Ties keep encounter order (Counter preserves insertion order and the
    sort is stable). Owner names and non-positive counts never rank.
    """
    ranked = sorted(
        (
            (name, count)
            for name, count in tally.items()
            if count > 0 and not (identity and identity.is_self(name))
        ),
        key=lambda item: item[1],
        reverse=True,
    )
    return tuple(RankedEntry(name=name, count=count) for name, count in ranked[:limit])


def as_handle(name: str) -> str:
    return name if name.startswith("@") else f"@{name}"


def join_tied_names(names: Sequence[str], max_names: Optional[int] = None) -> Optional[str]:
    """
    Join tied names for display.

    Examples:
        >>> join_tied_names(["alice"])
        '@alice'

        >>> join_tied_names(["alice", "bob"])
        '@alice & @bob'

        >>> join_tied_names(["alice", "bob", "carol"])
        '@alice, @bob & @carol'
    """
    if max_names is not None:
        names = names[:max_names]
    handles = [as_handle(name) for name in names]
    if not handles:
        return None
    if len(handles) == 1:
        return handles[0]
    return f"{', '.join(handles[:-1])} & {handles[-1]}"


def tied_leaders(tally: Counter[str]) -> tuple[list[str], int]:
    """Names sharing the highest count, in encounter order, and that count."""
    if not tally:
        return [], 0
    top_count = max(tally.values())
    return [name for name, count in tally.items() if count == top_count], top_count
