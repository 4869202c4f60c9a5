"""
Comments left on other people's posts and reels.
"""

from __future__ import annotations

from collections import Counter
from typing import Optional

import structlog
from bs4 import Tag

from ..archive import Archive, paths
from ..extractor.markup import content_blocks, nested_label_value, parse_html, sibling_cell_value
from ..extractor.models import CreatorStats, Identity
from ..extractor.strategies import compile_patterns, first_success, regex_strategy
from .ranking import join_tied_names, tied_leaders

logger = structlog.get_logger(__name__)

MEDIA_OWNER_LABEL = "Media Owner"

MEDIA_OWNER_PATTERNS = compile_patterns(
    [
        r"Media Owner\s*<div><div>([^<]+)</div></div>",
        r"Media Owner</td>\s*<td[^>]*><div><div>([^<]+)</div>",
        r"Media Owner</td>\s*<td[^>]*>([^<]+)</td>",
    ]
)


def comment_media_owner(block: Tag) -> Optional[str]:
    return first_success(
        [
            lambda: nested_label_value(block, MEDIA_OWNER_LABEL),
            lambda: sibling_cell_value(block, MEDIA_OWNER_LABEL),
            lambda: regex_strategy(MEDIA_OWNER_PATTERNS)(str(block)),
        ]
    )


class CommentsExtractor:
    """Counts comments on others' media and finds the most commented creators."""

    name = "comments"

    def __init__(self, max_tied_creators: Optional[int] = None) -> None:
        self.max_tied_creators = max_tied_creators

    def default(self) -> CreatorStats:
        return CreatorStats()

    def comment_files(self, archive: Archive) -> list[str]:
        post_parts = sorted(
            (path for path in archive.list_files(paths.COMMENTS_ROOT) if paths.POST_COMMENTS_FILE_PATTERN.search(path)),
            key=lambda path: paths.numbered_sort_key(path, paths.POST_COMMENTS_FILE_PATTERN),
        )
        return post_parts + [paths.REELS_COMMENTS]

    def tally_html(self, html: str, identity: Identity, tally: Counter[str]) -> int:
        """Add one page's non-owner comments to tally; return how many were added."""
        added = 0
        for block in content_blocks(parse_html(html)):
            owner = comment_media_owner(block)
            if owner and not identity.is_self(owner):
                tally[owner] += 1
                added += 1
        return added

    def stats_from_tally(self, tally: Counter[str], total: int) -> CreatorStats:
        names, top_count = tied_leaders(tally)
        if not names:
            return CreatorStats(total=total)
        return CreatorStats(
            total=total,
            top_creator=join_tied_names(names, self.max_tied_creators),
            top_creator_count=top_count,
        )

    async def extract(self, archive: Archive, identity: Identity) -> CreatorStats:
        tally: Counter[str] = Counter()
        total = 0
        for path in self.comment_files(archive):
            html = await archive.read_text(path)
            if html is None:
                logger.debug("source_missing", extractor=self.name, path=path)
                continue
            total += self.tally_html(html, identity, tally)

        stats = self.stats_from_tally(tally, total)
        logger.debug("comments_extracted", total=stats.total, top_creator=stats.top_creator)
        return stats
