"""
Likes given, and whose posts were liked most.
"""

from __future__ import annotations

import re
from collections import Counter
from typing import Optional

import structlog
from bs4 import Tag

from ..archive import Archive, paths
from ..extractor.markup import content_blocks, nested_label_value, parse_html, sibling_cell_value, text_of
from ..extractor.models import CreatorStats, Identity
from ..extractor.strategies import first_success
from ..utils.text import clean
from .ranking import as_handle, top_entries

logger = structlog.get_logger(__name__)

MEDIA_OWNER_LABEL = "Media Owner"
LIKED_PHRASE_PATTERN = re.compile(r"Liked\s+([^']+)'s")
PROFILE_URL_PATTERN = re.compile(r"instagram\.com/([^/?#]+)")
# Path segments of post/reel/story links, not usernames
NON_PROFILE_SEGMENTS = frozenset({"p", "reel", "reels", "stories", "explore", "tv", "_u"})


def media_owner_cell(block: Tag) -> Optional[str]:
    return first_success(
        [
            lambda: sibling_cell_value(block, MEDIA_OWNER_LABEL),
            lambda: nested_label_value(block, MEDIA_OWNER_LABEL),
        ]
    )


def heading_text(block: Tag) -> Optional[str]:
    return text_of(block.find("h2")) or None


def liked_phrase(block: Tag) -> Optional[str]:
    match = LIKED_PHRASE_PATTERN.search(block.get_text(" "))
    return clean(match.group(1)) if match else None


def first_link_owner(block: Tag) -> Optional[str]:
    anchor = block.find("a")
    if anchor is None:
        return None
    href = anchor.get("href") or ""
    if isinstance(href, list):
        href = href[0] if href else ""
    match = PROFILE_URL_PATTERN.search(href)
    if match and match.group(1) not in NON_PROFILE_SEGMENTS:
        return match.group(1)
    return text_of(anchor) or None


OWNER_STRATEGIES = (media_owner_cell, heading_text, liked_phrase, first_link_owner)


class LikesExtractor:
    """Counts liked posts and tallies their owners."""

    name = "likes"

    def default(self) -> CreatorStats:
        return CreatorStats()

    def stats_from_html(self, html: str, identity: Identity) -> CreatorStats:
        blocks = content_blocks(parse_html(html))
        tally: Counter[str] = Counter()
        for block in blocks:
            owner = first_success(OWNER_STRATEGIES, block)
            if owner and not identity.is_self(owner):
                tally[owner] += 1

        leaders = top_entries(tally, limit=1)
        if not leaders:
            return CreatorStats(total=len(blocks))
        return CreatorStats(
            total=len(blocks),
            top_creator=as_handle(leaders[0].name),
            top_creator_count=leaders[0].count,
        )

    async def extract(self, archive: Archive, identity: Identity) -> CreatorStats:
        html = await archive.read_text(paths.LIKED_POSTS)
        if html is None:
            logger.debug("source_missing", extractor=self.name, path=paths.LIKED_POSTS)
            return self.default()
        stats = self.stats_from_html(html, identity)
        logger.debug("likes_extracted", total=stats.total, top_creator=stats.top_creator)
        return stats
