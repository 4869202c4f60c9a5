"""
Counts of posts, reels and stories the owner created.
"""

from __future__ import annotations

from typing import Optional

import structlog

from ..archive import Archive, paths
from ..extractor.markup import BLOCK_COUNTERS
from ..extractor.models import ContentCounts, Identity
from ..extractor.strategies import first_success

logger = structlog.get_logger(__name__)


def count_blocks(html: str) -> int:
    """Number of content blocks on a page, 0 when none are recognized."""
    return first_success(BLOCK_COUNTERS, html) or 0


class ContentCountExtractor:
    """Counts content blocks across the media pages."""

    name = "content_created"

    def default(self) -> ContentCounts:
        return ContentCounts()

    def _post_files(self, archive: Archive) -> list[str]:
        """Post pages under the first media root that has any."""
        for root in paths.MEDIA_ROOTS:
            post_files = [path for path in archive.list_files(root) if paths.POSTS_FILE_PATTERN.search(path)]
            if post_files:
                return sorted(post_files, key=lambda path: paths.numbered_sort_key(path, paths.POSTS_FILE_PATTERN))
        return []

    async def _count_posts(self, archive: Archive) -> int:
        post_files = self._post_files(archive)
        if not post_files:
            logger.debug("source_missing", extractor=self.name, file="posts_<n>.html")
        total = 0
        for path in post_files:
            html = await archive.read_text(path)
            if html:
                total += count_blocks(html)
        return total

    async def _count_single(self, archive: Archive, filename: str) -> int:
        found: Optional[tuple[str, str]] = await archive.read_first(paths.under_roots(paths.MEDIA_ROOTS, filename))
        if found is None:
            logger.debug("source_missing", extractor=self.name, file=filename)
            return 0
        return count_blocks(found[1])

    async def extract(self, archive: Archive, identity: Identity) -> ContentCounts:
        counts = ContentCounts(
            posts=await self._count_posts(archive),
            reels=await self._count_single(archive, paths.REELS_FILE),
            stories=await self._count_single(archive, paths.STORIES_FILE),
        )
        logger.debug("content_counted", posts=counts.posts, reels=counts.reels, stories=counts.stories)
        return counts
