"""
Unit tests for comments extraction.
"""

from __future__ import annotations

from collections import Counter

import pytest
from instawrapped.extractor.models import CreatorStats
from instawrapped.metrics.comments import CommentsExtractor
from tests.helpers.export_pages import BLOCK_OPEN, comments_page, page, table_row

COMMENTS = "your_instagram_activity/comments/"


@pytest.fixture
def extractor() -> CommentsExtractor:
    return CommentsExtractor()


class TestTally:
    def test_counts_non_owner_comments(self, extractor, owner):
        tally: Counter = Counter()
        added = extractor.tally_html(comments_page(["alice", "testuser", "bob", "alice"]), owner, tally)
        assert added == 3
        assert tally == Counter({"alice": 2, "bob": 1})

    def test_table_row_layout(self, extractor, owner):
        html = page(f"{BLOCK_OPEN}<table>{table_row('Media Owner', 'carol')}</table></div>")
        tally: Counter = Counter()
        assert extractor.tally_html(html, owner, tally) == 1
        assert tally == Counter({"carol": 1})

    def test_blocks_without_owner_are_skipped(self, extractor, owner):
        html = page(f"{BLOCK_OPEN}<table>{table_row('Comment', 'hello')}</table></div>")
        tally: Counter = Counter()
        assert extractor.tally_html(html, owner, tally) == 0


class TestStats:
    def test_single_leader(self, extractor):
        stats = extractor.stats_from_tally(Counter({"alice": 3, "bob": 1}), 4)
        assert stats == CreatorStats(total=4, top_creator="@alice", top_creator_count=3)

    def test_two_way_tie(self, extractor):
        stats = extractor.stats_from_tally(Counter({"alice": 2, "bob": 2, "carol": 1}), 5)
        assert stats.top_creator == "@alice & @bob"
        assert stats.top_creator_count == 2

    def test_three_way_tie(self, extractor):
        stats = extractor.stats_from_tally(Counter({"alice": 1, "bob": 1, "carol": 1}), 3)
        assert stats.top_creator == "@alice, @bob & @carol"

    def test_tie_cap(self):
        stats = CommentsExtractor(max_tied_creators=2).stats_from_tally(Counter({"a": 1, "b": 1, "c": 1, "d": 1}), 4)
        assert stats.top_creator == "@a & @b"

    def test_no_comments(self, extractor):
        assert extractor.stats_from_tally(Counter(), 0) == CreatorStats()


class TestExtract:
    def test_comment_files_order(self, extractor, open_archive):
        archive = open_archive(
            {
                COMMENTS + "reels_comments.html": "",
                COMMENTS + "post_comments_10.html": "",
                COMMENTS + "post_comments_2.html": "",
            }
        )
        assert extractor.comment_files(archive) == [
            COMMENTS + "post_comments_2.html",
            COMMENTS + "post_comments_10.html",
            COMMENTS + "reels_comments.html",
        ]

    @pytest.mark.asyncio
    async def test_posts_and_reels_are_combined(self, extractor, open_archive, owner):
        archive = open_archive(
            {
                COMMENTS + "post_comments_1.html": comments_page(["alice", "bob"]),
                COMMENTS + "reels_comments.html": comments_page(["bob", "alice", "testuser"]),
            }
        )
        stats = await extractor.extract(archive, owner)
        assert stats == CreatorStats(total=4, top_creator="@alice & @bob", top_creator_count=2)

    @pytest.mark.asyncio
    async def test_reels_only(self, extractor, open_archive, owner):
        archive = open_archive({COMMENTS + "reels_comments.html": comments_page(["carol"])})
        assert (await extractor.extract(archive, owner)).top_creator == "@carol"

    @pytest.mark.asyncio
    async def test_missing_pages(self, extractor, open_archive, owner):
        assert await extractor.extract(open_archive({}), owner) == CreatorStats()
