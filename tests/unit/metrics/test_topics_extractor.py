"""
Unit tests for recommended topic extraction.
"""

from __future__ import annotations

import pytest
from instawrapped.extractor.models import Topic
from instawrapped.metrics.topics import TopicsExtractor
from tests.helpers.export_pages import page, topics_page

RECOMMENDED_TOPICS = "preferences/your_topics/recommended_topics.html"


@pytest.fixture
def extractor() -> TopicsExtractor:
    return TopicsExtractor()


def test_topics_in_page_order(extractor):
    topics = extractor.topics_from_html(topics_page(["Basketball", "Travel", "Knitting"]))
    assert topics == (
        Topic(name="Basketball", emoji="🏀"),
        Topic(name="Travel", emoji="✈️"),
        Topic(name="Knitting", emoji="🏷️"),
    )


def test_duplicates_keep_first_occurrence(extractor):
    names = [t.name for t in extractor.topics_from_html(topics_page(["Travel", "Music", "Travel"]))]
    assert names == ["Travel", "Music"]


def test_rejects_noise(extractor):
    html = topics_page(["Name", "ab", "x" * 100, "https://example.com", "Cooking"])
    assert [t.name for t in extractor.topics_from_html(html)] == ["Cooking"]


def test_plain_cell_layout(extractor):
    html = page("<table><tr><td>Name: Photography</td></tr><tr><td>Dance</td></tr></table>")
    assert [t.name for t in extractor.topics_from_html(html)] == ["Photography", "Dance"]


def test_length_bounds_are_configurable():
    extractor = TopicsExtractor(min_length=6, max_length=8)
    names = [t.name for t in extractor.topics_from_html(topics_page(["Travel", "Fitness", "Photography", "Art"]))]
    assert names == ["Travel", "Fitness"]


def test_empty_page(extractor):
    assert extractor.topics_from_html(page("")) == ()


@pytest.mark.asyncio
async def test_extract(extractor, open_archive, owner):
    archive = open_archive({RECOMMENDED_TOPICS: topics_page(["Yoga"])})
    assert await extractor.extract(archive, owner) == (Topic(name="Yoga", emoji="🧘"),)


@pytest.mark.asyncio
async def test_missing_page(extractor, open_archive, owner):
    assert await extractor.extract(open_archive({}), owner) == ()
