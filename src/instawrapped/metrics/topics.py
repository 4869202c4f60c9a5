"""
Recommended topics with an emoji per topic.
"""

from __future__ import annotations

import re
from typing import Iterable, Iterator, Optional

import structlog
from bs4 import BeautifulSoup

from ..archive import Archive, paths
from ..extractor.markup import parse_html, text_of
from ..extractor.models import Identity, Topic
from ..extractor.topic_classifier import TopicClassifier
from ..extractor.strategies import compile_patterns
from ..utils.text import strip_tags

logger = structlog.get_logger(__name__)

TOPIC_LABEL = "Name"
LEADING_LABEL_PATTERN = re.compile(r"^name\b\s*:?\s*", re.IGNORECASE)

TOPIC_PATTERNS = compile_patterns(
    [
        r"Name</td>\s*<td[^>]*><div><div>([^<]+)</div>",
        r"<td[^>]*>Name</td>\s*<td[^>]*>([^<]+)</td>",
        r"Name\s*<div><div>([^<]+)</div></div>",
    ]
)

# Fragments that mean the parser spilled markup or links into a value
SPILLOVER_MARKERS = ("http", "class=", "<")


class TopicsExtractor:
    """Collects recommended topics in page order."""

    name = "topics"

    def __init__(
        self,
        classifier: Optional[TopicClassifier] = None,
        min_length: int = 3,
        max_length: int = 99,
    ) -> None:
        self.classifier = classifier or TopicClassifier()
        self.min_length = min_length
        self.max_length = max_length

    def default(self) -> tuple[Topic, ...]:
        return ()

    def is_topic(self, candidate: str) -> bool:
        if not candidate or candidate == TOPIC_LABEL:
            return False
        if not (self.min_length <= len(candidate) <= self.max_length):
            return False
        return not any(marker in candidate for marker in SPILLOVER_MARKERS)

    def _from_cells(self, soup: BeautifulSoup) -> Iterator[str]:
        for cell in soup.find_all("td"):
            nested = cell.select_one("div > div")
            if nested is not None:
                yield text_of(nested)
            else:
                yield LEADING_LABEL_PATTERN.sub("", text_of(cell)).strip()

    def _from_markup(self, html: str) -> Iterator[str]:
        for pattern in TOPIC_PATTERNS:
            matches = [strip_tags(match.group(1)) for match in pattern.finditer(html)]
            if any(matches):
                yield from matches
                return

    def _collect(self, candidates: Iterable[str]) -> list[str]:
        seen: dict[str, None] = {}
        for candidate in candidates:
            if self.is_topic(candidate) and candidate not in seen:
                seen[candidate] = None
        return list(seen)

    def topics_from_html(self, html: str) -> tuple[Topic, ...]:
        names = self._collect(self._from_cells(parse_html(html)))
        if not names:
            names = self._collect(self._from_markup(html))
        return tuple(Topic(name=name, emoji=self.classifier.classify(name)) for name in names)

    async def extract(self, archive: Archive, identity: Identity) -> tuple[Topic, ...]:
        html = await archive.read_text(paths.RECOMMENDED_TOPICS)
        if html is None:
            logger.debug("source_missing", extractor=self.name, path=paths.RECOMMENDED_TOPICS)
            return self.default()
        topics = self.topics_from_html(html)
        logger.debug("topics_extracted", count=len(topics))
        return topics
