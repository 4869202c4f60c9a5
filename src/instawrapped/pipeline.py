"""
Pipeline orchestration for instawrapped.

One call turns archive bytes into an ExtractionResult: open the archive,
resolve the owner once, run every metric extractor and merge their
fragments. Only an unreadable archive container is an error; anything
missing inside the archive leaves the matching field at its default.
"""

from __future__ import annotations

import asyncio
import time
from datetime import datetime
from typing import Any, Callable, Dict, Optional

import structlog

from .archive import Archive, ArchiveReader
from .config.config import ExtractionSettings
from .extractor.identity import IdentityResolver
from .extractor.models import ExtractionResult, Identity, MessageMetrics
from .extractor.protocols import MetricExtractor
from .extractor.topic_classifier import TopicClassifier
from .metrics import (
    AccountAgeExtractor,
    CommentsExtractor,
    ContentCountExtractor,
    LikesExtractor,
    MessagesExtractor,
    TopicsExtractor,
)

logger = structlog.get_logger(__name__)


class ExtractionPipeline:
    """
    Runs every metric extractor against one archive.

    Extractors share nothing but the read-only Identity and the archive
    handle, so they run concurrently.
    """

    def __init__(
        self,
        settings: Optional[ExtractionSettings] = None,
        clock: Optional[Callable[[], datetime]] = None,
        classifier: Optional[TopicClassifier] = None,
    ) -> None:
        self.settings = settings or ExtractionSettings()
        self.identity_resolver = IdentityResolver()
        self.extractors: Dict[str, MetricExtractor] = {
            "account_age": AccountAgeExtractor(clock=clock),
            "topics": TopicsExtractor(
                classifier=classifier,
                min_length=self.settings.topic_min_length,
                max_length=self.settings.topic_max_length,
            ),
            "content_created": ContentCountExtractor(),
            "likes": LikesExtractor(),
            "comments": CommentsExtractor(max_tied_creators=self.settings.max_tied_creators),
            "messages": MessagesExtractor(
                ranking_size=self.settings.ranking_size,
                response_window_seconds=self.settings.response_window_seconds,
                min_timestamp_year=self.settings.min_timestamp_year,
            ),
        }
        self.logger = logger.bind(component="ExtractionPipeline")

    async def _run_extractor(self, key: str, extractor: MetricExtractor, archive: Archive, identity: Identity) -> Any:
        start = time.perf_counter()
        try:
            value = await extractor.extract(archive, identity)
        except Exception as e:
            # A failing extractor leaves only its own field at the default.
            self.logger.warning("extractor_failed", extractor=key, error=str(e), exc_info=True)
            return extractor.default()
        self.logger.debug("extractor_finished", extractor=key, elapsed=round(time.perf_counter() - start, 4))
        return value

    async def extract_archive(self, archive: Archive) -> ExtractionResult:
        identity = await self.identity_resolver.resolve(archive)

        keys = list(self.extractors)
        values = await asyncio.gather(
            *(self._run_extractor(key, self.extractors[key], archive, identity) for key in keys)
        )
        fragments = dict(zip(keys, values))

        messages: MessageMetrics = fragments["messages"]
        return ExtractionResult(
            account_age=fragments["account_age"],
            top_chat_partners=messages.top_chat_partners,
            top_shared_to=messages.top_shared_to,
            top_received_from=messages.top_received_from,
            likes=fragments["likes"],
            comments=fragments["comments"],
            content_created=fragments["content_created"],
            topics=fragments["topics"],
            avg_response_time=messages.avg_response_time,
        )

    async def extract(self, archive_bytes: bytes) -> ExtractionResult:
        """Extract every metric from archive bytes.

        Raises:
            ArchiveError: The bytes are not a readable archive container
        """
        start = time.perf_counter()
        with ArchiveReader.open(archive_bytes) as archive:
            self.logger.info("extraction_started", entries=len(archive.names))
            result = await self.extract_archive(archive)
        self.logger.info("extraction_finished", elapsed=round(time.perf_counter() - start, 4))
        return result


async def extract(
    archive_bytes: bytes,
    settings: Optional[ExtractionSettings] = None,
    clock: Optional[Callable[[], datetime]] = None,
) -> ExtractionResult:
    """Extract an ExtractionResult from archive bytes."""
    return await ExtractionPipeline(settings=settings, clock=clock).extract(archive_bytes)


def extract_sync(
    archive_bytes: bytes,
    settings: Optional[ExtractionSettings] = None,
    clock: Optional[Callable[[], datetime]] = None,
) -> ExtractionResult:
    """Blocking wrapper around extract() for callers without an event loop."""
    return asyncio.run(extract(archive_bytes, settings=settings, clock=clock))
