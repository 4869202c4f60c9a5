"""
Inbox metrics: chat partners, shared content and response time.

Every folder under the inbox is one conversation. Its ``message_<n>.html``
files are read in numeric order, parsed into messages and sorted by time.
Reactions ("liked a message", "reacted to a message") are kept as
participants but excluded from every count.
"""

from __future__ import annotations

import re
from collections import Counter
from datetime import datetime, timezone
from statistics import fmean
from typing import Iterable, Optional

import structlog
from bs4 import Tag
from dateutil import parser as dateutil_parser

from ..archive import Archive, paths
from ..extractor.markup import content_blocks, parse_html, text_of
from ..extractor.models import Chat, Identity, Message, MessageMetrics, ResponseTime
from ..extractor.strategies import compile_patterns, first_success, regex_strategy
from .ranking import top_entries

logger = structlog.get_logger(__name__)

SENDER_PATTERNS = compile_patterns([r"<h2[^>]*>([^<]+)</h2>"])

TIMESTAMP_SELECTORS = (
    "div._3-94._a6-o",
    "div._a6-o",
    'div[class*="_a6-o"]',
    'div[class*="timestamp"]',
    'div[class*="date"]',
)

TIMESTAMP_PATTERNS = compile_patterns(
    [
        r"(\w{3}\s+\d{1,2},\s+\d{4}\s+\d{1,2}:\d{2}:\d{2}\s+[APap][Mm])",
        r"(\w{3}\s+\d{1,2},\s+\d{4}\s+\d{1,2}:\d{2}\s+[APap][Mm])",
        r"(\d{1,2}/\d{1,2}/\d{4}\s+\d{1,2}:\d{2}:\d{2}\s+[APap][Mm])",
        r"(\w{3}\s+\d{1,2},\s+\d{4})",
    ]
)

SHARE_URL_MARKERS = ("instagram.com/reel/", "instagram.com/p/", "instagram.com/stories/")
SHARE_PHRASES = ("sent an attachment", "shared a video", "shared a post")
REACTION_PHRASES = ("reacted to your msg", "liked a message", "reacted to a message")

FOLDER_ID_SUFFIX = re.compile(r"_\d+$")
# Timestamps must spell out a four-digit year
YEAR_PATTERN = re.compile(r"(?<!\d)\d{4}(?!\d)")


def is_countable(text: str) -> bool:
    """False for reaction/like pseudo-messages."""
    lower = text.lower()
    return not any(phrase in lower for phrase in REACTION_PHRASES)


def is_share(markup: str, text: str) -> bool:
    lower = text.lower()
    shared = any(marker in markup for marker in SHARE_URL_MARKERS) or any(phrase in lower for phrase in SHARE_PHRASES)
    return shared and is_countable(text)


def folder_display_name(folder_key: str) -> str:
    """``alice_123456789`` -> ``alice``; keys without an id suffix are kept."""
    return FOLDER_ID_SUFFIX.sub("", folder_key) or folder_key


def message_sender(block: Tag) -> Optional[str]:
    return first_success(
        [
            lambda: text_of(block.find("h2")),
            lambda: regex_strategy(SENDER_PATTERNS)(str(block)),
        ]
    )


def _to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class TimestampParser:
    """Parses message timestamps, rejecting implausible years."""

    def __init__(self, min_year: int = 2000) -> None:
        self.min_year = min_year

    def parse(self, value: str) -> Optional[datetime]:
        if not value or not YEAR_PATTERN.search(value):
            return None
        parsed = dateutil_parser.parse(value)
        if parsed.year <= self.min_year:
            return None
        return _to_naive_utc(parsed)

    def from_selectors(self, block: Tag) -> Optional[datetime]:
        for selector in TIMESTAMP_SELECTORS:
            element = block.select_one(selector)
            if element is None:
                continue
            value = first_success([self.parse], text_of(element))
            if value is not None:
                return value
        return None

    def from_text(self, text: str) -> Optional[datetime]:
        for pattern in TIMESTAMP_PATTERNS:
            match = pattern.search(text)
            if not match:
                continue
            value = first_success([self.parse], match.group(1))
            if value is not None:
                return value
        return None

    def from_block(self, block: Tag, text: str) -> Optional[datetime]:
        return first_success([self.from_selectors, lambda _: self.from_text(text)], block)


def _chronological(messages: Iterable[Message]) -> tuple[Message, ...]:
    # Untimed messages keep their relative order after the timed ones.
    return tuple(sorted(messages, key=lambda m: (m.timestamp is None, m.timestamp or datetime.min)))


class MessagesExtractor:
    """Derives chat partner, share and response-time metrics from the inbox."""

    name = "messages"

    def __init__(
        self,
        ranking_size: int = 3,
        response_window_seconds: float = 86_400,
        min_timestamp_year: int = 2000,
    ) -> None:
        self.ranking_size = ranking_size
        self.response_window_seconds = response_window_seconds
        self.timestamps = TimestampParser(min_year=min_timestamp_year)

    def default(self) -> MessageMetrics:
        return MessageMetrics()

    # --- Parsing ---

    def parse_block(self, block: Tag) -> Optional[Message]:
        sender = message_sender(block)
        if not sender:
            return None
        text = text_of(block)
        return Message(
            sender=sender,
            timestamp=self.timestamps.from_block(block, text),
            is_share=is_share(str(block), text),
            countable=is_countable(text),
        )

    def parse_page(self, html: str) -> list[Message]:
        messages = []
        for block in content_blocks(parse_html(html)):
            message = self.parse_block(block)
            if message is not None:
                messages.append(message)
        return messages

    def build_chat(self, folder_key: str, pages: Iterable[str]) -> Chat:
        """Assemble one conversation from its pages, given in file order."""
        messages: list[Message] = []
        for html in pages:
            messages.extend(self.parse_page(html))
        participants = tuple(dict.fromkeys(m.sender for m in messages))
        return Chat(folder_key=folder_key, participants=participants, messages=_chronological(messages))

    def chat_folders(self, archive: Archive) -> dict[str, list[str]]:
        """Map each chat folder key to its message files in numeric order."""
        root = archive.resolve_root(paths.INBOX_ROOTS)
        if root is None:
            return {}

        folders: dict[str, list[str]] = {}
        for path in archive.list_files(root):
            relative = path[len(root) :]
            folder_key, _, filename = relative.partition("/")
            if folder_key and filename and paths.MESSAGE_FILE_PATTERN.search(filename):
                folders.setdefault(folder_key, []).append(path)

        for files in folders.values():
            files.sort(key=lambda path: paths.numbered_sort_key(path, paths.MESSAGE_FILE_PATTERN))
        return folders

    async def load_chat(self, archive: Archive, folder_key: str, files: list[str]) -> Chat:
        pages = []
        for path in files:
            html = await archive.read_text(path)
            if html:
                pages.append(html)
        return self.build_chat(folder_key, pages)

    # --- Metrics ---

    def chat_name(self, chat: Chat, identity: Identity) -> str:
        if chat.is_group:
            return folder_display_name(chat.folder_key)
        others = [p for p in chat.participants if not identity.is_self(p)]
        return others[0] if others else folder_display_name(chat.folder_key)

    def response_gaps(self, chat: Chat, identity: Identity) -> list[float]:
        """Seconds between someone else's message and the owner's next reply."""
        countable = [m for m in chat.messages if m.countable]
        gaps = []
        for previous, current in zip(countable, countable[1:]):
            if identity.is_self(previous.sender) or not identity.is_self(current.sender):
                continue
            if previous.timestamp is None or current.timestamp is None:
                continue
            gap = (current.timestamp - previous.timestamp).total_seconds()
            if 0 < gap < self.response_window_seconds:
                gaps.append(gap)
        return gaps

    def metrics_from_chats(self, chats: Iterable[Chat], identity: Identity) -> MessageMetrics:
        partners: Counter[str] = Counter()
        shared_to: Counter[str] = Counter()
        received_from: Counter[str] = Counter()
        gaps: list[float] = []

        for chat in chats:
            name = self.chat_name(chat, identity)

            if not chat.is_group:
                received = sum(1 for m in chat.messages if m.countable and not identity.is_self(m.sender))
                if received:
                    partners[name] += received
                gaps.extend(self.response_gaps(chat, identity))

            for message in chat.messages:
                if not (message.is_share and message.countable):
                    continue
                if identity.is_self(message.sender):
                    shared_to[name] += 1
                else:
                    received_from[name if chat.is_group else message.sender] += 1

        avg_response_time = None
        if gaps:
            average = fmean(gaps)
            avg_response_time = ResponseTime(hours=int(average // 3600), minutes=int((average % 3600) // 60))

        return MessageMetrics(
            top_chat_partners=top_entries(partners, self.ranking_size, identity),
            top_shared_to=top_entries(shared_to, self.ranking_size, identity),
            top_received_from=top_entries(received_from, self.ranking_size, identity),
            avg_response_time=avg_response_time,
        )

    async def extract(self, archive: Archive, identity: Identity) -> MessageMetrics:
        folders = self.chat_folders(archive)
        if not folders:
            logger.debug("source_missing", extractor=self.name, roots=list(paths.INBOX_ROOTS))
            return self.default()

        chats = [await self.load_chat(archive, key, files) for key, files in folders.items()]
        logger.debug("chats_loaded", chats=len(chats), groups=sum(1 for c in chats if c.is_group))
        return self.metrics_from_chats(chats, identity)
