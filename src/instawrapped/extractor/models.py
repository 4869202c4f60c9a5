"""
Data models for extraction results.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from ..utils.text import normalize_handle


@dataclass(slots=True, frozen=True)
class AccountAge:
    """Time since signup, in whole calendar months."""

    years: int
    months: int

    def __post_init__(self) -> None:
        if self.years < 0:
            raise ValueError("years must be non-negative")
        if not (0 <= self.months <= 11):
            raise ValueError("months must be between 0 and 11")


@dataclass(slots=True, frozen=True)
class ResponseTime:
    hours: int
    minutes: int

    def __post_init__(self) -> None:
        if self.hours < 0:
            raise ValueError("hours must be non-negative")
        if not (0 <= self.minutes <= 59):
            raise ValueError("minutes must be between 0 and 59")


@dataclass(slots=True, frozen=True)
class RankedEntry:
    """One row of a top-N ranking."""

    name: str
    count: int

    def __post_init__(self) -> None:
        if self.count <= 0:
            raise ValueError("count must be positive")


@dataclass(slots=True, frozen=True)
class CreatorStats:
    """Interaction totals with the most frequent other party."""

    total: int = 0
    top_creator: Optional[str] = None
    top_creator_count: int = 0


@dataclass(slots=True, frozen=True)
class ContentCounts:
    posts: int = 0
    reels: int = 0
    stories: int = 0


@dataclass(slots=True, frozen=True)
class Topic:
    name: str
    emoji: str


@dataclass(slots=True, frozen=True)
class MessageMetrics:
    """Everything derived from the message inbox."""

    top_chat_partners: tuple[RankedEntry, ...] = ()
    top_shared_to: tuple[RankedEntry, ...] = ()
    top_received_from: tuple[RankedEntry, ...] = ()
    avg_response_time: Optional[ResponseTime] = None


@dataclass(slots=True, frozen=True)
class Identity:
    """
    The account owner as named on the personal information page.

    ``is_self`` is a conservative string heuristic, not a proven identity
    match: a contact whose display name equals the owner's username is
    treated as the owner.
    """

    username: Optional[str] = None
    name: Optional[str] = None

    @property
    def resolved(self) -> bool:
        return bool(self.username or self.name)

    def is_self(self, candidate: Optional[str]) -> bool:
        """Return True when candidate names the account owner."""
        if not candidate or not self.resolved:
            return False
        normalized = normalize_handle(candidate)
        if not normalized:
            return False
        known = {normalize_handle(value) for value in (self.username, self.name) if value}
        known.discard("")
        return normalized in known


@dataclass(slots=True, frozen=True)
class Message:
    sender: str
    timestamp: Optional[datetime]
    is_share: bool
    countable: bool


@dataclass(slots=True, frozen=True)
class Chat:
    """One inbox conversation, rebuilt from its message files."""

    folder_key: str
    participants: tuple[str, ...]  # distinct senders, first-seen order
    messages: tuple[Message, ...]

    @property
    def is_group(self) -> bool:
        return len(self.participants) > 2


def _ranking_to_list(entries: tuple[RankedEntry, ...]) -> list[dict[str, Any]]:
    return [{"name": entry.name, "count": entry.count} for entry in entries]


def _creator_stats_to_dict(stats: CreatorStats) -> dict[str, Any]:
    return {
        "total": stats.total,
        "topCreator": stats.top_creator,
        "topCreatorCount": stats.top_creator_count,
    }


@dataclass(slots=True, frozen=True)
class ExtractionResult:
    """Every fact extracted from one export archive."""

    account_age: Optional[AccountAge] = None
    top_chat_partners: tuple[RankedEntry, ...] = ()
    top_shared_to: tuple[RankedEntry, ...] = ()
    top_received_from: tuple[RankedEntry, ...] = ()
    likes: CreatorStats = field(default_factory=CreatorStats)
    comments: CreatorStats = field(default_factory=CreatorStats)
    content_created: ContentCounts = field(default_factory=ContentCounts)
    topics: tuple[Topic, ...] = ()
    avg_response_time: Optional[ResponseTime] = None

    @classmethod
    def empty(cls) -> "ExtractionResult":
        return cls()

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the camelCase keys the slideshow renderer reads."""
        return {
            "accountAge": (
                {"years": self.account_age.years, "months": self.account_age.months}
                if self.account_age
                else None
            ),
            "topChatPartners": _ranking_to_list(self.top_chat_partners),
            "likes": _creator_stats_to_dict(self.likes),
            "comments": _creator_stats_to_dict(self.comments),
            "avgResponseTime": (
                {"hours": self.avg_response_time.hours, "minutes": self.avg_response_time.minutes}
                if self.avg_response_time
                else None
            ),
            "topSharedTo": _ranking_to_list(self.top_shared_to),
            "topReceivedFrom": _ranking_to_list(self.top_received_from),
            "contentCreated": {
                "posts": self.content_created.posts,
                "reels": self.content_created.reels,
                "stories": self.content_created.stories,
            },
            "topics": [{"name": topic.name, "emoji": topic.emoji} for topic in self.topics],
        }
