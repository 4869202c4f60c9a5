"""
Building blocks shared by the metric extractors.

- models: result records and the owner Identity
- markup: BeautifulSoup helpers for export page layouts
- strategies: ordered first-success fallback chains
- identity: account owner resolution
- topic_classifier: interest label to emoji
"""

from .identity import IdentityResolver
from .models import (
    AccountAge,
    Chat,
    ContentCounts,
    CreatorStats,
    ExtractionResult,
    Identity,
    Message,
    MessageMetrics,
    RankedEntry,
    ResponseTime,
    Topic,
)
from .protocols import MetricExtractor
from .strategies import first_success
from .topic_classifier import TopicClassifier, classify

__all__ = [
    "AccountAge",
    "Chat",
    "ContentCounts",
    "CreatorStats",
    "ExtractionResult",
    "Identity",
    "IdentityResolver",
    "Message",
    "MessageMetrics",
    "MetricExtractor",
    "RankedEntry",
    "ResponseTime",
    "Topic",
    "TopicClassifier",
    "classify",
    "first_success",
]
