"""
Metric extractors, one per fact family.

- AccountAgeExtractor: years and months since signup
- TopicsExtractor: recommended topics with emoji
- ContentCountExtractor: posts, reels and stories created
- LikesExtractor: likes given and most liked creator
- CommentsExtractor: comments left and most commented creators
- MessagesExtractor: chat partners, shares and response time
"""

from .account_age import AccountAgeExtractor, calendar_age
from .comments import CommentsExtractor
from .content import ContentCountExtractor, count_blocks
from .likes import LikesExtractor
from .messages import MessagesExtractor, TimestampParser
from .ranking import join_tied_names, top_entries
from .topics import TopicsExtractor

__all__ = [
    "AccountAgeExtractor",
    "CommentsExtractor",
    "ContentCountExtractor",
    "LikesExtractor",
    "MessagesExtractor",
    "TimestampParser",
    "TopicsExtractor",
    "calendar_age",
    "count_blocks",
    "join_tied_names",
    "top_entries",
]
