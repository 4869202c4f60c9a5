"""
Known locations inside an export archive.

The export format is versioned and folders get renamed between versions, so
some content areas are listed with every root that has been observed. Roots
are tried in order.
"""

from __future__ import annotations

import re

PERSONAL_INFORMATION = "personal_information/personal_information/personal_information.html"
SIGNUP_DETAILS = "security_and_login_information/login_and_profile_creation/signup_details.html"
RECOMMENDED_TOPICS = "preferences/your_topics/recommended_topics.html"

MEDIA_ROOTS = (
    "your_instagram_activity/media/",
    "your_instagram_activity/content/",
)
STORIES_FILE = "stories.html"
REELS_FILE = "reels.html"
POSTS_FILE_PATTERN = re.compile(r"(?:^|/)posts_(\d+)\.html$")

LIKED_POSTS = "your_instagram_activity/likes/liked_posts.html"

COMMENTS_ROOT = "your_instagram_activity/comments/"
POST_COMMENTS_FILE_PATTERN = re.compile(r"(?:^|/)post_comments_(\d+)\.html$")
REELS_COMMENTS = COMMENTS_ROOT + "reels_comments.html"

INBOX_ROOTS = (
    "your_instagram_activity/messages/inbox/",
    "messages/inbox/",
)
MESSAGE_FILE_PATTERN = re.compile(r"(?:^|/)message_(\d+)\.html$")


def under_roots(roots: tuple[str, ...], filename: str) -> list[str]:
    """Return filename joined onto every root, in root order."""
    return [root + filename for root in roots]


def numbered_sort_key(path: str, pattern: re.Pattern[str]) -> tuple[int, str]:
    """Sort key putting ``name_2.html`` before ``name_10.html``."""
    match = pattern.search(path)
    return (int(match.group(1)) if match else 0, path)
