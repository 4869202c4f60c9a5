"""
Shared test configuration for instawrapped.

Provides the account owner, a fixed clock and in-memory export archives
built from the page builders in ``tests.helpers.export_pages``.
"""

# Standard library imports
from datetime import datetime
from typing import Callable, Dict, Generator, List

# Third-party imports
import pytest

# Local imports
from instawrapped.archive import Archive, ArchiveReader
from instawrapped.extractor.models import Identity
from tests.helpers.export_pages import (
    build_archive,
    comments_page,
    liked_posts_page,
    media_page,
    message_page,
    personal_information_page,
    signup_page,
    topics_page,
)

INBOX = "your_instagram_activity/messages/inbox/"
MEDIA = "your_instagram_activity/media/"
COMMENTS = "your_instagram_activity/comments/"

# ============================================================================
# Pytest Configuration
# ============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests across modules")


# ============================================================================
# Core Fixtures
# ============================================================================


@pytest.fixture
def owner() -> Identity:
    """The account owner used throughout the sample archives."""
    return Identity(username="testuser", name="Test User")


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 3, 1, 12, 0, 0)


@pytest.fixture
def fixed_clock(fixed_now: datetime) -> Callable[[], datetime]:
    return lambda: fixed_now


@pytest.fixture
def open_archive() -> Generator[Callable[[Dict[str, str]], Archive], None, None]:
    """Factory opening an in-memory archive; every archive is closed on teardown."""
    opened: List[Archive] = []

    def _open(files: Dict[str, str]) -> Archive:
        archive = ArchiveReader.open(build_archive(files))
        opened.append(archive)
        return archive

    yield _open

    for archive in opened:
        archive.close()


# ============================================================================
# Sample Export
# ============================================================================


@pytest.fixture
def full_export_files() -> Dict[str, str]:
    """
    A complete export for the owner testuser / Test User.

    Expected facts with the clock at 2024-03-01:
    - account age 8 years 9 months (signup 2015-06-15)
    - posts 3, reels 1, stories 2
    - likes total 4, top @alice (2)
    - comments total 4, top "@alice & @bob" (2)
    - partners bob (3), alice (2); shared to alice (1);
      received from alice (1) and the group "friends" (1)
    - average response 0h 45m
    """
    return {
        "personal_information/personal_information/personal_information.html": personal_information_page(
            "testuser", "Test User"
        ),
        "security_and_login_information/login_and_profile_creation/signup_details.html": signup_page(
            "Jun 15, 2015 10:00 am"
        ),
        "preferences/your_topics/recommended_topics.html": topics_page(["Basketball", "Travel", "Knitting"]),
        MEDIA + "posts_1.html": media_page(2),
        MEDIA + "posts_2.html": media_page(1),
        MEDIA + "reels.html": media_page(1),
        MEDIA + "stories.html": media_page(2),
        "your_instagram_activity/likes/liked_posts.html": liked_posts_page(["alice", "alice", "carol", "testuser"]),
        COMMENTS + "post_comments_1.html": comments_page(["alice", "bob"]),
        COMMENTS + "reels_comments.html": comments_page(["bob", "alice", "testuser"]),
        INBOX
        + "alice_123/message_1.html": message_page(
            [
                ("alice", "hey", "Jan 15, 2024 10:00 am"),
                ("testuser", "hi!", "Jan 15, 2024 10:30 am"),
                ("alice", "look at this", "Jan 15, 2024 11:00 am", "https://www.instagram.com/reel/abc123/"),
                ("testuser", "and this one", "Jan 15, 2024 12:00 pm", "https://www.instagram.com/p/xyz789/"),
                ("alice", "Liked a message", "Jan 15, 2024 12:05 pm"),
            ]
        ),
        INBOX
        + "bob_456/message_1.html": message_page(
            [
                ("bob", "yo", "Feb 1, 2024 9:00 am"),
                ("bob", "you there?", "Feb 1, 2024 9:01 am"),
                ("bob", "ok nvm", "Feb 3, 2024 9:00 am"),
            ]
        ),
        INBOX
        + "friends_789/message_1.html": message_page(
            [
                ("alice", "hello group", "Feb 5, 2024 8:00 pm"),
                ("bob", "sent an attachment.", "Feb 5, 2024 8:05 pm", "https://www.instagram.com/p/grp1/"),
                ("testuser", "haha", "Feb 5, 2024 8:10 pm"),
            ]
        ),
    }


@pytest.fixture
def full_export(full_export_files: Dict[str, str]) -> bytes:
    return build_archive(full_export_files)
