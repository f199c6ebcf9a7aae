"""Test configuration and fixtures."""

from datetime import datetime, timedelta
from uuid import uuid4

from logfire.testing import capfire  # noqa: F401  (fixture re-export)

from sapp.domain.model import Post, User
from sapp.domain.value import PostId, UserId, UserName


def make_user(user_name: str = "alice") -> User:
    """Build a user with a fresh ID.

    Args:
        user_name: Public user name

    Returns:
        User domain model (not saved)
    """
    return User(id=UserId(uuid4()), user_name=UserName(user_name))


def make_post(author_id: UserId, content: str = "A post") -> Post:
    """Build a post with a fresh ID."""
    return Post(id=PostId(uuid4()), author_id=author_id, content=content)


def minutes_ago(minutes: int) -> datetime:
    """Timestamp ``minutes`` before now, for ordering fixtures."""
    return datetime.now() - timedelta(minutes=minutes)
