"""In-memory repository implementations for testing."""

from .comment import InMemoryCommentRepository
from .learning_path import (
    InMemoryLearningPathContentRepository,
    InMemoryLearningPathRepository,
)
from .post import InMemoryPostRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryCommentRepository",
    "InMemoryLearningPathContentRepository",
    "InMemoryLearningPathRepository",
    "InMemoryPostRepository",
    "InMemoryUserRepository",
]
