"""PostgreSQL repository implementations."""

from sapp.persistence.repository.comment import PostgresCommentRepository
from sapp.persistence.repository.learning_path import (
    PostgresLearningPathContentRepository,
    PostgresLearningPathRepository,
)
from sapp.persistence.repository.post import PostgresPostRepository
from sapp.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresPostRepository",
    "PostgresCommentRepository",
    "PostgresLearningPathRepository",
    "PostgresLearningPathContentRepository",
]
