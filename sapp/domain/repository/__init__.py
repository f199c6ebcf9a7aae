"""Repository interfaces for the domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from sapp.domain.repository.comment import CommentRepository
from sapp.domain.repository.learning_path import (
    LearningPathContentRepository,
    LearningPathRepository,
)
from sapp.domain.repository.post import PostRepository
from sapp.domain.repository.user import UserRepository

__all__ = [
    "UserRepository",
    "PostRepository",
    "CommentRepository",
    "LearningPathRepository",
    "LearningPathContentRepository",
]
