"""Domain services."""

from .base import Service
from .comment_service import CommentNode, CommentService
from .learning_path_service import (
    LearningPathContentSummary,
    LearningPathService,
    LearningPathSummary,
)

__all__ = [
    "CommentNode",
    "CommentService",
    "LearningPathContentSummary",
    "LearningPathService",
    "LearningPathSummary",
    "Service",
]
