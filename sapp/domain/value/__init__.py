"""Domain value objects."""

from sapp.domain.value.identifiers import (
    CommentId,
    LearningPathContentId,
    LearningPathId,
    PostId,
    UserId,
)
from sapp.domain.value.types import LearningPathContentDraft, UserName

__all__ = [
    # Identifiers
    "UserId",
    "PostId",
    "CommentId",
    "LearningPathId",
    "LearningPathContentId",
    # Types
    "UserName",
    "LearningPathContentDraft",
]
