"""Domain model entities."""

from sapp.domain.model.comment import Comment
from sapp.domain.model.learning_path import LearningPath, LearningPathContent
from sapp.domain.model.post import Post
from sapp.domain.model.user import User

__all__ = [
    "User",
    "Post",
    "Comment",
    "LearningPath",
    "LearningPathContent",
]
