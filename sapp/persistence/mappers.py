"""Mappers for converting between database rows and domain models.

Since the domain models are immutable Pydantic models, mapping is done by
hand instead of through SQLAlchemy's ORM.
"""

from typing import Any, Dict
from uuid import UUID

from sapp.domain.model import Comment, LearningPath, LearningPathContent, Post, User
from sapp.domain.value import (
    CommentId,
    LearningPathContentId,
    LearningPathId,
    PostId,
    UserId,
    UserName,
)


def _uuid(value: Any) -> UUID:
    """Accept both UUID objects and their string form from drivers."""
    return UUID(value) if isinstance(value, str) else value


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        user_name=UserName(row["user_name"]),
        email=row.get("email"),
        created_at=row["created_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict."""
    return user.model_dump()


def row_to_post(row: Dict[str, Any]) -> Post:
    """Convert database row to Post domain model.

    Args:
        row: Database row as dict

    Returns:
        Post domain model
    """
    return Post(
        id=PostId(_uuid(row["id"])),
        author_id=UserId(_uuid(row["author_id"])),
        content=row["content"],
        created_at=row["created_at"],
    )


def post_to_dict(post: Post) -> Dict[str, Any]:
    """Convert Post domain model to database dict."""
    return post.model_dump()


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    return Comment(
        id=CommentId(_uuid(row["id"])),
        post_id=PostId(_uuid(row["post_id"])),
        author_id=UserId(_uuid(row["author_id"])),
        content=row["content"],
        parent_id=CommentId(_uuid(row["parent_id"])) if row.get("parent_id") else None,
        created_at=row["created_at"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict."""
    return comment.model_dump()


def row_to_learning_path(row: Dict[str, Any]) -> LearningPath:
    """Convert database row to LearningPath domain model.

    Args:
        row: Database row as dict

    Returns:
        LearningPath domain model
    """
    return LearningPath(
        id=LearningPathId(_uuid(row["id"])),
        name=row["name"],
        tag=row["tag"],
        owner_id=UserId(_uuid(row["owner_id"])),
    )


def learning_path_to_dict(path: LearningPath) -> Dict[str, Any]:
    """Convert LearningPath domain model to database dict."""
    return path.model_dump()


def row_to_learning_path_content(row: Dict[str, Any]) -> LearningPathContent:
    """Convert database row to LearningPathContent domain model.

    Args:
        row: Database row as dict

    Returns:
        LearningPathContent domain model
    """
    return LearningPathContent(
        id=LearningPathContentId(_uuid(row["id"])),
        learning_path_id=LearningPathId(_uuid(row["learning_path_id"])),
        title=row["title"],
        description=row.get("description"),
        url=row.get("url"),
        ordinal=row["ordinal"],
        is_completed=row["is_completed"],
        updated_at=row["updated_at"],
    )


def learning_path_content_to_dict(content: LearningPathContent) -> Dict[str, Any]:
    """Convert LearningPathContent domain model to database dict."""
    return content.model_dump()
