"""In-memory comment repository for testing."""

from typing import Optional

from sapp.domain.model.comment import Comment
from sapp.domain.repository.comment import CommentRepository
from sapp.domain.value import CommentId, PostId


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing.

    There is no foreign key enforcement: deleting a comment leaves its
    replies in place.
    """

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def find_top_level_by_post(self, post_id: PostId) -> list[Comment]:
        """Find top-level comments of a post, newest first."""
        comments = [
            c
            for c in self._comments.values()
            if c.post_id == post_id and c.parent_id is None
        ]
        comments.sort(key=lambda c: c.created_at, reverse=True)
        return comments

    async def find_children(self, parent_id: CommentId) -> list[Comment]:
        """Find direct replies to a comment, oldest first."""
        comments = [c for c in self._comments.values() if c.parent_id == parent_id]
        comments.sort(key=lambda c: c.created_at)
        return comments

    async def count_by_post(self, post_id: PostId) -> int:
        """Count all comments of a post, replies included."""
        return sum(1 for c in self._comments.values() if c.post_id == post_id)

    async def save(self, comment: Comment) -> Comment:
        """Save or update a comment."""
        self._comments[comment.id] = comment
        return comment

    async def delete(self, comment_id: CommentId) -> None:
        """Delete a comment."""
        self._comments.pop(comment_id, None)
