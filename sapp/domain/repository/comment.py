"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from sapp.domain.model.comment import Comment
from sapp.domain.value import CommentId, PostId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_top_level_by_post(self, post_id: PostId) -> List[Comment]:
        """Find the comments of a post that have no parent.

        Args:
            post_id: The post ID

        Returns:
            Top-level comments, newest first
        """
        pass

    @abstractmethod
    async def find_children(self, parent_id: CommentId) -> List[Comment]:
        """Find direct replies to a comment.

        Args:
            parent_id: The parent comment ID

        Returns:
            Direct replies, oldest first
        """
        pass

    @abstractmethod
    async def count_by_post(self, post_id: PostId) -> int:
        """Count all comments for a post, replies included.

        Args:
            post_id: The post ID

        Returns:
            Number of comments
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update).

        Args:
            comment: The comment to save

        Returns:
            The saved comment
        """
        pass

    @abstractmethod
    async def delete(self, comment_id: CommentId) -> None:
        """Delete a comment (hard delete).

        Replies are removed by the store's ON DELETE CASCADE on parent_id
        where the store enforces it.

        Args:
            comment_id: The comment ID to delete
        """
        pass
