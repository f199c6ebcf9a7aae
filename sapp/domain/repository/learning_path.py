"""Learning path repository interfaces."""

from abc import ABC, abstractmethod
from typing import List, Optional

from sapp.domain.model.learning_path import LearningPath, LearningPathContent
from sapp.domain.value import LearningPathContentId, LearningPathId, UserId


class LearningPathRepository(ABC):
    """Repository for the LearningPath aggregate root."""

    @abstractmethod
    async def find_by_id(self, path_id: LearningPathId) -> Optional[LearningPath]:
        """Find a learning path by ID.

        Args:
            path_id: The learning path ID

        Returns:
            The learning path if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_owner(self, owner_id: UserId) -> List[LearningPath]:
        """Find every learning path owned by a user.

        Args:
            owner_id: The owner's user ID

        Returns:
            List of learning paths (unpaginated)
        """
        pass

    @abstractmethod
    async def exists(self, path_id: LearningPathId) -> bool:
        """Check whether a learning path exists.

        Args:
            path_id: The learning path ID

        Returns:
            True if the path exists
        """
        pass

    @abstractmethod
    async def save(self, path: LearningPath) -> LearningPath:
        """Save a learning path (create or update).

        Args:
            path: The learning path to save

        Returns:
            The saved learning path
        """
        pass

    @abstractmethod
    async def delete(self, path_id: LearningPathId) -> None:
        """Delete a learning path row.

        Its content rows must already be gone: the content foreign key has
        no cascade.

        Args:
            path_id: The learning path ID
        """
        pass


class LearningPathContentRepository(ABC):
    """Repository for content items of learning paths."""

    @abstractmethod
    async def find_by_id(
        self, content_id: LearningPathContentId
    ) -> Optional[LearningPathContent]:
        """Find a content item by ID.

        Args:
            content_id: The content ID

        Returns:
            The content item if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_learning_path(
        self, path_id: LearningPathId
    ) -> List[LearningPathContent]:
        """Find the content items of a path ordered by ordinal ascending.

        Args:
            path_id: The learning path ID

        Returns:
            Content items in ordinal order
        """
        pass

    @abstractmethod
    async def count_by_learning_path(self, path_id: LearningPathId) -> int:
        """Count content items of a path.

        Args:
            path_id: The learning path ID

        Returns:
            Number of content items
        """
        pass

    @abstractmethod
    async def count_completed_by_learning_path(self, path_id: LearningPathId) -> int:
        """Count completed content items of a path.

        Args:
            path_id: The learning path ID

        Returns:
            Number of content items with the completion flag set
        """
        pass

    @abstractmethod
    async def save(self, content: LearningPathContent) -> LearningPathContent:
        """Save a content item (create or update).

        Args:
            content: The content item to save

        Returns:
            The saved content item
        """
        pass

    @abstractmethod
    async def save_all(
        self, contents: List[LearningPathContent]
    ) -> List[LearningPathContent]:
        """Save several content items together.

        Args:
            contents: The content items to save

        Returns:
            The saved content items, in input order
        """
        pass

    @abstractmethod
    async def delete(self, content_id: LearningPathContentId) -> None:
        """Delete a single content item.

        Args:
            content_id: The content ID
        """
        pass

    @abstractmethod
    async def delete_by_learning_path(self, path_id: LearningPathId) -> int:
        """Bulk-delete every content item of a path in one statement.

        Args:
            path_id: The learning path ID

        Returns:
            Number of rows deleted
        """
        pass
