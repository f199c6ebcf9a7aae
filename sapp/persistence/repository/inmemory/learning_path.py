"""In-memory learning path repositories for testing."""

from typing import Optional

from sapp.domain.model.learning_path import LearningPath, LearningPathContent
from sapp.domain.repository.learning_path import (
    LearningPathContentRepository,
    LearningPathRepository,
)
from sapp.domain.value import LearningPathContentId, LearningPathId, UserId


class InMemoryLearningPathRepository(LearningPathRepository):
    """In-memory implementation of LearningPathRepository for testing."""

    def __init__(self) -> None:
        self._paths: dict[LearningPathId, LearningPath] = {}

    async def find_by_id(self, path_id: LearningPathId) -> Optional[LearningPath]:
        """Find a learning path by ID."""
        return self._paths.get(path_id)

    async def find_by_owner(self, owner_id: UserId) -> list[LearningPath]:
        """Find every learning path owned by a user."""
        return [p for p in self._paths.values() if p.owner_id == owner_id]

    async def exists(self, path_id: LearningPathId) -> bool:
        """Check whether a learning path exists."""
        return path_id in self._paths

    async def save(self, path: LearningPath) -> LearningPath:
        """Save or update a learning path."""
        self._paths[path.id] = path
        return path

    async def delete(self, path_id: LearningPathId) -> None:
        """Delete a learning path."""
        self._paths.pop(path_id, None)


class InMemoryLearningPathContentRepository(LearningPathContentRepository):
    """In-memory implementation of LearningPathContentRepository for testing."""

    def __init__(self) -> None:
        self._contents: dict[LearningPathContentId, LearningPathContent] = {}

    async def find_by_id(
        self, content_id: LearningPathContentId
    ) -> Optional[LearningPathContent]:
        """Find a content item by ID."""
        return self._contents.get(content_id)

    async def find_by_learning_path(
        self, path_id: LearningPathId
    ) -> list[LearningPathContent]:
        """Find the content items of a path ordered by ordinal."""
        contents = [
            c for c in self._contents.values() if c.learning_path_id == path_id
        ]
        contents.sort(key=lambda c: c.ordinal)
        return contents

    async def count_by_learning_path(self, path_id: LearningPathId) -> int:
        """Count content items of a path."""
        return sum(
            1 for c in self._contents.values() if c.learning_path_id == path_id
        )

    async def count_completed_by_learning_path(self, path_id: LearningPathId) -> int:
        """Count completed content items of a path."""
        return sum(
            1
            for c in self._contents.values()
            if c.learning_path_id == path_id and c.is_completed
        )

    async def save(self, content: LearningPathContent) -> LearningPathContent:
        """Save or update a content item."""
        self._contents[content.id] = content
        return content

    async def save_all(
        self, contents: list[LearningPathContent]
    ) -> list[LearningPathContent]:
        """Save or update several content items."""
        for content in contents:
            self._contents[content.id] = content
        return list(contents)

    async def delete(self, content_id: LearningPathContentId) -> None:
        """Delete a content item."""
        self._contents.pop(content_id, None)

    async def delete_by_learning_path(self, path_id: LearningPathId) -> int:
        """Delete every content item of a path."""
        doomed = [
            cid for cid, c in self._contents.items() if c.learning_path_id == path_id
        ]
        for cid in doomed:
            del self._contents[cid]
        return len(doomed)
