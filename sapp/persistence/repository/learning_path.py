"""PostgreSQL implementations of the learning path repositories."""

from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from sapp.domain.model import LearningPath, LearningPathContent
from sapp.domain.repository import (
    LearningPathContentRepository,
    LearningPathRepository,
)
from sapp.domain.value import LearningPathContentId, LearningPathId, UserId
from sapp.persistence.mappers import (
    learning_path_content_to_dict,
    learning_path_to_dict,
    row_to_learning_path,
    row_to_learning_path_content,
)
from sapp.persistence.tables import learning_path_contents_table, learning_paths_table


class PostgresLearningPathRepository(LearningPathRepository):
    """PostgreSQL implementation of LearningPathRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, path_id: LearningPathId) -> Optional[LearningPath]:
        """Find a learning path by ID."""
        stmt = select(learning_paths_table).where(learning_paths_table.c.id == path_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_learning_path(row._asdict()) if row else None

    async def find_by_owner(self, owner_id: UserId) -> List[LearningPath]:
        """Find every learning path owned by a user."""
        stmt = select(learning_paths_table).where(
            learning_paths_table.c.owner_id == owner_id
        )
        result = await self.session.execute(stmt)
        return [row_to_learning_path(row._asdict()) for row in result.fetchall()]

    async def exists(self, path_id: LearningPathId) -> bool:
        """Check whether a learning path exists."""
        stmt = select(
            select(learning_paths_table.c.id)
            .where(learning_paths_table.c.id == path_id)
            .exists()
        )
        result = await self.session.execute(stmt)
        return bool(result.scalar())

    async def save(self, path: LearningPath) -> LearningPath:
        """Save a learning path (create or update)."""
        path_dict = learning_path_to_dict(path)

        if await self.exists(path.id):
            stmt = (
                learning_paths_table.update()
                .where(learning_paths_table.c.id == path.id)
                .values(**path_dict)
            )
        else:
            stmt = learning_paths_table.insert().values(**path_dict)

        await self.session.execute(stmt)
        await self.session.flush()
        return path

    async def delete(self, path_id: LearningPathId) -> None:
        """Delete a learning path row."""
        stmt = learning_paths_table.delete().where(learning_paths_table.c.id == path_id)
        await self.session.execute(stmt)
        await self.session.flush()


class PostgresLearningPathContentRepository(LearningPathContentRepository):
    """PostgreSQL implementation of LearningPathContentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(
        self, content_id: LearningPathContentId
    ) -> Optional[LearningPathContent]:
        """Find a content item by ID."""
        stmt = select(learning_path_contents_table).where(
            learning_path_contents_table.c.id == content_id
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_learning_path_content(row._asdict()) if row else None

    async def find_by_learning_path(
        self, path_id: LearningPathId
    ) -> List[LearningPathContent]:
        """Find the content items of a path ordered by ordinal."""
        stmt = (
            select(learning_path_contents_table)
            .where(learning_path_contents_table.c.learning_path_id == path_id)
            .order_by(learning_path_contents_table.c.ordinal)
        )
        result = await self.session.execute(stmt)
        return [
            row_to_learning_path_content(row._asdict()) for row in result.fetchall()
        ]

    async def count_by_learning_path(self, path_id: LearningPathId) -> int:
        """Count content items of a path."""
        stmt = (
            select(func.count())
            .select_from(learning_path_contents_table)
            .where(learning_path_contents_table.c.learning_path_id == path_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def count_completed_by_learning_path(self, path_id: LearningPathId) -> int:
        """Count completed content items of a path."""
        stmt = (
            select(func.count())
            .select_from(learning_path_contents_table)
            .where(learning_path_contents_table.c.learning_path_id == path_id)
            .where(learning_path_contents_table.c.is_completed.is_(True))
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def save(self, content: LearningPathContent) -> LearningPathContent:
        """Save a content item (create or update)."""
        await self._write(content)
        await self.session.flush()
        return content

    async def save_all(
        self, contents: List[LearningPathContent]
    ) -> List[LearningPathContent]:
        """Save several content items, flushing once at the end."""
        for content in contents:
            await self._write(content)
        await self.session.flush()
        return list(contents)

    async def delete(self, content_id: LearningPathContentId) -> None:
        """Delete a single content item."""
        stmt = learning_path_contents_table.delete().where(
            learning_path_contents_table.c.id == content_id
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def delete_by_learning_path(self, path_id: LearningPathId) -> int:
        """Bulk-delete the content items of a path."""
        stmt = learning_path_contents_table.delete().where(
            learning_path_contents_table.c.learning_path_id == path_id
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount or 0

    async def _write(self, content: LearningPathContent) -> None:
        content_dict = learning_path_content_to_dict(content)
        existing = await self.find_by_id(content.id)

        if existing:
            stmt = (
                learning_path_contents_table.update()
                .where(learning_path_contents_table.c.id == content.id)
                .values(**content_dict)
            )
        else:
            stmt = learning_path_contents_table.insert().values(**content_dict)

        await self.session.execute(stmt)
