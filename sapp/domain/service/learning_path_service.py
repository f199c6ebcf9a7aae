"""Learning path domain service."""

import sys
from dataclasses import dataclass
from datetime import datetime
from uuid import uuid4

import logfire

from sapp.domain.error import NotAuthorizedError, NotFoundError
from sapp.domain.model import LearningPath, LearningPathContent
from sapp.domain.repository import (
    LearningPathContentRepository,
    LearningPathRepository,
    UserRepository,
)
from sapp.domain.value import (
    LearningPathContentDraft,
    LearningPathContentId,
    LearningPathId,
    UserId,
)
from sapp.domain.value.types import UserName

from .base import Service


@dataclass
class LearningPathContentSummary:
    """Flattened view of a content item; the parent path is referenced by ID."""

    id: LearningPathContentId
    learning_path_id: LearningPathId
    title: str
    description: str | None
    url: str | None
    ordinal: int
    is_completed: bool
    updated_at: datetime

    @classmethod
    def from_content(cls, content: LearningPathContent) -> "LearningPathContentSummary":
        return cls(
            id=content.id,
            learning_path_id=content.learning_path_id,
            title=content.title,
            description=content.description,
            url=content.url,
            ordinal=content.ordinal,
            is_completed=content.is_completed,
            updated_at=content.updated_at,
        )


@dataclass
class LearningPathSummary:
    """Learning path enriched with completion counts and ordered contents."""

    id: LearningPathId
    name: str
    tag: int
    owner_id: UserId
    owner_user_name: UserName | None
    total_content_count: int
    completed_count: int
    contents: list[LearningPathContentSummary]


class LearningPathService(Service):
    """Domain service for learning paths and their content items.

    Every operation expects to run inside a single transaction supplied by
    the caller (the request-scoped session). Multi-step writes such as
    path creation or deletion rely on that boundary for atomicity.
    """

    def __init__(
        self,
        learning_path_repository: LearningPathRepository,
        content_repository: LearningPathContentRepository,
        user_repository: UserRepository,
    ) -> None:
        """Initialize learning path service.

        Args:
            learning_path_repository: Learning path repository
            content_repository: Learning path content repository
            user_repository: User repository
        """
        self.learning_path_repository = learning_path_repository
        self.content_repository = content_repository
        self.user_repository = user_repository

    async def get_learning_paths_by_user_id(
        self, user_id: UserId
    ) -> list[LearningPathSummary]:
        """Get every learning path owned by a user.

        Args:
            user_id: Owner user ID

        Returns:
            Enriched summaries of the user's paths
        """
        with logfire.span(
            "learning_path_service.get_learning_paths_by_user_id",
            user_id=str(user_id),
        ):
            paths = await self.learning_path_repository.find_by_owner(user_id)
            summaries = [await self._to_summary(path) for path in paths]
            logfire.info(
                "Learning paths retrieved for user",
                user_id=str(user_id),
                count=len(summaries),
            )
            return summaries

    async def get_learning_path_by_id(
        self, path_id: LearningPathId
    ) -> LearningPathSummary:
        """Get a learning path by ID.

        Args:
            path_id: Learning path ID

        Returns:
            Enriched summary of the path

        Raises:
            NotFoundError: If the path doesn't exist
        """
        with logfire.span(
            "learning_path_service.get_learning_path_by_id", path_id=str(path_id)
        ):
            path = await self._get_path(path_id)
            return await self._to_summary(path)

    async def create_learning_path(
        self,
        user_id: UserId,
        name: str,
        tag: int,
        initial_contents: list[LearningPathContentDraft] | None = None,
    ) -> LearningPathSummary:
        """Create a learning path together with its initial content items.

        The path row is written first so the content rows can reference it.

        Args:
            user_id: Owner user ID
            name: Path name
            tag: Category code
            initial_contents: Content items to create, ordinals kept as given

        Returns:
            Enriched summary of the new path

        Raises:
            NotFoundError: If the user doesn't exist
        """
        with logfire.span(
            "learning_path_service.create_learning_path",
            user_id=str(user_id),
            tag=tag,
            content_count=len(initial_contents or []),
        ):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))

            path = await self.learning_path_repository.save(
                LearningPath(
                    id=LearningPathId(uuid4()),
                    name=name,
                    tag=tag,
                    owner_id=user_id,
                )
            )

            for draft in initial_contents or []:
                await self.content_repository.save(self._new_content(path.id, draft))

            logfire.info(
                "Learning path created",
                path_id=str(path.id),
                user_id=str(user_id),
                content_count=len(initial_contents or []),
            )
            return await self._to_summary(path)

    async def update_learning_path(
        self, path_id: LearningPathId, name: str, tag: int
    ) -> LearningPathSummary:
        """Overwrite the name and tag of a learning path.

        Args:
            path_id: Learning path ID
            name: New name
            tag: New category code

        Returns:
            Enriched summary of the updated path

        Raises:
            NotFoundError: If the path doesn't exist
        """
        with logfire.span(
            "learning_path_service.update_learning_path", path_id=str(path_id), tag=tag
        ):
            path = await self._get_path(path_id)
            updated = await self.learning_path_repository.save(
                path.model_copy(update={"name": name, "tag": tag})
            )
            logfire.info("Learning path updated", path_id=str(path_id))
            return await self._to_summary(updated)

    async def delete_learning_path(
        self, path_id: LearningPathId, requester_user_id: UserId
    ) -> None:
        """Delete a learning path and all of its content items.

        Content rows go first in a single bulk statement because their
        foreign key to the path has no cascade. No loaded path or content
        state is held across the deletes, so nothing stale can be written
        back. Failures are logged and re-raised.

        Args:
            path_id: Learning path ID
            requester_user_id: Authenticated caller

        Raises:
            NotFoundError: If the path doesn't exist
            NotAuthorizedError: If the requester doesn't own the path
        """
        with logfire.span(
            "learning_path_service.delete_learning_path",
            path_id=str(path_id),
            requester_user_id=str(requester_user_id),
        ):
            await self._authorize_path_owner(path_id, requester_user_id)

            try:
                removed = await self.content_repository.delete_by_learning_path(
                    path_id
                )
                await self.learning_path_repository.delete(path_id)
            except Exception as e:
                logfire.error(
                    "Learning path deletion failed",
                    path_id=str(path_id),
                    error=str(e),
                    error_type=type(e).__name__,
                    _exc_info=sys.exc_info(),
                )
                raise

            logfire.info(
                "Learning path deleted", path_id=str(path_id), contents_removed=removed
            )

    async def add_content(
        self, path_id: LearningPathId, draft: LearningPathContentDraft
    ) -> LearningPathContentSummary:
        """Append a content item to a learning path.

        Args:
            path_id: Learning path ID
            draft: Content to add

        Returns:
            Summary of the created content item

        Raises:
            NotFoundError: If the path doesn't exist
        """
        with logfire.span(
            "learning_path_service.add_content",
            path_id=str(path_id),
            ordinal=draft.ordinal,
        ):
            path = await self._get_path(path_id)
            content = await self.content_repository.save(
                self._new_content(path.id, draft)
            )
            logfire.info(
                "Learning path content added",
                path_id=str(path_id),
                content_id=str(content.id),
            )
            return LearningPathContentSummary.from_content(content)

    async def update_content_completion(
        self,
        content_id: LearningPathContentId,
        is_completed: bool,
        requester_user_id: UserId,
    ) -> LearningPathContentSummary:
        """Set the completion flag of a content item.

        Args:
            content_id: Content ID
            is_completed: New completion flag
            requester_user_id: Authenticated caller, must own the parent path

        Returns:
            Summary of the updated content item

        Raises:
            NotFoundError: If the content item doesn't exist
            NotAuthorizedError: If the requester doesn't own the parent path
        """
        with logfire.span(
            "learning_path_service.update_content_completion",
            content_id=str(content_id),
            is_completed=is_completed,
            requester_user_id=str(requester_user_id),
        ):
            content = await self._get_content(content_id)
            if not await self._owns_content(content, requester_user_id):
                raise self._content_not_authorized(content, requester_user_id)

            updated = await self.content_repository.save(
                self._with_completion(content, is_completed)
            )
            logfire.info(
                "Learning path content completion updated",
                content_id=str(content_id),
                is_completed=is_completed,
            )
            return LearningPathContentSummary.from_content(updated)

    async def delete_content(
        self, content_id: LearningPathContentId, requester_user_id: UserId
    ) -> None:
        """Delete a single content item.

        Args:
            content_id: Content ID
            requester_user_id: Authenticated caller, must own the parent path

        Raises:
            NotFoundError: If the content item doesn't exist
            NotAuthorizedError: If the requester doesn't own the parent path
        """
        with logfire.span(
            "learning_path_service.delete_content",
            content_id=str(content_id),
            requester_user_id=str(requester_user_id),
        ):
            content = await self._get_content(content_id)
            if not await self._owns_content(content, requester_user_id):
                raise self._content_not_authorized(content, requester_user_id)

            await self.content_repository.delete(content.id)
            logfire.info("Learning path content deleted", content_id=str(content_id))

    async def calculate_completion_percentage(self, path_id: LearningPathId) -> int:
        """Calculate how much of a learning path is completed.

        Args:
            path_id: Learning path ID

        Returns:
            Percentage in [0, 100], truncated; 0 for a path without content

        Raises:
            NotFoundError: If the path doesn't exist
        """
        with logfire.span(
            "learning_path_service.calculate_completion_percentage",
            path_id=str(path_id),
        ):
            if not await self.learning_path_repository.exists(path_id):
                logfire.warn("Learning path not found", path_id=str(path_id))
                raise NotFoundError("Learning path", str(path_id))

            total = await self.content_repository.count_by_learning_path(path_id)
            if total == 0:
                return 0

            completed = await self.content_repository.count_completed_by_learning_path(
                path_id
            )
            return completed * 100 // total

    async def batch_update_content_completion(
        self,
        content_ids: list[LearningPathContentId],
        is_completed: bool,
        requester_user_id: UserId,
    ) -> list[LearningPathContentSummary]:
        """Set the completion flag of several content items at once.

        Works in three stages: resolve every ID, authorize every item, then
        mutate and save them together. A missing ID or a foreign item
        aborts the batch before anything is written.

        Args:
            content_ids: Content IDs to update
            is_completed: New completion flag
            requester_user_id: Authenticated caller, must own every parent path

        Returns:
            Summaries of the updated items, in input order

        Raises:
            NotFoundError: On the first ID that doesn't exist
            NotAuthorizedError: On the first item the requester doesn't own
        """
        with logfire.span(
            "learning_path_service.batch_update_content_completion",
            content_count=len(content_ids),
            is_completed=is_completed,
            requester_user_id=str(requester_user_id),
        ):
            contents = [await self._get_content(cid) for cid in content_ids]

            owners: dict[LearningPathId, bool] = {}
            for content in contents:
                path_id = content.learning_path_id
                if path_id not in owners:
                    owners[path_id] = await self._owns_content(
                        content, requester_user_id
                    )
                if not owners[path_id]:
                    raise self._content_not_authorized(content, requester_user_id)

            updated = await self.content_repository.save_all(
                [self._with_completion(c, is_completed) for c in contents]
            )
            logfire.info(
                "Learning path content completion batch updated",
                content_count=len(updated),
                is_completed=is_completed,
            )
            return [LearningPathContentSummary.from_content(c) for c in updated]

    async def _get_path(self, path_id: LearningPathId) -> LearningPath:
        path = await self.learning_path_repository.find_by_id(path_id)
        if not path:
            logfire.warn("Learning path not found", path_id=str(path_id))
            raise NotFoundError("Learning path", str(path_id))
        return path

    async def _get_content(
        self, content_id: LearningPathContentId
    ) -> LearningPathContent:
        content = await self.content_repository.find_by_id(content_id)
        if not content:
            logfire.warn("Learning path content not found", content_id=str(content_id))
            raise NotFoundError("Learning path content", str(content_id))
        return content

    async def _authorize_path_owner(
        self, path_id: LearningPathId, requester_user_id: UserId
    ) -> None:
        path = await self._get_path(path_id)
        if not path.is_owned_by(requester_user_id):
            logfire.warn(
                "Learning path ownership check failed",
                path_id=str(path_id),
                owner_id=str(path.owner_id),
                requester_user_id=str(requester_user_id),
            )
            raise NotAuthorizedError(
                "learning path", str(path_id), str(requester_user_id)
            )

    async def _owns_content(
        self, content: LearningPathContent, user_id: UserId
    ) -> bool:
        """Check ownership through the chain content -> path -> owner."""
        path = await self.learning_path_repository.find_by_id(content.learning_path_id)
        return path is not None and path.is_owned_by(user_id)

    @staticmethod
    def _content_not_authorized(
        content: LearningPathContent, user_id: UserId
    ) -> NotAuthorizedError:
        logfire.warn(
            "Learning path content ownership check failed",
            content_id=str(content.id),
            path_id=str(content.learning_path_id),
            requester_user_id=str(user_id),
        )
        return NotAuthorizedError(
            "learning path content", str(content.id), str(user_id)
        )

    @staticmethod
    def _new_content(
        path_id: LearningPathId, draft: LearningPathContentDraft
    ) -> LearningPathContent:
        return LearningPathContent(
            id=LearningPathContentId(uuid4()),
            learning_path_id=path_id,
            title=draft.title,
            description=draft.description,
            url=draft.url,
            ordinal=draft.ordinal,
            is_completed=False,
            updated_at=datetime.now(),
        )

    @staticmethod
    def _with_completion(
        content: LearningPathContent, is_completed: bool
    ) -> LearningPathContent:
        return content.model_copy(
            update={"is_completed": is_completed, "updated_at": datetime.now()}
        )

    async def _to_summary(self, path: LearningPath) -> LearningPathSummary:
        # Counts come from the store, not from the loaded content list
        total = await self.content_repository.count_by_learning_path(path.id)
        completed = await self.content_repository.count_completed_by_learning_path(
            path.id
        )
        contents = await self.content_repository.find_by_learning_path(path.id)
        owner = await self.user_repository.find_by_id(path.owner_id)

        return LearningPathSummary(
            id=path.id,
            name=path.name,
            tag=path.tag,
            owner_id=path.owner_id,
            owner_user_name=owner.user_name if owner else None,
            total_content_count=total,
            completed_count=completed,
            contents=[LearningPathContentSummary.from_content(c) for c in contents],
        )
