"""Domain layer DI providers."""

from dishka import Scope, provide

from sapp.domain.repository import (
    CommentRepository,
    LearningPathContentRepository,
    LearningPathRepository,
    PostRepository,
    UserRepository,
)
from sapp.domain.service import CommentService, LearningPathService
from sapp.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each unit of work gets fresh service instances sharing one transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        user_repository: UserRepository,
        post_repository: PostRepository,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            user_repository=user_repository,
            post_repository=post_repository,
        )

    @provide
    def get_learning_path_service(
        self,
        learning_path_repository: LearningPathRepository,
        content_repository: LearningPathContentRepository,
        user_repository: UserRepository,
    ) -> LearningPathService:
        """Provide learning path domain service."""
        return LearningPathService(
            learning_path_repository=learning_path_repository,
            content_repository=content_repository,
            user_repository=user_repository,
        )
