"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from sapp.config import Settings
from sapp.domain.repository import (
    CommentRepository,
    LearningPathContentRepository,
    LearningPathRepository,
    PostRepository,
    UserRepository,
)
from sapp.persistence.database import create_engine, create_session_factory
from sapp.persistence.repository import (
    PostgresCommentRepository,
    PostgresLearningPathContentRepository,
    PostgresLearningPathRepository,
    PostgresPostRepository,
    PostgresUserRepository,
)
from sapp.util.di.base import ProviderBase
from sapp.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_engine(self, settings: Settings) -> AsyncEngine:
        """Provide database engine."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        return engine

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide the transaction for one unit of work.

        Every service call made through the same request container shares
        this session. It is committed when the scope exits cleanly and
        rolled back if an exception was raised, so multi-step operations
        either land completely or not at all.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
                logfire.info("Session committed")
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, session: AsyncSession) -> UserRepository:
        """Provide User repository."""
        return PostgresUserRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_post_repository(self, session: AsyncSession) -> PostRepository:
        """Provide Post repository."""
        return PostgresPostRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_comment_repository(self, session: AsyncSession) -> CommentRepository:
        """Provide Comment repository."""
        return PostgresCommentRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_learning_path_repository(
        self, session: AsyncSession
    ) -> LearningPathRepository:
        """Provide LearningPath repository."""
        return PostgresLearningPathRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_learning_path_content_repository(
        self, session: AsyncSession
    ) -> LearningPathContentRepository:
        """Provide LearningPathContent repository."""
        return PostgresLearningPathContentRepository(session)
