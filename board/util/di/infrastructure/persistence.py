"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from board.config import Settings
from board.domain.repository import (
    CommentedThreadRepository,
    CommentRepository,
    LikeRepository,
    ThreadRepository,
    TransactionManager,
)
from board.domain.service import ProfileDirectory
from board.persistence.database import create_engine, create_session_factory
from board.persistence.repository import (
    PostgresCommentedThreadRepository,
    PostgresCommentRepository,
    PostgresLikeRepository,
    PostgresProfileDirectory,
    PostgresThreadRepository,
)
from board.persistence.transaction import PostgresTransactionManager
from board.util.di.base import ProviderBase
from board.util.observability import instrument_sqlalchemy


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
        # Instrument SQLAlchemy for observability
        instrument_sqlalchemy(engine)
        return engine

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.APP)
    def get_transaction_manager(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        settings: Settings,
    ) -> TransactionManager:
        """Provide the retrying transaction manager.

        Each unit of work opens its own session, separate from the request
        session used for plain reads.
        """
        return PostgresTransactionManager(
            session_factory=session_factory,
            max_attempts=settings.comments.max_transaction_attempts,
            backoff_seconds=settings.comments.retry_backoff_seconds,
        )

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        The session is automatically committed at the end of the request
        if no exception occurred, or rolled back if an exception was raised.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_comment_repository(self, session: AsyncSession) -> CommentRepository:
        """Provide Comment repository."""
        return PostgresCommentRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_thread_repository(self, session: AsyncSession) -> ThreadRepository:
        """Provide Thread repository."""
        return PostgresThreadRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_like_repository(self, session: AsyncSession) -> LikeRepository:
        """Provide Like repository."""
        return PostgresLikeRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_commented_thread_repository(
        self, session: AsyncSession
    ) -> CommentedThreadRepository:
        """Provide CommentedThread repository."""
        return PostgresCommentedThreadRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_profile_directory(self, session: AsyncSession) -> ProfileDirectory:
        """Provide the profile directory."""
        return PostgresProfileDirectory(session)
