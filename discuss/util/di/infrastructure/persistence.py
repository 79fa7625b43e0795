"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

import logfire
from dishka import Scope, provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from discuss.config import Settings
from discuss.domain.repository import (
    ClosurePathRepository,
    CommentRepository,
    ProfileRepository,
    TransactionManager,
)
from discuss.persistence.database import (
    PostgresTransactionManager,
    create_engine,
    create_session_factory,
)
from discuss.persistence.repository import (
    PostgresClosurePathRepository,
    PostgresCommentRepository,
    PostgresProfileRepository,
)
from discuss.util.di.base import ProviderBase
from discuss.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL.

    Repositories hold no session of their own; every call runs in the
    transaction handle passed to it, so they live for the whole app.
    """

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide database engine, disposed when the container closes."""
        engine = create_engine(settings)
        # Instrument SQLAlchemy for observability
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()
        logfire.info("Database engine disposed")

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.APP)
    def get_transaction_manager(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> TransactionManager:
        """Provide transaction manager."""
        return PostgresTransactionManager(session_factory)

    @provide(scope=Scope.APP)
    def get_comment_repository(self) -> CommentRepository:
        """Provide Comment repository."""
        return PostgresCommentRepository()

    @provide(scope=Scope.APP)
    def get_closure_path_repository(self) -> ClosurePathRepository:
        """Provide ClosurePath repository."""
        return PostgresClosurePathRepository()

    @provide(scope=Scope.APP)
    def get_profile_repository(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> ProfileRepository:
        """Provide Profile repository."""
        return PostgresProfileRepository(session_factory)
