"""Database connection, session and transaction management.

Provides the async engine, the session factory and the PostgreSQL
TransactionManager whose handles the Postgres repositories accept.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from discuss.config import Settings
from discuss.domain.repository import Transaction, TransactionManager


def create_engine(settings: Settings) -> AsyncEngine:
    """Create async database engine.

    Args:
        settings: Application settings with database URL

    Returns:
        Configured async engine
    """
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,  # Log SQL queries in debug mode
        pool_pre_ping=True,  # Verify connections before using
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create async session factory.

    Args:
        engine: Database engine

    Returns:
        Session factory for creating database sessions
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,  # Don't expire objects after commit
        autoflush=False,  # Manual flushing for better control
        autocommit=False,  # Explicit transaction management
    )


class PostgresTransaction(Transaction):
    """Transaction handle wrapping one AsyncSession."""

    def __init__(self, session: AsyncSession, writable: bool) -> None:
        self.session = session
        self.writable = writable


class PostgresTransactionManager(TransactionManager):
    """Hands out sessions from the pool as transaction handles."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    @asynccontextmanager
    async def begin(self) -> AsyncIterator[PostgresTransaction]:
        # session.begin() commits on normal exit and rolls back on any
        # exception, CancelledError included
        async with self.session_factory() as session:
            async with session.begin():
                yield PostgresTransaction(session, writable=True)

    @asynccontextmanager
    async def read(self) -> AsyncIterator[PostgresTransaction]:
        # Closing the session rolls back the implicit read transaction
        async with self.session_factory() as session:
            yield PostgresTransaction(session, writable=False)


def session_of(tx: Transaction, write: bool = False) -> AsyncSession:
    """Get the session behind a transaction handle.

    Args:
        tx: Handle produced by PostgresTransactionManager
        write: Whether the caller is about to write

    Raises:
        TypeError: If the handle came from another TransactionManager
        ValueError: If a write is attempted through a read handle
    """
    if not isinstance(tx, PostgresTransaction):
        raise TypeError(f"Expected PostgresTransaction, got {type(tx).__name__}")
    if write and not tx.writable:
        raise ValueError("Cannot write through a read-only transaction")
    return tx.session
