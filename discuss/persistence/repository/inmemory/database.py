"""In-memory comment store with transactional semantics for testing.

A write transaction works on copies of the committed tables and swaps them
in on commit; an exception discards the copies. Write transactions are
serialized by a lock, so the store behaves like a single-connection
database.
"""

import asyncio
import itertools
from contextlib import asynccontextmanager
from typing import AsyncIterator

from discuss.domain.model import ClosurePath, Comment
from discuss.domain.repository import Transaction, TransactionManager
from discuss.domain.value import CommentId

PathKey = tuple[CommentId, CommentId]


class InMemoryDatabase:
    """Committed state shared by the in-memory repositories."""

    def __init__(self) -> None:
        self.comments: dict[CommentId, Comment] = {}
        self.paths: dict[PathKey, ClosurePath] = {}
        self.lock = asyncio.Lock()
        # Like a database sequence, IDs are not reused after a rollback
        self._ids = itertools.count(1)

    def next_comment_id(self) -> CommentId:
        return CommentId(next(self._ids))


class InMemoryTransaction(Transaction):
    """Working copy of the tables for one unit of work."""

    def __init__(
        self,
        comments: dict[CommentId, Comment],
        paths: dict[PathKey, ClosurePath],
        writable: bool,
    ) -> None:
        self.comments = comments
        self.paths = paths
        self.writable = writable


class InMemoryTransactionManager(TransactionManager):
    """TransactionManager over an InMemoryDatabase."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database

    @asynccontextmanager
    async def begin(self) -> AsyncIterator[InMemoryTransaction]:
        async with self.database.lock:
            tx = InMemoryTransaction(
                dict(self.database.comments),
                dict(self.database.paths),
                writable=True,
            )
            yield tx
            # Only reached when the block exited without an exception
            self.database.comments = tx.comments
            self.database.paths = tx.paths

    @asynccontextmanager
    async def read(self) -> AsyncIterator[InMemoryTransaction]:
        # Commits replace the dicts instead of mutating them, so holding the
        # current ones gives a stable committed view
        yield InMemoryTransaction(
            self.database.comments, self.database.paths, writable=False
        )


def state_of(tx: Transaction, write: bool = False) -> InMemoryTransaction:
    """Get the working copy behind a transaction handle.

    Raises:
        TypeError: If the handle came from another TransactionManager
        ValueError: If a write is attempted through a read handle
    """
    if not isinstance(tx, InMemoryTransaction):
        raise TypeError(f"Expected InMemoryTransaction, got {type(tx).__name__}")
    if write and not tx.writable:
        raise ValueError("Cannot write through a read-only transaction")
    return tx
