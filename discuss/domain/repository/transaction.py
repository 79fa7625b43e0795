"""Transaction handles.

Store operations never reach for an ambient connection. Each call receives
the Transaction it runs in, so a create or delete can thread one handle
through every store call and commit or roll back all of them together.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager


class Transaction(ABC):
    """Handle for one unit of database work.

    Concrete stores only accept the handle type produced by their own
    TransactionManager.
    """

    pass


class TransactionManager(ABC):
    """Factory for transaction handles."""

    @abstractmethod
    def begin(self) -> AbstractAsyncContextManager[Transaction]:
        """Open a read-write transaction.

        The transaction commits when the block exits normally and rolls back
        when it exits with any exception, including task cancellation.
        """
        pass

    @abstractmethod
    def read(self) -> AbstractAsyncContextManager[Transaction]:
        """Open a read-only handle.

        Reads see committed data only and never commit anything.
        """
        pass
