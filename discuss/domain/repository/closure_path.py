"""Closure path store interface."""

from abc import ABC, abstractmethod
from typing import List, Sequence

from discuss.domain.model.comment import ClosurePath
from discuss.domain.repository.transaction import Transaction
from discuss.domain.value import CommentId


class ClosurePathRepository(ABC):
    """Repository for ClosurePath rows.

    Read methods only consider rows with valid=True. Delete methods remove
    rows regardless of their flag.
    """

    @abstractmethod
    async def insert_self_path(self, tx: Transaction, comment_id: CommentId) -> None:
        """Insert the (comment, comment, 0) row."""
        pass

    @abstractmethod
    async def insert_ancestor_paths(
        self, tx: Transaction, parent_id: CommentId, child_id: CommentId
    ) -> int:
        """Copy the parent's ancestry onto a new child.

        For every valid row (a, parent_id, L) insert (a, child_id, L + 1).
        Inserts nothing when the parent has no valid rows.

        Returns:
            Number of rows inserted
        """
        pass

    @abstractmethod
    async def find_ancestor_paths(
        self, tx: Transaction, descendant_id: CommentId
    ) -> List[ClosurePath]:
        """Find all paths ending at a comment, ordered by path length."""
        pass

    @abstractmethod
    async def find_descendant_ids(
        self, tx: Transaction, ancestor_id: CommentId
    ) -> List[CommentId]:
        """Find the full descendant set of a comment, itself included.

        Ordered by distance from the ancestor, then by ID.
        """
        pass

    @abstractmethod
    async def find_child_edges(
        self, tx: Transaction, root_ids: Sequence[CommentId]
    ) -> List[tuple[CommentId, CommentId]]:
        """Find every parent/child edge inside the subtrees of the given roots.

        Returns:
            (parent_id, child_id) pairs taken from valid length-1 rows whose
            child is a strict descendant of one of the roots
        """
        pass

    @abstractmethod
    async def delete_touching(
        self, tx: Transaction, comment_ids: Sequence[CommentId]
    ) -> int:
        """Delete rows where any of the IDs appears as ancestor or descendant.

        Returns:
            Number of rows removed
        """
        pass
