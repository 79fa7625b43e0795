"""Comment record store interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from discuss.domain.model.comment import Comment
from discuss.domain.repository.transaction import Transaction
from discuss.domain.value import CommentId, PostId, UserId


class CommentRepository(ABC):
    """Repository for Comment rows.

    Only rows with valid=True are visible through these methods.
    """

    @abstractmethod
    async def insert(
        self, tx: Transaction, post_id: PostId, author_id: UserId, text: str
    ) -> Comment:
        """Insert a comment row.

        Args:
            tx: Transaction to run in
            post_id: Owning post
            author_id: Author user ID
            text: Comment text

        Returns:
            The stored comment with its generated ID and timestamps
        """
        pass

    @abstractmethod
    async def find_by_id(
        self, tx: Transaction, comment_id: CommentId
    ) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            tx: Transaction to run in
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(
        self, tx: Transaction, comment_ids: Sequence[CommentId]
    ) -> List[Comment]:
        """Find several comments at once, in no particular order."""
        pass

    @abstractmethod
    async def find_roots(
        self, tx: Transaction, post_id: PostId, limit: int, offset: int
    ) -> List[Comment]:
        """Find a page of root comments of a post.

        A root comment has no valid length-1 closure path pointing at it.
        Results are ordered newest first, ties broken by higher ID first.

        Args:
            tx: Transaction to run in
            post_id: The post ID
            limit: Maximum number of roots to return
            offset: Number of roots to skip

        Returns:
            Root comments of the requested page
        """
        pass

    @abstractmethod
    async def count_roots(self, tx: Transaction, post_id: PostId) -> int:
        """Count root comments of a post using the same predicate as find_roots."""
        pass

    @abstractmethod
    async def update_text(
        self,
        tx: Transaction,
        comment_id: CommentId,
        author_id: UserId,
        text: str,
    ) -> Optional[Comment]:
        """Update text and updated_at of a comment owned by author_id.

        Returns:
            The updated comment, or None when no valid row with that ID and
            author exists
        """
        pass

    @abstractmethod
    async def delete_many(
        self, tx: Transaction, comment_ids: Sequence[CommentId]
    ) -> int:
        """Hard delete comment rows.

        Returns:
            Number of rows removed
        """
        pass
