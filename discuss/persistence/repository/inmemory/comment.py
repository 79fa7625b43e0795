"""In-memory comment repository for testing."""

from typing import Optional, Sequence

from discuss.domain.model.comment import Comment, utc_now
from discuss.domain.repository import CommentRepository, Transaction
from discuss.domain.value import CommentId, PostId, UserId

from .database import InMemoryDatabase, InMemoryTransaction, state_of


def _child_ids(state: InMemoryTransaction) -> set[CommentId]:
    """IDs with a valid incoming length-1 path."""
    return {
        path.descendant_id
        for path in state.paths.values()
        if path.path_length == 1 and path.valid
    }


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database

    async def insert(
        self, tx: Transaction, post_id: PostId, author_id: UserId, text: str
    ) -> Comment:
        """Insert a comment with the next ID."""
        state = state_of(tx, write=True)
        now = utc_now()
        comment = Comment(
            id=self.database.next_comment_id(),
            post_id=post_id,
            author_id=author_id,
            text=text,
            created_at=now,
            updated_at=now,
        )
        state.comments[comment.id] = comment
        return comment

    async def find_by_id(
        self, tx: Transaction, comment_id: CommentId
    ) -> Optional[Comment]:
        """Find a valid comment by ID."""
        comment = state_of(tx).comments.get(comment_id)
        return comment if comment is not None and comment.valid else None

    async def find_by_ids(
        self, tx: Transaction, comment_ids: Sequence[CommentId]
    ) -> list[Comment]:
        """Find valid comments by ID."""
        comments = state_of(tx).comments
        return [
            comments[cid]
            for cid in dict.fromkeys(comment_ids)
            if cid in comments and comments[cid].valid
        ]

    def _roots(self, state: InMemoryTransaction, post_id: PostId) -> list[Comment]:
        children = _child_ids(state)
        return [
            c
            for c in state.comments.values()
            if c.post_id == post_id and c.valid and c.id not in children
        ]

    async def find_roots(
        self, tx: Transaction, post_id: PostId, limit: int, offset: int
    ) -> list[Comment]:
        """Find a page of root comments, newest first."""
        roots = self._roots(state_of(tx), post_id)
        roots.sort(key=lambda c: (c.created_at, c.id), reverse=True)
        return roots[offset : offset + limit]

    async def count_roots(self, tx: Transaction, post_id: PostId) -> int:
        """Count root comments of a post."""
        return len(self._roots(state_of(tx), post_id))

    async def update_text(
        self,
        tx: Transaction,
        comment_id: CommentId,
        author_id: UserId,
        text: str,
    ) -> Optional[Comment]:
        """Update text of a comment owned by author_id."""
        state = state_of(tx, write=True)
        comment = state.comments.get(comment_id)
        if comment is None or not comment.valid or comment.author_id != author_id:
            return None
        updated = comment.model_copy(update={"text": text, "updated_at": utc_now()})
        state.comments[comment_id] = updated
        return updated

    async def delete_many(
        self, tx: Transaction, comment_ids: Sequence[CommentId]
    ) -> int:
        """Remove comment rows."""
        state = state_of(tx, write=True)
        removed = 0
        for comment_id in set(comment_ids):
            if state.comments.pop(comment_id, None) is not None:
                removed += 1
        return removed
