"""PostgreSQL implementation of Comment repository."""

from typing import List, Optional, Sequence

from sqlalchemy import and_, delete, func, insert, select, update
from sqlalchemy.sql.elements import ColumnElement

from discuss.domain.model import Comment
from discuss.domain.repository import CommentRepository, Transaction
from discuss.domain.value import CommentId, PostId, UserId
from discuss.persistence.database import session_of
from discuss.persistence.mappers import row_to_comment
from discuss.persistence.tables import comment_paths_table, comments_table


def _root_filter(post_id: PostId) -> ColumnElement[bool]:
    """Valid comments of a post without a valid incoming length-1 path."""
    paths = comment_paths_table
    has_parent = (
        select(paths.c.descendant_id)
        .where(paths.c.descendant_id == comments_table.c.id)
        .where(paths.c.path_length == 1)
        .where(paths.c.valid.is_(True))
        .exists()
    )
    return and_(
        comments_table.c.post_id == post_id,
        comments_table.c.valid.is_(True),
        ~has_parent,
    )


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    async def insert(
        self, tx: Transaction, post_id: PostId, author_id: UserId, text: str
    ) -> Comment:
        """Insert a comment and return it with its generated ID."""
        session = session_of(tx, write=True)
        stmt = (
            insert(comments_table)
            .values(post_id=post_id, author_id=author_id, text=text)
            .returning(comments_table)
        )
        result = await session.execute(stmt)
        return row_to_comment(result.one()._asdict())

    async def find_by_id(
        self, tx: Transaction, comment_id: CommentId
    ) -> Optional[Comment]:
        """Find a valid comment by ID."""
        session = session_of(tx)
        stmt = (
            select(comments_table)
            .where(comments_table.c.id == comment_id)
            .where(comments_table.c.valid.is_(True))
        )
        result = await session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_by_ids(
        self, tx: Transaction, comment_ids: Sequence[CommentId]
    ) -> List[Comment]:
        """Find valid comments by ID in one query."""
        if not comment_ids:
            return []
        session = session_of(tx)
        stmt = (
            select(comments_table)
            .where(comments_table.c.id.in_(list(comment_ids)))
            .where(comments_table.c.valid.is_(True))
        )
        result = await session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def find_roots(
        self, tx: Transaction, post_id: PostId, limit: int, offset: int
    ) -> List[Comment]:
        """Find a page of root comments, newest first."""
        session = session_of(tx)
        stmt = (
            select(comments_table)
            .where(_root_filter(post_id))
            .order_by(comments_table.c.created_at.desc(), comments_table.c.id.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def count_roots(self, tx: Transaction, post_id: PostId) -> int:
        """Count root comments of a post."""
        session = session_of(tx)
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(_root_filter(post_id))
        )
        result = await session.execute(stmt)
        return result.scalar() or 0

    async def update_text(
        self,
        tx: Transaction,
        comment_id: CommentId,
        author_id: UserId,
        text: str,
    ) -> Optional[Comment]:
        """Update text of a comment owned by author_id."""
        session = session_of(tx, write=True)
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .where(comments_table.c.author_id == author_id)
            .where(comments_table.c.valid.is_(True))
            .values(text=text, updated_at=func.now())
            .returning(comments_table)
        )
        result = await session.execute(stmt)
        row = result.fetchone()
        if row is None:
            # Not the author, or the comment is gone
            return None
        return row_to_comment(row._asdict())

    async def delete_many(
        self, tx: Transaction, comment_ids: Sequence[CommentId]
    ) -> int:
        """Hard delete comment rows."""
        if not comment_ids:
            return 0
        session = session_of(tx, write=True)
        stmt = delete(comments_table).where(comments_table.c.id.in_(list(comment_ids)))
        result = await session.execute(stmt)
        return result.rowcount or 0
