"""PostgreSQL implementation of ClosurePath repository."""

from typing import List, Sequence

from sqlalchemy import BigInteger, delete, insert, literal, or_, select, true

from discuss.domain.model import ClosurePath
from discuss.domain.repository import ClosurePathRepository, Transaction
from discuss.domain.value import CommentId
from discuss.persistence.database import session_of
from discuss.persistence.mappers import row_to_closure_path
from discuss.persistence.tables import comment_paths_table

paths = comment_paths_table


class PostgresClosurePathRepository(ClosurePathRepository):
    """PostgreSQL implementation of ClosurePathRepository."""

    async def insert_self_path(self, tx: Transaction, comment_id: CommentId) -> None:
        """Insert the (comment, comment, 0) row."""
        session = session_of(tx, write=True)
        stmt = insert(paths).values(
            ancestor_id=comment_id,
            descendant_id=comment_id,
            path_length=0,
            valid=True,
        )
        await session.execute(stmt)

    async def insert_ancestor_paths(
        self, tx: Transaction, parent_id: CommentId, child_id: CommentId
    ) -> int:
        """Copy the parent's ancestry onto the child in one INSERT ... SELECT."""
        session = session_of(tx, write=True)
        ancestry = (
            select(
                paths.c.ancestor_id,
                literal(child_id, BigInteger),
                paths.c.path_length + 1,
                true(),
            )
            .where(paths.c.descendant_id == parent_id)
            .where(paths.c.valid.is_(True))
        )
        stmt = insert(paths).from_select(
            ["ancestor_id", "descendant_id", "path_length", "valid"], ancestry
        )
        result = await session.execute(stmt)
        return result.rowcount or 0

    async def find_ancestor_paths(
        self, tx: Transaction, descendant_id: CommentId
    ) -> List[ClosurePath]:
        """Find all valid paths ending at a comment."""
        session = session_of(tx)
        stmt = (
            select(paths)
            .where(paths.c.descendant_id == descendant_id)
            .where(paths.c.valid.is_(True))
            .order_by(paths.c.path_length)
        )
        result = await session.execute(stmt)
        return [row_to_closure_path(row._asdict()) for row in result.fetchall()]

    async def find_descendant_ids(
        self, tx: Transaction, ancestor_id: CommentId
    ) -> List[CommentId]:
        """Find the descendant set of a comment, itself included."""
        session = session_of(tx)
        stmt = (
            select(paths.c.descendant_id)
            .where(paths.c.ancestor_id == ancestor_id)
            .where(paths.c.valid.is_(True))
            .order_by(paths.c.path_length, paths.c.descendant_id)
        )
        result = await session.execute(stmt)
        return [CommentId(row) for row in result.scalars().all()]

    async def find_child_edges(
        self, tx: Transaction, root_ids: Sequence[CommentId]
    ) -> List[tuple[CommentId, CommentId]]:
        """Find every length-1 edge below the given roots in one query."""
        if not root_ids:
            return []
        session = session_of(tx)
        # Aliased so the subquery does not correlate with the outer table
        nested = paths.alias("nested")
        subtree = (
            select(nested.c.descendant_id)
            .where(nested.c.ancestor_id.in_(list(root_ids)))
            .where(nested.c.path_length > 0)
            .where(nested.c.valid.is_(True))
        )
        stmt = (
            select(paths.c.ancestor_id, paths.c.descendant_id)
            .where(paths.c.path_length == 1)
            .where(paths.c.valid.is_(True))
            .where(paths.c.descendant_id.in_(subtree))
        )
        result = await session.execute(stmt)
        return [
            (CommentId(parent_id), CommentId(child_id))
            for parent_id, child_id in result.fetchall()
        ]

    async def delete_touching(
        self, tx: Transaction, comment_ids: Sequence[CommentId]
    ) -> int:
        """Delete rows mentioning any of the IDs on either end."""
        if not comment_ids:
            return 0
        session = session_of(tx, write=True)
        ids = list(comment_ids)
        stmt = delete(paths).where(
            or_(paths.c.ancestor_id.in_(ids), paths.c.descendant_id.in_(ids))
        )
        result = await session.execute(stmt)
        return result.rowcount or 0
