"""Closure path maintenance.

Keeps the closure table consistent with the comment rows:

- attach: a new comment gets its self-path plus one row per ancestor of
  its parent, each one hop longer than the parent's.
- remove_subtree: a comment and every descendant are removed from both
  stores, along with every path row that mentions any of them.

Both operations run inside the caller's transaction.
"""

import logfire

from discuss.domain.repository import (
    ClosurePathRepository,
    CommentRepository,
    Transaction,
)
from discuss.domain.value import CommentId

from .base import Service


class PathMaintainer(Service):
    """Writes and removes closure rows for comment inserts and deletes."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        closure_path_repository: ClosurePathRepository,
    ) -> None:
        """Initialize path maintainer.

        Args:
            comment_repository: Comment record store
            closure_path_repository: Closure path store
        """
        self.comment_repository = comment_repository
        self.closure_path_repository = closure_path_repository

    async def attach(
        self,
        tx: Transaction,
        comment_id: CommentId,
        parent_id: CommentId | None = None,
    ) -> int:
        """Record a freshly inserted comment in the closure table.

        Args:
            tx: Open transaction the comment row was inserted in
            comment_id: The new comment
            parent_id: Parent comment for replies (None for top-level)

        Returns:
            Number of ancestor rows written, not counting the self-path.
            Zero for top-level comments and for parents without closure rows.
        """
        with logfire.span(
            "path_maintainer.attach", comment_id=comment_id, parent_id=parent_id
        ):
            await self.closure_path_repository.insert_self_path(tx, comment_id)

            if parent_id is None:
                return 0

            inserted = await self.closure_path_repository.insert_ancestor_paths(
                tx, parent_id=parent_id, child_id=comment_id
            )
            if inserted == 0:
                logfire.warn(
                    "Parent has no closure paths, comment stored without ancestry",
                    comment_id=comment_id,
                    parent_id=parent_id,
                )
            return inserted

    async def depth_of(self, tx: Transaction, comment_id: CommentId) -> int:
        """Get a comment's level in its thread, 1 for a root.

        Zero when the comment has no closure rows.
        """
        ancestry = await self.closure_path_repository.find_ancestor_paths(
            tx, comment_id
        )
        return len(ancestry)

    async def collect_subtree(
        self, tx: Transaction, comment_id: CommentId
    ) -> list[CommentId]:
        """Get a comment's descendant set, the comment itself first.

        Empty when the comment has no self-path, e.g. when a concurrent
        delete already removed it.
        """
        return await self.closure_path_repository.find_descendant_ids(tx, comment_id)

    async def remove_subtree(
        self, tx: Transaction, comment_id: CommentId
    ) -> list[CommentId]:
        """Hard delete a comment, its descendants and all their path rows.

        Args:
            tx: Open transaction
            comment_id: Root of the subtree to remove

        Returns:
            IDs of the removed comments, ordered by distance from comment_id
        """
        with logfire.span("path_maintainer.remove_subtree", comment_id=comment_id):
            subtree = await self.collect_subtree(tx, comment_id)
            if not subtree:
                logfire.warn("Subtree already removed", comment_id=comment_id)
                return []

            removed_comments = await self.comment_repository.delete_many(tx, subtree)
            removed_paths = await self.closure_path_repository.delete_touching(
                tx, subtree
            )

            logfire.info(
                "Subtree removed",
                comment_id=comment_id,
                comments=removed_comments,
                paths=removed_paths,
            )
            return subtree
