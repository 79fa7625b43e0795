"""Comment tree assembly for the read path."""

from collections import defaultdict
from typing import Iterable, Mapping, Sequence

import logfire

from discuss.domain.model import AuthorProfile, Comment, CommentNode, CommentPage
from discuss.domain.repository import (
    ClosurePathRepository,
    CommentRepository,
    ProfileRepository,
    Transaction,
)
from discuss.domain.value import CommentId, PostId, UserId

from .base import Service


class TreeAssembler(Service):
    """Builds a page of fully expanded comment threads.

    Algorithm:
    1. Count the post's root comments and fetch the requested page of them
    2. Fetch every parent/child edge inside the page's subtrees
    3. Fetch the comment rows of all descendants in one query
    4. Fetch author profiles for every comment on the page
    5. Build adjacency map parent_id -> [children] and assemble in memory

    The number of round trips does not depend on thread depth or width.
    """

    def __init__(
        self,
        comment_repository: CommentRepository,
        closure_path_repository: ClosurePathRepository,
        profile_repository: ProfileRepository,
    ) -> None:
        """Initialize tree assembler.

        Args:
            comment_repository: Comment record store
            closure_path_repository: Closure path store
            profile_repository: Author profile lookup
        """
        self.comment_repository = comment_repository
        self.closure_path_repository = closure_path_repository
        self.profile_repository = profile_repository

    async def assemble(
        self, tx: Transaction, post_id: PostId, limit: int, offset: int
    ) -> CommentPage:
        """Assemble one page of root comments with their full threads.

        Args:
            tx: Read handle
            post_id: Post ID
            limit: Maximum number of root comments
            offset: Number of root comments to skip

        Returns:
            Roots ordered newest first, children ordered oldest first
        """
        with logfire.span(
            "tree_assembler.assemble", post_id=post_id, limit=limit, offset=offset
        ):
            total = await self.comment_repository.count_roots(tx, post_id)
            has_more = offset + limit < total

            roots = await self.comment_repository.find_roots(
                tx, post_id, limit=limit, offset=offset
            )
            if not roots:
                return CommentPage(comments=[], total=total, has_more=has_more)

            edges = await self.closure_path_repository.find_child_edges(
                tx, [root.id for root in roots]
            )
            child_ids = sorted({child_id for _, child_id in edges})
            descendants = (
                await self.comment_repository.find_by_ids(tx, child_ids)
                if child_ids
                else []
            )

            author_ids = sorted({c.author_id for c in [*roots, *descendants]})
            profiles = await self.profile_repository.find_profiles(author_ids)

            forest = build_forest(roots, descendants, edges, profiles)
            logfire.info(
                "Comment page assembled",
                post_id=post_id,
                roots=len(roots),
                descendants=len(descendants),
                total=total,
            )
            return CommentPage(comments=forest, total=total, has_more=has_more)


def build_forest(
    roots: Sequence[Comment],
    descendants: Iterable[Comment],
    edges: Iterable[tuple[CommentId, CommentId]],
    profiles: Mapping[UserId, AuthorProfile] | None = None,
) -> list[CommentNode]:
    """Assemble comment nodes from flat rows.

    Args:
        roots: Root comments in the order they should be returned
        descendants: Comment rows of every non-root node
        edges: (parent_id, child_id) pairs from length-1 closure rows
        profiles: Author profiles keyed by user ID

    Returns:
        One CommentNode per root, each with its children populated
        recursively and ordered oldest first. Edges pointing at comments
        missing from descendants are skipped.
    """
    profiles = profiles or {}
    by_id = {comment.id: comment for comment in descendants}

    adjacency: dict[CommentId, list[Comment]] = defaultdict(list)
    for parent_id, child_id in edges:
        child = by_id.get(child_id)
        if child is not None:
            adjacency[parent_id].append(child)
    for children in adjacency.values():
        children.sort(key=lambda c: (c.created_at, c.id))

    def to_node(
        comment: Comment, parent_id: CommentId | None, children: list[CommentNode]
    ) -> CommentNode:
        profile = profiles.get(comment.author_id)
        return CommentNode(
            comment_id=comment.id,
            post_id=comment.post_id,
            user_id=comment.author_id,
            text=comment.text,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
            parent_id=parent_id,
            children=children,
            display_name=profile.display_name if profile else None,
            profile_pic=profile.profile_pic if profile else None,
        )

    # Post-order walk with an explicit stack; thread depth is unbounded.
    # A comment is claimed by the first parent that reaches it.
    forest: list[CommentNode] = []
    claimed: set[CommentId] = set()
    for root in roots:
        claimed.add(root.id)
        built: dict[CommentId, CommentNode] = {}
        stack: list[tuple[Comment, CommentId | None, list[Comment] | None]] = [
            (root, None, None)
        ]
        while stack:
            comment, parent_id, children = stack.pop()
            if children is None:
                children = [
                    c for c in adjacency.get(comment.id, []) if c.id not in claimed
                ]
                claimed.update(c.id for c in children)
                stack.append((comment, parent_id, children))
                stack.extend((child, comment.id, None) for child in reversed(children))
                continue

            built[comment.id] = to_node(
                comment, parent_id, [built.pop(child.id) for child in children]
            )
        forest.append(built.pop(root.id))

    return forest
