"""Comment domain service.

Entry point for every comment operation. Validates input, consults the
post lookup and permission oracle, and runs the store calls of each write
inside a single transaction. Errors leaving this service are always one of
the kinds in discuss.domain.error.
"""

import asyncio
import sys
from typing import Awaitable, TypeVar

import logfire

from discuss.config import CommentSettings
from discuss.domain.error import (
    DomainError,
    ForbiddenError,
    InternalError,
    InvalidArgumentError,
    NotFoundError,
)
from discuss.domain.model import CommentPage, PostCommunity
from discuss.domain.repository import CommentRepository, TransactionManager
from discuss.domain.value import CommentId, PostId, UserId

from .access import PermissionOracle, PostLookup
from .base import Service
from .path_maintainer import PathMaintainer
from .tree_assembler import TreeAssembler

T = TypeVar("T")


class CommentService(Service):
    """Domain service for threaded comments."""

    def __init__(
        self,
        transaction_manager: TransactionManager,
        comment_repository: CommentRepository,
        path_maintainer: PathMaintainer,
        tree_assembler: TreeAssembler,
        post_lookup: PostLookup,
        permission_oracle: PermissionOracle,
        settings: CommentSettings,
    ) -> None:
        """Initialize comment service.

        Args:
            transaction_manager: Source of transaction handles
            comment_repository: Comment record store
            path_maintainer: Closure path maintenance
            tree_assembler: Read path tree builder
            post_lookup: Resolves posts to communities
            permission_oracle: Read/write permission checks
            settings: Comment limits and deadlines
        """
        self.transaction_manager = transaction_manager
        self.comment_repository = comment_repository
        self.path_maintainer = path_maintainer
        self.tree_assembler = tree_assembler
        self.post_lookup = post_lookup
        self.permission_oracle = permission_oracle
        self.settings = settings

    async def create(
        self,
        user_id: UserId,
        post_id: PostId | None,
        text: str | None,
        parent_id: CommentId | None = None,
    ) -> CommentId:
        """Create a top-level comment or a reply.

        Args:
            user_id: Author
            post_id: Post being commented on
            text: Comment text, trimmed before storing
            parent_id: Parent comment for replies (None for top-level)

        Returns:
            ID of the new comment

        Raises:
            InvalidArgumentError: Blank or oversized text, missing post ID,
                a parent that belongs to another post, or a reply that would
                exceed max_depth
            NotFoundError: Unknown post, unknown community, or unknown parent
                when strict_parent is enabled
            ForbiddenError: Community inactive or user may not write
            InternalError: Any other failure; nothing is persisted
        """
        with logfire.span(
            "comment_service.create",
            user_id=user_id,
            post_id=post_id,
            parent_id=parent_id,
        ):
            return await self._guard(
                "create", self._create(user_id, post_id, text, parent_id)
            )

    async def _create(
        self,
        user_id: UserId,
        post_id: PostId | None,
        text: str | None,
        parent_id: CommentId | None,
    ) -> CommentId:
        cleaned = self._clean_text(text)
        if post_id is None:
            raise InvalidArgumentError("post_id is required")

        post = await self._require_post(post_id)
        self._require_active(post)
        await self.permission_oracle.check_write(user_id, post.community_id)

        async with self.transaction_manager.begin() as tx:
            if parent_id is not None:
                parent = await self.comment_repository.find_by_id(tx, parent_id)
                if parent is None:
                    if self.settings.strict_parent:
                        raise NotFoundError("Comment", str(parent_id))
                    logfire.warn(
                        "Parent comment not found, storing reply as orphan",
                        parent_id=parent_id,
                        post_id=post_id,
                    )
                elif parent.post_id != post_id:
                    logfire.warn(
                        "Parent comment does not belong to post",
                        parent_id=parent_id,
                        parent_post_id=parent.post_id,
                        target_post_id=post_id,
                    )
                    raise InvalidArgumentError(
                        "Parent comment does not belong to this post"
                    )
                else:
                    parent_depth = await self.path_maintainer.depth_of(tx, parent_id)
                    if parent_depth >= self.settings.max_depth:
                        logfire.warn(
                            "Reply exceeds maximum thread depth",
                            parent_id=parent_id,
                            parent_depth=parent_depth,
                            max_depth=self.settings.max_depth,
                        )
                        raise InvalidArgumentError(
                            f"Thread depth limit of {self.settings.max_depth} reached"
                        )

            comment = await self.comment_repository.insert(
                tx, post_id=post_id, author_id=user_id, text=cleaned
            )
            ancestors = await self.path_maintainer.attach(tx, comment.id, parent_id)

        logfire.info(
            "Comment created",
            comment_id=comment.id,
            post_id=post_id,
            user_id=user_id,
            depth=ancestors,
        )
        return comment.id

    async def update(
        self, user_id: UserId, comment_id: CommentId, text: str | None
    ) -> CommentId:
        """Replace the text of a comment owned by the caller.

        Returns:
            The comment ID

        Raises:
            InvalidArgumentError: Blank or oversized text
            NotFoundError: Unknown comment, post or community
            ForbiddenError: Community inactive, or the caller is not the
                author (also raised when the comment vanished concurrently)
            InternalError: Any other failure
        """
        with logfire.span(
            "comment_service.update", user_id=user_id, comment_id=comment_id
        ):
            return await self._guard(
                "update", self._update(user_id, comment_id, text)
            )

    async def _update(
        self, user_id: UserId, comment_id: CommentId, text: str | None
    ) -> CommentId:
        cleaned = self._clean_text(text)

        async with self.transaction_manager.read() as tx:
            comment = await self.comment_repository.find_by_id(tx, comment_id)
        if comment is None:
            raise NotFoundError("Comment", str(comment_id))

        post = await self._require_post(comment.post_id)
        self._require_active(post)

        async with self.transaction_manager.begin() as tx:
            updated = await self.comment_repository.update_text(
                tx, comment_id=comment_id, author_id=user_id, text=cleaned
            )
            if updated is None:
                logfire.warn(
                    "Comment update rejected",
                    comment_id=comment_id,
                    user_id=user_id,
                    author_id=comment.author_id,
                )
                raise ForbiddenError("Not allowed")

        logfire.info(
            "Comment text updated",
            comment_id=comment_id,
            post_id=comment.post_id,
            text_length=len(cleaned),
        )
        return comment_id

    async def list_for_post(
        self,
        post_id: PostId | None,
        limit: int | None = None,
        offset: int | None = None,
        user_id: UserId | None = None,
    ) -> CommentPage:
        """Get one page of a post's threads.

        Args:
            post_id: Post ID
            limit: Number of root comments, defaults to the configured page
                size and is capped at max_page_size
            offset: Number of root comments to skip
            user_id: Caller; when given, read permission is checked

        Returns:
            Page of root comments with fully expanded children

        Raises:
            InvalidArgumentError: Missing post ID or bad paging values
            NotFoundError: Unknown post or community (identified callers)
            ForbiddenError: Caller may not read the community
            InternalError: Any other failure
        """
        with logfire.span(
            "comment_service.list_for_post",
            post_id=post_id,
            limit=limit,
            offset=offset,
            user_id=user_id,
        ):
            return await self._guard(
                "list_for_post", self._list_for_post(post_id, limit, offset, user_id)
            )

    async def _list_for_post(
        self,
        post_id: PostId | None,
        limit: int | None,
        offset: int | None,
        user_id: UserId | None,
    ) -> CommentPage:
        if post_id is None:
            raise InvalidArgumentError("post_id is required")

        limit = self.settings.default_page_size if limit is None else limit
        offset = 0 if offset is None else offset
        if limit < 1:
            raise InvalidArgumentError("limit must be at least 1")
        if offset < 0:
            raise InvalidArgumentError("offset must not be negative")
        limit = min(limit, self.settings.max_page_size)

        if user_id is not None:
            post = await self._require_post(post_id)
            await self.permission_oracle.check_read(user_id, post.community_id)

        async with self.transaction_manager.read() as tx:
            return await self.tree_assembler.assemble(
                tx, post_id, limit=limit, offset=offset
            )

    async def hard_delete(
        self, user_id: UserId, comment_id: CommentId
    ) -> list[CommentId]:
        """Physically remove a comment and its entire subtree.

        Returns:
            Removed comment IDs, the comment itself first. Empty when a
            concurrent delete already removed the subtree.

        Raises:
            NotFoundError: Unknown comment
            ForbiddenError: Caller is not the author
            InternalError: Any other failure; nothing is removed
        """
        with logfire.span(
            "comment_service.hard_delete", user_id=user_id, comment_id=comment_id
        ):
            return await self._guard(
                "hard_delete", self._hard_delete(user_id, comment_id)
            )

    async def _hard_delete(
        self, user_id: UserId, comment_id: CommentId
    ) -> list[CommentId]:
        async with self.transaction_manager.read() as tx:
            comment = await self.comment_repository.find_by_id(tx, comment_id)
        if comment is None:
            raise NotFoundError("Comment", str(comment_id))
        if comment.author_id != user_id:
            logfire.warn(
                "Comment delete rejected, not the author",
                comment_id=comment_id,
                user_id=user_id,
                author_id=comment.author_id,
            )
            raise ForbiddenError("Not allowed")

        # A concurrent delete between the read and here leaves an empty subtree
        async with self.transaction_manager.begin() as tx:
            deleted = await self.path_maintainer.remove_subtree(tx, comment_id)

        logfire.info(
            "Comment hard deleted",
            comment_id=comment_id,
            post_id=comment.post_id,
            deleted=len(deleted),
        )
        return deleted

    async def _guard(self, operation: str, work: Awaitable[T]) -> T:
        """Apply the operation deadline and normalize failures.

        Cancellation of the caller propagates unchanged.
        """
        timeout = self.settings.operation_timeout_seconds
        try:
            if timeout is None:
                return await work
            return await asyncio.wait_for(work, timeout=timeout)
        except DomainError:
            raise
        except asyncio.TimeoutError as e:
            logfire.error(
                "Comment operation timed out", operation=operation, timeout=timeout
            )
            raise InternalError("Operation timed out") from e
        except Exception as e:
            logfire.error(
                "Comment operation failed",
                operation=operation,
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            raise InternalError() from e

    def _clean_text(self, text: str | None) -> str:
        cleaned = (text or "").strip()
        if not cleaned:
            raise InvalidArgumentError("Comment text must not be empty")
        if len(cleaned) > self.settings.max_text_length:
            raise InvalidArgumentError(
                f"Comment text exceeds {self.settings.max_text_length} characters"
            )
        return cleaned

    async def _require_post(self, post_id: PostId) -> PostCommunity:
        post = await self.post_lookup.get_post_community(post_id)
        if post is None:
            raise NotFoundError("Post", str(post_id))
        return post

    @staticmethod
    def _require_active(post: PostCommunity) -> None:
        if not post.is_active:
            logfire.warn(
                "Post community is inactive",
                post_id=post.post_id,
                community_id=post.community_id,
            )
            raise ForbiddenError("Community is inactive")
