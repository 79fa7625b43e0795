"""Post lookup and permission checks.

The comment engine only consumes these two contracts. The default
implementation answers them from the community tables; another deployment
can provide its own PostLookup and PermissionOracle through DI.
"""

from abc import ABC, abstractmethod

import logfire

from discuss.domain.error import ForbiddenError, NotFoundError
from discuss.domain.model.community import Community, PostCommunity
from discuss.domain.repository import CommunityRepository
from discuss.domain.value import CommunityId, PostId, UserId

from .base import Service


class PostLookup(ABC):
    """Resolves a post to the community that owns it."""

    @abstractmethod
    async def get_post_community(self, post_id: PostId) -> PostCommunity | None:
        """Get the community of a post.

        Args:
            post_id: Post ID

        Returns:
            Community details for the post, None if the post does not exist
        """
        pass


class PermissionOracle(ABC):
    """Decides whether a user may read or write comments in a community."""

    @abstractmethod
    async def check_read(self, user_id: UserId, community_id: CommunityId) -> None:
        """Allow reading or raise.

        Raises:
            NotFoundError: If the community does not exist
            ForbiddenError: If the user may not read the community
        """
        pass

    @abstractmethod
    async def check_write(self, user_id: UserId, community_id: CommunityId) -> None:
        """Allow writing or raise.

        Raises:
            NotFoundError: If the community does not exist
            ForbiddenError: If the user may not write to the community
        """
        pass


class CommunityAccessService(Service, PostLookup, PermissionOracle):
    """Default post lookup and permission policy.

    Policy:
    - Reading requires membership when the community is private.
    - Writing additionally requires the community to be active.
    """

    def __init__(self, community_repository: CommunityRepository) -> None:
        """Initialize community access service.

        Args:
            community_repository: Community read repository
        """
        self.community_repository = community_repository

    async def get_post_community(self, post_id: PostId) -> PostCommunity | None:
        with logfire.span("community_access.get_post_community", post_id=post_id):
            post = await self.community_repository.find_post_community(post_id)
            if post is None:
                logfire.warn("Post not found", post_id=post_id)
            return post

    async def check_read(self, user_id: UserId, community_id: CommunityId) -> None:
        with logfire.span(
            "community_access.check_read",
            user_id=user_id,
            community_id=community_id,
        ):
            community = await self._get_community(community_id)
            await self._check_membership(user_id, community)

    async def check_write(self, user_id: UserId, community_id: CommunityId) -> None:
        with logfire.span(
            "community_access.check_write",
            user_id=user_id,
            community_id=community_id,
        ):
            community = await self._get_community(community_id)
            if not community.is_active:
                logfire.warn(
                    "Write rejected, community inactive",
                    community_id=community_id,
                    status=community.status.value,
                )
                raise ForbiddenError("Community is inactive")
            await self._check_membership(user_id, community)

    async def _get_community(self, community_id: CommunityId) -> Community:
        community = await self.community_repository.find_community(community_id)
        if community is None:
            raise NotFoundError("Community", str(community_id))
        return community

    async def _check_membership(self, user_id: UserId, community: Community) -> None:
        if not community.is_private:
            return
        if not await self.community_repository.is_active_member(community.id, user_id):
            logfire.warn(
                "Access rejected, not a member of private community",
                user_id=user_id,
                community_id=community.id,
            )
            raise ForbiddenError("Private community")
