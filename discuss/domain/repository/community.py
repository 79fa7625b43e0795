"""Community read repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from discuss.domain.model.community import Community, PostCommunity
from discuss.domain.value import CommunityId, PostId, UserId


class CommunityRepository(ABC):
    """Read access to posts, communities and memberships.

    These tables belong to the community module. Implementations manage
    their own connections; lookups never join a comment transaction.
    """

    @abstractmethod
    async def find_post_community(self, post_id: PostId) -> Optional[PostCommunity]:
        """Find the community owning a valid post.

        Args:
            post_id: The post ID

        Returns:
            Community details for the post, None if the post does not exist
        """
        pass

    @abstractmethod
    async def find_community(self, community_id: CommunityId) -> Optional[Community]:
        """Find a valid community by ID."""
        pass

    @abstractmethod
    async def is_active_member(
        self, community_id: CommunityId, user_id: UserId
    ) -> bool:
        """Check whether the user is an active member of the community."""
        pass
