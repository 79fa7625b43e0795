"""In-memory community repository for testing."""

from typing import Optional

from discuss.domain.model import Community, PostCommunity
from discuss.domain.repository import CommunityRepository
from discuss.domain.value import (
    CommunityId,
    CommunityStatus,
    MembershipStatus,
    PostId,
    UserId,
)


class InMemoryCommunityRepository(CommunityRepository):
    """In-memory implementation of CommunityRepository for testing."""

    def __init__(self) -> None:
        self._communities: dict[CommunityId, Community] = {}
        self._posts: dict[PostId, CommunityId] = {}
        self._members: dict[tuple[CommunityId, UserId], MembershipStatus] = {}

    def add_community(
        self,
        community_id: CommunityId,
        status: CommunityStatus = CommunityStatus.ACTIVE,
        is_private: bool = False,
    ) -> Community:
        """Add or replace a community."""
        community = Community(id=community_id, status=status, is_private=is_private)
        self._communities[community_id] = community
        return community

    def add_post(self, post_id: PostId, community_id: CommunityId) -> None:
        """Register a post under a community."""
        self._posts[post_id] = community_id

    def add_member(
        self,
        community_id: CommunityId,
        user_id: UserId,
        status: MembershipStatus = MembershipStatus.ACTIVE,
    ) -> None:
        """Add or replace a membership."""
        self._members[(community_id, user_id)] = status

    async def find_post_community(self, post_id: PostId) -> Optional[PostCommunity]:
        community_id = self._posts.get(post_id)
        if community_id is None:
            return None
        community = self._communities.get(community_id)
        if community is None:
            return None
        return PostCommunity(
            post_id=post_id,
            community_id=community.id,
            community_status=community.status,
            is_private=community.is_private,
        )

    async def find_community(self, community_id: CommunityId) -> Optional[Community]:
        return self._communities.get(community_id)

    async def is_active_member(
        self, community_id: CommunityId, user_id: UserId
    ) -> bool:
        return self._members.get((community_id, user_id)) == MembershipStatus.ACTIVE
