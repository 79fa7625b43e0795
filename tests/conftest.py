"""Test configuration and helpers."""

from discuss.domain.repository import CommunityRepository
from discuss.domain.service import CommentService
from discuss.domain.value import (
    CommentId,
    CommunityId,
    CommunityStatus,
    PostId,
    UserId,
)

POST_ID = PostId(100)
COMMUNITY_ID = CommunityId(10)
ALICE = UserId(1)
BOB = UserId(2)


def seed_post(
    community_repo: CommunityRepository,
    post_id: PostId = POST_ID,
    community_id: CommunityId = COMMUNITY_ID,
    status: CommunityStatus = CommunityStatus.ACTIVE,
    is_private: bool = False,
) -> PostId:
    """Register a post under a community in the in-memory community store.

    Args:
        community_repo: InMemoryCommunityRepository from the test container
        post_id: Post to register
        community_id: Owning community, created or replaced
        status: Community status
        is_private: Whether the community is private

    Returns:
        The post ID
    """
    community_repo.add_community(community_id, status=status, is_private=is_private)
    community_repo.add_post(post_id, community_id)
    return post_id


async def build_thread(
    service: CommentService, post_id: PostId = POST_ID, user_id: UserId = ALICE
) -> dict[str, CommentId]:
    """Create a small thread and return its IDs by name.

    Shape:
        root
        ├── a
        │   └── a1
        │       └── a1x
        └── b
    """
    root = await service.create(user_id, post_id, "root")
    a = await service.create(user_id, post_id, "a", parent_id=root)
    b = await service.create(user_id, post_id, "b", parent_id=root)
    a1 = await service.create(user_id, post_id, "a1", parent_id=a)
    a1x = await service.create(user_id, post_id, "a1x", parent_id=a1)
    return {"root": root, "a": a, "b": b, "a1": a1, "a1x": a1x}
