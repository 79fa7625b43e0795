"""Read models owned by the community and user modules.

The comment engine never writes these; it only asks about them.
"""

from typing import Optional

from discuss.domain.model.common import DomainModel
from discuss.domain.value import CommunityId, CommunityStatus, PostId, UserId


class Community(DomainModel):
    """Community a post belongs to."""

    id: CommunityId
    status: CommunityStatus
    is_private: bool = False

    @property
    def is_active(self) -> bool:
        return self.status == CommunityStatus.ACTIVE


class PostCommunity(DomainModel):
    """Answer of a post lookup: which community owns the post and its state."""

    post_id: PostId
    community_id: CommunityId
    community_status: CommunityStatus
    is_private: bool = False

    @property
    def is_active(self) -> bool:
        return self.community_status == CommunityStatus.ACTIVE


class AuthorProfile(DomainModel):
    """Public profile details rendered next to a comment."""

    user_id: UserId
    display_name: Optional[str] = None
    profile_pic: Optional[str] = None
