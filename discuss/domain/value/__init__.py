"""Domain value objects."""

from discuss.domain.value.identifiers import CommentId, CommunityId, PostId, UserId
from discuss.domain.value.types import CommunityStatus, MembershipStatus

__all__ = [
    # Identifiers
    "CommentId",
    "CommunityId",
    "PostId",
    "UserId",
    # Types
    "CommunityStatus",
    "MembershipStatus",
]
