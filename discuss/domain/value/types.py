"""Domain value types."""

from enum import Enum


class CommunityStatus(str, Enum):
    """Lifecycle status of a community.

    Only active communities accept new comments or edits.
    """

    ACTIVE = "active"
    INACTIVE = "inactive"
    ARCHIVED = "archived"


class MembershipStatus(str, Enum):
    """Status of a user's membership in a community."""

    ACTIVE = "active"
    PENDING = "pending"
    BANNED = "banned"
