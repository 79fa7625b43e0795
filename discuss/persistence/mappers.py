"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict

from discuss.domain.model import (
    AuthorProfile,
    ClosurePath,
    Comment,
    Community,
    PostCommunity,
)
from discuss.domain.value import (
    CommentId,
    CommunityId,
    CommunityStatus,
    PostId,
    UserId,
)


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    return Comment(
        id=CommentId(row["id"]),
        post_id=PostId(row["post_id"]),
        author_id=UserId(row["author_id"]),
        text=row["text"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        valid=row.get("valid", True),
    )


def row_to_closure_path(row: Dict[str, Any]) -> ClosurePath:
    """Convert database row to ClosurePath domain model."""
    return ClosurePath(
        ancestor_id=CommentId(row["ancestor_id"]),
        descendant_id=CommentId(row["descendant_id"]),
        path_length=row["path_length"],
        valid=row.get("valid", True),
    )


def parse_community_status(value: str | None) -> CommunityStatus:
    """Map a stored status string to CommunityStatus.

    Unknown values are treated as inactive so they never accept writes.
    """
    try:
        return CommunityStatus((value or "").lower())
    except ValueError:
        return CommunityStatus.INACTIVE


def row_to_community(row: Dict[str, Any]) -> Community:
    """Convert database row to Community domain model."""
    return Community(
        id=CommunityId(row["id"]),
        status=parse_community_status(row["status"]),
        is_private=bool(row["is_private"]),
    )


def row_to_post_community(row: Dict[str, Any]) -> PostCommunity:
    """Convert a joined post/community row to PostCommunity.

    Args:
        row: Row with post_id, community_id, status and is_private columns

    Returns:
        PostCommunity read model
    """
    return PostCommunity(
        post_id=PostId(row["post_id"]),
        community_id=CommunityId(row["community_id"]),
        community_status=parse_community_status(row["status"]),
        is_private=bool(row["is_private"]),
    )


def display_name_of(first_name: str | None, last_name: str | None) -> str | None:
    """Join first and last name, skipping blanks."""
    parts = [p.strip() for p in (first_name, last_name) if p and p.strip()]
    return " ".join(parts) if parts else None


def row_to_author_profile(row: Dict[str, Any]) -> AuthorProfile:
    """Convert a users row to AuthorProfile."""
    return AuthorProfile(
        user_id=UserId(row["id"]),
        display_name=display_name_of(row.get("first_name"), row.get("last_name")),
        profile_pic=row.get("profile_pic"),
    )
