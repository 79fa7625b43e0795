"""Assembled comment tree returned by the read path."""

from dataclasses import dataclass, field
from datetime import datetime

from discuss.domain.value import CommentId, PostId, UserId


@dataclass(frozen=True)
class CommentNode:
    """Node in an assembled comment thread.

    Children are fully built before the node itself is constructed, so a
    node's children list is set exactly once.
    """

    comment_id: CommentId
    post_id: PostId
    user_id: UserId
    text: str
    created_at: datetime
    updated_at: datetime
    parent_id: CommentId | None
    children: list["CommentNode"] = field(default_factory=list)
    display_name: str | None = None
    profile_pic: str | None = None

    @property
    def children_count(self) -> int:
        return len(self.children)


@dataclass(frozen=True)
class CommentPage:
    """One page of root comments with their threads."""

    comments: list[CommentNode]
    total: int
    has_more: bool
