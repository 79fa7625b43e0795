"""Domain model entities."""

from discuss.domain.model.comment import ClosurePath, Comment
from discuss.domain.model.community import AuthorProfile, Community, PostCommunity
from discuss.domain.model.tree import CommentNode, CommentPage

__all__ = [
    "AuthorProfile",
    "ClosurePath",
    "Comment",
    "CommentNode",
    "CommentPage",
    "Community",
    "PostCommunity",
]
