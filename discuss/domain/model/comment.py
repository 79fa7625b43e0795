"""Comment and closure path entities.

Comment threads are stored as a closure table: besides the comment row
itself, every (ancestor, descendant) pair in a post's thread has its own
ClosurePath row carrying the number of hops between them. A comment always
has a path to itself at length 0 (the self-path); a length-1 path marks its
direct parent.
"""

from datetime import datetime, timezone

from pydantic import Field

from discuss.domain.model.common import DomainModel
from discuss.domain.value import CommentId, PostId, UserId


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Comment(DomainModel):
    """Comment entity.

    A comment row carries no parent pointer; its position in the thread is
    recorded only in the closure table. Rows with valid=False are treated
    as absent by every read.
    """

    id: CommentId
    post_id: PostId
    author_id: UserId
    text: str = Field(min_length=1)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    valid: bool = True


class ClosurePath(DomainModel):
    """Reachability row between two comments of the same thread."""

    ancestor_id: CommentId
    descendant_id: CommentId
    path_length: int = Field(ge=0)
    valid: bool = True

    @property
    def is_self_path(self) -> bool:
        return self.ancestor_id == self.descendant_id and self.path_length == 0
