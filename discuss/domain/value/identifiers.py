"""Strongly typed identifiers for domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting. All identifiers are integer
surrogate keys generated by the database.
"""

from typing import NewType

CommentId = NewType("CommentId", int)
PostId = NewType("PostId", int)
UserId = NewType("UserId", int)
CommunityId = NewType("CommunityId", int)
