"""PostgreSQL repository implementations."""

from discuss.persistence.repository.closure_path import PostgresClosurePathRepository
from discuss.persistence.repository.comment import PostgresCommentRepository
from discuss.persistence.repository.community import PostgresCommunityRepository
from discuss.persistence.repository.profile import PostgresProfileRepository

__all__ = [
    "PostgresClosurePathRepository",
    "PostgresCommentRepository",
    "PostgresCommunityRepository",
    "PostgresProfileRepository",
]
