"""In-memory repository implementations for testing."""

from .closure_path import InMemoryClosurePathRepository
from .comment import InMemoryCommentRepository
from .community import InMemoryCommunityRepository
from .database import InMemoryDatabase, InMemoryTransaction, InMemoryTransactionManager
from .profile import InMemoryProfileRepository

__all__ = [
    "InMemoryClosurePathRepository",
    "InMemoryCommentRepository",
    "InMemoryCommunityRepository",
    "InMemoryDatabase",
    "InMemoryProfileRepository",
    "InMemoryTransaction",
    "InMemoryTransactionManager",
]
