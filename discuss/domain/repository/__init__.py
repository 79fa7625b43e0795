"""Repository interfaces.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from discuss.domain.repository.closure_path import ClosurePathRepository
from discuss.domain.repository.comment import CommentRepository
from discuss.domain.repository.community import CommunityRepository
from discuss.domain.repository.profile import ProfileRepository
from discuss.domain.repository.transaction import Transaction, TransactionManager

__all__ = [
    "ClosurePathRepository",
    "CommentRepository",
    "CommunityRepository",
    "ProfileRepository",
    "Transaction",
    "TransactionManager",
]
