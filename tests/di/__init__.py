"""Mock providers for testing."""

from .community import MockCommunityProvider
from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "MockCommunityProvider",
    "MockPersistenceProvider",
    "build_test_container",
]
