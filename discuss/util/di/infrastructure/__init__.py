"""Infrastructure providers."""

# Import bases
from .community import CommunityProvider
from .persistence import PersistenceProvider

# Import implementations (needed for __subclasses__())
from .community import ProdCommunityProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401

__all__ = [
    "CommunityProvider",
    "PersistenceProvider",
    "ProdCommunityProvider",
    "ProdPersistenceProvider",
]
