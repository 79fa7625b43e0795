"""Community infrastructure providers."""

from dishka import Scope, provide
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from discuss.domain.repository import CommunityRepository
from discuss.persistence.repository import PostgresCommunityRepository
from discuss.util.di.base import ProviderBase


class CommunityProvider(ProviderBase):
    """Community component base.

    Supplies the community tables the default permission policy reads.
    """

    __mock_component__ = "community"
    __depends_on__ = {"persistence"}


class ProdCommunityProvider(CommunityProvider):
    """Production community provider reading the community tables."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_community_repository(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> CommunityRepository:
        """Provide Community repository."""
        return PostgresCommunityRepository(session_factory)
