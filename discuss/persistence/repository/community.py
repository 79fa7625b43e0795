"""PostgreSQL implementation of Community repository."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from discuss.domain.model import Community, PostCommunity
from discuss.domain.repository import CommunityRepository
from discuss.domain.value import CommunityId, MembershipStatus, PostId, UserId
from discuss.persistence.mappers import row_to_community, row_to_post_community
from discuss.persistence.tables import (
    communities_table,
    community_members_table,
    community_posts_table,
)


class PostgresCommunityRepository(CommunityRepository):
    """PostgreSQL implementation of CommunityRepository.

    Each lookup checks out its own session; none of them join a comment
    transaction.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Initialize repository with a session factory.

        Args:
            session_factory: Factory for short-lived read sessions
        """
        self.session_factory = session_factory

    async def find_post_community(self, post_id: PostId) -> Optional[PostCommunity]:
        """Find the community owning a valid post."""
        stmt = (
            select(
                community_posts_table.c.id.label("post_id"),
                community_posts_table.c.community_id,
                communities_table.c.status,
                communities_table.c.is_private,
            )
            .select_from(
                community_posts_table.join(
                    communities_table,
                    community_posts_table.c.community_id == communities_table.c.id,
                )
            )
            .where(community_posts_table.c.id == post_id)
            .where(community_posts_table.c.valid.is_(True))
            .where(communities_table.c.valid.is_(True))
        )
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            row = result.fetchone()
        return row_to_post_community(row._asdict()) if row else None

    async def find_community(self, community_id: CommunityId) -> Optional[Community]:
        """Find a valid community by ID."""
        stmt = (
            select(communities_table)
            .where(communities_table.c.id == community_id)
            .where(communities_table.c.valid.is_(True))
        )
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            row = result.fetchone()
        return row_to_community(row._asdict()) if row else None

    async def is_active_member(
        self, community_id: CommunityId, user_id: UserId
    ) -> bool:
        """Check for a valid, active membership row."""
        stmt = (
            select(community_members_table.c.user_id)
            .where(community_members_table.c.community_id == community_id)
            .where(community_members_table.c.user_id == user_id)
            .where(community_members_table.c.status == MembershipStatus.ACTIVE.value)
            .where(community_members_table.c.valid.is_(True))
        )
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return result.fetchone() is not None
