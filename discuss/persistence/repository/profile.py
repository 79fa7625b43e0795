"""PostgreSQL implementation of Profile repository."""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from discuss.domain.model import AuthorProfile
from discuss.domain.repository import ProfileRepository
from discuss.domain.value import UserId
from discuss.persistence.mappers import row_to_author_profile
from discuss.persistence.tables import users_table


class PostgresProfileRepository(ProfileRepository):
    """Reads author names and pictures from the users table."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    async def find_profiles(
        self, user_ids: Sequence[UserId]
    ) -> dict[UserId, AuthorProfile]:
        """Find profiles for several users in one query."""
        if not user_ids:
            return {}
        stmt = select(
            users_table.c.id,
            users_table.c.first_name,
            users_table.c.last_name,
            users_table.c.profile_pic,
        ).where(users_table.c.id.in_(list(user_ids)))
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            rows = result.fetchall()
        profiles = [row_to_author_profile(row._asdict()) for row in rows]
        return {profile.user_id: profile for profile in profiles}
