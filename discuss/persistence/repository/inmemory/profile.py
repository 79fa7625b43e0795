"""In-memory profile repository for testing."""

from typing import Sequence

from discuss.domain.model import AuthorProfile
from discuss.domain.repository import ProfileRepository
from discuss.domain.value import UserId
from discuss.persistence.mappers import display_name_of


class InMemoryProfileRepository(ProfileRepository):
    """In-memory implementation of ProfileRepository for testing."""

    def __init__(self) -> None:
        self._profiles: dict[UserId, AuthorProfile] = {}

    def add_profile(
        self,
        user_id: UserId,
        first_name: str | None = None,
        last_name: str | None = None,
        profile_pic: str | None = None,
    ) -> AuthorProfile:
        """Add or replace a user's profile."""
        profile = AuthorProfile(
            user_id=user_id,
            display_name=display_name_of(first_name, last_name),
            profile_pic=profile_pic,
        )
        self._profiles[user_id] = profile
        return profile

    async def find_profiles(
        self, user_ids: Sequence[UserId]
    ) -> dict[UserId, AuthorProfile]:
        return {uid: self._profiles[uid] for uid in user_ids if uid in self._profiles}
