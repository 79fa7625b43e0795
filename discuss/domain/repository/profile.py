"""Author profile repository interface."""

from abc import ABC, abstractmethod
from typing import Sequence

from discuss.domain.model.community import AuthorProfile
from discuss.domain.value import UserId


class ProfileRepository(ABC):
    """Read access to the public profile of comment authors."""

    @abstractmethod
    async def find_profiles(
        self, user_ids: Sequence[UserId]
    ) -> dict[UserId, AuthorProfile]:
        """Find profiles for several users in one round trip.

        Users without a profile are missing from the result.
        """
        pass
