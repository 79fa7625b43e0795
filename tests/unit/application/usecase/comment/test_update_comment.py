"""Unit tests for UpdateCommentUseCase."""

import pytest

from discuss.application.usecase.comment import (
    UpdateCommentRequest,
    UpdateCommentUseCase,
)
from discuss.domain.error import ForbiddenError
from discuss.domain.repository import CommunityRepository
from discuss.domain.service import CommentService
from discuss.persistence.repository.inmemory import InMemoryDatabase
from tests.conftest import ALICE, BOB, POST_ID, seed_post
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestUpdateCommentUseCase:
    """Tests for UpdateCommentUseCase."""

    @pytest.mark.asyncio
    async def test_update_comment_text(self, unit_env):
        """Author can update the text of their comment."""
        # Arrange
        use_case = await unit_env.get(UpdateCommentUseCase)
        service = await unit_env.get(CommentService)
        database = await unit_env.get(InMemoryDatabase)
        seed_post(await unit_env.get(CommunityRepository))
        comment_id = await service.create(ALICE, POST_ID, "Original text")

        # Act
        response = await use_case.execute(
            UpdateCommentRequest(
                comment_id=comment_id, user_id=ALICE, text="Updated text"
            )
        )

        # Assert
        assert response.comment_id == comment_id
        assert database.comments[comment_id].text == "Updated text"

    @pytest.mark.asyncio
    async def test_update_comment_unauthorized(self, unit_env):
        """Non-author cannot update a comment."""
        # Arrange
        use_case = await unit_env.get(UpdateCommentUseCase)
        service = await unit_env.get(CommentService)
        database = await unit_env.get(InMemoryDatabase)
        seed_post(await unit_env.get(CommunityRepository))
        comment_id = await service.create(ALICE, POST_ID, "Original text")

        # Act & Assert
        with pytest.raises(ForbiddenError):
            await use_case.execute(
                UpdateCommentRequest(
                    comment_id=comment_id, user_id=BOB, text="Hacked text"
                )
            )
        assert database.comments[comment_id].text == "Original text"
