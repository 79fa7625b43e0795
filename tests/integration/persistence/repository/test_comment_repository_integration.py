"""Integration tests for the PostgreSQL comment stores.

Run against a migrated database:

    DISCUSS_INTEGRATION=1 DATABASE__URL=postgresql+asyncpg://... pytest -m integration
"""

import os
import uuid

import pytest
from sqlalchemy import insert
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from discuss.domain.error import InternalError
from discuss.domain.repository import (
    ClosurePathRepository,
    CommentRepository,
    TransactionManager,
)
from discuss.domain.service import CommentService
from discuss.domain.value import CommunityId, PostId, UserId
from discuss.persistence.tables import communities_table, community_posts_table
from tests.harness import create_env_fixture

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(
        os.environ.get("DISCUSS_INTEGRATION") != "1",
        reason="set DISCUSS_INTEGRATION=1 to run against PostgreSQL",
    ),
]

# Integration test fixture
integration_env = create_env_fixture(unmock={"persistence", "community"})

AUTHOR = UserId(1)


async def create_post(env) -> PostId:
    """Insert a fresh community and post, returning the post ID."""
    session_factory = await env.get(async_sessionmaker[AsyncSession])
    async with session_factory() as session:
        async with session.begin():
            community_id = (
                await session.execute(
                    insert(communities_table)
                    .values(name=f"test-{uuid.uuid4()}")
                    .returning(communities_table.c.id)
                )
            ).scalar_one()
            post_id = (
                await session.execute(
                    insert(community_posts_table)
                    .values(community_id=CommunityId(community_id), author_id=AUTHOR)
                    .returning(community_posts_table.c.id)
                )
            ).scalar_one()
    return PostId(post_id)


class TestCommentStoresIntegration:
    """Closure maintenance and thread reads against PostgreSQL."""

    @pytest.mark.asyncio
    async def test_thread_round_trip(self, integration_env):
        # Arrange
        service = await integration_env.get(CommentService)
        post_id = await create_post(integration_env)

        # Act
        root = await service.create(AUTHOR, post_id, "root")
        reply = await service.create(AUTHOR, post_id, "reply", parent_id=root)
        nested = await service.create(AUTHOR, post_id, "nested", parent_id=reply)
        page = await service.list_for_post(post_id)

        # Assert
        assert page.total == 1
        assert not page.has_more
        [node] = page.comments
        assert node.comment_id == root
        assert node.children[0].comment_id == reply
        assert node.children[0].children[0].comment_id == nested

    @pytest.mark.asyncio
    async def test_ancestor_paths_written_by_insert_select(self, integration_env):
        # Arrange
        service = await integration_env.get(CommentService)
        closure_repo = await integration_env.get(ClosurePathRepository)
        manager = await integration_env.get(TransactionManager)
        post_id = await create_post(integration_env)
        root = await service.create(AUTHOR, post_id, "root")
        reply = await service.create(AUTHOR, post_id, "reply", parent_id=root)
        nested = await service.create(AUTHOR, post_id, "nested", parent_id=reply)

        # Act
        async with manager.read() as tx:
            paths = await closure_repo.find_ancestor_paths(tx, nested)

        # Assert
        assert [(p.ancestor_id, p.path_length) for p in paths] == [
            (nested, 0),
            (reply, 1),
            (root, 2),
        ]

    @pytest.mark.asyncio
    async def test_hard_delete_removes_subtree(self, integration_env):
        # Arrange
        service = await integration_env.get(CommentService)
        comment_repo = await integration_env.get(CommentRepository)
        manager = await integration_env.get(TransactionManager)
        post_id = await create_post(integration_env)
        root = await service.create(AUTHOR, post_id, "root")
        reply = await service.create(AUTHOR, post_id, "reply", parent_id=root)
        sibling = await service.create(AUTHOR, post_id, "sibling")

        # Act
        deleted = await service.hard_delete(AUTHOR, root)

        # Assert
        assert deleted == [root, reply]
        async with manager.read() as tx:
            remaining = await comment_repo.find_by_ids(tx, [root, reply, sibling])
        assert [c.id for c in remaining] == [sibling]

    @pytest.mark.asyncio
    async def test_failed_create_rolls_back(self, integration_env, monkeypatch):
        """A failure after the comment row is written leaves nothing behind."""
        # Arrange
        service = await integration_env.get(CommentService)
        post_id = await create_post(integration_env)

        async def fail(*args, **kwargs):
            raise RuntimeError("closure write failed")

        monkeypatch.setattr(service.path_maintainer, "attach", fail)

        # Act
        with pytest.raises(InternalError):
            await service.create(AUTHOR, post_id, "doomed")

        # Assert
        page = await service.list_for_post(post_id)
        assert page.total == 0
