"""Unit tests for PathMaintainer."""

import pytest

from discuss.domain.repository import (
    ClosurePathRepository,
    CommentRepository,
    CommunityRepository,
    TransactionManager,
)
from discuss.domain.service import CommentService, PathMaintainer
from discuss.domain.value import CommentId
from discuss.persistence.repository.inmemory import InMemoryDatabase
from tests.conftest import ALICE, POST_ID, build_thread, seed_post
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestClosureInvariants:
    """Closure rows written by attach."""

    @pytest.mark.asyncio
    async def test_every_comment_has_one_self_path(self, unit_env):
        # Arrange
        service = await unit_env.get(CommentService)
        database = await unit_env.get(InMemoryDatabase)
        seed_post(await unit_env.get(CommunityRepository))

        # Act
        ids = await build_thread(service)

        # Assert
        for comment_id in ids.values():
            self_paths = [
                p
                for p in database.paths.values()
                if p.ancestor_id == comment_id and p.descendant_id == comment_id
            ]
            assert len(self_paths) == 1
            assert self_paths[0].path_length == 0
            assert self_paths[0].is_self_path

    @pytest.mark.asyncio
    async def test_ancestors_are_propagated(self, unit_env):
        """The deepest comment is linked to every ancestor by distance."""
        # Arrange
        service = await unit_env.get(CommentService)
        closure_repo = await unit_env.get(ClosurePathRepository)
        manager = await unit_env.get(TransactionManager)
        seed_post(await unit_env.get(CommunityRepository))
        ids = await build_thread(service)

        # Act
        async with manager.read() as tx:
            paths = await closure_repo.find_ancestor_paths(tx, ids["a1x"])

        # Assert
        assert [(p.ancestor_id, p.path_length) for p in paths] == [
            (ids["a1x"], 0),
            (ids["a1"], 1),
            (ids["a"], 2),
            (ids["root"], 3),
        ]

    @pytest.mark.asyncio
    async def test_child_copies_parent_ancestry_plus_one(self, unit_env):
        """For every (x, parent, L) there is (x, child, L + 1)."""
        # Arrange
        service = await unit_env.get(CommentService)
        database = await unit_env.get(InMemoryDatabase)
        seed_post(await unit_env.get(CommunityRepository))
        ids = await build_thread(service)
        parent_of = {
            ids["a"]: ids["root"],
            ids["b"]: ids["root"],
            ids["a1"]: ids["a"],
            ids["a1x"]: ids["a1"],
        }

        # Assert
        rows = {
            (p.ancestor_id, p.descendant_id): p.path_length
            for p in database.paths.values()
        }
        for child, parent in parent_of.items():
            for (ancestor, descendant), length in list(rows.items()):
                if descendant == parent:
                    assert rows[(ancestor, child)] == length + 1

    @pytest.mark.asyncio
    async def test_attach_to_parent_without_paths(self, unit_env):
        """A parent with no closure rows contributes nothing."""
        # Arrange
        maintainer = await unit_env.get(PathMaintainer)
        comment_repo = await unit_env.get(CommentRepository)
        manager = await unit_env.get(TransactionManager)
        database = await unit_env.get(InMemoryDatabase)

        # Act
        async with manager.begin() as tx:
            comment = await comment_repo.insert(tx, POST_ID, ALICE, "orphan")
            written = await maintainer.attach(tx, comment.id, CommentId(999))

        # Assert
        assert written == 0
        assert list(database.paths) == [(comment.id, comment.id)]


class TestRemoveSubtree:
    """Tests for collect_subtree and remove_subtree."""

    @pytest.mark.asyncio
    async def test_collect_subtree_starts_with_itself(self, unit_env):
        # Arrange
        service = await unit_env.get(CommentService)
        maintainer = await unit_env.get(PathMaintainer)
        manager = await unit_env.get(TransactionManager)
        seed_post(await unit_env.get(CommunityRepository))
        ids = await build_thread(service)

        # Act
        async with manager.read() as tx:
            subtree = await maintainer.collect_subtree(tx, ids["root"])

        # Assert
        assert subtree[0] == ids["root"]
        assert set(subtree) == set(ids.values())

    @pytest.mark.asyncio
    async def test_remove_missing_subtree_is_noop(self, unit_env):
        """A subtree that is already gone removes nothing."""
        # Arrange
        maintainer = await unit_env.get(PathMaintainer)
        manager = await unit_env.get(TransactionManager)

        # Act
        async with manager.begin() as tx:
            removed = await maintainer.remove_subtree(tx, CommentId(31337))

        # Assert
        assert removed == []

    @pytest.mark.asyncio
    async def test_remove_leaf(self, unit_env):
        """Removing a leaf drops its self-path and its ancestor rows."""
        # Arrange
        service = await unit_env.get(CommentService)
        maintainer = await unit_env.get(PathMaintainer)
        manager = await unit_env.get(TransactionManager)
        database = await unit_env.get(InMemoryDatabase)
        seed_post(await unit_env.get(CommunityRepository))
        ids = await build_thread(service)
        paths_before = len(database.paths)

        # Act
        async with manager.begin() as tx:
            removed = await maintainer.remove_subtree(tx, ids["a1x"])

        # Assert
        assert removed == [ids["a1x"]]
        # a1x had a self-path and three ancestors
        assert len(database.paths) == paths_before - 4
        assert ids["a1x"] not in database.comments


class TestDepth:
    """Thread levels read from the closure table."""

    @pytest.mark.asyncio
    async def test_depth_counts_levels_from_root(self, unit_env):
        # Arrange
        service = await unit_env.get(CommentService)
        maintainer = await unit_env.get(PathMaintainer)
        manager = await unit_env.get(TransactionManager)
        seed_post(await unit_env.get(CommunityRepository))
        ids = await build_thread(service)

        # Act
        async with manager.read() as tx:
            depths = {
                name: await maintainer.depth_of(tx, comment_id)
                for name, comment_id in ids.items()
            }
            unknown = await maintainer.depth_of(tx, CommentId(31337))

        # Assert
        assert depths == {"root": 1, "a": 2, "a1": 3, "a1x": 4, "b": 2}
        assert unknown == 0
