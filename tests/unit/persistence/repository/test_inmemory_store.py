"""Unit tests for the in-memory transactional store."""

import pytest

from discuss.domain.repository import Transaction
from discuss.domain.value import CommentId, PostId, UserId
from discuss.persistence.repository.inmemory import (
    InMemoryClosurePathRepository,
    InMemoryCommentRepository,
    InMemoryDatabase,
    InMemoryTransactionManager,
)


@pytest.fixture
def database():
    return InMemoryDatabase()


@pytest.fixture
def manager(database):
    return InMemoryTransactionManager(database)


@pytest.fixture
def comments(database):
    return InMemoryCommentRepository(database)


@pytest.fixture
def paths(database):
    return InMemoryClosurePathRepository(database)


class TestTransactions:
    """Commit and rollback behaviour."""

    @pytest.mark.asyncio
    async def test_commit_on_normal_exit(self, database, manager, comments):
        # Act
        async with manager.begin() as tx:
            comment = await comments.insert(tx, PostId(1), UserId(1), "kept")

        # Assert
        assert database.comments[comment.id].text == "kept"

    @pytest.mark.asyncio
    async def test_rollback_on_exception(self, database, manager, comments, paths):
        # Act
        with pytest.raises(RuntimeError):
            async with manager.begin() as tx:
                comment = await comments.insert(tx, PostId(1), UserId(1), "lost")
                await paths.insert_self_path(tx, comment.id)
                raise RuntimeError("boom")

        # Assert
        assert database.comments == {}
        assert database.paths == {}

    @pytest.mark.asyncio
    async def test_uncommitted_writes_invisible_to_readers(
        self, manager, comments
    ):
        # Arrange
        async with manager.begin() as tx:
            comment = await comments.insert(tx, PostId(1), UserId(1), "pending")

            # Act
            async with manager.read() as reader:
                seen = await comments.find_by_id(reader, comment.id)

        # Assert
        assert seen is None

    @pytest.mark.asyncio
    async def test_ids_not_reused_after_rollback(self, manager, comments):
        # Arrange
        with pytest.raises(RuntimeError):
            async with manager.begin() as tx:
                lost = await comments.insert(tx, PostId(1), UserId(1), "lost")
                raise RuntimeError("boom")

        # Act
        async with manager.begin() as tx:
            kept = await comments.insert(tx, PostId(1), UserId(1), "kept")

        # Assert
        assert kept.id > lost.id

    @pytest.mark.asyncio
    async def test_read_handle_rejects_writes(self, manager, comments):
        async with manager.read() as tx:
            with pytest.raises(ValueError):
                await comments.insert(tx, PostId(1), UserId(1), "nope")

    @pytest.mark.asyncio
    async def test_foreign_handle_rejected(self, comments):
        class OtherTransaction(Transaction):
            pass

        with pytest.raises(TypeError):
            await comments.find_by_id(OtherTransaction(), CommentId(1))


class TestClosurePaths:
    """Closure table operations."""

    @pytest.mark.asyncio
    async def test_duplicate_self_path_rejected(self, manager, comments, paths):
        with pytest.raises(ValueError):
            async with manager.begin() as tx:
                comment = await comments.insert(tx, PostId(1), UserId(1), "x")
                await paths.insert_self_path(tx, comment.id)
                await paths.insert_self_path(tx, comment.id)

    @pytest.mark.asyncio
    async def test_child_edges_limited_to_given_roots(self, manager, comments, paths):
        # Arrange
        async with manager.begin() as tx:
            ids = []
            for text in ("r1", "c1", "r2", "c2"):
                comment = await comments.insert(tx, PostId(1), UserId(1), text)
                await paths.insert_self_path(tx, comment.id)
                ids.append(comment.id)
            r1, c1, r2, c2 = ids
            await paths.insert_ancestor_paths(tx, parent_id=r1, child_id=c1)
            await paths.insert_ancestor_paths(tx, parent_id=r2, child_id=c2)

        # Act
        async with manager.read() as tx:
            edges = await paths.find_child_edges(tx, [r1])
            roots = await comments.find_roots(tx, PostId(1), limit=10, offset=0)

        # Assert
        assert edges == [(r1, c1)]
        assert [c.id for c in roots] == [r2, r1]

    @pytest.mark.asyncio
    async def test_invalid_rows_are_ignored_by_reads(
        self, database, manager, comments, paths
    ):
        """Rows flagged invalid do not count as parent links."""
        # Arrange
        async with manager.begin() as tx:
            parent = await comments.insert(tx, PostId(1), UserId(1), "parent")
            await paths.insert_self_path(tx, parent.id)
            child = await comments.insert(tx, PostId(1), UserId(1), "child")
            await paths.insert_self_path(tx, child.id)
            await paths.insert_ancestor_paths(tx, parent_id=parent.id, child_id=child.id)
        key = (parent.id, child.id)
        database.paths = {
            **database.paths,
            key: database.paths[key].model_copy(update={"valid": False}),
        }

        # Act
        async with manager.read() as tx:
            count = await comments.count_roots(tx, PostId(1))
            descendants = await paths.find_descendant_ids(tx, parent.id)

        # Assert
        assert count == 2
        assert descendants == [parent.id]

    @pytest.mark.asyncio
    async def test_delete_touching_counts_rows(self, manager, comments, paths):
        # Arrange
        async with manager.begin() as tx:
            parent = await comments.insert(tx, PostId(1), UserId(1), "parent")
            await paths.insert_self_path(tx, parent.id)
            child = await comments.insert(tx, PostId(1), UserId(1), "child")
            await paths.insert_self_path(tx, child.id)
            await paths.insert_ancestor_paths(tx, parent_id=parent.id, child_id=child.id)

        # Act
        async with manager.begin() as tx:
            removed = await paths.delete_touching(tx, [child.id])

        # Assert
        assert removed == 2
        async with manager.read() as tx:
            assert await paths.find_descendant_ids(tx, parent.id) == [parent.id]
            assert await paths.find_ancestor_paths(tx, child.id) == []
