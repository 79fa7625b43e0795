"""Unit tests for the SQL the PostgreSQL repositories emit.

Statements are captured by a recording session and compiled with the
PostgreSQL dialect, so no database is needed.
"""

import pytest
from sqlalchemy.dialects import postgresql

from discuss.domain.repository import Transaction
from discuss.domain.value import CommentId, PostId, UserId
from discuss.persistence.database import PostgresTransaction, session_of
from discuss.persistence.repository import (
    PostgresClosurePathRepository,
    PostgresCommentRepository,
)


class FakeResult:
    def __init__(self, rowcount: int = 0) -> None:
        self.rowcount = rowcount

    def fetchone(self):
        return None

    def fetchall(self):
        return []

    def scalar(self):
        return 0

    def scalars(self):
        return self

    def all(self):
        return []


class RecordingSession:
    """Stands in for AsyncSession and remembers executed statements."""

    def __init__(self, rowcount: int = 0) -> None:
        self.statements = []
        self.rowcount = rowcount

    async def execute(self, stmt):
        self.statements.append(stmt)
        return FakeResult(self.rowcount)

    def sql(self, index: int = -1) -> str:
        compiled = self.statements[index].compile(dialect=postgresql.dialect())
        return " ".join(str(compiled).split())


def write_tx(session: RecordingSession) -> PostgresTransaction:
    return PostgresTransaction(session, writable=True)  # type: ignore[arg-type]


def read_tx(session: RecordingSession) -> PostgresTransaction:
    return PostgresTransaction(session, writable=False)  # type: ignore[arg-type]


class TestSessionOf:
    def test_returns_session(self):
        session = RecordingSession()
        assert session_of(write_tx(session), write=True) is session

    def test_read_handle_rejects_writes(self):
        with pytest.raises(ValueError):
            session_of(read_tx(RecordingSession()), write=True)

    def test_foreign_handle_rejected(self):
        class OtherTransaction(Transaction):
            pass

        with pytest.raises(TypeError):
            session_of(OtherTransaction())


class TestClosurePathStatements:
    """Statements issued by PostgresClosurePathRepository."""

    @pytest.mark.asyncio
    async def test_ancestor_paths_copied_in_one_statement(self):
        # Arrange
        session = RecordingSession(rowcount=3)
        repo = PostgresClosurePathRepository()

        # Act
        written = await repo.insert_ancestor_paths(
            write_tx(session), parent_id=CommentId(1), child_id=CommentId(2)
        )

        # Assert
        assert written == 3
        assert len(session.statements) == 1
        sql = session.sql()
        assert sql.startswith(
            "INSERT INTO comment_paths (ancestor_id, descendant_id, path_length, valid) SELECT"
        )
        assert "comment_paths.path_length + " in sql
        assert "WHERE comment_paths.descendant_id = " in sql

    @pytest.mark.asyncio
    async def test_child_edges_use_subtree_subquery(self):
        # Arrange
        session = RecordingSession()
        repo = PostgresClosurePathRepository()

        # Act
        await repo.find_child_edges(read_tx(session), [CommentId(1), CommentId(2)])

        # Assert
        sql = session.sql()
        assert "comment_paths AS nested" in sql
        assert "nested.path_length > " in sql
        assert "comment_paths.path_length = " in sql

    @pytest.mark.asyncio
    async def test_empty_id_lists_skip_the_database(self):
        session = RecordingSession()
        repo = PostgresClosurePathRepository()

        assert await repo.find_child_edges(read_tx(session), []) == []
        assert await repo.delete_touching(write_tx(session), []) == 0
        assert session.statements == []

    @pytest.mark.asyncio
    async def test_delete_touching_matches_either_end(self):
        # Arrange
        session = RecordingSession(rowcount=4)
        repo = PostgresClosurePathRepository()

        # Act
        removed = await repo.delete_touching(write_tx(session), [CommentId(5)])

        # Assert
        assert removed == 4
        sql = session.sql()
        assert sql.startswith("DELETE FROM comment_paths")
        assert "comment_paths.ancestor_id IN" in sql
        assert " OR comment_paths.descendant_id IN" in sql

    @pytest.mark.asyncio
    async def test_writes_rejected_on_read_handle(self):
        repo = PostgresClosurePathRepository()
        with pytest.raises(ValueError):
            await repo.insert_self_path(read_tx(RecordingSession()), CommentId(1))


class TestCommentStatements:
    """Statements issued by PostgresCommentRepository."""

    @pytest.mark.asyncio
    async def test_roots_exclude_comments_with_a_parent_edge(self):
        # Arrange
        session = RecordingSession()
        repo = PostgresCommentRepository()

        # Act
        roots = await repo.find_roots(read_tx(session), PostId(1), limit=10, offset=20)

        # Assert
        assert roots == []
        sql = session.sql()
        assert "EXISTS (SELECT comment_paths.descendant_id" in sql
        assert "NOT " in sql
        assert "comment_paths.descendant_id = comments.id" in sql
        assert "ORDER BY comments.created_at DESC, comments.id DESC" in sql
        assert "LIMIT" in sql and "OFFSET" in sql

    @pytest.mark.asyncio
    async def test_count_roots_uses_same_filter(self):
        session = RecordingSession()
        repo = PostgresCommentRepository()

        assert await repo.count_roots(read_tx(session), PostId(1)) == 0
        sql = session.sql()
        assert sql.startswith("SELECT count(*)")
        assert "NOT " in sql and "EXISTS (SELECT" in sql

    @pytest.mark.asyncio
    async def test_update_scoped_to_author(self):
        # Arrange
        session = RecordingSession()
        repo = PostgresCommentRepository()

        # Act
        updated = await repo.update_text(
            write_tx(session), CommentId(1), UserId(2), "edited"
        )

        # Assert
        assert updated is None
        sql = session.sql()
        assert sql.startswith("UPDATE comments SET")
        assert "updated_at=now()" in sql
        assert "comments.author_id = " in sql
        assert "RETURNING" in sql

    @pytest.mark.asyncio
    async def test_delete_many_reports_rowcount(self):
        session = RecordingSession(rowcount=2)
        repo = PostgresCommentRepository()

        removed = await repo.delete_many(write_tx(session), [CommentId(1), CommentId(2)])

        assert removed == 2
        assert session.sql().startswith("DELETE FROM comments WHERE comments.id IN")
