"""In-memory closure path repository for testing."""

from typing import Sequence

from discuss.domain.model.comment import ClosurePath
from discuss.domain.repository import ClosurePathRepository, Transaction
from discuss.domain.value import CommentId

from .database import InMemoryDatabase, InMemoryTransaction, state_of


def _add(state: InMemoryTransaction, path: ClosurePath) -> None:
    key = (path.ancestor_id, path.descendant_id)
    if key in state.paths:
        # Same failure a primary key violation gives in Postgres
        raise ValueError(f"Duplicate closure path {key}")
    state.paths[key] = path


class InMemoryClosurePathRepository(ClosurePathRepository):
    """In-memory implementation of ClosurePathRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database

    async def insert_self_path(self, tx: Transaction, comment_id: CommentId) -> None:
        state = state_of(tx, write=True)
        _add(
            state,
            ClosurePath(ancestor_id=comment_id, descendant_id=comment_id, path_length=0),
        )

    async def insert_ancestor_paths(
        self, tx: Transaction, parent_id: CommentId, child_id: CommentId
    ) -> int:
        state = state_of(tx, write=True)
        ancestry = [
            path
            for path in state.paths.values()
            if path.descendant_id == parent_id and path.valid
        ]
        for path in ancestry:
            _add(
                state,
                ClosurePath(
                    ancestor_id=path.ancestor_id,
                    descendant_id=child_id,
                    path_length=path.path_length + 1,
                ),
            )
        return len(ancestry)

    async def find_ancestor_paths(
        self, tx: Transaction, descendant_id: CommentId
    ) -> list[ClosurePath]:
        paths = [
            path
            for path in state_of(tx).paths.values()
            if path.descendant_id == descendant_id and path.valid
        ]
        return sorted(paths, key=lambda p: p.path_length)

    async def find_descendant_ids(
        self, tx: Transaction, ancestor_id: CommentId
    ) -> list[CommentId]:
        paths = [
            path
            for path in state_of(tx).paths.values()
            if path.ancestor_id == ancestor_id and path.valid
        ]
        paths.sort(key=lambda p: (p.path_length, p.descendant_id))
        return [path.descendant_id for path in paths]

    async def find_child_edges(
        self, tx: Transaction, root_ids: Sequence[CommentId]
    ) -> list[tuple[CommentId, CommentId]]:
        paths = state_of(tx).paths.values()
        roots = set(root_ids)
        subtree = {
            path.descendant_id
            for path in paths
            if path.ancestor_id in roots and path.path_length > 0 and path.valid
        }
        return sorted(
            (path.ancestor_id, path.descendant_id)
            for path in paths
            if path.path_length == 1 and path.valid and path.descendant_id in subtree
        )

    async def delete_touching(
        self, tx: Transaction, comment_ids: Sequence[CommentId]
    ) -> int:
        state = state_of(tx, write=True)
        ids = set(comment_ids)
        doomed = [
            key
            for key, path in state.paths.items()
            if path.ancestor_id in ids or path.descendant_id in ids
        ]
        for key in doomed:
            del state.paths[key]
        return len(doomed)
