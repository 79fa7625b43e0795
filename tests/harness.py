"""Test environments for unit, integration and E2E tests.

Integration environments assume PostgreSQL is reachable at DATABASE__URL
with migrations applied (python scripts/run_migrations.py).
"""

import pytest_asyncio

from discuss.util.di import Component
from tests.di import build_test_container


def create_env_fixture(unmock: set[Component] | None = None):
    """Make a fixture yielding a request-scoped container.

    Each test gets its own container, so in-memory comment and community
    data never leaks between tests. The container is closed afterwards,
    which disposes the engine in integration runs.

    Args:
        unmock: Components to run against their production implementation

    Usage:
        unit_env = create_env_fixture()

        @pytest.mark.asyncio
        async def test_reply(unit_env):
            service = await unit_env.get(CommentService)
    """

    @pytest_asyncio.fixture
    async def _env():
        container = build_test_container(unmock=unmock)
        async with container() as request_container:
            yield request_container
        await container.close()

    return _env
