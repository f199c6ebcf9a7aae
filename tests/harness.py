"""Test harness for unit and integration tests.

Integration tests assume a PostgreSQL instance is reachable at the
configured DATABASE__URL with migrations applied.
"""

import pytest_asyncio

from sapp.util.di import Component
from tests.di import build_test_container


def create_env_fixture(unmock: set[Component] | None = None):
    """Factory for creating test environment fixtures.

    Creates a pytest fixture that:
    - Builds a test container with specified unmocking
    - Yields request-scoped container for service access
    - Settings loaded from environment automatically

    Args:
        unmock: Components to use real implementations for

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        # Unit tests - everything mocked, no database needed
        unit_env = create_env_fixture()

        # Integration tests - real persistence, assumes postgres running
        integration_env = create_env_fixture(unmock={"persistence"})

        @pytest.mark.asyncio
        async def test_add_content(unit_env):
            service = await unit_env.get(LearningPathService)
            ...
    """

    @pytest_asyncio.fixture
    async def _test_environment():
        container = build_test_container(unmock=unmock or set())

        # One request scope per test: one transaction, fresh in-memory repos
        async with container() as request_container:
            yield request_container

        await container.close()

    return _test_environment
