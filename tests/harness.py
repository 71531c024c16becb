"""Test harness for unit and E2E tests.

Integration tests assume a PostgreSQL instance reachable at DATABASE__URL.
Settings are loaded from environment variables (configure via .env or export).
"""

import functools

import pytest
import pytest_asyncio
from dishka import AsyncContainer, Provider
from fastapi.testclient import TestClient

from qa.config import Settings
from qa.interface.api.app import create_app
from qa.util.di import Component
from qa.util.jwt import create_token
from tests.di import build_test_container


def create_env_fixture(
    unmock: set[Component] | None = None,
    overrides: list[Provider] | None = None,
):
    """Factory for creating test environment fixtures.

    Creates a pytest fixture that:
    - Builds a test container with specified unmocking
    - Yields request-scoped container for service access
    - Settings loaded from environment automatically

    Args:
        unmock: Components to use real implementations for
        overrides: Providers that replace defaults (e.g. custom settings)

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        # Unit tests - everything mocked, no database needed
        unit_env = create_env_fixture()

        # Integration tests - real persistence, assumes postgres running
        integration_env = create_env_fixture(unmock={"persistence"})

        @pytest.mark.asyncio
        async def test_vote(unit_env):
            vote_service = await unit_env.get(VoteService)
            ...
    """

    @pytest_asyncio.fixture
    async def _test_environment():
        container = build_test_container(unmock=unmock or set(), overrides=overrides)

        async with container() as request_container:
            yield request_container

        await container.close()

    return _test_environment


class ApiHarness:
    """TestClient bound to an in-memory container.

    Seeding runs on the client's event loop so repository locks and data
    are shared with the requests under test.
    """

    def __init__(self, client: TestClient, container: AsyncContainer):
        self.client = client
        self.container = container

    def seed(self, func, *args, **kwargs):
        """Run an async helper from tests.conftest against the container."""
        return self.client.portal.call(
            functools.partial(func, self.container, *args, **kwargs)
        )

    def get(self, dependency):
        return self.client.portal.call(self.container.get, dependency)

    @staticmethod
    def auth(user) -> dict[str, str]:
        """Headers carrying a session cookie for the user."""
        token = create_token(str(user.id), user.name, Settings().auth)
        return {"Cookie": f"auth_token={token}"}


def create_client_fixture(overrides: list[Provider] | None = None):
    """Factory for E2E fixtures serving the API from an in-memory container.

    Usage:
        api = create_client_fixture()

        def test_health(api):
            assert api.client.get("/health").status_code == 200
    """

    @pytest.fixture
    def _api():
        container = build_test_container(overrides=overrides, http=True)
        with TestClient(create_app(container)) as client:
            yield ApiHarness(client, container)
            client.portal.call(container.close)

    return _api
