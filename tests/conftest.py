from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from asgi_lifespan import LifespanManager

from graphql_loader import load
from graphql_loader.main import create_app

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def library():
    """The aggregated fixture API under fixtures/library."""
    return load("fixtures/library")


@pytest.fixture
async def client(library):
    """Async test client with lifespan support."""
    app = create_app(library)
    async with LifespanManager(app) as manager:
        async with AsyncClient(
            transport=ASGITransport(app=manager.app),
            base_url="http://test",
        ) as ac:
            yield ac
