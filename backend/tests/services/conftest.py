"""Service test fixtures — fake gateway + FastAPI test client.

Invariants:
    - get_gateway dependency overridden: no test touches the network
    - Overrides cleared after every test
"""

import pytest
from httpx import ASGITransport, AsyncClient

from hidecod.api.dependencies import get_gateway
from hidecod.main import app
from tests.services.fake_gateway import FakeGateway


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
async def client(gateway):
    """FastAPI test client with the Admin API gateway overridden."""
    async def override_get_gateway():
        yield gateway

    app.dependency_overrides[get_gateway] = override_get_gateway
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    app.dependency_overrides.clear()
