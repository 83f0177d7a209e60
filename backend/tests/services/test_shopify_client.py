"""Shopify Admin Client — retry, backoff, and error mapping over httpx.MockTransport.

Tests cover:
    - success returns the GraphQL data object and sends auth header
    - 429 retried honoring Retry-After; exhausted → rate_limit error
    - 5xx retried then succeeds; exhausted → connection_error
    - 4xx fails immediately
    - top-level GraphQL errors → graphql_error
    - connection errors retried

Design Decisions:
    - asyncio.sleep patched to a no-op recorder: delays asserted, not waited
"""

import httpx
import pytest

from hidecod.core.errors import ErrorContext, ShopifyAPIError
from hidecod.infrastructure.shopify_client import ShopifyAdminClient


@pytest.fixture
def sleeps(monkeypatch):
    recorded: list[float] = []

    async def _fake_sleep(seconds):
        recorded.append(seconds)

    monkeypatch.setattr(
        "hidecod.infrastructure.shopify_client.asyncio.sleep", _fake_sleep,
    )
    return recorded


def _client(handler, max_retries: int = 2) -> ShopifyAdminClient:
    return ShopifyAdminClient(
        "test-shop.myshopify.com", "shpat_x",
        api_version="2025-07", max_retries=max_retries,
        base_delay_ms=100, max_delay_ms=1000,
        transport=httpx.MockTransport(handler),
    )


def _sequence(*responses):
    """Handler replaying responses in order; records requests."""
    requests = []
    queue = list(responses)

    def handler(request: httpx.Request):
        requests.append(request)
        item = queue.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    handler.requests = requests
    return handler


async def test_execute_returns_data(sleeps):
    handler = _sequence(httpx.Response(200, json={"data": {"shop": {"name": "x"}}}))
    client = _client(handler)
    assert await client.execute("query { shop { name } }") == {"shop": {"name": "x"}}
    request = handler.requests[0]
    assert request.url.path == "/admin/api/2025-07/graphql.json"
    assert request.headers["X-Shopify-Access-Token"] == "shpat_x"
    assert sleeps == []
    await client.aclose()


async def test_rate_limit_respects_retry_after(sleeps):
    handler = _sequence(
        httpx.Response(429, headers={"Retry-After": "2"}),
        httpx.Response(200, json={"data": {"ok": True}}),
    )
    client = _client(handler)
    assert await client.execute("query { ok }") == {"ok": True}
    assert sleeps == [2.0]


async def test_rate_limit_exhausted(sleeps):
    handler = _sequence(*[httpx.Response(429) for _ in range(3)])
    client = _client(handler, max_retries=2)
    with pytest.raises(ShopifyAPIError) as exc_info:
        await client.execute("query { ok }")
    assert exc_info.value.api_error_type == "rate_limit"
    assert len(sleeps) == 2


async def test_server_error_retried_then_succeeds(sleeps):
    handler = _sequence(
        httpx.Response(502),
        httpx.Response(200, json={"data": {"ok": True}}),
    )
    client = _client(handler)
    assert await client.execute("query { ok }") == {"ok": True}
    assert len(sleeps) == 1
    assert 0.075 <= sleeps[0] <= 0.125


async def test_server_error_exhausted(sleeps):
    handler = _sequence(*[httpx.Response(503) for _ in range(3)])
    client = _client(handler, max_retries=2)
    with pytest.raises(ShopifyAPIError) as exc_info:
        await client.execute("query { ok }")
    assert exc_info.value.api_error_type == "connection_error"
    assert exc_info.value.http_status == 503


async def test_client_error_not_retried(sleeps):
    handler = _sequence(httpx.Response(401, text="Invalid API key"))
    client = _client(handler)
    with pytest.raises(ShopifyAPIError) as exc_info:
        await client.execute("query { ok }")
    assert exc_info.value.api_error_type == "client_error"
    assert len(handler.requests) == 1
    assert sleeps == []


async def test_graphql_errors_raise(sleeps):
    handler = _sequence(httpx.Response(
        200, json={"errors": [{"message": "Field 'x' doesn't exist"}]},
    ))
    client = _client(handler)
    with pytest.raises(ShopifyAPIError) as exc_info:
        await client.execute("query { x }")
    assert exc_info.value.api_error_type == "graphql_error"
    assert "doesn't exist" in exc_info.value.message


async def test_connection_error_retried(sleeps):
    handler = _sequence(
        httpx.ConnectError("refused"),
        httpx.Response(200, json={"data": {"ok": True}}),
    )
    client = _client(handler)
    assert await client.execute("query { ok }") == {"ok": True}
    assert len(sleeps) == 1


async def test_missing_data_is_empty(sleeps):
    handler = _sequence(httpx.Response(200, json={"data": None}))
    assert await _client(handler).execute("query { ok }") == {}


async def test_error_carries_caller_context(sleeps):
    handler = _sequence(httpx.Response(400, text="bad"))
    context = ErrorContext(
        customization_id="gid://shopify/PaymentCustomization/9", operation="read",
    )
    with pytest.raises(ShopifyAPIError) as exc_info:
        await _client(handler).execute("query { x }", context=context)
    assert exc_info.value.context is context
    assert exc_info.value.to_response()["error"]["context"]["operation"] == "read"
