"""Resilient Shopify Admin Client — GraphQL over httpx with retry, backoff, and error mapping.

Invariants:
    - Rate limits (429): backoff, respects Retry-After header
    - Transient errors (5xx, connection, timeout): max_retries with exponential backoff
    - Client errors (4xx except 429): immediate failure, no retry
    - Top-level GraphQL `errors` are failures; mutation userErrors are NOT (callers
      inspect those per operation)
    - All failures mapped to ShopifyAPIError (core/errors.py)

Design Decisions:
    - Wrapper over raw httpx client: isolates retry logic from services
    - ±25% jitter on backoff: spreads retries across concurrent admin requests
    - transport injectable: tests use httpx.MockTransport, no network
"""

import asyncio
import random
import logging

import httpx

from hidecod.core.errors import ShopifyAPIError, ErrorContext

logger = logging.getLogger(__name__)

_RATE_LIMITED = 429


class ShopifyAdminClient:
    """Implements PaymentCustomizationGateway against the Admin GraphQL API."""

    def __init__(
        self,
        shop_domain: str,
        access_token: str,
        api_version: str = "2025-07",
        max_retries: int = 3,
        base_delay_ms: int = 1000,
        max_delay_ms: int = 30_000,
        timeout_seconds: int = 30,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.shop_domain = shop_domain
        self.endpoint = (
            f"https://{shop_domain}/admin/api/{api_version}/graphql.json"
        )
        self.client = httpx.AsyncClient(
            headers={
                "X-Shopify-Access-Token": access_token,
                "Content-Type": "application/json",
                "Accept": "application/json",
            },
            timeout=timeout_seconds,
            transport=transport,
        )
        self.max_retries = max_retries
        self.base_delay_ms = base_delay_ms
        self.max_delay_ms = max_delay_ms

    async def execute(
        self,
        query: str,
        variables: dict | None = None,
        context: ErrorContext | None = None,
    ) -> dict:
        """POST a GraphQL document; return its `data` object."""
        body = {"query": query, "variables": variables or {}}
        for attempt in range(self.max_retries + 1):
            try:
                response = await self.client.post(self.endpoint, json=body)
            except (httpx.ConnectError, httpx.TimeoutException, httpx.RemoteProtocolError) as e:
                await self._handle_transient_error(e, attempt, context)
                continue
            except httpx.HTTPError as e:
                raise ShopifyAPIError(str(e), "transport", context=context)

            if response.status_code == _RATE_LIMITED:
                await self._handle_rate_limit(response, attempt, context)
                continue
            if response.status_code >= 500:
                await self._handle_transient_error(
                    f"HTTP {response.status_code}", attempt, context,
                )
                continue
            if response.status_code >= 400:
                raise ShopifyAPIError(
                    f"HTTP {response.status_code}: {response.text[:200]}",
                    "client_error",
                    context=context,
                )
            return self._unwrap(response, attempt, context)
        # Unreachable: the final attempt raises inside the handlers
        raise ShopifyAPIError("retries exhausted", "connection_error", context=context)

    async def aclose(self) -> None:
        await self.client.aclose()

    def _unwrap(
        self, response: httpx.Response, attempt: int, context: ErrorContext | None,
    ) -> dict:
        """Parse the GraphQL envelope; map top-level errors to ShopifyAPIError."""
        try:
            payload = response.json()
        except (ValueError, RecursionError):
            raise ShopifyAPIError(
                "Response is not valid JSON", "invalid_response", context=context,
            )
        errors = payload.get("errors") if isinstance(payload, dict) else None
        if errors:
            messages = "; ".join(
                str(e.get("message", e)) if isinstance(e, dict) else str(e)
                for e in (errors if isinstance(errors, list) else [errors])
            )
            raise ShopifyAPIError(messages, "graphql_error", context=context)
        logger.info(
            "Shopify API success",
            extra={
                "attempt": attempt + 1,
                "shop": self.shop_domain,
                "operation": context.operation if context else None,
                "customization_id": context.customization_id if context else None,
            },
        )
        data = payload.get("data") if isinstance(payload, dict) else None
        return data or {}

    async def _handle_rate_limit(
        self, response: httpx.Response, attempt: int, context: ErrorContext | None,
    ) -> None:
        """Handle throttling with retry or raise."""
        retry_after_ms = self._extract_retry_after(response)
        if attempt >= self.max_retries:
            raise ShopifyAPIError(
                "Rate limit exceeded after retries",
                "rate_limit",
                retry_after_ms=retry_after_ms,
                context=context,
            )
        delay = retry_after_ms or self._backoff(attempt)
        logger.warning(
            f"Rate limit hit, retry after {delay}ms (attempt {attempt + 1})",
        )
        await asyncio.sleep(delay / 1000)

    async def _handle_transient_error(
        self, e: object, attempt: int, context: ErrorContext | None,
    ) -> None:
        """Handle transient errors with retry or raise."""
        if attempt >= self.max_retries:
            raise ShopifyAPIError(
                f"Transient failure after {self.max_retries} retries: {e}",
                "connection_error",
                context=context,
            )
        delay = self._backoff(attempt)
        logger.warning(f"Transient error, retry after {delay}ms: {e}")
        await asyncio.sleep(delay / 1000)

    def _backoff(self, attempt: int) -> int:
        """Exponential backoff with ±25% jitter."""
        delay = min(self.max_delay_ms, (2 ** attempt) * self.base_delay_ms)
        return int(delay * random.uniform(0.75, 1.25))  # nosec B311

    def _extract_retry_after(self, response: httpx.Response) -> int | None:
        """Retry-After header in milliseconds (seconds on the wire)."""
        val = response.headers.get("retry-after")
        if not val:
            return None
        try:
            return int(float(val) * 1000)
        except ValueError:
            return None
