"""Request Dependencies — Admin API gateway and service construction.

Invariants:
    - One ShopifyAdminClient per request, closed when the request ends
    - Unconfigured credentials fail with ShopifyAPIError before any network call

Design Decisions:
    - Routes depend on get_service; tests override get_gateway with a fake
"""

from typing import AsyncGenerator

from fastapi import Depends

from hidecod.config import get_settings
from hidecod.core.errors import ShopifyAPIError
from hidecod.core.repository_protocols import PaymentCustomizationGateway
from hidecod.infrastructure.shopify_client import ShopifyAdminClient
from hidecod.services.payment_customizations import PaymentCustomizationService


async def get_gateway() -> AsyncGenerator[PaymentCustomizationGateway, None]:
    """FastAPI dependency for the Admin GraphQL client."""
    settings = get_settings()
    if not settings.admin_api_configured:
        raise ShopifyAPIError(
            "Admin API credentials are not configured", "not_configured",
        )
    client = ShopifyAdminClient(
        settings.shopify_shop_domain,
        settings.shopify_admin_access_token,
        api_version=settings.shopify_api_version,
        max_retries=settings.shopify_max_retries,
        base_delay_ms=settings.shopify_base_delay_ms,
        max_delay_ms=settings.shopify_max_delay_ms,
        timeout_seconds=settings.shopify_timeout_seconds,
    )
    try:
        yield client
    finally:
        await client.aclose()


def get_service(
    gateway: PaymentCustomizationGateway = Depends(get_gateway),
) -> PaymentCustomizationService:
    settings = get_settings()
    return PaymentCustomizationService(
        gateway,
        title=settings.customization_title,
        page_size=settings.customizations_page_size,
        functions_page_size=settings.functions_page_size,
    )
