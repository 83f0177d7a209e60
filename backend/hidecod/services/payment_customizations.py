"""Payment Customization Service — list, create, and configure "Hide COD by City" rules.

Invariants:
    - create_customization discovers the backing function first; no function → FunctionNotFoundError
    - Mutation userErrors → ShopifyUserError (never silently ignored)
    - Missing customization on read → ResourceNotFoundError
    - Cities or keywords with no letters/digits are rejected before any write
    - Configuration is read and written only through the namespaced json metafield

Design Decisions:
    - Service class over free functions: the gateway is injected once per request
    - GraphQL documents kept next to the calls that send them
"""

import logging

from hidecod.core.admin_config import (
    build_config_document,
    build_metafield_input,
    config_from_metafield,
    customization_gid,
    customization_numeric_id,
    prepare_allowed_cities,
    select_payment_function,
)
from hidecod.core.domain_types import METAFIELD_KEY, METAFIELD_NAMESPACE
from hidecod.core.errors import (
    ConfigurationValidationError,
    ErrorContext,
    FunctionNotFoundError,
    ResourceNotFoundError,
    ShopifyUserError,
)
from hidecod.core.normalize import normalize, parse_list_field
from hidecod.core.repository_protocols import PaymentCustomizationGateway

logger = logging.getLogger(__name__)

LIST_CUSTOMIZATIONS_QUERY = """
query paymentCustomizations($first: Int!) {
  paymentCustomizations(first: $first) {
    edges { node { id title enabled } }
  }
}
"""

LIST_FUNCTIONS_QUERY = """
query PaymentFunctions($first: Int!) {
  shopifyFunctions(first: $first) {
    nodes { id title apiType }
  }
}
"""

CREATE_CUSTOMIZATION_MUTATION = """
mutation paymentCustomizationCreate($paymentCustomization: PaymentCustomizationInput!) {
  paymentCustomizationCreate(paymentCustomization: $paymentCustomization) {
    paymentCustomization { id }
    userErrors { field message }
  }
}
"""

GET_CUSTOMIZATION_QUERY = f"""
query getCustomization($id: ID!) {{
  paymentCustomization(id: $id) {{
    id
    title
    enabled
    metafield(namespace: "{METAFIELD_NAMESPACE}", key: "{METAFIELD_KEY}") {{
      type
      value
      jsonValue
    }}
  }}
}}
"""

UPDATE_CUSTOMIZATION_MUTATION = """
mutation updateCustomization($id: ID!, $metafield: MetafieldInput!) {
  paymentCustomizationUpdate(
    id: $id,
    paymentCustomization: { metafields: [$metafield] }
  ) {
    userErrors { field message }
  }
}
"""


def _reject_unmatchable(
    values: list[str], field: str, context: ErrorContext,
) -> None:
    """Entries with no letters or digits are ignored at checkout; refuse to store them."""
    blank = [v for v in values if not normalize(v)]
    if blank:
        raise ConfigurationValidationError(
            f"{field} entries must contain letters or digits: {blank}",
            field, context,
        )


def _summarize(node: dict) -> dict:
    return {
        "id": node["id"],
        "numeric_id": customization_numeric_id(node["id"]),
        "title": node.get("title", ""),
        "enabled": bool(node.get("enabled")),
    }


class PaymentCustomizationService:
    """Admin operations over a PaymentCustomizationGateway."""

    def __init__(
        self,
        gateway: PaymentCustomizationGateway,
        title: str = "Hide COD by City",
        page_size: int = 10,
        functions_page_size: int = 25,
    ):
        self.gateway = gateway
        self.title = title
        self.page_size = page_size
        self.functions_page_size = functions_page_size

    async def list_customizations(self) -> list[dict]:
        data = await self.gateway.execute(
            LIST_CUSTOMIZATIONS_QUERY, {"first": self.page_size},
            context=ErrorContext(operation="list"),
        )
        edges = (data.get("paymentCustomizations") or {}).get("edges") or []
        return [_summarize(e["node"]) for e in edges if e.get("node")]

    async def create_customization(self) -> dict:
        """Discover the payment function and create an enabled customization."""
        context = ErrorContext(operation="create")
        data = await self.gateway.execute(
            LIST_FUNCTIONS_QUERY, {"first": self.functions_page_size},
            context=context,
        )
        nodes = (data.get("shopifyFunctions") or {}).get("nodes") or []
        function = select_payment_function(nodes)
        if not function or not function.get("id"):
            raise FunctionNotFoundError(context)

        data = await self.gateway.execute(
            CREATE_CUSTOMIZATION_MUTATION,
            {
                "paymentCustomization": {
                    "title": self.title,
                    "enabled": True,
                    "functionId": function["id"],
                },
            },
            context=context,
        )
        result = data.get("paymentCustomizationCreate") or {}
        user_errors = result.get("userErrors") or []
        if user_errors:
            raise ShopifyUserError(
                "paymentCustomizationCreate", user_errors, context,
            )

        gid = result["paymentCustomization"]["id"]
        logger.info(
            "Payment customization created",
            extra={"customization_id": gid, "operation": "create"},
        )
        return {
            "id": gid,
            "numeric_id": customization_numeric_id(gid),
            "function_id": function["id"],
        }

    async def get_configuration(self, numeric_id: str) -> dict:
        gid = customization_gid(numeric_id)
        context = ErrorContext(customization_id=gid, operation="read")
        data = await self.gateway.execute(
            GET_CUSTOMIZATION_QUERY, {"id": gid}, context=context,
        )
        node = data.get("paymentCustomization")
        if not node:
            raise ResourceNotFoundError("PaymentCustomization", numeric_id, context)
        config = config_from_metafield(node.get("metafield"))
        return {
            **_summarize(node),
            "allowed_cities": parse_list_field(config.get("allowedCities")),
            "cod_keywords": parse_list_field(config.get("codKeywords")),
        }

    async def save_configuration(
        self,
        numeric_id: str,
        allowed_cities: list[str],
        cod_keywords: list[str] | None = None,
    ) -> dict:
        """Write the allow-list (title-cased, de-duplicated) to the metafield."""
        gid = customization_gid(numeric_id)
        context = ErrorContext(customization_id=gid, operation="update")
        cities = prepare_allowed_cities(allowed_cities)
        keywords = parse_list_field(cod_keywords or [])
        _reject_unmatchable(cities, "allowedCities", context)
        _reject_unmatchable(keywords, "codKeywords", context)
        document = build_config_document(cities, keywords)

        data = await self.gateway.execute(
            UPDATE_CUSTOMIZATION_MUTATION,
            {"id": gid, "metafield": build_metafield_input(document)},
            context=context,
        )
        result = data.get("paymentCustomizationUpdate") or {}
        user_errors = result.get("userErrors") or []
        if user_errors:
            raise ShopifyUserError(
                "paymentCustomizationUpdate", user_errors, context,
            )

        logger.info(
            f"Configuration saved ({len(cities)} cities)",
            extra={"customization_id": gid, "operation": "update"},
        )
        return {
            "id": gid,
            "numeric_id": numeric_id,
            "allowed_cities": cities,
            "cod_keywords": keywords,
        }
