"""Boundary Protocols — contract between the admin services and the platform API.

Invariants:
    - Services depend on this Protocol, never on the HTTP client directly
    - Implementations raise ShopifyAPIError on transport failures and return
      the GraphQL `data` payload otherwise
    - context (customization id, operation) rides along so transport errors
      carry the same observability fields as domain errors

Design Decisions:
    - Protocol over ABC: structural subtyping; tests pass an in-memory fake
"""

from typing import Protocol

from hidecod.core.errors import ErrorContext


class PaymentCustomizationGateway(Protocol):
    """Contract for the Admin GraphQL API — implemented by infrastructure."""
    async def execute(
        self,
        query: str,
        variables: dict | None = None,
        context: ErrorContext | None = None,
    ) -> dict: ...
