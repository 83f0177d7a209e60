"""Domain Types — immutable entities for a single checkout evaluation.

Invariants:
    - Every entity is frozen: the evaluator only reads and projects
    - Sequences are tuples, never lists, so nothing outlives one call mutated
    - PolicyConfig fields are already parsed (trimmed, de-blanked, ordered)

Design Decisions:
    - NewType for ids: zero runtime cost, keeps opaque ids distinct from names
    - Frozen dataclasses over pydantic models: the core has no validation step,
      every malformed field has already degraded to empty at the boundary
"""

from dataclasses import dataclass, field
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

PaymentMethodId = NewType("PaymentMethodId", str)


# ─── Constants ───────────────────────────────────────────────────

DEFAULT_COD_KEYWORDS: tuple[str, ...] = ("cash on delivery", "cod", "cash")

METAFIELD_NAMESPACE = "$app:hide-cod"
METAFIELD_KEY = "function-configuration"
METAFIELD_TYPE = "json"


# ─── Entities ────────────────────────────────────────────────────

@dataclass(frozen=True)
class PolicyConfig:
    """Merchant configuration: cities where COD stays visible."""
    allowed_cities: tuple[str, ...] = ()
    cod_keywords: tuple[str, ...] = ()


@dataclass(frozen=True)
class CheckoutContext:
    """Buyer-side facts. delivery_city is None until the buyer enters one."""
    delivery_city: str | None = None


@dataclass(frozen=True)
class CandidatePaymentMethod:
    id: PaymentMethodId
    name: str = ""


@dataclass(frozen=True)
class HideInstruction:
    payment_method_id: PaymentMethodId


@dataclass(frozen=True)
class Decision:
    """Ordered hide instructions. Empty means leave every method as offered."""
    instructions: tuple[HideInstruction, ...] = field(default_factory=tuple)

    @property
    def is_no_change(self) -> bool:
        return not self.instructions


NO_CHANGES = Decision()
