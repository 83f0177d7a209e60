"""Policy Evaluator — decides which COD payment methods to hide for one checkout.

Invariants:
    - All functions are PURE: no IO, no async, no logging, no side effects
    - Fail-open: missing city or empty allow-list returns NO_CHANGES
    - Allowed city (any match) returns NO_CHANGES — COD stays visible
    - Hide instructions follow candidate input order, one per matching method
    - Linear in cities + keywords + candidates; no recursion, no retries

Design Decisions:
    - Symmetric containment over exact match: merchant and buyer city strings are
      free text ("Lahore" vs "Lahore Cantt"), accepting false positives on short
      names (an allowed "Kotli" also admits "Kotli Sattian")
    - An allowed city that normalizes to "" is contained in every checkout city,
      so it allows everything (no visibility change); keywords that normalize
      to "" are skipped so they never hide everything
    - Explicit keyword list replaces the defaults entirely (no merge)
"""

from collections.abc import Iterable

from hidecod.core.domain_types import (
    DEFAULT_COD_KEYWORDS,
    NO_CHANGES,
    CandidatePaymentMethod,
    CheckoutContext,
    Decision,
    HideInstruction,
    PolicyConfig,
)
from hidecod.core.normalize import normalize


def effective_keywords(config: PolicyConfig) -> tuple[str, ...]:
    """Configured keywords when any, otherwise the built-in COD defaults."""
    return config.cod_keywords or DEFAULT_COD_KEYWORDS


def city_matches(checkout_city: str, allowed_city: str) -> bool:
    """Three-way match on normalized names: equal, or either contains the other."""
    if not checkout_city:
        return False
    return (
        checkout_city == allowed_city
        or allowed_city in checkout_city
        or checkout_city in allowed_city
    )


def is_city_allowed(checkout_city: str, allowed_cities: Iterable[str]) -> bool:
    """True if the normalized checkout city matches any configured city."""
    return any(
        city_matches(checkout_city, normalize(allowed))
        for allowed in allowed_cities
    )


def select_cod_methods(
    candidates: Iterable[CandidatePaymentMethod], keywords: Iterable[str],
) -> list[CandidatePaymentMethod]:
    """Candidates whose normalized name contains any normalized keyword."""
    needles = [k for k in (normalize(k) for k in keywords) if k]
    return [
        m for m in candidates
        if any(k in normalize(m.name) for k in needles)
    ]


def evaluate(
    config: PolicyConfig,
    context: CheckoutContext,
    candidates: Iterable[CandidatePaymentMethod],
) -> Decision:
    """Hide COD methods when the delivery city is not on the allow-list."""
    keywords = effective_keywords(config)

    checkout_city = normalize(context.delivery_city)
    if not checkout_city:
        return NO_CHANGES
    if not config.allowed_cities:
        return NO_CHANGES

    if is_city_allowed(checkout_city, config.allowed_cities):
        return NO_CHANGES

    cod_methods = select_cod_methods(candidates, keywords)
    if not cod_methods:
        return NO_CHANGES

    return Decision(
        instructions=tuple(
            HideInstruction(payment_method_id=m.id) for m in cod_methods
        ),
    )
