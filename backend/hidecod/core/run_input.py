"""Run Input Boundary — decodes the host payload and encodes the host result.

Invariants:
    - decode_run_input() is total: any missing or mistyped field degrades to empty
    - Only the first delivery group's address city is inspected
    - Config is read from metafield.jsonValue; a JSON string there (or a raw
      metafield.value) is parsed as a fallback shape
    - run() never raises into the host

Design Decisions:
    - Loose dict payload decoded once at the boundary into frozen entities, so
      evaluate_policy never inspects runtime types
    - Payment methods without an id are dropped: there is nothing to hide by
"""

import json

from hidecod.core.domain_types import (
    CandidatePaymentMethod,
    CheckoutContext,
    Decision,
    PaymentMethodId,
    PolicyConfig,
)
from hidecod.core.evaluate_policy import evaluate
from hidecod.core.normalize import parse_list_field


def _obj(v: object) -> dict:
    return v if isinstance(v, dict) else {}


def _seq(v: object) -> list:
    return v if isinstance(v, list) else []


def _load_json_document(raw: str) -> dict:
    """Parse an embedded JSON document; anything but an object is empty."""
    try:
        doc = json.loads(raw)
    except (ValueError, RecursionError):
        return {}
    return _obj(doc)


def extract_config_document(payload: dict) -> dict:
    """Raw config object from paymentCustomization.metafield."""
    metafield = _obj(_obj(payload.get("paymentCustomization")).get("metafield"))
    json_value = metafield.get("jsonValue")
    if isinstance(json_value, str):
        return _load_json_document(json_value)
    if json_value is not None:
        return _obj(json_value)
    raw_value = metafield.get("value")
    if isinstance(raw_value, str):
        return _load_json_document(raw_value)
    return {}


def decode_policy_config(doc: dict) -> PolicyConfig:
    return PolicyConfig(
        allowed_cities=tuple(parse_list_field(doc.get("allowedCities"))),
        cod_keywords=tuple(parse_list_field(doc.get("codKeywords"))),
    )


def decode_checkout_context(payload: dict) -> CheckoutContext:
    groups = _seq(_obj(payload.get("cart")).get("deliveryGroups"))
    if not groups:
        return CheckoutContext()
    address = _obj(_obj(groups[0]).get("deliveryAddress"))
    city = address.get("city")
    return CheckoutContext(delivery_city=city if isinstance(city, str) else None)


def decode_payment_methods(payload: dict) -> tuple[CandidatePaymentMethod, ...]:
    methods = []
    for raw in _seq(payload.get("paymentMethods")):
        method = _obj(raw)
        method_id = method.get("id")
        if method_id is None or method_id == "":
            continue
        name = method.get("name")
        methods.append(CandidatePaymentMethod(
            id=PaymentMethodId(str(method_id)),
            name=name if isinstance(name, str) else "",
        ))
    return tuple(methods)


def decode_run_input(
    payload: object,
) -> tuple[PolicyConfig, CheckoutContext, tuple[CandidatePaymentMethod, ...]]:
    """Split the host payload into (config, context, candidates)."""
    payload = _obj(payload)
    return (
        decode_policy_config(extract_config_document(payload)),
        decode_checkout_context(payload),
        decode_payment_methods(payload),
    )


def encode_decision(decision: Decision) -> dict:
    """Host output shape: {"operations": [{"hide": {"paymentMethodId": ...}}]}."""
    return {
        "operations": [
            {"hide": {"paymentMethodId": i.payment_method_id}}
            for i in decision.instructions
        ],
    }


def run(payload: object) -> dict:
    """Host entry: decode, evaluate, encode."""
    config, context, candidates = decode_run_input(payload)
    return encode_decision(evaluate(config, context, candidates))
