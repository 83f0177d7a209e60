"""Admin Configuration — pure helpers behind the allow-list editor and rule creation.

Invariants:
    - config_from_metafield() always returns a dict whose allowedCities is a list
    - parse_allowed_cities_form() tries JSON first, falls back to comma text
    - build_metafield_input() always targets $app:hide-cod / function-configuration
    - No IO: the shell sends what these functions build

Design Decisions:
    - Title-casing and de-duplication happen on save (prepare_allowed_cities),
      matching the editor's tag input; the evaluator normalizes anyway
    - select_payment_function() falls back to the first function: apiType strings
      vary by API version, and single-function shops are the common case
"""

import json

from hidecod.core.city_catalog import ADD_PREFIX
from hidecod.core.domain_types import (
    METAFIELD_KEY,
    METAFIELD_NAMESPACE,
    METAFIELD_TYPE,
)
from hidecod.core.normalize import parse_list_field, to_title_case

CUSTOMIZATION_GID_PREFIX = "gid://shopify/PaymentCustomization/"


def config_from_metafield(metafield: dict | None) -> dict:
    """Stored config, preferring jsonValue over the raw JSON value string."""
    metafield = metafield or {}
    config: object = {"allowedCities": []}
    if metafield.get("jsonValue") is not None:
        config = metafield["jsonValue"]
    elif metafield.get("value"):
        try:
            config = json.loads(metafield["value"])
        except (ValueError, RecursionError):
            pass
    if not isinstance(config, dict):
        config = {}
    config = dict(config)
    if not isinstance(config.get("allowedCities"), list):
        config["allowedCities"] = []
    return config


def parse_allowed_cities_form(
    cities_json: str | None, cities_csv: str | None,
) -> list[str]:
    """Cities from a JSON array field, else from comma-separated text."""
    cities: list[str] = []
    if cities_json:
        try:
            parsed = json.loads(cities_json)
        except (ValueError, RecursionError):
            parsed = None
        if isinstance(parsed, list):
            cities = parse_list_field(parsed)
    if not cities:
        cities = parse_list_field(cities_csv or "")
    return cities


def prepare_allowed_cities(values: list[str]) -> list[str]:
    """Strip the add-marker, title-case, drop blanks and case-insensitive duplicates."""
    seen: set[str] = set()
    result = []
    for v in values:
        if v.startswith(ADD_PREFIX):
            v = v[len(ADD_PREFIX):]
        city = to_title_case(v)
        if city and city.lower() not in seen:
            seen.add(city.lower())
            result.append(city)
    return result


def build_config_document(
    allowed_cities: list[str], cod_keywords: list[str] | None = None,
) -> dict:
    doc: dict = {"allowedCities": list(allowed_cities)}
    if cod_keywords:
        doc["codKeywords"] = list(cod_keywords)
    return doc


def build_metafield_input(config: dict) -> dict:
    """MetafieldInput for paymentCustomizationUpdate."""
    return {
        "namespace": METAFIELD_NAMESPACE,
        "key": METAFIELD_KEY,
        "type": METAFIELD_TYPE,
        "value": json.dumps(config, ensure_ascii=False),
    }


def select_payment_function(nodes: list[dict]) -> dict | None:
    """Prefer a payment-customization function; else the first one; else None."""
    for node in nodes:
        if "PAYMENT" in str(node.get("apiType") or "").upper():
            return node
    return nodes[0] if nodes else None


def customization_gid(numeric_id: str) -> str:
    return f"{CUSTOMIZATION_GID_PREFIX}{numeric_id}"


def customization_numeric_id(gid: str) -> str:
    """Last path segment of a GraphQL global id."""
    return gid.rsplit("/", 1)[-1]
