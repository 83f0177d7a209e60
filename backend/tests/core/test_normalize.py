"""Normalizer — tests for normalize, parse_list_field, and to_title_case.

Tests cover:
    - normalize collapses case, punctuation, and whitespace runs
    - normalize is total (None, non-strings, empty)
    - parse_list_field accepts arrays and comma text, drops blanks, keeps order
    - to_title_case matches the editor's tag formatting
"""

import pytest

from hidecod.core.normalize import normalize, parse_list_field, to_title_case


# ─── normalize ───────────────────────────────────────────────────

@pytest.mark.parametrize("raw", [
    "Dera Ghazi Khan",
    "dera-ghazi khan",
    "DERA   GHAZI KHAN!",
    "  dera_ghazi...khan  ",
])
def test_normalize_equivalent_spellings(raw):
    assert normalize(raw) == "dera ghazi khan"


def test_normalize_strips_punctuation_in_payment_names():
    assert normalize("Cash on Delivery (COD)") == "cash on delivery cod"


def test_normalize_drops_non_ascii_letters():
    assert normalize("Multān") == "mult n"


def test_normalize_keeps_digits():
    assert normalize("Sector G-11/3") == "sector g 11 3"


@pytest.mark.parametrize("raw", [None, "", "   ", "!!!", 42, ["Lahore"]])
def test_normalize_degenerate_input_is_empty(raw):
    assert normalize(raw) == ""


# ─── parse_list_field ────────────────────────────────────────────

def test_parse_list_from_array_trims_and_drops_blanks():
    assert parse_list_field([" Lahore ", "", "  ", "Karachi"]) == [
        "Lahore", "Karachi",
    ]


def test_parse_list_from_comma_text():
    assert parse_list_field("Lahore, Karachi,,  Multan ,") == [
        "Lahore", "Karachi", "Multan",
    ]


def test_parse_list_preserves_order_and_duplicates():
    assert parse_list_field(["b", "a", "b"]) == ["b", "a", "b"]


def test_parse_list_stringifies_scalars():
    assert parse_list_field([123, True]) == ["123", "true"]


def test_parse_list_stringifies_like_javascript():
    assert parse_list_field([1.0, 2.5, None, ["a", None, 3], {"k": 1}]) == [
        "1", "2.5", "null", "a,,3", "[object Object]",
    ]


@pytest.mark.parametrize("raw", [None, "", [], {}, 5, {"a": 1}])
def test_parse_list_wrong_shape_is_empty(raw):
    assert parse_list_field(raw) == []


# ─── to_title_case ───────────────────────────────────────────────

def test_title_case_collapses_whitespace():
    assert to_title_case("  dera ghazi   KHAN ") == "Dera Ghazi Khan"


def test_title_case_blank():
    assert to_title_case("   ") == ""
