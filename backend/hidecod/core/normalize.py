"""Normalizer — canonical, comparison-stable forms of free-text strings.

Invariants:
    - normalize() is total: None and non-string input become ""
    - Output contains only [a-z0-9] and single spaces, no leading/trailing space
    - parse_list_field() never raises and preserves input order (duplicates kept)

Design Decisions:
    - ASCII-only alphanumerics: everything else (punctuation, hyphens, accents)
      collapses to one space so "dera-ghazi khan" == "DERA   GHAZI KHAN!"
    - Two list encodings accepted (JSON array, comma text): both exist in stored
      merchant configurations
"""

import math
import re

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def normalize(s: object) -> str:
    """Trim, lower-case, collapse every non-[a-z0-9] run to one space, trim."""
    if not isinstance(s, str) or not s:
        return ""
    return _NON_ALNUM.sub(" ", s.strip().lower()).strip()


def parse_list_field(v: object) -> list[str]:
    """Accept a sequence of values or comma-separated text; return trimmed non-blank strings."""
    if not v:
        return []
    if isinstance(v, (list, tuple)):
        items = [_stringify(x).strip() for x in v]
    elif isinstance(v, str):
        items = [x.strip() for x in v.split(",")]
    else:
        return []
    return [x for x in items if x]


def _stringify(x: object) -> str:
    """JavaScript String() of a decoded JSON value: 1.0 -> "1", [1, null] -> "1,"."""
    if x is None:
        return "null"
    if isinstance(x, bool):
        return "true" if x else "false"
    if isinstance(x, float):
        if math.isnan(x):
            return "NaN"
        if math.isinf(x):
            return "Infinity" if x > 0 else "-Infinity"
        if x.is_integer():
            return str(int(x))
    if isinstance(x, list):
        return ",".join("" if v is None else _stringify(v) for v in x)
    if isinstance(x, dict):
        return "[object Object]"
    return str(x)


def to_title_case(s: str) -> str:
    """Title-case each whitespace-separated word: '  dera ghazi   KHAN' -> 'Dera Ghazi Khan'."""
    return " ".join(
        w[:1].upper() + w[1:] for w in s.strip().lower().split()
    )
