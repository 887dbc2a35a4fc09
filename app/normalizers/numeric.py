"""
app/normalizers/numeric.py

Numeric parsing and heuristic field extraction shared by every normalizer.
"""

from __future__ import annotations

import math
import re
from typing import Any, Mapping

_GROUPING_SEPARATOR = re.compile(r"(?<=[\d-])[,\s]+(?=\d)")
_LEADING_NUMBER = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)")
_NON_NUMERIC = re.compile(r"[^\d.\-]+")

# ((keywords, ...), field path) pairs, tried in order.
KeywordFamilies = tuple[tuple[tuple[str, ...], str], ...]


def parse_numeric_value(value: Any) -> float | None:
    """
    Parse a loosely formatted value into a finite float.

    Numbers pass through unchanged. Strings lose thousands separators
    (commas or spaces between digits, or after a minus sign) and surrounding
    text, then the first signed decimal token is parsed, so
    ``"1,234.5 tCO2e"`` gives ``1234.5`` and ``"abc"`` gives ``None``.
    Booleans, containers, ``None``, NaN, infinities and integers too large
    for a float are absent.
    """

    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
        return number if math.isfinite(number) else None
    if not isinstance(value, str):
        return None

    ungrouped = _GROUPING_SEPARATOR.sub("", value)
    for token in _NON_NUMERIC.split(ungrouped):
        match = _LEADING_NUMBER.match(token)
        if match is None:
            continue
        number = float(match.group(0))
        return number if math.isfinite(number) else None
    return None


def extract_numeric_value(data: Mapping[str, Any], key: str) -> float | None:
    """
    Parse ``data[key]``; a missing key is absent.
    """

    if key not in data:
        return None
    return parse_numeric_value(data[key])


def normalize_key(key: str) -> str:
    """
    Normalize a field name for near-exact matching (case, spaces, ``-`` and ``_`` ignored).
    """

    return "".join(ch for ch in key.strip().lower() if ch.isalnum())


def match_keyword_family(
    label: str,
    families: KeywordFamilies,
) -> str | None:
    """
    Return the field path of the first keyword family found in ``label``.

    Matching is a case-insensitive substring test; families are tried in order.
    """

    lowered = label.lower()
    for keywords, field_path in families:
        if any(keyword in lowered for keyword in keywords):
            return field_path
    return None
