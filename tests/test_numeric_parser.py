"""
tests/test_numeric_parser.py

Pytest unit tests for the shared numeric parsing and keyword helpers.

Coverage
--------
- Numbers pass through; booleans and non-finite values are absent
- Comma and space thousands separators and unit suffixes are tolerated
- Text without digits is absent, never zero
- Keyed extraction and keyword family matching
"""

from __future__ import annotations

import math

import pytest

from app.normalizers.generic import ENVIRONMENTAL_KEYWORDS, GOVERNANCE_KEYWORDS
from app.normalizers.numeric import (
    extract_numeric_value,
    match_keyword_family,
    normalize_key,
    parse_numeric_value,
)


# ---------------------------------------------------------------------------
# parse_numeric_value
# ---------------------------------------------------------------------------


class TestParseNumericValue:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            (42, 42.0),
            (-3.5, -3.5),
            ("-50", -50.0),
            (" 42 ", 42.0),
            ("1,234.5 tCO2e", 1234.5),
            ("$1,000", 1000.0),
            ("12%", 12.0),
            (".5", 0.5),
            ("- 5", -5.0),
            ("12 500", 12500.0),
            ("12 500 kWh", 12500.0),
        ],
    )
    def test_parses_loose_numbers(self, raw: object, expected: float) -> None:
        assert parse_numeric_value(raw) == pytest.approx(expected)

    @pytest.mark.parametrize("raw", ["abc", "", "-", "n/a", None, [1], {"value": 1}, 10**400])
    def test_unreadable_values_are_absent(self, raw: object) -> None:
        assert parse_numeric_value(raw) is None

    def test_booleans_are_not_numbers(self) -> None:
        assert parse_numeric_value(True) is None
        assert parse_numeric_value(False) is None

    def test_non_finite_numbers_are_absent(self) -> None:
        assert parse_numeric_value(math.nan) is None
        assert parse_numeric_value(math.inf) is None

    def test_zero_is_present(self) -> None:
        assert parse_numeric_value("0") == 0.0
        assert parse_numeric_value(0) == 0.0


# ---------------------------------------------------------------------------
# Keyed extraction and matching
# ---------------------------------------------------------------------------


class TestExtraction:
    def test_missing_key_is_absent(self) -> None:
        assert extract_numeric_value({"other": 1}, "carbon") is None

    def test_present_key_is_parsed(self) -> None:
        assert extract_numeric_value({"carbon": "1,500"}, "carbon") == 1500.0

    def test_normalize_key_ignores_case_and_separators(self) -> None:
        assert normalize_key(" Employee-Count ") == "employeecount"
        assert normalize_key("employee_count") == "employeecount"


class TestKeywordFamilies:
    def test_matches_case_insensitive_substring(self) -> None:
        assert match_keyword_family("Total Carbon Output", ENVIRONMENTAL_KEYWORDS) == (
            "environmental.carbon_emissions"
        )

    def test_first_family_wins(self) -> None:
        # "board" is tried before "executive".
        assert match_keyword_family("executive_board", GOVERNANCE_KEYWORDS) == (
            "governance.board_composition.total_directors"
        )

    def test_no_match_returns_none(self) -> None:
        assert match_keyword_family("revenue", ENVIRONMENTAL_KEYWORDS) is None
