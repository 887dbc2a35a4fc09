"""
tests/test_esg_validation_engine.py

Pytest tests for the end-to-end ESG validation pipeline.

All tests are pure Python: no database, no I/O.

Coverage
--------
- Spreadsheet tab with negative carbon (invalid, penalized, small bonus)
- Generic payload with zero employees (valid, warning only)
- Empty payload for every source (score 100, no findings)
- Faults inside the pipeline become one critical ``general`` error
- Validity depends on severity, not on score
- Repeated calls give equal results
"""

from __future__ import annotations

from typing import Any

import pytest

from app.domain.esg_record import UnifiedESGRecord
from app.domain.validation import Severity, ValidationError, ValidationWarning
from app.normalizers.registry import SourceNormalizer
from app.services.esg_validation_service import ESGValidationEngine
from app.validators.esg_rules import ESGValidationRules

NEGATIVE_CARBON_WORKBOOK: dict[str, Any] = {
    "sheets": [
        {
            "properties": {"title": "Environmental Data"},
            "data": [
                {
                    "rowData": [
                        {"values": [{"formattedValue": "Carbon"}, {"formattedValue": "-50"}]},
                    ]
                }
            ],
        }
    ]
}


class _ExplodingNormalizer(SourceNormalizer):
    def normalize(self, payload: Any, source: str | None) -> UnifiedESGRecord:
        raise RuntimeError("boom")


class _MediumOnlyRules(ESGValidationRules):
    def evaluate(
        self,
        record: UnifiedESGRecord,
    ) -> tuple[list[ValidationError], list[ValidationWarning]]:
        errors = [
            ValidationError(field=f"field_{i}", message="minor issue", severity=Severity.MEDIUM)
            for i in range(5)
        ]
        return errors, []


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def engine() -> ESGValidationEngine:
    return ESGValidationEngine()


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------


class TestScenarios:
    def test_negative_carbon_in_spreadsheet(self, engine: ESGValidationEngine) -> None:
        evaluation = engine.evaluate(NEGATIVE_CARBON_WORKBOOK, "spreadsheet")
        result = evaluation.validation

        assert evaluation.normalized_record.environmental.carbon_emissions == -50.0
        assert result.is_valid is False
        assert len(result.errors) == 1
        assert result.errors[0].severity == Severity.CRITICAL
        assert "cannot be negative" in result.errors[0].message
        assert result.score == 81

    def test_zero_employees_in_generic_payload(self, engine: ESGValidationEngine) -> None:
        result = engine.validate({"employee_count": 0}, "generic")

        assert result.is_valid is True
        assert result.errors == ()
        assert len(result.warnings) == 1
        assert result.warnings[0].field == "social.employeeCount"
        assert result.score == 100

    @pytest.mark.parametrize(
        "source",
        ["accounting-platform", "spreadsheet", "office-graph", "generic", "unheard-of", None],
    )
    def test_empty_payload_scores_100(self, engine: ESGValidationEngine, source: str | None) -> None:
        result = engine.validate({}, source)

        assert result.is_valid is True
        assert result.errors == ()
        assert result.warnings == ()
        assert result.score == 100

    def test_provider_alias_uses_accounting_normalizer(self, engine: ESGValidationEngine) -> None:
        result = engine.validate({"carbon_emissions": "-10"}, "quickbooks")

        assert result.is_valid is False
        assert result.critical_errors[0].field == "environmental.carbonEmissions"

    def test_spaced_negative_carbon_is_critical(self, engine: ESGValidationEngine) -> None:
        result = engine.validate({"carbon_emissions": "- 5"}, "quickbooks")

        assert result.is_valid is False
        assert "cannot be negative" in result.critical_errors[0].message

    def test_oversized_integer_keeps_other_fields(self, engine: ESGValidationEngine) -> None:
        evaluation = engine.evaluate({"carbon_emissions": 10**400, "employee_count": 5}, "generic")

        record = evaluation.normalized_record
        assert record.environmental.carbon_emissions is None
        assert record.social.employee_count == 5.0
        assert all(error.field != "general" for error in evaluation.validation.errors)
        assert evaluation.validation.score > 0


# ---------------------------------------------------------------------------
# Fault handling
# ---------------------------------------------------------------------------


class TestFaultHandling:
    def test_exception_becomes_general_critical_error(self) -> None:
        engine = ESGValidationEngine(normalizer=_ExplodingNormalizer())

        evaluation = engine.evaluate({"carbon": 1}, "generic")
        result = evaluation.validation

        assert evaluation.normalized_record == UnifiedESGRecord()
        assert result.is_valid is False
        assert result.score == 0
        assert result.warnings == ()
        assert [(e.field, e.message, e.severity) for e in result.errors] == [
            ("general", "Validation error: boom", Severity.CRITICAL),
        ]

    def test_validate_never_raises(self) -> None:
        engine = ESGValidationEngine(normalizer=_ExplodingNormalizer())
        assert engine.validate(object(), "spreadsheet").score == 0

    def test_fault_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        engine = ESGValidationEngine(normalizer=_ExplodingNormalizer())

        with caplog.at_level("ERROR"):
            engine.validate({}, "generic")

        assert "ESG validation failed" in caplog.text


# ---------------------------------------------------------------------------
# Result contract
# ---------------------------------------------------------------------------


class TestResultContract:
    def test_validity_is_independent_of_score(self) -> None:
        engine = ESGValidationEngine(rules=_MediumOnlyRules())

        result = engine.validate({}, "generic")

        assert result.is_valid is True
        assert result.score == 75

    def test_repeated_calls_are_equal(self, engine: ESGValidationEngine) -> None:
        first = engine.evaluate(NEGATIVE_CARBON_WORKBOOK, "spreadsheet")
        second = engine.evaluate(NEGATIVE_CARBON_WORKBOOK, "spreadsheet")
        assert first == second

    def test_to_dict_uses_storage_keys(self, engine: ESGValidationEngine) -> None:
        payload = engine.evaluate(NEGATIVE_CARBON_WORKBOOK, "spreadsheet").to_dict()

        assert payload["normalizedRecord"] == {
            "environmental": {"carbonEmissions": -50.0},
            "social": {},
            "governance": {},
        }
        assert payload["validation"] == {
            "isValid": False,
            "errors": [
                {
                    "field": "environmental.carbonEmissions",
                    "message": "Carbon emissions cannot be negative",
                    "severity": "critical",
                }
            ],
            "warnings": [],
            "score": 81,
        }

    def test_result_is_frozen(self, engine: ESGValidationEngine) -> None:
        result = engine.validate({}, "generic")
        with pytest.raises((AttributeError, TypeError)):
            result.score = 0  # type: ignore[misc]
