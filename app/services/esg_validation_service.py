"""
app/services/esg_validation_service.py

ESG validation and scoring engine.

Pipeline: raw payload + source tag -> SourceNormalizer -> ESGValidationRules
-> ESGScoringModel -> ValidationResult.

The engine performs no I/O and keeps no state between calls. Malformed data
surfaces as errors and warnings in the result; any unexpected exception is
converted into a single critical ``general`` error with score 0. Callers
never see an exception from :meth:`ESGValidationEngine.validate`.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any

from app.domain.esg_record import UnifiedESGRecord, empty_record
from app.domain.validation import (
    ESGEvaluation,
    Severity,
    ValidationError,
    ValidationResult,
)
from app.normalizers.registry import SourceNormalizer
from app.services.esg_scoring import ESGScoringModel
from app.validators.esg_rules import ESGValidationRules

logger = logging.getLogger(__name__)


class ESGValidationEngine:
    """
    Stateless validation service; collaborators are injected at construction.

    Usage::

        engine = ESGValidationEngine()
        result = engine.validate({"employee_count": 0}, "generic")
        print(result.score)  # 100
    """

    def __init__(
        self,
        *,
        normalizer: SourceNormalizer | None = None,
        rules: ESGValidationRules | None = None,
        scoring: ESGScoringModel | None = None,
    ) -> None:
        self._normalizer = normalizer or SourceNormalizer()
        self._rules = rules or ESGValidationRules()
        self._scoring = scoring or ESGScoringModel()

    def validate(self, payload: Any, source: str | None) -> ValidationResult:
        """
        Normalize ``payload`` for ``source`` and return its validation result.
        """

        return self.evaluate(payload, source).validation

    def evaluate(self, payload: Any, source: str | None) -> ESGEvaluation:
        """
        Normalize and validate ``payload``, returning both the record and the result.
        """

        try:
            record = self._normalizer.normalize(payload, source)
            return ESGEvaluation(
                normalized_record=record,
                validation=self.validate_record(record),
            )
        except Exception as exc:
            logger.exception("ESG validation failed source=%s error=%s", source, exc)
            return ESGEvaluation(
                normalized_record=empty_record(),
                validation=self._fault_result(exc),
            )

    def validate_record(self, record: UnifiedESGRecord) -> ValidationResult:
        """
        Apply the rule set and scoring model to an already normalized record.
        """

        errors, warnings = self._rules.evaluate(record)
        score = self._scoring.score(record, errors)
        is_valid = not any(error.is_blocking for error in errors)
        logger.debug(
            "ESG record validated is_valid=%s score=%d errors=%d warnings=%d",
            is_valid,
            score,
            len(errors),
            len(warnings),
        )
        return ValidationResult(
            is_valid=is_valid,
            errors=tuple(errors),
            warnings=tuple(warnings),
            score=score,
        )

    @staticmethod
    def _fault_result(exc: Exception) -> ValidationResult:
        return ValidationResult(
            is_valid=False,
            errors=(
                ValidationError(
                    field="general",
                    message=f"Validation error: {exc}",
                    severity=Severity.CRITICAL,
                ),
            ),
            warnings=(),
            score=0,
        )


@lru_cache(maxsize=1)
def get_esg_validation_engine() -> ESGValidationEngine:
    """
    Build and cache the default validation engine.
    """

    return ESGValidationEngine()
