"""
app/services/esg_scoring.py

Deterministic ESG compliance score.

Formula
-------
score = 100
        - sum(severity penalty for each error)
        + completeness * COMPLETENESS_BONUS

The result is rounded and clamped to the integer range [0, 100].
Completeness is the share of schema leaf fields present in the record.
"""

from __future__ import annotations

from typing import Sequence

from app.domain.esg_record import UnifiedESGRecord
from app.domain.validation import Severity, ValidationError

BASE_SCORE: float = 100.0
COMPLETENESS_BONUS: float = 10.0
MIN_SCORE: int = 0
MAX_SCORE: int = 100

SEVERITY_PENALTIES: dict[str, float] = {
    Severity.CRITICAL: 20.0,
    Severity.HIGH: 10.0,
    Severity.MEDIUM: 5.0,
    Severity.LOW: 2.0,
}


class ESGScoringModel:
    """Stateless scoring model combining rule penalties and data completeness."""

    def calculate_completeness(self, record: UnifiedESGRecord) -> float:
        """Return present leaf fields / total leaf fields, in [0, 1]."""
        present, total = record.count_fields()
        return present / total if total else 0.0

    def penalty_for(self, errors: Sequence[ValidationError]) -> float:
        return sum(SEVERITY_PENALTIES.get(error.severity, 0.0) for error in errors)

    def score(self, record: UnifiedESGRecord, errors: Sequence[ValidationError]) -> int:
        """Compute the 0-100 compliance score for ``record`` given its errors.

        Penalties compound without a floor; only the final value is clamped.
        """
        raw = BASE_SCORE - self.penalty_for(errors)
        raw += self.calculate_completeness(record) * COMPLETENESS_BONUS
        return self.clamp(round(raw), MIN_SCORE, MAX_SCORE)

    @staticmethod
    def clamp(value: int, min_value: int, max_value: int) -> int:
        return max(min_value, min(value, max_value))
