"""
app/domain/validation.py

Result types emitted by the ESG validation engine.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from app.domain.esg_record import UnifiedESGRecord


class Severity:
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


BLOCKING_SEVERITIES = frozenset({Severity.CRITICAL, Severity.HIGH})


@dataclass(frozen=True)
class ValidationError:
    """
    One data-quality error on a dotted field path.
    """

    field: str
    message: str
    severity: str

    @property
    def is_blocking(self) -> bool:
        return self.severity in BLOCKING_SEVERITIES

    def to_dict(self) -> dict[str, Any]:
        return {"field": self.field, "message": self.message, "severity": self.severity}


@dataclass(frozen=True)
class ValidationWarning:
    """
    Suspicious but valid value, with a recommendation for the data owner.
    """

    field: str
    message: str
    recommendation: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "field": self.field,
            "message": self.message,
            "recommendation": self.recommendation,
        }


@dataclass(frozen=True)
class ValidationResult:
    """
    Immutable outcome of validating one normalized record.

    ``is_valid`` only reflects critical and high errors. Medium and low errors
    still lower ``score``.
    """

    is_valid: bool
    errors: tuple[ValidationError, ...] = ()
    warnings: tuple[ValidationWarning, ...] = ()
    score: int = 0

    @property
    def critical_errors(self) -> tuple[ValidationError, ...]:
        return tuple(error for error in self.errors if error.severity == Severity.CRITICAL)

    def to_dict(self) -> dict[str, Any]:
        return {
            "isValid": self.is_valid,
            "errors": [error.to_dict() for error in self.errors],
            "warnings": [warning.to_dict() for warning in self.warnings],
            "score": self.score,
        }


@dataclass(frozen=True)
class ESGEvaluation:
    """
    Normalized record paired with its validation result.
    """

    normalized_record: UnifiedESGRecord
    validation: ValidationResult

    def to_dict(self) -> dict[str, Any]:
        return {
            "normalizedRecord": self.normalized_record.to_dict(),
            "validation": self.validation.to_dict(),
        }
