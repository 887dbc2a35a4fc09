"""
app/validators/esg_rules.py

Domain validation rules for normalized ESG records.

Every rule runs independently; a failing rule never stops the others.
Absent fields are never validated, only present values are checked.
"""

from __future__ import annotations

from app.domain.esg_record import UnifiedESGRecord
from app.domain.validation import Severity, ValidationError, ValidationWarning

# ---------------------------------------------------------------------------
# Thresholds
# ---------------------------------------------------------------------------

CARBON_EMISSIONS_WARNING_THRESHOLD: float = 1_000_000.0
GENDER_RATIO_RANGE: tuple[float, float] = (0.0, 1.0)
MIN_BOARD_DIRECTORS: float = 1.0
MIN_CEO_PAY_RATIO: float = 1.0


class ESGValidationRules:
    """
    Stateless rule set applied to one :class:`UnifiedESGRecord`.
    """

    def evaluate(
        self,
        record: UnifiedESGRecord,
    ) -> tuple[list[ValidationError], list[ValidationWarning]]:
        """
        Run every rule and return ``(errors, warnings)`` in rule order.
        """

        errors: list[ValidationError] = []
        warnings: list[ValidationWarning] = []

        self._validate_environmental(record, errors, warnings)
        self._validate_social(record, errors, warnings)
        self._validate_governance(record, errors, warnings)
        return errors, warnings

    # ------------------------------------------------------------------
    # Environmental
    # ------------------------------------------------------------------

    def _validate_environmental(
        self,
        record: UnifiedESGRecord,
        errors: list[ValidationError],
        warnings: list[ValidationWarning],
    ) -> None:
        carbon = record.environmental.carbon_emissions
        if carbon is not None:
            if carbon < 0:
                errors.append(
                    ValidationError(
                        field="environmental.carbonEmissions",
                        message="Carbon emissions cannot be negative",
                        severity=Severity.CRITICAL,
                    )
                )
            elif carbon > CARBON_EMISSIONS_WARNING_THRESHOLD:
                warnings.append(
                    ValidationWarning(
                        field="environmental.carbonEmissions",
                        message="Carbon emissions seem unusually high",
                        recommendation="Verify the unit of measurement (tons CO2e)",
                    )
                )

        energy = record.environmental.energy_consumption
        if energy is not None and energy < 0:
            errors.append(
                ValidationError(
                    field="environmental.energyConsumption",
                    message="Energy consumption cannot be negative",
                    severity=Severity.CRITICAL,
                )
            )

    # ------------------------------------------------------------------
    # Social
    # ------------------------------------------------------------------

    def _validate_social(
        self,
        record: UnifiedESGRecord,
        errors: list[ValidationError],
        warnings: list[ValidationWarning],
    ) -> None:
        employees = record.social.employee_count
        if employees is not None:
            if employees < 0:
                errors.append(
                    ValidationError(
                        field="social.employeeCount",
                        message="Employee count cannot be negative",
                        severity=Severity.CRITICAL,
                    )
                )
            elif employees == 0:
                warnings.append(
                    ValidationWarning(
                        field="social.employeeCount",
                        message="Employee count is zero",
                        recommendation="Verify this is correct for your organization type",
                    )
                )

        gender_ratio = record.social.diversity_metrics.gender_ratio
        low, high = GENDER_RATIO_RANGE
        if gender_ratio is not None and not low <= gender_ratio <= high:
            errors.append(
                ValidationError(
                    field="social.diversityMetrics.genderRatio",
                    message="Gender ratio must be between 0 and 1",
                    severity=Severity.HIGH,
                )
            )

    # ------------------------------------------------------------------
    # Governance
    # ------------------------------------------------------------------

    def _validate_governance(
        self,
        record: UnifiedESGRecord,
        errors: list[ValidationError],
        warnings: list[ValidationWarning],
    ) -> None:
        directors = record.governance.board_composition.total_directors
        if directors is not None and directors < MIN_BOARD_DIRECTORS:
            errors.append(
                ValidationError(
                    field="governance.boardComposition.totalDirectors",
                    message="Board must have at least one director",
                    severity=Severity.CRITICAL,
                )
            )

        pay_ratio = record.governance.executive_compensation.ceo_pay_ratio
        if pay_ratio is not None and pay_ratio < MIN_CEO_PAY_RATIO:
            warnings.append(
                ValidationWarning(
                    field="governance.executiveCompensation.ceoPayRatio",
                    message="CEO pay ratio is less than 1",
                    recommendation="Verify this calculation is correct",
                )
            )
