"""
app/normalizers/accounting.py

Best-effort extraction from accounting-platform records.

Accounting payloads rarely carry ESG figures, so only a fixed set of flat keys
is read.
"""

from __future__ import annotations

from typing import Any, Mapping

from app.domain.esg_record import UnifiedESGRecord, record_from_values
from app.normalizers.base import BaseSourceNormalizer, SourceTag
from app.normalizers.numeric import normalize_key, parse_numeric_value

ACCOUNTING_FIELD_KEYS: dict[str, str] = {
    "carbon_emissions": "environmental.carbon_emissions",
    "energy_consumption": "environmental.energy_consumption",
    "employee_count": "social.employee_count",
    "community_investment": "social.community_investment",
    "ceo_pay_ratio": "governance.executive_compensation.ceo_pay_ratio",
    "median_employee_pay": "governance.executive_compensation.median_employee_pay",
}


class AccountingPlatformNormalizer(BaseSourceNormalizer):
    source = SourceTag.ACCOUNTING_PLATFORM

    def __init__(self, field_keys: Mapping[str, str] | None = None) -> None:
        self._field_keys = {
            normalize_key(key): path
            for key, path in (field_keys or ACCOUNTING_FIELD_KEYS).items()
        }

    def normalize(self, payload: Any) -> UnifiedESGRecord:
        if not isinstance(payload, Mapping):
            return UnifiedESGRecord()

        values: dict[str, float] = {}
        for key, raw_value in payload.items():
            if not isinstance(key, str):
                continue
            field_path = self._field_keys.get(normalize_key(key))
            if field_path is None:
                continue
            number = parse_numeric_value(raw_value)
            if number is not None:
                values[field_path] = number
        return record_from_values(values)
