"""
app/normalizers/generic.py

Catch-all normalizer for untagged or unrecognized sources.

Every top-level key is matched against keyword families for all three
sections at once, so one flat object can fill environmental, social, and
governance fields.
"""

from __future__ import annotations

from typing import Any, Mapping

from app.domain.esg_record import UnifiedESGRecord, record_from_values
from app.normalizers.base import BaseSourceNormalizer, SourceTag
from app.normalizers.numeric import KeywordFamilies, extract_numeric_value, match_keyword_family

ENVIRONMENTAL_KEYWORDS: KeywordFamilies = (
    (("carbon", "emission"), "environmental.carbon_emissions"),
    (("energy",), "environmental.energy_consumption"),
    (("water",), "environmental.water_usage"),
)

SOCIAL_KEYWORDS: KeywordFamilies = (
    (("employee", "staff"), "social.employee_count"),
    (("diversity",), "social.diversity_metrics.gender_ratio"),
)

GOVERNANCE_KEYWORDS: KeywordFamilies = (
    (("board", "director"), "governance.board_composition.total_directors"),
    (("ceo", "executive"), "governance.executive_compensation.ceo_pay_ratio"),
)


class GenericNormalizer(BaseSourceNormalizer):
    source = SourceTag.GENERIC

    def __init__(
        self,
        *,
        section_keywords: tuple[KeywordFamilies, ...] = (
            ENVIRONMENTAL_KEYWORDS,
            SOCIAL_KEYWORDS,
            GOVERNANCE_KEYWORDS,
        ),
    ) -> None:
        self._section_keywords = section_keywords

    def normalize(self, payload: Any) -> UnifiedESGRecord:
        if not isinstance(payload, Mapping):
            return UnifiedESGRecord()

        values: dict[str, float] = {}
        for key in payload:
            if not isinstance(key, str):
                continue
            number = extract_numeric_value(payload, key)
            if number is None:
                continue
            for families in self._section_keywords:
                field_path = match_keyword_family(key, families)
                if field_path is not None:
                    values[field_path] = number
        return record_from_values(values)
