"""
app/domain/esg_record.py

Unified ESG schema produced by source normalization.

Every leaf is either a finite float or ``None``. ``None`` means the value is
unknown, which is not the same as zero.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, is_dataclass
from typing import Any, Mapping


def _camel_case(name: str) -> str:
    head, *tail = name.split("_")
    return head + "".join(part.title() for part in tail)


def _section_to_dict(section: Any) -> dict[str, Any]:
    """
    Serialize a section or group, omitting absent leaves and empty groups.
    """

    payload: dict[str, Any] = {}
    for item in fields(section):
        value = getattr(section, item.name)
        if value is None:
            continue
        if is_dataclass(value):
            nested = _section_to_dict(value)
            if not nested:
                continue
            value = nested
        elif isinstance(value, dict):
            value = dict(value)
        payload[_camel_case(item.name)] = value
    return payload


def _count_leaves(section: Any) -> tuple[int, int]:
    present = 0
    total = 0
    for item in fields(section):
        value = getattr(section, item.name)
        if item.metadata.get("group"):
            group_present, group_total = _count_leaves(value)
            present += group_present
            total += group_total
            continue
        total += 1
        if value is not None:
            present += 1
    return present, total


@dataclass(frozen=True)
class DiversityMetrics:
    gender_ratio: float | None = None
    ethnic_diversity: float | None = None
    age_distribution: dict[str, float] | None = None


@dataclass(frozen=True)
class HealthAndSafety:
    incidents: float | None = None
    training_hours: float | None = None


@dataclass(frozen=True)
class BoardComposition:
    independent_directors: float | None = None
    total_directors: float | None = None
    diversity_percentage: float | None = None


@dataclass(frozen=True)
class ExecutiveCompensation:
    ceo_pay_ratio: float | None = None
    median_employee_pay: float | None = None


@dataclass(frozen=True)
class ComplianceMetrics:
    regulatory_violations: float | None = None
    audit_findings: float | None = None


@dataclass(frozen=True)
class EnvironmentalMetrics:
    carbon_emissions: float | None = None
    energy_consumption: float | None = None
    water_usage: float | None = None
    waste_generation: float | None = None
    renewable_energy_percentage: float | None = None


@dataclass(frozen=True)
class SocialMetrics:
    employee_count: float | None = None
    diversity_metrics: DiversityMetrics = field(
        default_factory=DiversityMetrics,
        metadata={"group": True},
    )
    health_and_safety: HealthAndSafety = field(
        default_factory=HealthAndSafety,
        metadata={"group": True},
    )
    community_investment: float | None = None


@dataclass(frozen=True)
class GovernanceMetrics:
    board_composition: BoardComposition = field(
        default_factory=BoardComposition,
        metadata={"group": True},
    )
    executive_compensation: ExecutiveCompensation = field(
        default_factory=ExecutiveCompensation,
        metadata={"group": True},
    )
    compliance_metrics: ComplianceMetrics = field(
        default_factory=ComplianceMetrics,
        metadata={"group": True},
    )


@dataclass(frozen=True)
class UnifiedESGRecord:
    """
    Canonical normalized ESG record with environmental, social, and governance sections.

    Records are immutable; normalizers build a fresh instance per payload.
    """

    environmental: EnvironmentalMetrics = field(
        default_factory=EnvironmentalMetrics,
        metadata={"group": True},
    )
    social: SocialMetrics = field(
        default_factory=SocialMetrics,
        metadata={"group": True},
    )
    governance: GovernanceMetrics = field(
        default_factory=GovernanceMetrics,
        metadata={"group": True},
    )

    def count_fields(self) -> tuple[int, int]:
        """
        Return ``(present, total)`` over every leaf field of the schema.

        Nested groups contribute each of their leaves individually.
        """

        return _count_leaves(self)

    def to_dict(self) -> dict[str, Any]:
        """
        Return the camelCase storage form. The three sections are always present.
        """

        return {
            "environmental": _section_to_dict(self.environmental),
            "social": _section_to_dict(self.social),
            "governance": _section_to_dict(self.governance),
        }


def empty_record() -> UnifiedESGRecord:
    """
    Return a record in which every field is absent.
    """

    return UnifiedESGRecord()


def _build_section(section_type: Any, tree: Mapping[str, Any]) -> Any:
    known = {item.name: item for item in fields(section_type)}
    unknown = set(tree) - set(known)
    if unknown:
        raise ValueError(
            f"Unknown field(s) for {section_type.__name__}: {', '.join(sorted(unknown))}."
        )

    kwargs: dict[str, Any] = {}
    for name, value in tree.items():
        item = known[name]
        if item.metadata.get("group"):
            kwargs[name] = _build_section(item.default_factory, value)
        else:
            kwargs[name] = value
    return section_type(**kwargs)


def record_from_values(values: Mapping[str, Any]) -> UnifiedESGRecord:
    """
    Build a record from snake_case dotted paths such as
    ``social.diversity_metrics.gender_ratio``.

    Paths not present in ``values`` stay absent.
    """

    tree: dict[str, Any] = {}
    for path, value in values.items():
        parts = path.split(".")
        node = tree
        for part in parts[:-1]:
            node = node.setdefault(part, {})
        node[parts[-1]] = value
    return _build_section(UnifiedESGRecord, tree)
