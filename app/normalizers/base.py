"""
app/normalizers/base.py

Base abstraction for source-specific ESG normalizers.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from app.domain.esg_record import UnifiedESGRecord


class SourceTag:
    ACCOUNTING_PLATFORM = "accounting-platform"
    SPREADSHEET = "spreadsheet"
    OFFICE_GRAPH = "office-graph"
    GENERIC = "generic"


KNOWN_SOURCE_TAGS: tuple[str, ...] = (
    SourceTag.ACCOUNTING_PLATFORM,
    SourceTag.SPREADSHEET,
    SourceTag.OFFICE_GRAPH,
)

# Provider names used by webhook routes and stored credentials.
SOURCE_ALIASES: dict[str, str] = {
    "quickbooks": SourceTag.ACCOUNTING_PLATFORM,
    "google-sheets": SourceTag.SPREADSHEET,
    "microsoft-graph": SourceTag.OFFICE_GRAPH,
}


def resolve_source_tag(source: str | None) -> str:
    """
    Map a raw source identifier to a known tag, or ``generic`` when unrecognized.
    """

    normalized = (source or "").strip().lower()
    if normalized in KNOWN_SOURCE_TAGS:
        return normalized
    return SOURCE_ALIASES.get(normalized, SourceTag.GENERIC)


class BaseSourceNormalizer(ABC):
    """
    Converts one source's raw payload shape into a UnifiedESGRecord.

    Implementations must be pure: no I/O, no state kept between calls, and no
    exceptions for malformed payloads (unreadable values are left absent).
    """

    source: str

    @abstractmethod
    def normalize(self, payload: Any) -> UnifiedESGRecord:
        """
        Return a fresh normalized record for ``payload``.
        """
