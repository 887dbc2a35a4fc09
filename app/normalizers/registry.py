"""
app/normalizers/registry.py

Source-tag dispatch over the registered normalizer strategies.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from app.domain.esg_record import UnifiedESGRecord
from app.normalizers.accounting import AccountingPlatformNormalizer
from app.normalizers.base import BaseSourceNormalizer, SourceTag, resolve_source_tag
from app.normalizers.generic import GenericNormalizer
from app.normalizers.office_graph import OfficeGraphNormalizer
from app.normalizers.spreadsheet import SpreadsheetNormalizer


class SourceNormalizer:
    """
    Routes a raw payload to the strategy registered for its source tag.

    Unknown tags fall back to the generic strategy. Holds no per-call state,
    so one instance can serve concurrent callers.
    """

    def __init__(self, normalizers: Iterable[BaseSourceNormalizer] | None = None) -> None:
        builtins: list[BaseSourceNormalizer] = [
            AccountingPlatformNormalizer(),
            SpreadsheetNormalizer(),
            OfficeGraphNormalizer(),
            GenericNormalizer(),
        ]
        registrations = {normalizer.source: normalizer for normalizer in builtins}
        for normalizer in normalizers or ():
            registrations[normalizer.source] = normalizer
        self._normalizers = registrations

    @property
    def sources(self) -> tuple[str, ...]:
        return tuple(sorted(self._normalizers))

    def resolve(self, source: str | None) -> BaseSourceNormalizer:
        tag = resolve_source_tag(source)
        return self._normalizers.get(tag, self._normalizers[SourceTag.GENERIC])

    def normalize(self, payload: Any, source: str | None) -> UnifiedESGRecord:
        """
        Normalize ``payload`` with the strategy for ``source``.
        """

        return self.resolve(source).normalize(payload)
