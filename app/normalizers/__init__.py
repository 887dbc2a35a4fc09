"""
app/normalizers package marker.
"""

from app.normalizers.accounting import AccountingPlatformNormalizer
from app.normalizers.base import BaseSourceNormalizer, SourceTag, resolve_source_tag
from app.normalizers.generic import GenericNormalizer
from app.normalizers.numeric import extract_numeric_value, match_keyword_family, parse_numeric_value
from app.normalizers.office_graph import OfficeGraphNormalizer
from app.normalizers.registry import SourceNormalizer
from app.normalizers.spreadsheet import SpreadsheetNormalizer

__all__ = [
    "AccountingPlatformNormalizer",
    "BaseSourceNormalizer",
    "GenericNormalizer",
    "OfficeGraphNormalizer",
    "SourceNormalizer",
    "SourceTag",
    "SpreadsheetNormalizer",
    "extract_numeric_value",
    "match_keyword_family",
    "parse_numeric_value",
    "resolve_source_tag",
]
