"""
app/normalizers/spreadsheet.py

Normalization for spreadsheet-service workbooks.

The payload carries ``sheets``; each sheet is routed by its title and read as
(metric label, value) rows from its first grid range.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from app.domain.esg_record import UnifiedESGRecord, record_from_values
from app.normalizers.base import BaseSourceNormalizer, SourceTag
from app.normalizers.numeric import KeywordFamilies, match_keyword_family, parse_numeric_value

logger = logging.getLogger(__name__)

ENVIRONMENTAL_ROWS: KeywordFamilies = (
    (("carbon",), "environmental.carbon_emissions"),
    (("energy",), "environmental.energy_consumption"),
    (("water",), "environmental.water_usage"),
)

SOCIAL_ROWS: KeywordFamilies = (
    (("employee",), "social.employee_count"),
    (("diversity",), "social.diversity_metrics.gender_ratio"),
)

GOVERNANCE_ROWS: KeywordFamilies = (
    (("board",), "governance.board_composition.total_directors"),
)

# Title keywords -> row families. The first matching title family wins.
SHEET_ROUTES: tuple[tuple[tuple[str, ...], KeywordFamilies], ...] = (
    (("environmental", "carbon"), ENVIRONMENTAL_ROWS),
    (("social", "employee"), SOCIAL_ROWS),
    (("governance", "board"), GOVERNANCE_ROWS),
)


class SpreadsheetNormalizer(BaseSourceNormalizer):
    source = SourceTag.SPREADSHEET

    def normalize(self, payload: Any) -> UnifiedESGRecord:
        if not isinstance(payload, Mapping):
            return UnifiedESGRecord()
        sheets = payload.get("sheets")
        if not isinstance(sheets, list):
            return UnifiedESGRecord()

        values: dict[str, float] = {}
        for sheet in sheets:
            if not isinstance(sheet, Mapping):
                continue
            title = self._sheet_title(sheet)
            row_families = self._route(title)
            if row_families is None:
                logger.debug("Skipping spreadsheet tab with no ESG route title=%s", title)
                continue
            self._read_rows(sheet, row_families, values)
        return record_from_values(values)

    @staticmethod
    def _sheet_title(sheet: Mapping[str, Any]) -> str:
        properties = sheet.get("properties")
        if not isinstance(properties, Mapping):
            return ""
        title = properties.get("title")
        return title.lower() if isinstance(title, str) else ""

    @staticmethod
    def _route(title: str) -> KeywordFamilies | None:
        for keywords, row_families in SHEET_ROUTES:
            if any(keyword in title for keyword in keywords):
                return row_families
        return None

    def _read_rows(
        self,
        sheet: Mapping[str, Any],
        row_families: KeywordFamilies,
        values: dict[str, float],
    ) -> None:
        for cells in self._iter_rows(sheet):
            if len(cells) < 2:
                continue
            label = self._cell_text(cells[0])
            field_path = match_keyword_family(label, row_families)
            if field_path is None:
                continue
            number = parse_numeric_value(self._cell_value(cells[1]))
            if number is not None:
                values[field_path] = number

    @staticmethod
    def _iter_rows(sheet: Mapping[str, Any]) -> list[list[Any]]:
        grids = sheet.get("data")
        if not isinstance(grids, list) or not grids or not isinstance(grids[0], Mapping):
            return []
        row_data = grids[0].get("rowData")
        if not isinstance(row_data, list):
            return []

        rows: list[list[Any]] = []
        for row in row_data:
            if not isinstance(row, Mapping):
                continue
            cells = row.get("values")
            if isinstance(cells, list):
                rows.append(cells)
        return rows

    @staticmethod
    def _cell_value(cell: Any) -> Any:
        if not isinstance(cell, Mapping):
            return None
        return cell.get("formattedValue")

    def _cell_text(self, cell: Any) -> str:
        value = self._cell_value(cell)
        return value if isinstance(value, str) else ""
