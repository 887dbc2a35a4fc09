"""
app/normalizers/office_graph.py

Office-document graph (workbook) normalization.
"""

from __future__ import annotations

import logging
from typing import Any

from app.domain.esg_record import UnifiedESGRecord
from app.normalizers.base import BaseSourceNormalizer, SourceTag

logger = logging.getLogger(__name__)


class OfficeGraphNormalizer(BaseSourceNormalizer):
    """
    Placeholder strategy: office-graph workbooks have no field mapping yet, so
    every payload normalizes to an empty record.
    """

    source = SourceTag.OFFICE_GRAPH

    def normalize(self, payload: Any) -> UnifiedESGRecord:
        # TODO: map workbook worksheets once a column layout for ESG workbooks is agreed.
        logger.debug("Office graph normalization has no field mapping; returning empty record")
        return UnifiedESGRecord()
