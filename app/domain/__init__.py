"""
app/domain package marker.
"""

from app.domain.data_update import (
    DataUpdateOutcome,
    SourceCredentials,
    WebhookNotification,
    WebhookStats,
)
from app.domain.esg_record import UnifiedESGRecord, empty_record, record_from_values
from app.domain.validation import (
    ESGEvaluation,
    Severity,
    ValidationError,
    ValidationResult,
    ValidationWarning,
)

__all__ = [
    "DataUpdateOutcome",
    "ESGEvaluation",
    "Severity",
    "SourceCredentials",
    "UnifiedESGRecord",
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "WebhookNotification",
    "WebhookStats",
    "empty_record",
    "record_from_values",
]
