"""
app/schemas package marker.
"""

from app.schemas.esg_validation import (
    ESGValidationRequest,
    ESGValidationResponse,
    ValidationIssueResponse,
    ValidationResultResponse,
    ValidationWarningResponse,
)
from app.schemas.webhooks import (
    DataFreshnessResponse,
    DataUpdateResponse,
    WebhookAcceptedResponse,
    WebhookChallengeResponse,
    WebhookStatsResponse,
)

__all__ = [
    "DataFreshnessResponse",
    "DataUpdateResponse",
    "ESGValidationRequest",
    "ESGValidationResponse",
    "ValidationIssueResponse",
    "ValidationResultResponse",
    "ValidationWarningResponse",
    "WebhookAcceptedResponse",
    "WebhookChallengeResponse",
    "WebhookStatsResponse",
]
