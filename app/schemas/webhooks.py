"""
Schemas for webhook intake and reporting endpoints.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field


class WebhookAcceptedResponse(BaseModel):
    status: str = "received"
    message: str = "Webhook received and queued for processing"


class WebhookChallengeResponse(BaseModel):
    challenge_code: str | None = None
    message: str | None = None


class DataUpdateResponse(BaseModel):
    id: UUID
    source: str
    resource_id: str
    event_type: str
    timestamp: datetime
    status: str
    data: dict[str, Any] | None = None
    error: str | None = None
    created_at: datetime
    updated_at: datetime


class WebhookStatsResponse(BaseModel):
    total: int = 0
    successful: int = 0
    failed: int = 0
    pending: int = 0
    by_source: dict[str, int] = Field(default_factory=dict)


class DataFreshnessResponse(BaseModel):
    source: str
    last_update: datetime
    event_type: str
    status: str
