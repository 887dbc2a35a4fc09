"""
app/domain/data_update.py

Domain models for webhook-driven data updates.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


@dataclass(frozen=True)
class WebhookNotification:
    """
    A source's notice that one of its resources changed.
    """

    source: str
    event_type: str
    resource_id: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(tz=timezone.utc))
    data: dict[str, Any] | None = None


@dataclass(frozen=True)
class SourceCredentials:
    """
    Provider tokens handed to a fetcher. Never logged.
    """

    platform: str
    access_token: str = field(repr=False)
    refresh_token: str | None = field(default=None, repr=False)
    realm_id: str | None = None


@dataclass(frozen=True)
class DataUpdateOutcome:
    """
    Result of processing one webhook notification.
    """

    update_id: uuid.UUID | None
    source: str
    event_type: str
    status: str
    score: int | None = None
    is_valid: bool | None = None
    error: str | None = None


@dataclass(frozen=True)
class WebhookStats:
    total: int
    successful: int
    failed: int
    pending: int
    by_source: dict[str, int] = field(default_factory=dict)
