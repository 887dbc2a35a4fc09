"""
db/models/data_update.py

One row per received webhook notification and its processing lifecycle.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import DateTime, Index, String, Text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, TimestampMixin


class DataUpdateStatus:
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class DataUpdate(Base, TimestampMixin):
    __tablename__ = "data_updates"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    source: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        comment="quickbooks, google-sheets, microsoft-graph",
    )
    resource_id: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    event_type: Mapped[str] = mapped_column(String(120), nullable=False)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        comment="Notification time reported by the webhook intake",
    )
    status: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default=DataUpdateStatus.PENDING,
    )
    data: Mapped[dict[str, Any] | None] = mapped_column(
        JSONB,
        nullable=True,
        comment="Raw webhook body",
    )
    error: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        Index("ix_data_updates_source", "source"),
        Index("ix_data_updates_status", "status"),
        Index("ix_data_updates_created_at", "created_at"),
        Index("ix_data_updates_source_status", "source", "status"),
    )
