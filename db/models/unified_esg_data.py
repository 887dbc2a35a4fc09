"""
db/models/unified_esg_data.py

Latest normalized ESG record and validation result per source and event type.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import Boolean, DateTime, Index, Integer, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, TimestampMixin


class UnifiedESGData(Base, TimestampMixin):
    __tablename__ = "unified_esg_data"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    source: Mapped[str] = mapped_column(String(50), nullable=False)
    event_type: Mapped[str] = mapped_column(String(120), nullable=False)
    raw_data: Mapped[Any] = mapped_column(
        JSONB,
        nullable=True,
        comment="Payload as fetched from the source",
    )
    normalized_record: Mapped[dict[str, Any]] = mapped_column(
        JSONB,
        nullable=False,
        comment="Unified environmental/social/governance record",
    )
    validation: Mapped[dict[str, Any]] = mapped_column(
        JSONB,
        nullable=False,
        comment="isValid, errors, warnings, score",
    )
    score: Mapped[int] = mapped_column(Integer, nullable=False)
    is_valid: Mapped[bool] = mapped_column(Boolean, nullable=False)
    last_updated: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        UniqueConstraint("source", "event_type", name="uq_unified_esg_data_source_event_type"),
        Index("ix_unified_esg_data_last_updated", "last_updated"),
    )
