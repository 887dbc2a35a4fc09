"""
db/models/data_freshness.py

Last successful update per source.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import DateTime, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, TimestampMixin


class FreshnessStatus:
    PENDING = "pending"
    CURRENT = "current"


class DataFreshness(Base, TimestampMixin):
    __tablename__ = "data_freshness"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    source: Mapped[str] = mapped_column(String(50), nullable=False)
    last_update: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    event_type: Mapped[str] = mapped_column(String(120), nullable=False, default="none")
    status: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default=FreshnessStatus.PENDING,
        comment="pending, current",
    )

    __table_args__ = (
        UniqueConstraint("source", name="uq_data_freshness_source"),
    )
