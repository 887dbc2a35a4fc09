"""
db/base.py

Declarative base and the timestamp mixin shared by the ESG update tables.
"""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import DateTime, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """
    Declarative base for every table in this service.

    ``dict[str, Any]`` annotations map to PostgreSQL JSONB.
    """

    type_annotation_map: dict[type, Any] = {dict[str, Any]: JSONB}


class TimestampMixin:
    """
    Adds ``created_at`` and ``updated_at`` columns.

    Bulk upserts bypass ``onupdate``, so repositories set ``updated_at``
    explicitly in their conflict clauses.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=lambda: datetime.now(timezone.utc),
    )
