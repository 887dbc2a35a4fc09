"""
Repository for unified ESG records and per-source freshness tracking.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Sequence

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.orm import Session

from db.models.data_freshness import DataFreshness, FreshnessStatus
from db.models.unified_esg_data import UnifiedESGData


class ESGDataRepository:
    """
    Upserts the latest normalized ESG data and freshness rows.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def upsert_unified_data(
        self,
        *,
        source: str,
        event_type: str,
        raw_data: Any,
        normalized_record: dict[str, Any],
        validation: dict[str, Any],
        last_updated: datetime,
    ) -> None:
        values = {
            "source": source,
            "event_type": event_type,
            "raw_data": raw_data,
            "normalized_record": normalized_record,
            "validation": validation,
            "score": int(validation["score"]),
            "is_valid": bool(validation["isValid"]),
            "last_updated": last_updated,
        }
        stmt = insert(UnifiedESGData).values(**values)
        stmt = stmt.on_conflict_do_update(
            constraint="uq_unified_esg_data_source_event_type",
            set_={
                "raw_data": stmt.excluded.raw_data,
                "normalized_record": stmt.excluded.normalized_record,
                "validation": stmt.excluded.validation,
                "score": stmt.excluded.score,
                "is_valid": stmt.excluded.is_valid,
                "last_updated": stmt.excluded.last_updated,
                "updated_at": last_updated,
            },
        )
        self._session.execute(stmt)

    def upsert_freshness(
        self,
        *,
        source: str,
        event_type: str,
        last_update: datetime,
        status: str = FreshnessStatus.CURRENT,
    ) -> None:
        stmt = insert(DataFreshness).values(
            source=source,
            event_type=event_type,
            last_update=last_update,
            status=status,
        )
        stmt = stmt.on_conflict_do_update(
            constraint="uq_data_freshness_source",
            set_={
                "event_type": stmt.excluded.event_type,
                "last_update": stmt.excluded.last_update,
                "status": stmt.excluded.status,
                "updated_at": last_update,
            },
        )
        self._session.execute(stmt)

    def list_freshness(self) -> list[DataFreshness]:
        stmt = select(DataFreshness).order_by(DataFreshness.last_update.desc())
        return list(self._session.scalars(stmt).all())

    def create_default_freshness(
        self,
        *,
        sources: Sequence[str],
        timestamp: datetime,
    ) -> list[DataFreshness]:
        rows = [
            DataFreshness(
                source=source,
                last_update=timestamp,
                event_type="none",
                status=FreshnessStatus.PENDING,
            )
            for source in sources
        ]
        self._session.add_all(rows)
        self._session.flush()
        return rows
