"""
Repository for webhook data-update lifecycle persistence and reporting.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session

from db.models.data_update import DataUpdate, DataUpdateStatus


class DataUpdateRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def create_update(
        self,
        *,
        source: str,
        resource_id: str,
        event_type: str,
        timestamp: datetime,
        data: dict[str, Any] | None = None,
    ) -> DataUpdate:
        update = DataUpdate(
            source=source,
            resource_id=resource_id,
            event_type=event_type,
            timestamp=timestamp,
            status=DataUpdateStatus.PENDING,
            data=data,
        )
        self._session.add(update)
        self._session.flush()
        self._session.refresh(update)
        return update

    def get_update(self, update_id: uuid.UUID) -> DataUpdate | None:
        return self._session.get(DataUpdate, update_id)

    def list_recent(self, *, limit: int = 50) -> list[DataUpdate]:
        stmt: Select[tuple[DataUpdate]] = (
            select(DataUpdate).order_by(DataUpdate.created_at.desc()).limit(max(1, limit))
        )
        return list(self._session.scalars(stmt).all())

    def mark_status(
        self,
        *,
        update_id: uuid.UUID,
        status: str,
        error: str | None = None,
    ) -> DataUpdate | None:
        update = self.get_update(update_id)
        if update is None:
            return None
        update.status = status
        update.error = error
        return update

    def count_by_status(self) -> dict[str, int]:
        stmt = select(DataUpdate.status, func.count()).group_by(DataUpdate.status)
        return {status: int(count) for status, count in self._session.execute(stmt).all()}

    def count_by_source(self) -> dict[str, int]:
        stmt = select(DataUpdate.source, func.count()).group_by(DataUpdate.source)
        return {source: int(count) for source, count in self._session.execute(stmt).all()}
