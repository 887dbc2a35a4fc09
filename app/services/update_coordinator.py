"""
app/services/update_coordinator.py

Coordinates webhook-driven updates: fetch the changed resource, run it
through the ESG validation engine, and persist the outcome.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from datetime import datetime, timezone
from functools import lru_cache
from typing import Any, Protocol, Sequence

from fastapi import BackgroundTasks
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import (
    get_external_http_settings,
    get_google_sheets_settings,
    get_microsoft_graph_settings,
    get_quickbooks_settings,
)
from app.connectors import (
    BaseSourceFetcher,
    GoogleSheetsFetcher,
    MicrosoftGraphFetcher,
    QuickBooksFetcher,
)
from app.domain.data_update import (
    DataUpdateOutcome,
    SourceCredentials,
    WebhookNotification,
    WebhookStats,
)
from app.domain.validation import ESGEvaluation
from app.logging_utils import log_event
from app.services.esg_validation_service import ESGValidationEngine, get_esg_validation_engine
from db.models.data_freshness import DataFreshness, FreshnessStatus
from db.models.data_update import DataUpdate, DataUpdateStatus
from db.repositories.credential_repository import CredentialRepository
from db.repositories.data_update_repository import DataUpdateRepository
from db.repositories.esg_data_repository import ESGDataRepository

logger = logging.getLogger(__name__)

KNOWN_PLATFORMS: tuple[str, ...] = ("quickbooks", "google-sheets", "microsoft-graph")

_PLATFORM_LABELS: dict[str, str] = {
    "quickbooks": "QuickBooks",
    "google-sheets": "Google Sheets",
    "microsoft-graph": "Microsoft Graph",
}


class UnknownSourceError(ValueError):
    """
    Raised when a notification names a source with no registered fetcher.
    """


class CredentialsNotFoundError(RuntimeError):
    """
    Raised when no stored credentials exist for a source platform.
    """


class UpdateTaskExecutor(Protocol):
    def submit(self, task: Callable[..., Any], *args: Any, **kwargs: Any) -> None:
        ...


class FastAPIBackgroundTaskExecutor:
    def __init__(self, background_tasks: BackgroundTasks) -> None:
        self._background_tasks = background_tasks

    def submit(self, task: Callable[..., Any], *args: Any, **kwargs: Any) -> None:
        self._background_tasks.add_task(task, *args, **kwargs)


class UpdateCoordinator:
    """
    Runs one notification through fetch -> normalize/validate -> persist and
    tracks its lifecycle on a ``data_updates`` row.

    The coordinator owns no mutable state; every call opens its own session.
    """

    def __init__(
        self,
        *,
        fetchers: Sequence[BaseSourceFetcher],
        engine: ESGValidationEngine,
        session_factory: Callable[[], Session] | None = None,
        update_repository_factory: Callable[[Session], DataUpdateRepository] = DataUpdateRepository,
        esg_repository_factory: Callable[[Session], ESGDataRepository] = ESGDataRepository,
        credential_repository_factory: Callable[[Session], CredentialRepository] = CredentialRepository,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        if session_factory is None:
            from db.session import SessionLocal

            self._session_factory = SessionLocal
        else:
            self._session_factory = session_factory

        self._fetchers = {fetcher.platform: fetcher for fetcher in fetchers}
        self._engine = engine
        self._update_repository_factory = update_repository_factory
        self._esg_repository_factory = esg_repository_factory
        self._credential_repository_factory = credential_repository_factory
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    # ------------------------------------------------------------------
    # Processing
    # ------------------------------------------------------------------

    def submit(self, notification: WebhookNotification, executor: UpdateTaskExecutor) -> None:
        """
        Schedule :meth:`process` so the webhook caller can be answered immediately.
        """

        executor.submit(self.process, notification)

    def process(self, notification: WebhookNotification) -> DataUpdateOutcome:
        """
        Process one notification end to end. Failures are recorded, not raised.
        """

        log_event(
            logger,
            logging.INFO,
            "webhook_received",
            source=notification.source,
            event_type=notification.event_type,
            resource_id=notification.resource_id,
        )

        with self._session_factory() as db:
            updates = self._update_repository_factory(db)
            try:
                update = updates.create_update(
                    source=notification.source,
                    resource_id=notification.resource_id,
                    event_type=notification.event_type,
                    timestamp=notification.timestamp,
                    data=notification.data,
                )
                db.commit()
            except SQLAlchemyError as exc:
                db.rollback()
                logger.exception(
                    "Failed to record data update source=%s error=%s",
                    notification.source,
                    exc,
                )
                return DataUpdateOutcome(
                    update_id=None,
                    source=notification.source,
                    event_type=notification.event_type,
                    status=DataUpdateStatus.FAILED,
                    error=f"{type(exc).__name__}: {exc}",
                )

            update_id = update.id
            try:
                updates.mark_status(update_id=update_id, status=DataUpdateStatus.PROCESSING)
                db.commit()

                evaluation = self._fetch_and_store(db=db, notification=notification)

                updates.mark_status(update_id=update_id, status=DataUpdateStatus.COMPLETED)
                db.commit()
            except Exception as exc:
                return self._mark_failed(
                    db=db,
                    update_id=update_id,
                    notification=notification,
                    exc=exc,
                )

        log_event(
            logger,
            logging.INFO,
            "webhook_processed",
            update_id=update_id,
            source=notification.source,
            score=evaluation.validation.score,
            is_valid=evaluation.validation.is_valid,
        )
        return DataUpdateOutcome(
            update_id=update_id,
            source=notification.source,
            event_type=notification.event_type,
            status=DataUpdateStatus.COMPLETED,
            score=evaluation.validation.score,
            is_valid=evaluation.validation.is_valid,
        )

    def _fetch_and_store(
        self,
        *,
        db: Session,
        notification: WebhookNotification,
    ) -> ESGEvaluation:
        fetcher = self._resolve_fetcher(notification.source)
        credentials = self._load_credentials(db=db, platform=fetcher.platform)
        payload = fetcher.fetch_payload(notification, credentials)

        evaluation = self._engine.evaluate(payload, fetcher.source_tag)
        self._log_validation(fetcher.platform, evaluation)

        now = self._clock()
        repository = self._esg_repository_factory(db)
        repository.upsert_unified_data(
            source=fetcher.platform,
            event_type=notification.event_type,
            raw_data=payload,
            normalized_record=evaluation.normalized_record.to_dict(),
            validation=evaluation.validation.to_dict(),
            last_updated=now,
        )
        repository.upsert_freshness(
            source=fetcher.platform,
            event_type=notification.event_type,
            last_update=now,
        )
        return evaluation

    def _resolve_fetcher(self, source: str) -> BaseSourceFetcher:
        fetcher = self._fetchers.get(source.strip().lower())
        if fetcher is None:
            raise UnknownSourceError(f"Unknown webhook source: {source}")
        return fetcher

    def _load_credentials(self, *, db: Session, platform: str) -> SourceCredentials:
        stored = self._credential_repository_factory(db).get_credentials(platform)
        if stored is None:
            label = _PLATFORM_LABELS.get(platform, platform)
            raise CredentialsNotFoundError(f"{label} credentials not found")
        return SourceCredentials(
            platform=platform,
            access_token=stored.access_token,
            refresh_token=stored.refresh_token,
            realm_id=stored.realm_id,
        )

    @staticmethod
    def _log_validation(platform: str, evaluation: ESGEvaluation) -> None:
        validation = evaluation.validation
        logger.info(
            "ESG validation source=%s is_valid=%s score=%d errors=%d warnings=%d",
            platform,
            validation.is_valid,
            validation.score,
            len(validation.errors),
            len(validation.warnings),
        )
        critical = validation.critical_errors
        if critical:
            logger.error(
                "Critical ESG validation errors source=%s errors=%s",
                platform,
                [error.to_dict() for error in critical],
            )

    def _mark_failed(
        self,
        *,
        db: Session,
        update_id: uuid.UUID,
        notification: WebhookNotification,
        exc: Exception,
    ) -> DataUpdateOutcome:
        error_message = str(exc) or type(exc).__name__
        logger.exception(
            "Data update failed id=%s source=%s error=%s",
            update_id,
            notification.source,
            error_message,
        )
        try:
            db.rollback()
            failed = self._update_repository_factory(db).mark_status(
                update_id=update_id,
                status=DataUpdateStatus.FAILED,
                error=error_message[:2000],
            )
            if failed is None:
                logger.error("Unable to mark data update as failed because it was not found id=%s", update_id)
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            logger.exception("Failed to persist failed data update state id=%s", update_id)

        return DataUpdateOutcome(
            update_id=update_id,
            source=notification.source,
            event_type=notification.event_type,
            status=DataUpdateStatus.FAILED,
            error=error_message,
        )

    # ------------------------------------------------------------------
    # Read models
    # ------------------------------------------------------------------

    def list_recent_updates(self, *, db: Session, limit: int = 50) -> list[DataUpdate]:
        return self._update_repository_factory(db).list_recent(limit=limit)

    def get_stats(self, *, db: Session) -> WebhookStats:
        repository = self._update_repository_factory(db)
        by_status = repository.count_by_status()
        by_source = repository.count_by_source()
        return WebhookStats(
            total=sum(by_status.values()),
            successful=by_status.get(DataUpdateStatus.COMPLETED, 0),
            failed=by_status.get(DataUpdateStatus.FAILED, 0),
            pending=by_status.get(DataUpdateStatus.PENDING, 0)
            + by_status.get(DataUpdateStatus.PROCESSING, 0),
            by_source={platform: by_source.get(platform, 0) for platform in KNOWN_PLATFORMS},
        )

    def get_freshness(self, *, db: Session) -> list[DataFreshness]:
        """
        Return freshness rows, seeding ``pending`` rows for the known sources
        when none exist yet.
        """

        repository = self._esg_repository_factory(db)
        rows = repository.list_freshness()
        if rows:
            return rows

        now = self._clock()
        try:
            rows = repository.create_default_freshness(sources=KNOWN_PLATFORMS, timestamp=now)
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            logger.error("Failed to insert default freshness rows error=%s", exc)
            rows = [
                DataFreshness(
                    source=platform,
                    last_update=now,
                    event_type="none",
                    status=FreshnessStatus.PENDING,
                )
                for platform in KNOWN_PLATFORMS
            ]
        return rows


@lru_cache(maxsize=1)
def get_update_coordinator() -> UpdateCoordinator:
    """
    Build and cache the update coordinator with the configured fetchers.
    """

    http_settings = get_external_http_settings()
    fetchers: list[BaseSourceFetcher] = [
        QuickBooksFetcher(settings=get_quickbooks_settings(), http_settings=http_settings),
        GoogleSheetsFetcher(settings=get_google_sheets_settings(), http_settings=http_settings),
        MicrosoftGraphFetcher(settings=get_microsoft_graph_settings(), http_settings=http_settings),
    ]
    return UpdateCoordinator(fetchers=fetchers, engine=get_esg_validation_engine())
