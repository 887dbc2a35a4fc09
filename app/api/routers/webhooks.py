"""
app/api/routers/webhooks.py

Webhook intake endpoints and update reporting.

Notifications are acknowledged immediately with 202; processing runs in the
background through the update coordinator.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, BackgroundTasks, Body, Depends, HTTPException, Query, status
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session

from app.api.dependencies import require_authorization_header, require_intuit_signature
from app.config import WebhookSettings, get_webhook_settings
from app.domain.data_update import WebhookNotification
from app.schemas.webhooks import (
    DataFreshnessResponse,
    DataUpdateResponse,
    WebhookAcceptedResponse,
    WebhookChallengeResponse,
    WebhookStatsResponse,
)
from app.services.update_coordinator import (
    FastAPIBackgroundTaskExecutor,
    UpdateCoordinator,
    get_update_coordinator,
)
from db.session import get_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/webhooks", tags=["webhooks"])


# ----------------------------------------------------------------------
# Intake
# ----------------------------------------------------------------------


@router.post(
    "/quickbooks",
    status_code=status.HTTP_202_ACCEPTED,
    response_model=WebhookAcceptedResponse,
    dependencies=[Depends(require_intuit_signature)],
)
def receive_quickbooks_webhook(
    background_tasks: BackgroundTasks,
    body: dict[str, Any] = Body(...),
    coordinator: UpdateCoordinator = Depends(get_update_coordinator),
) -> WebhookAcceptedResponse:
    entity = _first_quickbooks_entity(body)
    notification = WebhookNotification(
        source="quickbooks",
        event_type=str(entity.get("name") or "unknown"),
        resource_id=str(entity.get("id") or ""),
        data=body,
    )
    coordinator.submit(notification, FastAPIBackgroundTaskExecutor(background_tasks))
    return WebhookAcceptedResponse()


@router.get("/quickbooks", response_model=WebhookChallengeResponse, response_model_exclude_none=True)
def verify_quickbooks_webhook(
    challenge_code: str | None = Query(default=None),
) -> WebhookChallengeResponse:
    if challenge_code:
        return WebhookChallengeResponse(challenge_code=challenge_code)
    return WebhookChallengeResponse(message="QuickBooks webhook endpoint")


@router.post(
    "/google-sheets",
    status_code=status.HTTP_202_ACCEPTED,
    response_model=WebhookAcceptedResponse,
    dependencies=[Depends(require_authorization_header)],
)
def receive_google_sheets_webhook(
    background_tasks: BackgroundTasks,
    body: dict[str, Any] = Body(...),
    coordinator: UpdateCoordinator = Depends(get_update_coordinator),
) -> WebhookAcceptedResponse:
    notification = WebhookNotification(
        source="google-sheets",
        event_type=str(body.get("state") or "spreadsheet.updated"),
        resource_id=str(body.get("resourceId") or body.get("spreadsheetId") or ""),
        data=body,
    )
    coordinator.submit(notification, FastAPIBackgroundTaskExecutor(background_tasks))
    return WebhookAcceptedResponse()


@router.get("/google-sheets", response_model=WebhookChallengeResponse, response_model_exclude_none=True)
def verify_google_sheets_webhook(
    challenge_code: str | None = Query(default=None),
) -> WebhookChallengeResponse:
    if challenge_code:
        return WebhookChallengeResponse(challenge_code=challenge_code)
    return WebhookChallengeResponse(message="Google Sheets webhook endpoint")


@router.post(
    "/microsoft-graph",
    status_code=status.HTTP_202_ACCEPTED,
    response_model=WebhookAcceptedResponse,
    responses={200: {"content": {"text/plain": {}}}},
)
def receive_microsoft_graph_webhook(
    background_tasks: BackgroundTasks,
    validation_token: str | None = Query(default=None, alias="validationToken"),
    body: dict[str, Any] | None = Body(default=None),
    coordinator: UpdateCoordinator = Depends(get_update_coordinator),
    settings: WebhookSettings = Depends(get_webhook_settings),
) -> Any:
    # Subscription handshake: echo the token back as plain text.
    if validation_token:
        return PlainTextResponse(content=validation_token, status_code=status.HTTP_200_OK)

    notifications = (body or {}).get("value")
    first = notifications[0] if isinstance(notifications, list) and notifications else {}
    if not isinstance(first, dict):
        first = {}
    if settings.require_signature and not str(first.get("clientState") or "").strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing clientState",
        )

    notification = WebhookNotification(
        source="microsoft-graph",
        event_type=str(first.get("changeType") or "updated"),
        resource_id=_graph_resource_id(first),
        data=body,
    )
    coordinator.submit(notification, FastAPIBackgroundTaskExecutor(background_tasks))
    return WebhookAcceptedResponse()


# ----------------------------------------------------------------------
# Reporting
# ----------------------------------------------------------------------


@router.get("/updates", response_model=list[DataUpdateResponse])
def list_data_updates(
    limit: int | None = Query(default=None, ge=1, le=500, description="Max updates returned"),
    db: Session = Depends(get_db),
    coordinator: UpdateCoordinator = Depends(get_update_coordinator),
    settings: WebhookSettings = Depends(get_webhook_settings),
) -> list[DataUpdateResponse]:
    updates = coordinator.list_recent_updates(db=db, limit=limit or settings.updates_default_limit)
    return [
        DataUpdateResponse(
            id=update.id,
            source=update.source,
            resource_id=update.resource_id,
            event_type=update.event_type,
            timestamp=update.timestamp,
            status=update.status,
            data=update.data,
            error=update.error,
            created_at=update.created_at,
            updated_at=update.updated_at,
        )
        for update in updates
    ]


@router.get("/stats", response_model=WebhookStatsResponse)
def get_webhook_stats(
    db: Session = Depends(get_db),
    coordinator: UpdateCoordinator = Depends(get_update_coordinator),
) -> WebhookStatsResponse:
    stats = coordinator.get_stats(db=db)
    return WebhookStatsResponse(
        total=stats.total,
        successful=stats.successful,
        failed=stats.failed,
        pending=stats.pending,
        by_source=stats.by_source,
    )


@router.get("/freshness", response_model=list[DataFreshnessResponse])
def get_data_freshness(
    db: Session = Depends(get_db),
    coordinator: UpdateCoordinator = Depends(get_update_coordinator),
) -> list[DataFreshnessResponse]:
    return [
        DataFreshnessResponse(
            source=row.source,
            last_update=row.last_update,
            event_type=row.event_type,
            status=row.status,
        )
        for row in coordinator.get_freshness(db=db)
    ]


def _first_quickbooks_entity(body: dict[str, Any]) -> dict[str, Any]:
    try:
        entity = body["eventNotifications"][0]["dataChangeEvent"]["entities"][0]
    except (KeyError, IndexError, TypeError):
        logger.info("QuickBooks webhook carried no entity; using defaults")
        return {}
    return entity if isinstance(entity, dict) else {}


def _graph_resource_id(notification: dict[str, Any]) -> str:
    resource_data = notification.get("resourceData")
    if isinstance(resource_data, dict) and resource_data.get("id"):
        return str(resource_data["id"])
    return str(notification.get("resource") or "")
