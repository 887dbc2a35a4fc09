"""
app/connectors/quickbooks_fetcher.py

Accounting platform fetcher for QuickBooks Online entities.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from app.config import ExternalHTTPSettings, QuickBooksSettings
from app.connectors.base import BaseSourceFetcher, ConnectorRequestError
from app.domain.data_update import SourceCredentials, WebhookNotification
from app.normalizers.base import SourceTag

logger = logging.getLogger(__name__)

# Event type prefix -> QuickBooks entity path.
ENTITY_BY_EVENT_PREFIX: dict[str, str] = {
    "invoice": "invoice",
    "transaction": "purchase",
}


class QuickBooksFetcher(BaseSourceFetcher):
    platform = "quickbooks"
    source_tag = SourceTag.ACCOUNTING_PLATFORM

    def __init__(
        self,
        *,
        settings: QuickBooksSettings,
        http_settings: ExternalHTTPSettings,
        session: requests.Session | None = None,
    ) -> None:
        super().__init__(http_settings=http_settings, session=session)
        self._settings = settings

    def fetch_payload(
        self,
        notification: WebhookNotification,
        credentials: SourceCredentials,
    ) -> Any:
        if not credentials.realm_id:
            raise ConnectorRequestError("quickbooks: stored credentials have no realm_id.")

        entity = self.entity_for_event(notification.event_type)
        if entity is None:
            logger.info(
                "No QuickBooks entity mapping for event_type=%s resource_id=%s",
                notification.event_type,
                notification.resource_id,
            )
            return {"id": notification.resource_id, "type": "unknown"}

        url = (
            f"{self._settings.base_url.rstrip('/')}/v3/company/"
            f"{credentials.realm_id}/{entity}/{notification.resource_id}"
        )
        body = self._request_json(
            url=url,
            params={"minorversion": self._settings.minor_version},
            headers=self.bearer_headers(credentials),
        )
        if isinstance(body, dict):
            # QuickBooks wraps the entity under its capitalized name.
            for key, value in body.items():
                if key.lower() == entity and isinstance(value, dict):
                    return value
        return body

    @staticmethod
    def entity_for_event(event_type: str) -> str | None:
        prefix = event_type.strip().lower().split(".", 1)[0]
        return ENTITY_BY_EVENT_PREFIX.get(prefix)
