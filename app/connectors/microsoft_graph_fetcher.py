"""
app/connectors/microsoft_graph_fetcher.py

Office document graph fetcher for drive item content.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import requests

from app.config import ExternalHTTPSettings, MicrosoftGraphSettings
from app.connectors.base import BaseSourceFetcher
from app.domain.data_update import SourceCredentials, WebhookNotification
from app.normalizers.base import SourceTag


class MicrosoftGraphFetcher(BaseSourceFetcher):
    platform = "microsoft-graph"
    source_tag = SourceTag.OFFICE_GRAPH

    def __init__(
        self,
        *,
        settings: MicrosoftGraphSettings,
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
        item_id = quote(notification.resource_id, safe="")
        return self._request_json(
            url=f"{self._settings.base_url.rstrip('/')}/me/drive/items/{item_id}/content",
            headers=self.bearer_headers(credentials),
        )
