"""
app/connectors/google_sheets_fetcher.py

Spreadsheet service fetcher returning full grid data.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import requests

from app.config import ExternalHTTPSettings, GoogleSheetsSettings
from app.connectors.base import BaseSourceFetcher
from app.domain.data_update import SourceCredentials, WebhookNotification
from app.normalizers.base import SourceTag


class GoogleSheetsFetcher(BaseSourceFetcher):
    platform = "google-sheets"
    source_tag = SourceTag.SPREADSHEET

    def __init__(
        self,
        *,
        settings: GoogleSheetsSettings,
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
        spreadsheet_id = quote(notification.resource_id, safe="")
        return self._request_json(
            url=f"{self._settings.base_url.rstrip('/')}/spreadsheets/{spreadsheet_id}",
            params={"includeGridData": "true"},
            headers=self.bearer_headers(credentials),
        )
