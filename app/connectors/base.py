"""
app/connectors/base.py

Base fetcher abstraction and shared HTTP mechanics.

Fetchers turn a webhook notification into the raw payload consumed by the
ESG validation engine. They do not normalize anything themselves.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import Any

import requests

from app.config import ExternalHTTPSettings
from app.domain.data_update import SourceCredentials, WebhookNotification

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}


class ConnectorRequestError(RuntimeError):
    """
    Raised when a fetcher cannot retrieve a payload after retries.
    """


class BaseSourceFetcher(ABC):
    """
    Fetcher interface for one source platform.

    ``platform`` is the provider name used by webhook routes and stored
    credentials; ``source_tag`` is the normalizer tag for the fetched payload.
    """

    platform: str
    source_tag: str

    def __init__(
        self,
        *,
        http_settings: ExternalHTTPSettings,
        session: requests.Session | None = None,
    ) -> None:
        self._session = session or requests.Session()
        self._timeout_seconds = http_settings.timeout_seconds
        self._max_retries = http_settings.max_retries
        self._backoff_initial_seconds = http_settings.backoff_initial_seconds
        self._backoff_multiplier = http_settings.backoff_multiplier
        self._min_request_interval_seconds = (
            1.0 / http_settings.rate_limit_per_second if http_settings.rate_limit_per_second > 0 else 0.0
        )
        self._last_request_monotonic: float = 0.0

    @abstractmethod
    def fetch_payload(
        self,
        notification: WebhookNotification,
        credentials: SourceCredentials,
    ) -> Any:
        """
        Fetch the changed resource and return its raw payload.
        """

    @staticmethod
    def bearer_headers(credentials: SourceCredentials) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {credentials.access_token}",
            "Accept": "application/json",
        }

    def _request_json(
        self,
        *,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """
        Execute a GET request and return parsed JSON with retry support.
        """

        response = self._request(url=url, params=params, headers=headers)
        try:
            return response.json()
        except ValueError as exc:
            raise ConnectorRequestError(f"{self.platform}: response was not valid JSON.") from exc

    def _request(
        self,
        *,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> requests.Response:
        """
        Execute a GET request with rate limiting and exponential backoff.
        """

        last_error: Exception | None = None
        for attempt in range(self._max_retries + 1):
            self._apply_rate_limit()
            try:
                response = self._session.get(
                    url,
                    params=params,
                    headers=headers,
                    timeout=self._timeout_seconds,
                )
                if response.status_code in RETRYABLE_STATUS_CODES:
                    raise requests.HTTPError(
                        f"Retryable HTTP status code: {response.status_code}",
                        response=response,
                    )
                response.raise_for_status()
                return response
            except requests.HTTPError as exc:
                last_error = exc
                status_code = exc.response.status_code if exc.response is not None else None
                if status_code not in RETRYABLE_STATUS_CODES:
                    logger.error(
                        "Fetch failed platform=%s status=%s url=%s error=%s",
                        self.platform,
                        status_code,
                        url,
                        exc,
                    )
                    raise ConnectorRequestError(
                        f"{self.platform}: request rejected with status {status_code}."
                    ) from exc
            except (requests.Timeout, requests.ConnectionError) as exc:
                last_error = exc

            if attempt >= self._max_retries:
                break

            backoff_seconds = self._backoff_initial_seconds * (self._backoff_multiplier**attempt)
            logger.warning(
                "Fetch retry platform=%s attempt=%s/%s wait_seconds=%.2f url=%s",
                self.platform,
                attempt + 1,
                self._max_retries,
                backoff_seconds,
                url,
            )
            time.sleep(backoff_seconds)

        logger.error(
            "Fetch exhausted retries platform=%s url=%s error=%s",
            self.platform,
            url,
            last_error,
        )
        raise ConnectorRequestError(f"{self.platform}: request failed after retries.") from last_error

    def _apply_rate_limit(self) -> None:
        if self._min_request_interval_seconds <= 0:
            return

        elapsed = time.monotonic() - self._last_request_monotonic
        remaining = self._min_request_interval_seconds - elapsed
        if remaining > 0:
            time.sleep(remaining)
        self._last_request_monotonic = time.monotonic()
