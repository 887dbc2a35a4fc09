"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from db.config import load_env_files


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_bool_env(name: str, default: bool) -> bool:
    """
    Read a boolean from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_float_env(name: str, default: float) -> float:
    """
    Read a float from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return float(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


@dataclass(frozen=True)
class ExternalHTTPSettings:
    """
    Shared HTTP behavior settings for source fetchers.
    """

    timeout_seconds: float = 15.0
    max_retries: int = 3
    backoff_initial_seconds: float = 0.5
    backoff_multiplier: float = 2.0
    rate_limit_per_second: float = 5.0


@dataclass(frozen=True)
class QuickBooksSettings:
    """
    Accounting platform (QuickBooks Online) API settings.
    """

    base_url: str = "https://quickbooks.api.intuit.com"
    minor_version: int = 65


@dataclass(frozen=True)
class GoogleSheetsSettings:
    """
    Spreadsheet service (Google Sheets) API settings.
    """

    base_url: str = "https://sheets.googleapis.com/v4"


@dataclass(frozen=True)
class MicrosoftGraphSettings:
    """
    Office document graph (Microsoft Graph) API settings.
    """

    base_url: str = "https://graph.microsoft.com/v1.0"


@dataclass(frozen=True)
class WebhookSettings:
    """
    Webhook intake and reporting settings.
    """

    require_signature: bool = True
    updates_default_limit: int = 50


@lru_cache(maxsize=1)
def get_external_http_settings() -> ExternalHTTPSettings:
    """
    Return shared fetcher HTTP settings from environment variables.
    """

    return ExternalHTTPSettings(
        timeout_seconds=max(1.0, _get_float_env("EXTERNAL_HTTP_TIMEOUT_SECONDS", 15.0)),
        max_retries=max(0, _get_int_env("EXTERNAL_HTTP_MAX_RETRIES", 3)),
        backoff_initial_seconds=max(0.1, _get_float_env("EXTERNAL_HTTP_BACKOFF_INITIAL_SECONDS", 0.5)),
        backoff_multiplier=max(1.0, _get_float_env("EXTERNAL_HTTP_BACKOFF_MULTIPLIER", 2.0)),
        rate_limit_per_second=max(0.1, _get_float_env("EXTERNAL_HTTP_RATE_LIMIT_PER_SECOND", 5.0)),
    )


@lru_cache(maxsize=1)
def get_quickbooks_settings() -> QuickBooksSettings:
    return QuickBooksSettings(
        base_url=_get_str_env("QUICKBOOKS_BASE_URL", "https://quickbooks.api.intuit.com"),
        minor_version=max(1, _get_int_env("QUICKBOOKS_MINOR_VERSION", 65)),
    )


@lru_cache(maxsize=1)
def get_google_sheets_settings() -> GoogleSheetsSettings:
    return GoogleSheetsSettings(
        base_url=_get_str_env("GOOGLE_SHEETS_BASE_URL", "https://sheets.googleapis.com/v4"),
    )


@lru_cache(maxsize=1)
def get_microsoft_graph_settings() -> MicrosoftGraphSettings:
    return MicrosoftGraphSettings(
        base_url=_get_str_env("MICROSOFT_GRAPH_BASE_URL", "https://graph.microsoft.com/v1.0"),
    )


@lru_cache(maxsize=1)
def get_webhook_settings() -> WebhookSettings:
    """
    Return webhook settings from environment variables.
    """

    return WebhookSettings(
        require_signature=_get_bool_env("WEBHOOK_REQUIRE_SIGNATURE", True),
        updates_default_limit=max(1, _get_int_env("WEBHOOK_UPDATES_DEFAULT_LIMIT", 50)),
    )
