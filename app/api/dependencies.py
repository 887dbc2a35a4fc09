"""
app/api/dependencies.py

Shared FastAPI dependencies for webhook request verification.
"""

from __future__ import annotations

from fastapi import Depends, Header, HTTPException, status

from app.config import WebhookSettings, get_webhook_settings


def require_intuit_signature(
    x_intuit_signature: str | None = Header(default=None),
    settings: WebhookSettings = Depends(get_webhook_settings),
) -> str | None:
    """
    Reject QuickBooks notifications that carry no ``x-intuit-signature`` header.
    """

    if settings.require_signature and not (x_intuit_signature or "").strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing signature",
        )
    return x_intuit_signature


def require_authorization_header(
    authorization: str | None = Header(default=None),
    settings: WebhookSettings = Depends(get_webhook_settings),
) -> str | None:
    """
    Reject Google Sheets notifications without an ``Authorization`` header.
    """

    if settings.require_signature and not (authorization or "").strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing authorization",
        )
    return authorization
