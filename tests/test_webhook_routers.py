"""
tests/test_webhook_routers.py

HTTP tests for the ESG validation and webhook routers.

The routers are mounted on a bare FastAPI app with dependency overrides, so
no database or environment configuration is needed.
"""

from __future__ import annotations

import uuid
from collections.abc import Generator
from datetime import datetime, timezone
from types import SimpleNamespace
from typing import Any
from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.api.routers import esg_validation_router, webhooks_router
from app.config import WebhookSettings, get_webhook_settings
from app.domain.data_update import WebhookNotification, WebhookStats
from app.services.update_coordinator import UpdateCoordinator, get_update_coordinator
from db.session import get_db

NOW = datetime(2026, 10, 19, 8, 30, tzinfo=timezone.utc)


def _override_db() -> Generator[None, None, None]:
    yield None


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def coordinator() -> MagicMock:
    return MagicMock(spec=UpdateCoordinator)


@pytest.fixture()
def webhook_settings() -> WebhookSettings:
    return WebhookSettings()


@pytest.fixture()
def client(coordinator: MagicMock, webhook_settings: WebhookSettings) -> TestClient:
    application = FastAPI()
    application.include_router(esg_validation_router)
    application.include_router(webhooks_router)
    application.dependency_overrides[get_update_coordinator] = lambda: coordinator
    application.dependency_overrides[get_webhook_settings] = lambda: webhook_settings
    application.dependency_overrides[get_db] = _override_db
    return TestClient(application)


def _submitted(coordinator: MagicMock) -> WebhookNotification:
    coordinator.submit.assert_called_once()
    return coordinator.submit.call_args.args[0]


# ---------------------------------------------------------------------------
# POST /esg/validate
# ---------------------------------------------------------------------------


class TestESGValidateEndpoint:
    def test_spreadsheet_payload_is_normalized_and_scored(self, client: TestClient) -> None:
        body = {
            "source": "spreadsheet",
            "event_type": "manual-check",
            "payload": {
                "sheets": [
                    {
                        "properties": {"title": "Environmental Data"},
                        "data": [
                            {"rowData": [{"values": [{"formattedValue": "Carbon"}, {"formattedValue": "-50"}]}]}
                        ],
                    }
                ]
            },
        }

        response = client.post("/esg/validate", json=body)

        assert response.status_code == 200
        data = response.json()
        assert data["source"] == "spreadsheet"
        assert data["event_type"] == "manual-check"
        assert data["normalized_record"]["environmental"] == {"carbonEmissions": -50.0}
        assert data["validation"]["is_valid"] is False
        assert data["validation"]["score"] == 81
        assert data["validation"]["errors"][0]["severity"] == "critical"

    def test_source_defaults_to_generic(self, client: TestClient) -> None:
        response = client.post("/esg/validate", json={"payload": {"employee_count": 0}})

        assert response.status_code == 200
        data = response.json()
        assert data["source"] == "generic"
        assert data["validation"]["is_valid"] is True
        assert data["validation"]["warnings"][0]["message"] == "Employee count is zero"


# ---------------------------------------------------------------------------
# Webhook intake
# ---------------------------------------------------------------------------


class TestQuickBooksWebhook:
    def test_requires_signature(self, client: TestClient, coordinator: MagicMock) -> None:
        response = client.post("/webhooks/quickbooks", json={})

        assert response.status_code == 401
        coordinator.submit.assert_not_called()

    def test_accepts_and_queues_first_entity(self, client: TestClient, coordinator: MagicMock) -> None:
        body = {
            "eventNotifications": [
                {"realmId": "9130", "dataChangeEvent": {"entities": [{"name": "Invoice", "id": "145"}]}}
            ]
        }

        response = client.post("/webhooks/quickbooks", json=body, headers={"x-intuit-signature": "sig"})

        assert response.status_code == 202
        assert response.json() == {
            "status": "received",
            "message": "Webhook received and queued for processing",
        }
        notification = _submitted(coordinator)
        assert (notification.source, notification.event_type, notification.resource_id) == (
            "quickbooks",
            "Invoice",
            "145",
        )
        assert notification.data == body

    def test_missing_entity_defaults(self, client: TestClient, coordinator: MagicMock) -> None:
        response = client.post("/webhooks/quickbooks", json={"eventNotifications": []}, headers={"x-intuit-signature": "s"})

        assert response.status_code == 202
        notification = _submitted(coordinator)
        assert (notification.event_type, notification.resource_id) == ("unknown", "")

    def test_challenge_code_is_echoed(self, client: TestClient) -> None:
        response = client.get("/webhooks/quickbooks", params={"challenge_code": "xyz"})
        assert response.json() == {"challenge_code": "xyz"}

        response = client.get("/webhooks/quickbooks")
        assert response.json() == {"message": "QuickBooks webhook endpoint"}

    def test_signature_check_can_be_disabled(self, coordinator: MagicMock) -> None:
        application = FastAPI()
        application.include_router(webhooks_router)
        application.dependency_overrides[get_update_coordinator] = lambda: coordinator
        application.dependency_overrides[get_webhook_settings] = lambda: WebhookSettings(require_signature=False)

        response = TestClient(application).post("/webhooks/quickbooks", json={})

        assert response.status_code == 202


class TestGoogleSheetsWebhook:
    def test_requires_authorization(self, client: TestClient) -> None:
        assert client.post("/webhooks/google-sheets", json={}).status_code == 401

    def test_uses_state_and_resource_id(self, client: TestClient, coordinator: MagicMock) -> None:
        response = client.post(
            "/webhooks/google-sheets",
            json={"state": "update", "resourceId": "sheet-1"},
            headers={"Authorization": "Bearer t"},
        )

        assert response.status_code == 202
        notification = _submitted(coordinator)
        assert (notification.source, notification.event_type, notification.resource_id) == (
            "google-sheets",
            "update",
            "sheet-1",
        )

    def test_falls_back_to_spreadsheet_id(self, client: TestClient, coordinator: MagicMock) -> None:
        client.post(
            "/webhooks/google-sheets",
            json={"spreadsheetId": "sheet-2"},
            headers={"Authorization": "Bearer t"},
        )

        notification = _submitted(coordinator)
        assert (notification.event_type, notification.resource_id) == ("spreadsheet.updated", "sheet-2")

    def test_challenge_code_is_echoed(self, client: TestClient) -> None:
        response = client.get("/webhooks/google-sheets", params={"challenge_code": "abc"})
        assert response.json() == {"challenge_code": "abc"}


class TestMicrosoftGraphWebhook:
    def test_validation_token_is_echoed_as_text(self, client: TestClient, coordinator: MagicMock) -> None:
        response = client.post("/webhooks/microsoft-graph", params={"validationToken": "token-123"})

        assert response.status_code == 200
        assert response.text == "token-123"
        assert response.headers["content-type"].startswith("text/plain")
        coordinator.submit.assert_not_called()

    def test_requires_client_state(self, client: TestClient) -> None:
        response = client.post("/webhooks/microsoft-graph", json={"value": [{"changeType": "updated"}]})
        assert response.status_code == 401

    def test_accepts_notification(self, client: TestClient, coordinator: MagicMock) -> None:
        body = {
            "value": [
                {
                    "clientState": "secret",
                    "changeType": "updated",
                    "resource": "me/drive/items/01ABC",
                    "resourceData": {"id": "01ABC"},
                }
            ]
        }

        response = client.post("/webhooks/microsoft-graph", json=body)

        assert response.status_code == 202
        notification = _submitted(coordinator)
        assert (notification.source, notification.event_type, notification.resource_id) == (
            "microsoft-graph",
            "updated",
            "01ABC",
        )


# ---------------------------------------------------------------------------
# Reporting
# ---------------------------------------------------------------------------


class TestReporting:
    def test_updates_use_default_limit(self, client: TestClient, coordinator: MagicMock) -> None:
        update_id = uuid.uuid4()
        coordinator.list_recent_updates.return_value = [
            SimpleNamespace(
                id=update_id,
                source="quickbooks",
                resource_id="145",
                event_type="Invoice",
                timestamp=NOW,
                status="failed",
                data={"raw": True},
                error="QuickBooks credentials not found",
                created_at=NOW,
                updated_at=NOW,
            )
        ]

        response = client.get("/webhooks/updates")

        assert response.status_code == 200
        data = response.json()
        assert data[0]["id"] == str(update_id)
        assert data[0]["error"] == "QuickBooks credentials not found"
        coordinator.list_recent_updates.assert_called_once_with(db=None, limit=50)

    def test_updates_limit_is_validated(self, client: TestClient) -> None:
        assert client.get("/webhooks/updates", params={"limit": 0}).status_code == 422

    def test_stats(self, client: TestClient, coordinator: MagicMock) -> None:
        coordinator.get_stats.return_value = WebhookStats(
            total=5,
            successful=3,
            failed=1,
            pending=1,
            by_source={"quickbooks": 5, "google-sheets": 0, "microsoft-graph": 0},
        )

        response = client.get("/webhooks/stats")

        assert response.json() == {
            "total": 5,
            "successful": 3,
            "failed": 1,
            "pending": 1,
            "by_source": {"quickbooks": 5, "google-sheets": 0, "microsoft-graph": 0},
        }

    def test_freshness(self, client: TestClient, coordinator: MagicMock) -> None:
        coordinator.get_freshness.return_value = [
            SimpleNamespace(source="quickbooks", last_update=NOW, event_type="none", status="pending"),
        ]

        response = client.get("/webhooks/freshness")

        data: list[dict[str, Any]] = response.json()
        assert [(row["source"], row["status"]) for row in data] == [("quickbooks", "pending")]
