"""
Read access to stored integration credentials.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from db.models.integration_credential import IntegrationCredential


class CredentialRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def get_credentials(self, platform: str) -> IntegrationCredential | None:
        stmt = select(IntegrationCredential).where(IntegrationCredential.platform == platform)
        return self._session.scalars(stmt).first()
