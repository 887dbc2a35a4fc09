"""
Model package exports.

Import all SQLAlchemy models here so metadata registration and Alembic
autogeneration work without extra imports.
"""

from db.models.data_freshness import DataFreshness
from db.models.data_update import DataUpdate
from db.models.integration_credential import IntegrationCredential
from db.models.unified_esg_data import UnifiedESGData

__all__ = [
    "DataFreshness",
    "DataUpdate",
    "IntegrationCredential",
    "UnifiedESGData",
]
