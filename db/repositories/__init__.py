"""
Repository layer exports.
"""

from db.repositories.credential_repository import CredentialRepository
from db.repositories.data_update_repository import DataUpdateRepository
from db.repositories.esg_data_repository import ESGDataRepository

__all__ = [
    "CredentialRepository",
    "DataUpdateRepository",
    "ESGDataRepository",
]
