"""
app/services package marker.
"""

from app.services.esg_scoring import ESGScoringModel
from app.services.esg_validation_service import (
    ESGValidationEngine,
    get_esg_validation_engine,
)
from app.services.update_coordinator import (
    CredentialsNotFoundError,
    FastAPIBackgroundTaskExecutor,
    UnknownSourceError,
    UpdateCoordinator,
    get_update_coordinator,
)

__all__ = [
    "CredentialsNotFoundError",
    "ESGScoringModel",
    "ESGValidationEngine",
    "FastAPIBackgroundTaskExecutor",
    "UnknownSourceError",
    "UpdateCoordinator",
    "get_esg_validation_engine",
    "get_update_coordinator",
]
