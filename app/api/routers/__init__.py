"""
app/api/routers package marker.
"""

from app.api.routers.esg_validation import router as esg_validation_router
from app.api.routers.webhooks import router as webhooks_router

__all__ = [
    "esg_validation_router",
    "webhooks_router",
]
