"""
app/connectors package marker.
"""

from app.connectors.base import BaseSourceFetcher, ConnectorRequestError
from app.connectors.google_sheets_fetcher import GoogleSheetsFetcher
from app.connectors.microsoft_graph_fetcher import MicrosoftGraphFetcher
from app.connectors.quickbooks_fetcher import QuickBooksFetcher

__all__ = [
    "BaseSourceFetcher",
    "ConnectorRequestError",
    "GoogleSheetsFetcher",
    "MicrosoftGraphFetcher",
    "QuickBooksFetcher",
]
