"""Ingestion subpackage.

Provides the forecast provider client and the document record store.
"""

from .client import ForecastClient, VisualCrossingClient
from .storage import RecordStore, SqlRecordStore, StoredDocument

__all__ = ["ForecastClient", "VisualCrossingClient", "RecordStore", "SqlRecordStore", "StoredDocument"]
