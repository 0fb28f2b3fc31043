from .ingest_service import IngestService
from .listing_service import ListingService

__all__ = ["IngestService", "ListingService"]
