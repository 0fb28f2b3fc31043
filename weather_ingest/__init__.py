"""Weather ingest service.

Subpackages:
- api: FastAPI application, middleware and routes.
- ingestion: forecast provider client and the document record store.
- schemas: request, provider and storage models.
- services: ingest and listing logic used by the routes.
"""

__all__ = [
    "api",
    "ingestion",
    "schemas",
    "services",
]
