from typing import Optional

import time
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException

from ..config import AppSettings
from ..errors import ServiceError
from ..ingestion.client import ForecastClient, VisualCrossingClient
from ..ingestion.storage import RecordStore, SqlRecordStore
from ..logging import init_logging
from ..services.ingest_service import IngestService
from ..services.listing_service import ListingService
from .middleware import (
    RequestIDMiddleware,
    http_exception_handler,
    service_error_handler,
    validation_exception_handler,
)
from .routes import health, weather


def create_app(
    settings: Optional[AppSettings] = None,
    forecast_client: Optional[ForecastClient] = None,
    record_store: Optional[RecordStore] = None,
) -> FastAPI:
    settings = settings or AppSettings()
    logger = init_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("startup", env=settings.app_env, port=settings.port, collection=settings.collection)
        yield
        if owns_store:
            record_store.engine.dispose()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "health", "description": "Service health and uptime"},
            {"name": "weather", "description": "Ingest forecasts and list stored records"},
        ],
    )

    app.add_middleware(RequestIDMiddleware)
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)

    app.include_router(health.router, prefix="/health", tags=["health"])
    app.include_router(weather.router, tags=["weather"])

    # Shared collaborators are built once and reused by every request
    if forecast_client is None:
        forecast_client = VisualCrossingClient(
            api_key=settings.forecast_api_key,
            base_url=settings.forecast_base_url,
            unit_group=settings.unit_group,
            timeout_connect=settings.timeout_connect,
            timeout_read=settings.timeout_read,
        )
    owns_store = record_store is None
    if owns_store:
        record_store = SqlRecordStore.from_url(settings.database_url, settings.collection)

    app.state.settings = settings
    app.state.start_time = time.time()
    app.state.forecast_client = forecast_client
    app.state.record_store = record_store
    app.state.ingest_service = IngestService(forecast_client, record_store, atomic=settings.atomic_ingest)
    app.state.listing_service = ListingService(record_store)

    return app


if __name__ == "__main__":
    import uvicorn

    s = AppSettings()
    uvicorn.run(create_app(s), host=s.host, port=s.port)
