from typing import List

from fastapi import APIRouter, Request
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

import structlog
from ...errors import InvalidInput
from ...schemas.forecast import ForecastQuery, ForecastResponse
from ...schemas.records import WeatherRecord
from ..middleware import describe_validation_errors

router = APIRouter()
logger = structlog.get_logger()


@router.post(
    "/",
    response_model=ForecastResponse,
    summary="Fetch a forecast and store its days",
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": ForecastQuery.model_json_schema()}},
        }
    },
    responses={
        200: {
            "description": "Provider payload, as stored",
            "content": {
                "application/json": {
                    "example": {
                        "days": [
                            {"datetime": "2024-01-01", "temp": 5.2, "precip": 0.0},
                            {"datetime": "2024-01-02", "temp": 6.1, "precip": 1.4},
                        ]
                    }
                }
            },
        },
        400: {"description": "Malformed request body"},
        500: {"description": "Forecast provider or record store failure"},
    },
)
async def ingest(request: Request) -> ForecastResponse:
    # Body is decoded as JSON whatever the Content-Type header says
    body = await request.body()
    try:
        query = ForecastQuery.model_validate_json(body)
    except ValidationError as e:
        raise InvalidInput(describe_validation_errors(e.errors())) from e

    logger.info("ingest_endpoint_hit", location=query.location)
    return await run_in_threadpool(request.app.state.ingest_service.ingest, query)


@router.get(
    "/",
    response_model=List[WeatherRecord],
    summary="List stored weather records",
    responses={500: {"description": "Record store unavailable"}},
)
def list_records(request: Request) -> List[WeatherRecord]:
    logger.info("list_endpoint_hit")
    return request.app.state.listing_service.list_records()
