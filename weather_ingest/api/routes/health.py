import time
from fastapi import APIRouter, Request

from ...schemas.health import HealthResponse

router = APIRouter()


@router.get("/", response_model=HealthResponse, summary="Health status")
def health(request: Request) -> HealthResponse:
    settings = request.app.state.settings
    started = float(getattr(request.app.state, "start_time", time.time()))
    return HealthResponse(
        uptime_s=max(0.0, time.time() - started),
        version=settings.app_version,
        app_env=settings.app_env,
        collection=settings.collection,
    )
