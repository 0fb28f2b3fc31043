from __future__ import annotations

import time
import uuid

import structlog
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from ..errors import InvalidInput, ServiceError

logger = structlog.get_logger()


class RequestIDMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return
        request_id = uuid.uuid4().hex
        scope.setdefault("state", {})
        scope["state"]["request_id"] = request_id
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        start = time.perf_counter()
        status = 500
        response_started = False

        async def send_wrapper(message):
            nonlocal status, response_started
            if message.get("type") == "http.response.start":
                response_started = True
                status = message.get("status", status)
                headers = message.setdefault("headers", [])
                headers.append((b"x-request-id", request_id.encode()))
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as exc:
            if response_started:
                raise
            logger.exception("unhandled_error", path=scope.get("path", ""))
            response = JSONResponse(status_code=500, content=error_body("internal_error", str(exc), request_id))
            await response(scope, receive, send_wrapper)
        finally:
            dur_ms = int((time.perf_counter() - start) * 1000)
            logger.info(
                "request_completed",
                method=scope.get("method", ""),
                path=scope.get("path", ""),
                status=status,
                duration_ms=dur_ms,
            )
            structlog.contextvars.clear_contextvars()


def _request_id(request: Request) -> str:
    return getattr(getattr(request, "state", None), "request_id", None) or ""


def error_body(code: str, message: str, request_id: str) -> dict:
    return {"error": {"code": code, "message": message, "request_id": request_id}}


def describe_validation_errors(errors) -> str:
    if not errors:
        return "Invalid request body"
    first = errors[0]
    where = ".".join(p for p in first.get("loc", ()) if isinstance(p, str) and p != "body")
    return f"{where}: {first.get('msg')}" if where else str(first.get("msg"))


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    req_id = _request_id(request)
    logger.error(
        "service_error",
        code=exc.code,
        status=exc.status_code,
        message=exc.message,
        path=request.url.path,
    )
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.code, exc.message, req_id))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return await service_error_handler(request, InvalidInput(describe_validation_errors(exc.errors())))


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    body = error_body("http_error", str(exc.detail), _request_id(request))
    # Header added by RequestIDMiddleware; avoid duplicates here
    return JSONResponse(status_code=exc.status_code, content=body)

