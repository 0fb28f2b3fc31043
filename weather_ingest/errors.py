"""Error taxonomy for the ingest service.

Each `ServiceError` carries the HTTP status and the short error code the API
layer reports back to the caller. Nothing here is retried.
"""

from __future__ import annotations

from typing import Optional


class ServiceError(Exception):
    status_code: int = 500
    code: str = "internal_error"

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InvalidInput(ServiceError):
    """Request body is not valid JSON or lacks a required field."""

    status_code = 400
    code = "invalid_input"


class UpstreamUnavailable(ServiceError):
    """The forecast provider could not be reached."""

    code = "upstream_unavailable"


class UpstreamError(ServiceError):
    """The forecast provider answered with a non-200 status.

    Error statuses (>= 400) are passed through to the caller; anything else
    is reported as 502.
    """

    code = "upstream_error"

    def __init__(self, message: str, upstream_status: int) -> None:
        super().__init__(message, status_code=upstream_status if upstream_status >= 400 else 502)
        self.upstream_status = upstream_status


class UpstreamMalformed(ServiceError):
    """The forecast provider body could not be decoded."""

    code = "upstream_malformed"


class StorageError(ServiceError):
    """A record write failed."""

    code = "storage_error"


class StorageUnavailable(ServiceError):
    """The record store could not be read."""

    code = "storage_unavailable"


class RecordDecodeError(ValueError):
    """A stored document does not decode into a WeatherRecord."""

    def __init__(self, doc_id: str, reason: str) -> None:
        super().__init__(f"document {doc_id}: {reason}")
        self.doc_id = doc_id
        self.reason = reason
