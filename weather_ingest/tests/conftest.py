# Ensure repo root is on sys.path for absolute imports like `weather_ingest.api.*`
import os
import sys
import tempfile
import threading
import uuid
from typing import Any, Dict, List, Optional

import pytest

REPO_ROOT = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from weather_ingest.config import AppSettings
from weather_ingest.errors import StorageError, StorageUnavailable
from weather_ingest.ingestion.storage import SqlRecordStore, StoredDocument
from weather_ingest.schemas.forecast import ForecastResponse


def provider_payload(*days) -> Dict[str, Any]:
    """Build a provider body from (date, temp, precip) tuples."""
    return {"days": [{"datetime": d, "temp": t, "precip": p} for d, t, p in days]}


class FakeForecastClient:
    def __init__(self, payload: Optional[Dict[str, Any]] = None, error: Optional[Exception] = None) -> None:
        self.payload = payload if payload is not None else provider_payload()
        self.error = error
        self.calls: List[tuple] = []

    def fetch_forecast(self, location: str, start_date: str, end_date: str) -> ForecastResponse:
        self.calls.append((location, start_date, end_date))
        if self.error is not None:
            raise self.error
        return ForecastResponse.model_validate(self.payload)


class FakeRecordStore:
    """In-memory record store; `fail_on` makes the n-th attempted write fail."""

    def __init__(self, fail_on: Optional[int] = None, unavailable: bool = False) -> None:
        self.docs: Dict[str, Dict[str, Any]] = {}
        self.attempts = 0
        self.fail_on = fail_on
        self.unavailable = unavailable
        self._lock = threading.Lock()

    def _attempt(self) -> None:
        self.attempts += 1
        if self.fail_on is not None and self.attempts == self.fail_on:
            raise StorageError("Error inserting document: disk full")

    def create_record(self, record) -> str:
        with self._lock:
            self._attempt()
            doc_id = uuid.uuid4().hex
            self.docs[doc_id] = record.model_dump()
            return doc_id

    def create_records(self, records) -> List[str]:
        with self._lock:
            staged = {}
            for r in records:
                self._attempt()
                staged[uuid.uuid4().hex] = r.model_dump()
            self.docs.update(staged)
            return list(staged)

    def list_all_records(self) -> List[StoredDocument]:
        if self.unavailable:
            raise StorageUnavailable("Error getting documents: connection refused")
        return [StoredDocument(id=k, data=v) for k, v in self.docs.items()]


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None, forecast_api_key="test-key", log_level="WARNING")


@pytest.fixture
def sql_store():
    with tempfile.TemporaryDirectory() as td:
        store = SqlRecordStore.from_url(f"sqlite:///{os.path.join(td, 'records.db')}")
        yield store
        store.engine.dispose()
