from __future__ import annotations

from typing import List

import structlog

from ..ingestion.client import ForecastClient
from ..ingestion.storage import RecordStore
from ..schemas.forecast import ForecastQuery, ForecastResponse
from ..schemas.records import WeatherRecord

logger = structlog.get_logger()


def to_records(location: str, forecast: ForecastResponse) -> List[WeatherRecord]:
    """Map each forecast day to the record persisted for `location`."""
    return [
        WeatherRecord(
            location=location,
            date=day.date,
            temperature=day.temperature,
            precipitation=day.precipitation,
        )
        for day in forecast.days
    ]


class IngestService:
    """Fetches a forecast for a query and persists one record per day.

    With `atomic=True` the whole batch is committed in one transaction. With
    `atomic=False` records are written one by one and the first failure stops
    the loop, leaving earlier records in place.
    """

    def __init__(self, client: ForecastClient, store: RecordStore, atomic: bool = True) -> None:
        self.client = client
        self.store = store
        self.atomic = atomic

    def ingest(self, query: ForecastQuery) -> ForecastResponse:
        logger.info(
            "ingest_received",
            location=query.location,
            start_date=query.start_date,
            end_date=query.end_date,
        )
        forecast = self.client.fetch_forecast(query.location, query.start_date, query.end_date)
        records = to_records(query.location, forecast)

        if self.atomic:
            ids = self.store.create_records(records)
        else:
            ids = [self.store.create_record(r) for r in records]

        logger.info("records_written", location=query.location, count=len(ids), atomic=self.atomic)
        return forecast
