from __future__ import annotations

from typing import List

import structlog

from ..errors import RecordDecodeError
from ..ingestion.storage import RecordStore
from ..schemas.records import WeatherRecord

logger = structlog.get_logger()


class ListingService:
    def __init__(self, store: RecordStore) -> None:
        self.store = store

    def list_records(self) -> List[WeatherRecord]:
        docs = self.store.list_all_records()
        records: List[WeatherRecord] = []
        for doc in docs:
            try:
                records.append(doc.decode())
            except RecordDecodeError as e:
                logger.warning("record_decode_failed", doc_id=e.doc_id, error=e.reason)
                continue
        logger.info("records_listed", total=len(docs), decoded=len(records))
        return records
