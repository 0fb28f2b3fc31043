from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Protocol, Sequence

import structlog
from pydantic import ValidationError
from sqlalchemy import create_engine, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..errors import RecordDecodeError, StorageError, StorageUnavailable
from ..schemas.records import WeatherRecord
from .models import Document, create_tables

logger = structlog.get_logger()


@dataclass(frozen=True)
class StoredDocument:
    """Raw document as read back from the store."""

    id: str
    data: Dict[str, Any] = field(default_factory=dict)

    def decode(self) -> WeatherRecord:
        if not isinstance(self.data, dict):
            raise RecordDecodeError(self.id, f"expected an object, got {type(self.data).__name__}")
        try:
            return WeatherRecord.model_validate(self.data)
        except ValidationError as e:
            raise RecordDecodeError(self.id, str(e)) from e


class RecordStore(Protocol):
    """Insert-only document store over a single collection of weather records."""

    def create_record(self, record: WeatherRecord) -> str:
        """Insert one record and return its new document id."""
        ...

    def create_records(self, records: Sequence[WeatherRecord]) -> List[str]:
        """Insert all records in one transaction; either all land or none do."""
        ...

    def list_all_records(self) -> List[StoredDocument]:
        """Return every document in the collection, undecoded."""
        ...


def build_engine(database_url: str) -> Engine:
    connect_args: Dict[str, Any] = {}
    if database_url.startswith("sqlite"):
        # Route handlers run in a threadpool
        connect_args["check_same_thread"] = False
    return create_engine(database_url, future=True, connect_args=connect_args)


class SqlRecordStore:
    """`RecordStore` backed by a SQLAlchemy `documents` table.

    Each record becomes one JSON document with a fresh uuid4 id, so repeated or
    concurrent ingestion never overwrites an existing document.
    """

    def __init__(self, engine: Engine, collection: str = "weather_data") -> None:
        self.engine = engine
        self.collection = collection

    @classmethod
    def from_url(cls, database_url: str, collection: str = "weather_data") -> "SqlRecordStore":
        engine = build_engine(database_url)
        create_tables(engine)
        return cls(engine, collection)

    def _document(self, data: Dict[str, Any]) -> Document:
        return Document(id=uuid.uuid4().hex, collection=self.collection, data=data)

    def create_document(self, data: Dict[str, Any]) -> str:
        """Insert an arbitrary document body into the collection."""
        doc = self._document(data)
        doc_id = doc.id
        try:
            with Session(self.engine) as session:
                session.add(doc)
                session.commit()
        except SQLAlchemyError as e:
            raise StorageError(f"Error inserting document: {e}") from e
        return doc_id

    def create_record(self, record: WeatherRecord) -> str:
        return self.create_document(record.model_dump())

    def create_records(self, records: Sequence[WeatherRecord]) -> List[str]:
        docs = [self._document(r.model_dump()) for r in records]
        doc_ids = [d.id for d in docs]
        try:
            with Session(self.engine) as session:
                session.add_all(docs)
                session.commit()
        except SQLAlchemyError as e:
            raise StorageError(f"Error inserting {len(docs)} documents: {e}") from e
        return doc_ids

    def list_all_records(self) -> List[StoredDocument]:
        stmt = select(Document.id, Document.data).where(Document.collection == self.collection)
        try:
            with Session(self.engine) as session:
                rows = session.execute(stmt).all()
        except SQLAlchemyError as e:
            raise StorageUnavailable(f"Error getting documents: {e}") from e
        return [StoredDocument(id=row.id, data=row.data) for row in rows]
