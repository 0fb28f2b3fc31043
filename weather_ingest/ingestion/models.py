from __future__ import annotations

import datetime as dt
from typing import Any, Dict

from sqlalchemy import JSON, DateTime, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """SQLAlchemy declarative base for record store models."""


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class Document(Base):
    """Schemaless document stored in a named collection.

    The `data` column holds the document body as JSON; nothing about its shape
    is enforced at this level. Documents are insert-only.
    """

    __tablename__ = "documents"

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    collection: Mapped[str] = mapped_column(String(128), index=True, nullable=False)
    data: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)


def create_tables(engine) -> None:
    """Create all record store tables if they do not exist.

    Parameters
    ----------
    engine : sqlalchemy.Engine
        SQLAlchemy engine for the target database.
    """
    Base.metadata.create_all(bind=engine)
