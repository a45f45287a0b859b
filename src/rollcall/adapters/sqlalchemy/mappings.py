"""SQLAlchemy mapping metadata for the local mirror."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from functools import cache
from typing import TYPE_CHECKING, Final

from sqlalchemy import Column, DateTime, Dialect, String, Table, Text, TypeDecorator, orm
from sqlalchemy.orm import configure_mappers

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

GUESTS_KEY: Final[str] = "event_guests"
SETTINGS_KEY: Final[str] = "event_settings"


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


@dataclass(eq=False, kw_only=True)
class StoredBlob:
    """One keyed JSON document of the local mirror."""

    key: str
    payload: str
    updated_at: datetime


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "pk": "pk_%(table_name)s",
}

blob_table = Table(
    "mirror_blob",
    mapper_registry.metadata,
    Column("key", String(64), primary_key=True),
    Column("payload", Text, nullable=False),
    Column("updated_at", UTCDateTime(), nullable=False),
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the mirror records."""

    log.info("Starting SQLAlchemy mappers")
    mapper_registry.map_imperatively(StoredBlob, blob_table)
    configure_mappers()
    return mapper_registry


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the mapped metadata."""

    log.info("Creating all tables")
    mapper_registry.metadata.create_all(engine)
