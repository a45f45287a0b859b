from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone
from typing import TYPE_CHECKING

from sqlalchemy import inspect
from sqlalchemy.orm import Session

from rollcall.adapters.sqlalchemy import StoredBlob, create_all_tables, start_mappers

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine


def test_start_mappers_is_idempotent() -> None:
    # First invocation happens in the sqlite_engine fixture.
    start_mappers()
    start_mappers()


def test_create_all_tables_registers_blob_table(sqlite_engine: Engine) -> None:
    create_all_tables(sqlite_engine)

    assert "mirror_blob" in set(inspect(sqlite_engine).get_table_names())


def test_blob_timestamps_come_back_as_utc(sqlite_engine: Engine) -> None:
    taipei = timezone(timedelta(hours=8))
    with Session(sqlite_engine) as session:
        session.add(
            StoredBlob(
                key="event_guests",
                payload="[]",
                updated_at=datetime(2024, 5, 18, 17, tzinfo=taipei),
            )
        )
        session.commit()

    with Session(sqlite_engine) as session:
        blob = session.get(StoredBlob, "event_guests")
        assert blob is not None
        assert blob.updated_at == datetime(2024, 5, 18, 9, tzinfo=UTC)
        assert blob.updated_at.tzinfo is not None
