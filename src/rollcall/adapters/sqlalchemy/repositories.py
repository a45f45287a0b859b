"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from rollcall.adapters.sqlalchemy.mappings import StoredBlob

if TYPE_CHECKING:
    from sqlalchemy.orm import Session


class SqlAlchemyBlobRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, key: str) -> str | None:
        blob = self.session.get(StoredBlob, key)
        return None if blob is None else blob.payload

    def put(self, key: str, payload: str) -> None:
        now = datetime.now(tz=UTC)
        blob = self.session.get(StoredBlob, key)
        if blob is None:
            self.session.add(StoredBlob(key=key, payload=payload, updated_at=now))
            return
        blob.payload = payload
        blob.updated_at = now
