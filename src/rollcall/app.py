"""Application wiring: concrete adapters around the event service."""

from __future__ import annotations

import logging
from logging import getLogger
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from rollcall.adapters.drafts import parse_draft_payloads
from rollcall.adapters.remote import HttpDocumentStore
from rollcall.adapters.sqlalchemy import SqlAlchemyLocalMirror, is_started, startup
from rollcall.config import DEFAULT_OUTBOUND_BATCH_SIZE, configure_logging, get_remote_config
from rollcall.domain.event_service import EventService
from rollcall.domain.reconciliation import gather_batches
from rollcall.domain.registry import GuestRegistry

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import datetime

    from sqlalchemy.engine import Engine

    from rollcall.domain.ports import RemoteDocumentStore
    from rollcall.domain.reconciliation import ReconciliationResult
    from rollcall.domain.reconciliation.batches import BatchCollection, DraftChunk

log = getLogger(__name__)


def build_event_service(
    *,
    engine: Engine | None = None,
    remote: RemoteDocumentStore | None = None,
    connect: bool = True,
    log_level: int = logging.INFO,
) -> EventService:
    """Assemble the service from the environment and seed it from local data.

    ``remote`` overrides the HTTP store configured by ``ROLLCALL_REMOTE_URL``.
    """

    configure_logging(log_level)
    load_dotenv()
    if engine is not None:
        startup(engine=engine, force=True)
    elif not is_started():
        startup()

    remote_config = get_remote_config()
    if remote is None and remote_config is not None:
        remote = HttpDocumentStore(remote_config)
    batch_size = remote_config.batch_size if remote_config else DEFAULT_OUTBOUND_BATCH_SIZE

    service = EventService(
        GuestRegistry(),
        local=SqlAlchemyLocalMirror(),
        remote=remote,
        batch_size=batch_size,
    )
    service.load_local()
    if remote is None:
        log.info("No remote store configured, running local-only")
    elif connect:
        service.connect()
    return service


def import_draft_payloads(
    service: EventService,
    payloads: Iterable[object],
    *,
    source_hint: str = "",
    imported_at: datetime | None = None,
    overwrite: bool = False,
) -> ReconciliationResult:
    """Validate raw JSON drafts and import them; malformed ones count as rejected."""

    parsed = parse_draft_payloads(payloads, source_hint=source_hint)
    if overwrite:
        result = service.overwrite_from_drafts(parsed.drafts, imported_at=imported_at)
    else:
        result = service.import_drafts(parsed.drafts, imported_at=imported_at)
    result.rejected = [*parsed.rejected, *result.rejected]
    return result


def import_draft_chunks(
    service: EventService,
    chunks: Iterable[DraftChunk],
    *,
    imported_at: datetime | None = None,
) -> tuple[ReconciliationResult, BatchCollection]:
    """Parse every source, merge the survivors and import them in one commit."""

    collection = gather_batches(chunks)
    if collection.partial:
        log.warning(
            "Importing %s batches; %s sources failed",
            len(collection.batches),
            len(collection.failures),
        )
    result = service.import_drafts(collection.merged(), imported_at=imported_at)
    return result, collection
